"""Attendee data model for event registration."""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass
class Attendee:
    """Person registered for the event."""

    name: str
    phone: str
    id: str  # receipt ID, also the QR payload
    store_key: Optional[str] = None  # assigned by the record store on insert

    def __post_init__(self):
        """Validate attendee data."""
        if not self.name or not self.name.strip():
            raise ValueError("Name cannot be empty")

        if not self.phone or not self.phone.strip():
            raise ValueError("Phone cannot be empty")

        if not self.id or not self.id.strip():
            raise ValueError("Receipt ID cannot be empty")

    def to_document(self) -> Dict[str, str]:
        """Return the stored document; the store key is never part of it."""
        return {"name": self.name, "phone": self.phone, "id": self.id}

    @classmethod
    def from_document(cls, data: Dict[str, Any], store_key: Optional[str] = None) -> "Attendee":
        """
        Build an attendee from a stored document.

        Raises:
            ValueError: If a field is missing, null or empty
        """
        values = {}
        for field in ("name", "phone", "id"):
            value = data.get(field)
            if value is None:
                raise ValueError(f"Missing field in stored document: {field}")
            values[field] = str(value)

        return cls(store_key=store_key, **values)

    def without_store_key(self) -> "Attendee":
        """Copy of this attendee as shown on a receipt."""
        return replace(self, store_key=None)

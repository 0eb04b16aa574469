"""Input validation utilities."""
from typing import Iterable, Tuple


def validate_name(name: str) -> Tuple[bool, str]:
    """
    Validate attendee name.

    Args:
        name: Name to validate

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "Name is required") if empty or whitespace only
    """
    if not name or not name.strip():
        return False, "Name is required"
    return True, ""


def validate_phone(phone: str) -> Tuple[bool, str]:
    """
    Validate attendee phone.

    Only presence is checked; any non-blank text is accepted.
    """
    if not phone or not phone.strip():
        return False, "Phone is required"
    return True, ""


def normalize_name(name: str) -> str:
    """
    Normalize name for duplicate comparison.

    Args:
        name: Name to normalize

    Returns:
        Normalized name (trimmed, lowercased)

    Behavior:
        - Trims leading/trailing whitespace
        - Converts to lowercase
        - Preserves internal spacing
        - Example: " Alice " → "alice", "John Doe" → "john doe"
    """
    return name.strip().lower()


def is_duplicate_name(name: str, existing_names: Iterable[str]) -> bool:
    """Check whether name matches any existing name, ignoring case and outer whitespace."""
    normalized = normalize_name(name)
    return any(normalize_name(existing) == normalized for existing in existing_names)

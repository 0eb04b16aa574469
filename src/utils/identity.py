"""Receipt identifier generation."""
import uuid


def generate_receipt_id() -> str:
    """Return a new random UUID4 string used as the receipt reference."""
    return str(uuid.uuid4())

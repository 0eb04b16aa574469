"""Per-session application state."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from src.models.attendee import Attendee


@dataclass
class AppState:
    """
    Mutable state of one browser session.

    Workflows receive this object explicitly. `attendees` is only mutated
    after the record store confirms an insert or delete.
    """

    attendees: List[Attendee] = field(default_factory=list)
    loaded: bool = False
    current_receipt: Optional[Attendee] = None
    admin_authenticated: bool = False
    pending: bool = False
    feedback: Optional[Tuple[str, str]] = None  # (level, message)

    def find_by_receipt_id(self, receipt_id: str) -> Optional[Attendee]:
        """Return the loaded attendee with this receipt ID, if any."""
        for attendee in self.attendees:
            if attendee.id == receipt_id:
                return attendee
        return None

    def set_feedback(self, level: str, message: str) -> None:
        """Queue a message for the next render."""
        self.feedback = (level, message)

    def pop_feedback(self) -> Optional[Tuple[str, str]]:
        """Return and clear the queued message."""
        feedback, self.feedback = self.feedback, None
        return feedback

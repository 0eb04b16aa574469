"""Admin service: passphrase gate and registration management."""
import logging
from typing import List

from src.models.app_state import AppState
from src.models.attendee import Attendee
from src.services.record_store import RecordStore
from src.services.registration_service import pending_store_call
from src.utils.config import Settings
from src.utils.exceptions import AuthGateError, RecordNotFoundError

logger = logging.getLogger(__name__)


def authenticate_admin(passphrase: str, settings: Settings) -> bool:
    """
    Check the admin passphrase.

    Args:
        passphrase: Passphrase typed by the user
        settings: Settings holding ADMIN_PASSWORD

    Returns:
        True if passphrase matches, False otherwise

    Security:
        - Plain-text comparison against one shared passphrase
        - No sessions, tokens, rate limiting or audit log
        - An unset ADMIN_PASSWORD never matches
    """
    if not settings.admin_password:
        return False
    return passphrase == settings.admin_password


def login_admin(state: AppState, passphrase: str, settings: Settings) -> None:
    """
    Unlock the admin panel for this session.

    Raises:
        AuthGateError: If the passphrase is wrong; state is unchanged
    """
    if not authenticate_admin(passphrase, settings):
        logger.warning("Rejected admin login attempt")
        raise AuthGateError("Incorrect password")

    state.admin_authenticated = True
    logger.info("Admin logged in")


def logout_admin(state: AppState) -> None:
    """Lock the admin panel again."""
    state.admin_authenticated = False


def list_attendees(state: AppState) -> List[Attendee]:
    """Return the loaded attendees in registration order."""
    return state.attendees


def delete_attendee(state: AppState, store: RecordStore, receipt_id: str, store_key: str) -> Attendee:
    """
    Delete an attendee from the store, then from the loaded list.

    Args:
        state: Session state
        store: Record store
        receipt_id: Receipt ID of the attendee to remove from the list
        store_key: Store key to delete by

    Returns:
        The removed attendee

    Raises:
        RecordNotFoundError: If no loaded attendee has receipt_id, or its
            store key differs from store_key; no store call
        OperationPendingError: If a store call is already in flight
        StorePersistenceError: If the store delete fails; list is unchanged
    """
    attendee = state.find_by_receipt_id(receipt_id)
    if attendee is None:
        raise RecordNotFoundError(f"Registration not found: {receipt_id}")

    if attendee.store_key != store_key:
        raise RecordNotFoundError(f"Registration {receipt_id} is not stored under {store_key}")

    with pending_store_call(state):
        store.delete(store_key)

    state.attendees = [a for a in state.attendees if a.id != receipt_id]

    if state.current_receipt is not None and state.current_receipt.id == receipt_id:
        state.current_receipt = None

    logger.info(f"Deleted registration {receipt_id}")
    return attendee

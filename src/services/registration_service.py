"""Registration service: initial load and attendee sign-up."""
import logging
from contextlib import contextmanager
from typing import Callable, List

from src.models.app_state import AppState
from src.models.attendee import Attendee
from src.services.record_store import RecordStore
from src.utils.exceptions import (
    DuplicateNameError,
    OperationPendingError,
    ValidationError,
)
from src.utils.identity import generate_receipt_id
from src.utils.validation import is_duplicate_name, validate_name, validate_phone

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "This name is already registered."


@contextmanager
def pending_store_call(state: AppState):
    """
    Mark the session busy for the duration of a store call.

    Raises:
        OperationPendingError: If another store call is still in flight
    """
    if state.pending:
        raise OperationPendingError("Please wait for the previous request to finish")

    state.pending = True
    try:
        yield
    finally:
        state.pending = False


def load_attendees(state: AppState, store: RecordStore) -> List[Attendee]:
    """
    Populate state.attendees from one full store read.

    Documents that don't form a valid attendee are skipped with a warning.

    Raises:
        StorePersistenceError: If the store read fails; state stays unloaded
    """
    with pending_store_call(state):
        documents = store.list_all()

    attendees = []
    for store_key, document in documents:
        try:
            attendees.append(Attendee.from_document(document, store_key=store_key))
        except ValueError as e:
            logger.warning(f"Skipping malformed record {store_key}: {e}")

    state.attendees = attendees
    state.loaded = True
    logger.info(f"Loaded {len(attendees)} registrations")
    return attendees


def register_attendee(
    state: AppState,
    store: RecordStore,
    name: str,
    phone: str,
    id_factory: Callable[[], str] = generate_receipt_id,
) -> Attendee:
    """
    Register an attendee and make them the current receipt.

    Args:
        state: Session state holding the loaded attendees
        store: Record store to persist into
        name: Attendee name
        phone: Attendee phone
        id_factory: Receipt ID generator

    Returns:
        The created attendee, without its store key

    Raises:
        ValidationError: If name or phone is blank
        DuplicateNameError: If the name matches a loaded attendee, ignoring case
        OperationPendingError: If a store call is already in flight
        StorePersistenceError: If the insert fails; state is left unchanged

    Behavior:
        - Checks duplicates only against state.attendees
        - Appends to state.attendees only after the store returns a key
    """
    name = (name or "").strip()
    phone = (phone or "").strip()

    for is_valid, error_msg in (validate_name(name), validate_phone(phone)):
        if not is_valid:
            raise ValidationError(error_msg)

    if is_duplicate_name(name, (attendee.name for attendee in state.attendees)):
        raise DuplicateNameError(DUPLICATE_NAME_MESSAGE)

    attendee = Attendee(name=name, phone=phone, id=id_factory())

    with pending_store_call(state):
        store_key = store.insert(attendee.to_document())

    attendee.store_key = store_key
    state.attendees.append(attendee)

    receipt = attendee.without_store_key()
    state.current_receipt = receipt

    logger.info(f"Registered attendee with receipt {attendee.id}")
    return receipt

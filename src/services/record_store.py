"""Record store interface and the JSON file backend.

Stores deal in raw documents (`{"name", "phone", "id"}`) addressed by a
store-assigned key. Converting documents to attendees is the workflows' job.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from src.services.storage_service import load_json, save_json, lock_file
from src.utils.config import Settings
from src.utils.exceptions import StorePersistenceError

logger = logging.getLogger(__name__)

StoredDocument = Tuple[str, Dict[str, Any]]

EMPTY_STORE: Dict[str, Any] = {"records": {}}


class RecordStore(ABC):
    """Collection of attendee documents."""

    @abstractmethod
    def list_all(self) -> List[StoredDocument]:
        """Return every (store_key, document) pair in insertion order."""
        ...

    @abstractmethod
    def insert(self, document: Dict[str, Any]) -> str:
        """Persist a document and return its new store key."""
        ...

    @abstractmethod
    def delete(self, store_key: str) -> None:
        """Delete the document with this key. Unknown keys are a no-op."""
        ...


class JsonRecordStore(RecordStore):
    """
    Record store backed by a local JSON file.

    File layout: {"records": {<store_key>: <document>, ...}}. Writers are
    serialized with an exclusive file lock held for `timeout` seconds at most.
    """

    def __init__(self, file_path: str, timeout: float = 10.0):
        self.file_path = file_path
        self.timeout = timeout

    def _load(self) -> Dict[str, Any]:
        data = load_json(self.file_path, default=EMPTY_STORE)
        records = data.get("records")
        if not isinstance(records, dict):
            raise ValueError(f"'records' must be an object in {self.file_path}")
        return data

    def list_all(self) -> List[StoredDocument]:
        try:
            data = self._load()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read records from {self.file_path}: {e}")
            raise StorePersistenceError("Could not load registrations") from e

        return list(data["records"].items())

    def insert(self, document: Dict[str, Any]) -> str:
        store_key = uuid.uuid4().hex
        try:
            with lock_file(self.file_path, timeout=self.timeout):
                data = self._load()
                data["records"][store_key] = dict(document)
                save_json(self.file_path, data)
        except (OSError, ValueError) as e:
            # TimeoutError and IOError are both OSError; JSONDecodeError is a ValueError
            logger.error(f"Failed to insert record into {self.file_path}: {e}")
            raise StorePersistenceError("Could not save registration") from e

        return store_key

    def delete(self, store_key: str) -> None:
        try:
            with lock_file(self.file_path, timeout=self.timeout):
                data = self._load()
                if data["records"].pop(store_key, None) is None:
                    logger.info(f"Store key {store_key} not present in {self.file_path}")
                    return
                save_json(self.file_path, data)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to delete record {store_key} from {self.file_path}: {e}")
            raise StorePersistenceError("Could not delete registration") from e


def create_record_store(settings: Settings) -> RecordStore:
    """
    Build the record store selected by settings.record_store.

    Raises:
        StorePersistenceError: If the Firestore client can't be initialized
    """
    if settings.record_store == "firestore":
        from src.services.firestore_store import FirestoreRecordStore

        return FirestoreRecordStore.from_settings(settings)

    logger.info(f"Using JSON record store at {settings.data_file}")
    return JsonRecordStore(settings.data_file, timeout=settings.store_timeout)

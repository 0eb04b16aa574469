"""Cloud Firestore record store."""
import json
import logging
from typing import Any, Dict, List

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError

from src.services.record_store import RecordStore, StoredDocument
from src.utils.config import Settings
from src.utils.exceptions import StorePersistenceError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "ekathra-registration"


def _load_credentials(settings: Settings):
    """
    Resolve service account credentials, in order of preference:

    1) FIREBASE_SERVICE_ACCOUNT_JSON containing the service account JSON
    2) FIREBASE_CREDENTIALS_FILE pointing to a service account file
    3) Application default credentials
    """
    if settings.firebase_service_account_json:
        try:
            info = json.loads(settings.firebase_service_account_json)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse FIREBASE_SERVICE_ACCOUNT_JSON: {e}") from e
        return credentials.Certificate(info)

    if settings.firebase_credentials_file:
        return credentials.Certificate(settings.firebase_credentials_file)

    return credentials.ApplicationDefault()


def _get_or_init_app(settings: Settings):
    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        cred = _load_credentials(settings)
        return firebase_admin.initialize_app(cred, name=FIREBASE_APP_NAME)


class FirestoreRecordStore(RecordStore):
    """Record store backed by a Firestore collection; store keys are document IDs."""

    def __init__(self, client, collection: str = "people", timeout: float = 10.0):
        self.client = client
        self.collection = collection
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreRecordStore":
        """Initialize the Firebase app once per process and wrap its Firestore client."""
        try:
            app = _get_or_init_app(settings)
            client = firestore.client(app)
        except Exception as e:
            logger.error(f"Failed to initialize Firestore client: {e}")
            raise StorePersistenceError("Could not connect to the registration database") from e

        logger.info(f"Using Firestore record store, collection '{settings.firestore_collection}'")
        return cls(client, collection=settings.firestore_collection, timeout=settings.store_timeout)

    def _collection(self):
        return self.client.collection(self.collection)

    def list_all(self) -> List[StoredDocument]:
        try:
            snapshots = self._collection().stream(timeout=self.timeout)
            return [(snap.id, snap.to_dict() or {}) for snap in snapshots]
        except GoogleAPIError as e:
            logger.error(f"Failed to list Firestore collection '{self.collection}': {e}")
            raise StorePersistenceError("Could not load registrations") from e

    def insert(self, document: Dict[str, Any]) -> str:
        try:
            _, doc_ref = self._collection().add(dict(document), timeout=self.timeout)
        except GoogleAPIError as e:
            logger.error(f"Failed to add document to '{self.collection}': {e}")
            raise StorePersistenceError("Could not save registration") from e
        return doc_ref.id

    def delete(self, store_key: str) -> None:
        try:
            self._collection().document(store_key).delete(timeout=self.timeout)
        except GoogleAPIError as e:
            logger.error(f"Failed to delete document {store_key} from '{self.collection}': {e}")
            raise StorePersistenceError("Could not delete registration") from e

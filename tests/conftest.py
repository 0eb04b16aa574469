"""Shared fixtures."""
import itertools

import pytest

from src.models.app_state import AppState
from src.services.record_store import RecordStore
from src.utils.config import Settings
from src.utils.exceptions import StorePersistenceError


class MemoryRecordStore(RecordStore):
    """In-memory record store that can be told to fail."""

    def __init__(self):
        self.records = {}
        self.calls = []
        self.fail_on = set()
        self._keys = (f"key-{i}" for i in itertools.count(1))

    def _check(self, operation):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise StorePersistenceError(f"Simulated {operation} failure")

    def list_all(self):
        self._check("list_all")
        return list(self.records.items())

    def insert(self, document):
        self._check("insert")
        key = next(self._keys)
        self.records[key] = dict(document)
        return key

    def delete(self, store_key):
        self._check("delete")
        self.records.pop(store_key, None)

    @property
    def mutations(self):
        return [call for call in self.calls if call in ("insert", "delete")]


@pytest.fixture
def memory_store():
    """Empty in-memory record store."""
    return MemoryRecordStore()


@pytest.fixture
def app_state():
    """Loaded, empty application state."""
    return AppState(loaded=True)


@pytest.fixture
def settings():
    """Settings with an admin passphrase configured."""
    return Settings(admin_password="ekathra25")

"""
Shared test fixtures and helpers for the pki-urls test suite.

Provides an in-memory key-value backend, a config store on top of it,
and a helper to read the raw persisted bytes (for "nothing changed" checks).
"""

from __future__ import annotations

import pytest

from pki_urls.adapters.config_store import KeyValueUrlConfigStore
from pki_urls.adapters.storage import InMemoryStorage
from pki_urls.domain.models import STORAGE_KEY


@pytest.fixture()
def storage() -> InMemoryStorage:
    """A fresh, empty in-memory backend."""
    return InMemoryStorage()


@pytest.fixture()
def store(storage: InMemoryStorage) -> KeyValueUrlConfigStore:
    """Config store adapter over the in-memory backend."""
    return KeyValueUrlConfigStore(storage)


def raw_record(storage: InMemoryStorage) -> bytes | None:
    """Return the bytes stored under the URL config key, or None if never written."""
    entry = storage.get(STORAGE_KEY)
    return entry.value if entry is not None else None

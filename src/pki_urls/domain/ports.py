"""
Ports — Protocol-based interfaces for infrastructure adapters.

These define WHAT the application needs (contracts) without specifying
HOW it's done (implementation). Following hexagonal architecture:

  Domain ← Ports (protocols) ← Adapters (implementations)

Two layers of storage contract:
  1. KeyValueStorage → raw get/put of bytes by key (the external backend)
  2. UrlConfigStore  → typed load/save of the single URLConfig record

KeyValueStorage is the boundary to third-party code, so it raises.
UrlConfigStore is consumed by the handler, so it returns Result.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway.result import Result

from pki_urls.domain.models import StorageEntry, URLConfig, UrlConfigLookup


@runtime_checkable
class KeyValueStorage(Protocol):
    """
    Port: the external key-value store.

    No concurrency control is assumed. A single put is all-or-nothing
    for its key. Both methods raise on backend failure.
    """

    def get(self, key: str) -> StorageEntry | None:
        """Return the entry stored under `key`, or None if it was never written."""
        ...

    def put(self, entry: StorageEntry) -> None:
        """Write `entry`, replacing any previous value for its key."""
        ...


@runtime_checkable
class UrlConfigStore(Protocol):
    """
    Port: persistence of exactly one URLConfig record under a fixed key.

    load() succeeds with an empty lookup when nothing has been stored.
    Failures are STORAGE_UNAVAILABLE_ERROR (backend) or ENCODING_ERROR
    (record cannot be (de)serialized).
    """

    def load(self) -> Result[UrlConfigLookup]: ...

    def save(self, record: URLConfig) -> Result[URLConfig]:
        """Persist `record`, returning it unchanged on success."""
        ...

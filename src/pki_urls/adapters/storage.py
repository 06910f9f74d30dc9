"""
Key-value storage adapters — the external collaborator behind the config store.

Adapter layer — implements the KeyValueStorage port twice:

  InMemoryStorage → process-local dict (development, tests, single replica)
  PsycopgStorage  → PostgreSQL table with one row per key

Both RAISE on failure; turning exceptions into Result failures is the job
of the config store adapter that sits on top.

PostgreSQL layout:
  CREATE TABLE pki_storage (key TEXT PRIMARY KEY, value BYTEA NOT NULL)

A put is a single-statement upsert inside its own transaction, so each
key is replaced all-or-nothing. Transient connection errors are retried
with tenacity exponential backoff; every other error propagates at once.
"""

from __future__ import annotations

import threading

import psycopg
import structlog
from psycopg import sql
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pki_urls.domain.models import StorageEntry

log = structlog.get_logger()

_CREATE_TABLE = sql.SQL(
    "CREATE TABLE IF NOT EXISTS {table} (key TEXT PRIMARY KEY, value BYTEA NOT NULL)"
)

_SELECT = sql.SQL("SELECT value FROM {table} WHERE key = %s")

_UPSERT = sql.SQL(
    "INSERT INTO {table} (key, value) VALUES (%s, %s) "
    "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value"
)


class InMemoryStorage:
    """
    Dict-backed key-value storage.

    Implements the KeyValueStorage port. Values are copied on the way in
    and out so callers cannot alias stored bytes.
    """

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> StorageEntry | None:
        with self._lock:
            value = self._data.get(key)
        if value is None:
            return None
        return StorageEntry(key=key, value=bytes(value))

    def put(self, entry: StorageEntry) -> None:
        with self._lock:
            self._data[entry.key] = bytes(entry.value)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    log.warning(
        "storage.retry",
        attempt=retry_state.attempt_number,
        error=str(exc),
    )


class PsycopgStorage:
    """
    Persist key-value entries to PostgreSQL using psycopg (v3).

    Implements the KeyValueStorage port.
    Opens a new connection per call (no pooling).
    """

    def __init__(
        self,
        dsn: str,
        table: str = "pki_storage",
        connect_attempts: int = 3,
    ) -> None:
        self._dsn = dsn
        self._table_name = table
        self._table = sql.Identifier(table)
        self._retrying = Retrying(
            stop=stop_after_attempt(connect_attempts),
            wait=wait_exponential(multiplier=0.2, min=0.1, max=5),
            retry=retry_if_exception_type(psycopg.OperationalError),
            before_sleep=_log_retry,
            reraise=True,
        )

    def ensure_schema(self) -> None:
        """Create the storage table if it does not exist yet."""
        self._retrying.copy()(self._execute_ddl)
        log.info("storage.schema_ready", table=self._table_name)

    def get(self, key: str) -> StorageEntry | None:
        return self._retrying.copy()(self._select, key)

    def put(self, entry: StorageEntry) -> None:
        self._retrying.copy()(self._upsert, entry)

    def _execute_ddl(self) -> None:
        with psycopg.connect(self._dsn) as conn:
            conn.execute(_CREATE_TABLE.format(table=self._table))

    def _select(self, key: str) -> StorageEntry | None:
        with psycopg.connect(self._dsn) as conn:
            row = conn.execute(_SELECT.format(table=self._table), (key,)).fetchone()
        if row is None:
            return None
        return StorageEntry(key=key, value=bytes(row[0]))

    def _upsert(self, entry: StorageEntry) -> None:
        with psycopg.connect(self._dsn) as conn, conn.transaction():
            conn.execute(_UPSERT.format(table=self._table), (entry.key, entry.value))

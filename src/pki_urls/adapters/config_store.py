"""
Config store adapter — typed load/save of the URLConfig record.

Adapter layer — implements the UrlConfigStore port on top of any
KeyValueStorage backend.

Persisted format (the only contract with compatibility weight):

  key "urls" → {"issuing_certificates": [...],
                "crl_distribution_points": [...],
                "ocsp_servers": [...]}

encoded as UTF-8 JSON through a pydantic model. Decoding is tolerant:
unknown keys are ignored and missing keys default to []. A value that is
not JSON, or has a non-list field, is corrupt state and fails the load
rather than being silently replaced.

All exceptions are caught at this adapter boundary and returned as Result
failures: backend errors → STORAGE_UNAVAILABLE_ERROR, codec errors →
ENCODING_ERROR.
"""

from __future__ import annotations

import structlog
from pydantic import BaseModel, ConfigDict, Field
from railway import ErrorCode
from railway.result import Result

from pki_urls.domain.models import STORAGE_KEY, StorageEntry, URLConfig, UrlConfigLookup
from pki_urls.domain.ports import KeyValueStorage

log = structlog.get_logger()


class StoredUrls(BaseModel):
    """Wire shape of the persisted record."""

    model_config = ConfigDict(extra="ignore")

    issuing_certificates: list[str] = Field(default_factory=list)
    crl_distribution_points: list[str] = Field(default_factory=list)
    ocsp_servers: list[str] = Field(default_factory=list)


def encode_record(record: URLConfig) -> bytes:
    return StoredUrls(**record.to_dict()).model_dump_json().encode("utf-8")


def decode_record(raw: bytes) -> URLConfig:
    stored = StoredUrls.model_validate_json(raw)
    return URLConfig(
        issuing_certificates=stored.issuing_certificates,
        crl_distribution_points=stored.crl_distribution_points,
        ocsp_servers=stored.ocsp_servers,
    )


class KeyValueUrlConfigStore:
    """
    Load and save the single URLConfig record under a fixed key.

    Implements the UrlConfigStore port.
    """

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> Result[UrlConfigLookup]:
        """
        Fetch and decode the record.

        Returns Success(UrlConfigLookup()) with found=False when the key
        has never been written.
        """
        try:
            entry = self._storage.get(self._key)
        except Exception as e:
            log.error("config_store.load_failed", key=self._key, error=str(e))
            return Result.failure(
                ErrorCode.STORAGE_UNAVAILABLE_ERROR,
                f"Failed to read {self._key!r} from storage",
                e,
            )

        if entry is None:
            log.debug("config_store.not_found", key=self._key)
            return Result.success(UrlConfigLookup())

        return Result.from_computation(
            lambda: UrlConfigLookup(record=decode_record(entry.value)),
            ErrorCode.ENCODING_ERROR,
            f"Stored value under {self._key!r} could not be decoded",
        ).peek_failure(
            lambda err: log.error("config_store.decode_failed", key=self._key, error=err.message)
        )

    def save(self, record: URLConfig) -> Result[URLConfig]:
        """Encode and write the record, overwriting any previous value."""
        return (
            Result.from_computation(
                lambda: encode_record(record),
                ErrorCode.ENCODING_ERROR,
                "URL config could not be encoded",
            )
            .flat_map(
                lambda payload: Result.from_computation(
                    lambda: self._put(payload, record),
                    ErrorCode.STORAGE_UNAVAILABLE_ERROR,
                    f"Failed to write {self._key!r} to storage",
                )
            )
            .peek_failure(
                lambda err: log.error("config_store.save_failed", key=self._key, error=err.message)
            )
        )

    def _put(self, payload: bytes, record: URLConfig) -> URLConfig:
        self._storage.put(StorageEntry(key=self._key, value=payload))
        log.info("config_store.saved", key=self._key, size=len(payload))
        return record

"""
Domain models — immutable value objects for the issuance URL configuration.

URLConfig is the single persisted record. UrlConfigUpdate models a partial
write: each field is independently optional, so "not provided" (None) is
never confused with "provided but empty" ("").

All models are frozen dataclasses (immutable) following functional principles.
Merging an update produces a NEW URLConfig; nothing is mutated in place.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields, replace

STORAGE_KEY = "urls"
"""Fixed key under which the single URLConfig record is stored."""

FIELD_LABELS: dict[str, str] = {
    "issuing_certificates": "issuing certificates",
    "crl_distribution_points": "CRL distribution points",
    "ocsp_servers": "OCSP servers",
}


@dataclass(frozen=True, slots=True)
class URLConfig:
    """
    URLs embedded into issued certificates.

    Each list is ordered and may be empty:
      - issuing_certificates    → Authority Information Access (caIssuers)
      - crl_distribution_points → CRL Distribution Points extension
      - ocsp_servers            → Authority Information Access (OCSP)
    """

    issuing_certificates: list[str] = field(default_factory=list)
    crl_distribution_points: list[str] = field(default_factory=list)
    ocsp_servers: list[str] = field(default_factory=list)

    def with_urls(self, field_name: str, urls: list[str]) -> URLConfig:
        """Return a copy with one list replaced."""
        if field_name not in FIELD_LABELS:
            raise KeyError(f"Unknown URL field: {field_name!r}")
        return replace(self, **{field_name: list(urls)})

    def to_dict(self) -> dict[str, list[str]]:
        """Flat field-name → list mapping, as returned to readers."""
        return {f.name: list(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True, slots=True)
class UrlConfigUpdate:
    """
    A partial write request.

    None means "leave this field alone". Any string, including "",
    means "replace this field with the comma-separated URLs in it".
    """

    issuing_certificates: str | None = None
    crl_distribution_points: str | None = None
    ocsp_servers: str | None = None

    def provided(self) -> Iterator[tuple[str, str]]:
        """Yield (field_name, raw_value) for every field that was set, in declaration order."""
        for f in fields(self):
            raw = getattr(self, f.name)
            if raw is not None:
                yield f.name, raw

    @property
    def is_empty(self) -> bool:
        return next(self.provided(), None) is None


@dataclass(frozen=True, slots=True)
class UrlConfigLookup:
    """
    Outcome of loading the record.

    `record` is None when the key has never been written, which is a
    normal state (not a failure) distinct from a stored record whose
    lists happen to be empty.
    """

    record: URLConfig | None = None

    @property
    def found(self) -> bool:
        return self.record is not None

    def record_or_default(self) -> URLConfig:
        """The stored record, or three empty lists on first write."""
        return self.record if self.record is not None else URLConfig()


@dataclass(frozen=True, slots=True)
class StorageEntry:
    """A raw key/value pair exchanged with the key-value storage backend."""

    key: str
    value: bytes = field(repr=False)

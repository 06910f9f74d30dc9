"""
URL config handler — read and partial-update operations over the record.

Domain layer — all I/O is injected via the UrlConfigStore port.

The write operation is a railway:

  store.load()
    → record_or_default (three empty lists on first write)
      → merge_update (split + validate each provided field, in order)
        → store.save(merged)

A validation failure short-circuits before save, so a rejected request
never persists anything, not even the fields that were valid.

Concurrency: load → merge → save is NOT atomic. Two writers updating
different fields at the same time can race, and the later save silently
drops the earlier writer's change (lost update). The storage port offers
no compare-and-swap, so callers that need strict ordering must serialize
writes themselves.
"""

from __future__ import annotations

import structlog
from railway.failure import FailureDescription
from railway.result import Result

from pki_urls.domain.models import URLConfig, UrlConfigLookup, UrlConfigUpdate
from pki_urls.domain.ports import UrlConfigStore
from pki_urls.domain.validation import parse_url_field

log = structlog.get_logger()

HELP_SYNOPSIS = "Set the URLs for the issuing CA, CRL distribution points, and OCSP servers."

HELP_DESCRIPTION = """\
This path allows you to set the issuing CA, CRL distribution points, and
OCSP server URLs that will be encoded into issued certificates. If these
values are not set, no such information will be encoded in the issued
certificates. To delete URLs, simply re-set the appropriate value with an
empty string.

Multiple URLs can be specified for each type; use commas to separate them.
"""


def read_urls(store: UrlConfigStore) -> Result[dict[str, list[str]]]:
    """
    Return the stored URLs as a flat field → list mapping.

    A never-configured record yields an empty mapping, not a failure.
    """
    return store.load().map(
        lambda lookup: lookup.record.to_dict() if lookup.record is not None else {}
    )


def _apply_field(record: URLConfig, field_name: str, raw: str) -> Result[URLConfig]:
    """Validate one provided field and, if valid, return the record with it replaced."""
    return parse_url_field(field_name, raw).map(
        lambda urls: record.with_urls(field_name, urls)
    )


def merge_update(current: URLConfig, update: UrlConfigUpdate) -> Result[URLConfig]:
    """
    Apply every provided field of `update` on top of `current`.

    Each field validates its own new value. Fields left as None keep
    whatever `current` holds.
    """
    result: Result[URLConfig] = Result.success(current)
    for field_name, raw in update.provided():
        result = result.flat_map(
            lambda record, _name=field_name, _raw=raw: _apply_field(record, _name, _raw)
        )
    return result


def _log_rejected(error: FailureDescription) -> None:
    log.warning("urls.write_rejected", error_code=error.code.value, message=error.message)


def write_urls(store: UrlConfigStore, update: UrlConfigUpdate) -> Result[URLConfig]:
    """
    Partially update the stored record.

    Returns the merged record that was persisted. Transports expose no
    success payload; the value is for callers that want it (and tests).
    """
    return (
        store.load()
        .map(UrlConfigLookup.record_or_default)
        .flat_map(lambda current: merge_update(current, update))
        .peek_failure(_log_rejected)
        .flat_map(store.save)
        .peek(
            lambda record: log.info(
                "urls.written",
                fields=[name for name, _ in update.provided()],
                issuing_certificates=len(record.issuing_certificates),
                crl_distribution_points=len(record.crl_distribution_points),
                ocsp_servers=len(record.ocsp_servers),
            )
        )
    )

"""
URL list parsing and syntax validation.

Inbound values are comma-separated strings. Each token is trimmed and
checked against pydantic's URL grammar (scheme + authority + path).
Only syntax is checked: these URLs are metadata written into certificates,
never contacted by the issuer, so reachability is irrelevant.

Empty tokens are dropped, so "" clears a field to [] and a stray
trailing comma is harmless.
"""

from __future__ import annotations

from pydantic import AnyUrl, TypeAdapter, ValidationError
from railway import ErrorCode
from railway.result import Result

from pki_urls.domain.models import FIELD_LABELS

_URL = TypeAdapter(AnyUrl)


def split_urls(raw: str) -> list[str]:
    """Split a comma-separated value into trimmed, non-empty tokens, preserving order."""
    return [token for token in (part.strip() for part in raw.split(",")) if token]


def url_syntax_error(url: str) -> str | None:
    """Return the parser's complaint about `url`, or None if it parses."""
    try:
        _URL.validate_python(url)
    except ValidationError as e:
        return "; ".join(err["msg"] for err in e.errors())
    return None


def validate_urls(field_name: str, urls: list[str]) -> Result[list[str]]:
    """
    Check every URL in order; the first bad one fails the whole list.

    The failure message names the field, the offending token, and the
    parser error so the caller can fix the request without guessing.
    """
    label = FIELD_LABELS.get(field_name, field_name)
    for url in urls:
        error = url_syntax_error(url)
        if error is not None:
            return Result.failure(
                ErrorCode.VALIDATION_ERROR,
                f"invalid URL found in {label}; url is {url}, error is {error}",
            )
    return Result.success(urls)


def parse_url_field(field_name: str, raw: str) -> Result[list[str]]:
    """Split then validate one inbound field value."""
    return validate_urls(field_name, split_urls(raw))

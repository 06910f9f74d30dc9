"""
Failure description — structured error information for the failure track.

An ErrorCode classifies what went wrong; a FailureDescription carries the
code together with a human-readable message, the originating exception
(if any), and the moment the failure was recorded.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Grouped by the HTTP status range they surface as:
    - Client errors (4xx): VALIDATION
    - Server errors (5xx): ENCODING, STORAGE_UNAVAILABLE, TECHNICAL
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Caller sent a value that fails syntax or domain checks (→ 400)."""

    ENCODING_ERROR = "ENCODING_ERROR"
    """Data could not be serialized or deserialized; stored state may be corrupt (→ 500)."""

    STORAGE_UNAVAILABLE_ERROR = "STORAGE_UNAVAILABLE_ERROR"
    """The storage backend could not be read or written (→ 503)."""

    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected exception escaping a computation (→ 500)."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: code, message, optional exception, timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "bad URL")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc.message
    'bad URL'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def full_stack_trace(self) -> str:
        """The message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.message}\n{tb}"

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

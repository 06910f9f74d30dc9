"""
HTTP integration — ErrorCode → HTTP status mapping and response builders.

Framework-agnostic core plus a FastAPI adapter:

    status = HttpStatusMapper.map_error_code(ErrorCode.VALIDATION_ERROR)  # → 400

    body, status = build_response(result, success_status=200)
    return build_fastapi_response(result)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, TypeVar

from fastapi import Response
from fastapi.responses import JSONResponse

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


class HttpStatusMapper:
    """Maps ErrorCode enum values to HTTP status codes."""

    _CODE_TO_STATUS: dict[ErrorCode, int] = {
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.ENCODING_ERROR: 500,
        ErrorCode.STORAGE_UNAVAILABLE_ERROR: 503,
        ErrorCode.TECHNICAL_ERROR: 500,
    }

    @classmethod
    def map_error_code(cls, code: ErrorCode) -> int:
        return cls._CODE_TO_STATUS.get(code, 500)

    @classmethod
    def map_failure(cls, failure: FailureDescription) -> int:
        return cls.map_error_code(failure.code)


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """
    Standardized error response body.

        {
            "error_code": "VALIDATION_ERROR",
            "message": "invalid URL found in OCSP servers; url is ...",
            "timestamp": "2026-02-17T10:30:00+00:00"
        }
    """

    error_code: str
    message: str
    timestamp: str

    @staticmethod
    def from_failure(failure: FailureDescription) -> ErrorResponse:
        return ErrorResponse(
            error_code=failure.code.value,
            message=failure.message,
            timestamp=failure.timestamp.isoformat(),
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def build_response(
    result: Result[T],
    success_status: int = 200,
    success_body: Any = None,
) -> tuple[Any, int]:
    """
    Build a (body, status_code) tuple from a Result.

        body, status = build_response(result, success_status=201)
    """
    return result.either(
        on_success=lambda value: (
            success_body if success_body is not None else value,
            success_status,
        ),
        on_failure=lambda error: (
            ErrorResponse.from_failure(error).to_dict(),
            HttpStatusMapper.map_failure(error),
        ),
    )


def build_fastapi_response(
    result: Result[T],
    success_status: int = 200,
) -> Response:
    """
    Build a FastAPI response from a Result.

    A 204 success produces an empty body regardless of the success value.
    """
    if result.is_success() and success_status == 204:
        return Response(status_code=204)
    body, status = build_response(result, success_status)
    return JSONResponse(content=body, status_code=status)

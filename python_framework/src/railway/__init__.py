"""
Railway-Oriented Programming (ROP) framework.

Explicit, composable, functional error handling — no exceptions in business logic.

    from railway import Result, ErrorCode

    def require_scheme(url: str) -> Result[str]:
        if "://" not in url:
            return Result.failure(ErrorCode.VALIDATION_ERROR, "URL has no scheme")
        return Result.success(url)

    result = Result.success("http://ca.example").flat_map(require_scheme)
"""

from railway.assertions import ResultAssertions
from railway.execution import (
    ExecutionContext,
    LoggingExecutionContext,
    NoOpExecutionContext,
)
from railway.failure import ErrorCode, FailureDescription
from railway.result import Failure, Result, Success

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ResultAssertions",
]

__version__ = "1.0.0"

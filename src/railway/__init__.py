"""
Railway-Oriented Programming (ROP) helpers.

Every stage returns a Result; failures short-circuit through .flat_map().

    from railway import Result, ErrorCode

    def require_host(host: str | None) -> Result[str]:
        if not host:
            return Result.failure(ErrorCode.VALIDATION_ERROR, "url has no host")
        return Result.success(host)
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ResultAssertions",
]

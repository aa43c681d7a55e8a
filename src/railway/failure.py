"""
Failure description — what travels down the failure track.

A failed stage produces a FailureDescription: an ErrorCode saying which kind
of problem happened, a human-readable message, and (when the failure came
from an exception) the exception itself so the caller can print its text.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """Kinds of failure a stage can report."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Missing or invalid command-line input."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Invalid runtime settings (environment / .env)."""

    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    """A remote endpoint could not be reached or answered with an error."""

    PARSE_ERROR = "PARSE_ERROR"
    """A document is not well-formed."""

    DECODE_ERROR = "DECODE_ERROR"
    """Encoded content (base64, DER) could not be decoded."""

    IO_ERROR = "IO_ERROR"
    """Reading or writing the local filesystem failed."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: error code, message, optional exception, timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "ADFS url is required!")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def detail(self) -> str | None:
        """Text of the underlying exception, or None when there is none."""
        if self.exception is None:
            return None
        return str(self.exception) or type(self.exception).__name__

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.message}\n{tb}"

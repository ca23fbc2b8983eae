"""Error types for the SDD server.

Every expected failure (bad input, rejected path, rate limiting) is raised
as an :class:`SddError` carrying a stable code. The tool dispatcher turns
these into structured error results; nothing here is retried.
"""

from __future__ import annotations

from typing import Any, Dict


INVALID_TYPE = "INVALID_TYPE"
INVALID_LENGTH = "INVALID_LENGTH"
INVALID_FORMAT = "INVALID_FORMAT"
EMPTY_CRITERIA = "EMPTY_CRITERIA"
CRITERION_TOO_LONG = "CRITERION_TOO_LONG"
DESCRIPTION_TOO_LONG = "DESCRIPTION_TOO_LONG"
INVALID_PATH = "INVALID_PATH"
INVALID_EXTENSION = "INVALID_EXTENSION"
FILE_TOO_LARGE = "FILE_TOO_LARGE"
RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
INVALID_ARGS = "INVALID_ARGS"
UNKNOWN_TOOL = "UNKNOWN_TOOL"
UNKNOWN_ERROR = "UNKNOWN_ERROR"


class SddError(Exception):
    """Base error with a machine-readable code."""

    def __init__(self, message: str, code: str = UNKNOWN_ERROR):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a structured tool result."""
        return {
            "success": False,
            "code": self.code,
            "error": self.message,
        }


class ValidationError(SddError):
    """A field failed type, length, format or collection checks."""


class FileWriteError(SddError):
    """An output request was rejected before anything was written."""


class RateLimitError(SddError):
    """The calling client exhausted its request window."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, RATE_LIMIT_EXCEEDED)


class InvalidArgsError(SddError):
    """Tool arguments do not have the expected shape."""

    def __init__(self, message: str):
        super().__init__(message, INVALID_ARGS)

"""lcovkit error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Coverage (trace parsing and path resolution)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Coverage (3xxx)
    MALFORMED_RECORD = 3001
    PATH_RESOLUTION_FAILED = 3002
    UNREADABLE_INPUT = 3003


@dataclass(frozen=True, slots=True)
class LcovKitError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'MALFORMED_RECORD')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(LcovKitError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class CoverageError(LcovKitError):
    """Errors raised while reading LCOV traces."""


class MalformedRecordError(CoverageError):
    """A DA or BRDA directive carried a non-integer numeric field."""

    @classmethod
    def for_record(cls, kind: str, line_token: str, raw: str) -> "MalformedRecordError":
        return cls(
            code=ErrorCode.MALFORMED_RECORD,
            message=f"Can't save {kind} data for line {line_token}",
            details={"kind": kind, "line_token": line_token, "raw": raw},
        )

    @property
    def kind(self) -> str:
        return str(self.details["kind"])

    @property
    def line_token(self) -> str:
        return str(self.details["line_token"])


class PathResolutionError(CoverageError):
    """An SF path could not be canonicalized."""

    @classmethod
    def for_path(cls, raw_path: str, reason: str) -> "PathResolutionError":
        return cls(
            code=ErrorCode.PATH_RESOLUTION_FAILED,
            message=f"Unable to resolve coverage path {raw_path!r}: {reason}",
            details={"raw_path": raw_path, "reason": reason},
        )

    @property
    def raw_path(self) -> str:
        return str(self.details["raw_path"])


class UnreadableInputError(CoverageError):
    """The trace file itself could not be read."""

    @classmethod
    def for_path(cls, path: str, reason: str) -> "UnreadableInputError":
        return cls(
            code=ErrorCode.UNREADABLE_INPUT,
            message=f"Could not read content from file: {path} ({reason})",
            details={"path": path, "reason": reason},
        )

"""Core module exports."""

from lcovkit.core.errors import (
    ConfigError,
    CoverageError,
    ErrorCode,
    LcovKitError,
    MalformedRecordError,
    PathResolutionError,
    UnreadableInputError,
)
from lcovkit.core.logging import (
    configure_logging,
    get_log_file_path,
)

__all__ = [
    # Errors
    "ConfigError",
    "CoverageError",
    "ErrorCode",
    "LcovKitError",
    "MalformedRecordError",
    "PathResolutionError",
    "UnreadableInputError",
    # Logging
    "configure_logging",
    "get_log_file_path",
]

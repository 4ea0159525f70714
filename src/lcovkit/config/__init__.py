"""Config module exports."""

from lcovkit.config.loader import LcovKitSettings, load_config, resolve_base_dir
from lcovkit.config.models import (
    CoverageConfig,
    LcovKitConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "resolve_base_dir",
    "CoverageConfig",
    "LcovKitConfig",
    "LcovKitSettings",
    "LoggingConfig",
    "LogOutputConfig",
]

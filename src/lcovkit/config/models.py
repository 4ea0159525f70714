"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (LCOVKIT__SECTION__KEY)
3. Project YAML (.lcovkit/config.yaml)
4. Global YAML (~/.config/lcovkit/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    LCOVKIT__<SECTION>__<KEY>=<VALUE>

Examples:
    LCOVKIT__LOGGING__LEVEL=DEBUG
    LCOVKIT__COVERAGE__FORCE_ZERO_COVERAGE=true
    LCOVKIT__COVERAGE__UT_REPORT_PATHS='["coverage/lcov.info"]'
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        LCOVKIT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every ignored trace section.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CoverageConfig(BaseModel):
    """LCOV ingestion configuration.

    Env vars:
        LCOVKIT__COVERAGE__BASE_DIR: Directory relative SF paths resolve against
        LCOVKIT__COVERAGE__UT_REPORT_PATHS: Unit test LCOV traces
        LCOVKIT__COVERAGE__IT_REPORT_PATHS: Integration test LCOV traces
        LCOVKIT__COVERAGE__FORCE_ZERO_COVERAGE: Zero-fill files absent from traces
        LCOVKIT__COVERAGE__STRICT_PATHS: Require SF paths to exist on disk
    """

    base_dir: str | None = Field(
        default=None,
        description="Base directory for relative SF paths. Default: project root. "
        "Relative values are taken relative to the project root.",
    )
    ut_report_paths: list[str] = Field(
        default_factory=list,
        description="LCOV unit test report paths, relative to the project root.",
    )
    it_report_paths: list[str] = Field(
        default_factory=list,
        description="LCOV integration test report paths, relative to the project root.",
    )
    strict_paths: bool = Field(
        default=True,
        description="Discard sections whose SF path does not exist on disk. "
        "Disable to key missing files by their lexically normalized path.",
    )
    force_zero_coverage: bool = Field(
        default=False,
        description="Report 0% coverage for source files absent from every trace.",
    )
    exclude_type_definitions: bool = Field(
        default=True,
        description="Drop .d.ts files from coverage views and zero-fill.",
    )
    source_suffixes: list[str] = Field(
        default_factory=lambda: [".ts", ".tsx"],
        description="Source file suffixes considered for zero-fill discovery.",
    )
    fail_on_unreadable: bool = Field(
        default=False,
        description="Abort when a configured trace cannot be read. "
        "By default an unreadable trace contributes nothing.",
    )
    max_workers: int = Field(
        default=2,
        description="Parallel trace parsing workers.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if not (1 <= v <= 32):
            raise ValueError(f"max_workers must be 1-32, got {v}")
        return v

    @field_validator("source_suffixes")
    @classmethod
    def validate_source_suffixes(cls, v: list[str]) -> list[str]:
        for suffix in v:
            if not suffix.startswith("."):
                raise ValueError(f"Suffix must start with '.': {suffix}")
        return v


class LcovKitConfig(BaseModel):
    """Root configuration for lcovkit.

    All settings can be configured via:
    1. Environment variables: LCOVKIT__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)

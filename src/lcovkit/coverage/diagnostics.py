"""Diagnostics sinks for trace parsing.

The builder reports dropped records and unresolvable paths through an
injected sink rather than a module-level logger, so each parse can be
observed on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol

import structlog

from lcovkit.core.errors import CoverageError

IssueLevel = Literal["warning", "error"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One issue found while parsing a trace."""

    level: IssueLevel
    error: CoverageError
    source: str  # trace the issue came from
    line_number: int  # 1-based line within the trace

    @property
    def event(self) -> str:
        return f"lcov.{self.error.error_name.lower()}"


class DiagnosticsSink(Protocol):
    """Receives issues found during a parse."""

    def record_issue(self, issue: Diagnostic) -> None: ...


class LoggingDiagnostics:
    """Forwards issues to structlog at the issue's level."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._log = logger or structlog.get_logger()

    def record_issue(self, issue: Diagnostic) -> None:
        log_method = self._log.error if issue.level == "error" else self._log.warning
        log_method(
            issue.event,
            message=issue.error.message,
            source=issue.source,
            trace_line=issue.line_number,
            **issue.error.details,
        )


@dataclass
class CollectingDiagnostics:
    """Keeps every issue in memory."""

    issues: list[Diagnostic] = field(default_factory=list)

    def record_issue(self, issue: Diagnostic) -> None:
        self.issues.append(issue)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def errors(self) -> list[Diagnostic]:
        return [i for i in self.issues if i.level == "error"]

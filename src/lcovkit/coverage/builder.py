"""LCOV trace to CoverageReport.

build_report() does a single pass over the trace lines, keeping a cursor
on the accumulator for the current SF section. Records before the first
SF, and records in sections whose path cannot be resolved, go to
accumulators that never reach the report.

Used by: Istanbul/nyc, Karma, Jest, c8, geninfo, cargo-llvm-cov, pytest-cov
"""

from collections.abc import Iterable
from pathlib import Path

import structlog

from lcovkit.core.errors import (
    MalformedRecordError,
    PathResolutionError,
    UnreadableInputError,
)
from lcovkit.coverage.accumulator import FileCoverageAccumulator
from lcovkit.coverage.diagnostics import Diagnostic, DiagnosticsSink, LoggingDiagnostics
from lcovkit.coverage.models import BranchHit, CoverageReport, FileStart, LineHit
from lcovkit.coverage.paths import resolve_path
from lcovkit.coverage.records import parse_record

log = structlog.get_logger(__name__)


def build_report(
    lines: Iterable[str],
    base_dir: Path | str,
    *,
    diagnostics: DiagnosticsSink | None = None,
    strict_paths: bool = True,
    source: str = "lcov",
) -> CoverageReport:
    """Parse LCOV trace lines into a CoverageReport.

    Args:
        lines: Lines of one trace file.
        base_dir: Directory relative SF paths are resolved against.
        diagnostics: Receives malformed-record warnings and path errors.
            Defaults to a LoggingDiagnostics.
        strict_paths: Passed to resolve_path().
        source: Label stored on the report and on each diagnostic.

    Returns:
        CoverageReport keyed by canonical path.
    """
    sink = diagnostics if diagnostics is not None else LoggingDiagnostics()

    files: dict[str, FileCoverageAccumulator] = {}
    orphan = FileCoverageAccumulator()
    discard = FileCoverageAccumulator()
    current = orphan

    for line_number, line in enumerate(lines, start=1):
        try:
            record = parse_record(line)
        except MalformedRecordError as e:
            sink.record_issue(
                Diagnostic(level="warning", error=e, source=source, line_number=line_number)
            )
            continue

        if isinstance(record, FileStart):
            try:
                path = resolve_path(base_dir, record.path, strict=strict_paths)
            except PathResolutionError as e:
                sink.record_issue(
                    Diagnostic(level="error", error=e, source=source, line_number=line_number)
                )
                current = discard
                continue
            current = files.setdefault(path, FileCoverageAccumulator())
        elif isinstance(record, LineHit):
            current.add_line_hit(record.line, record.count)
        elif isinstance(record, BranchHit):
            current.add_branch_hit(record.line, record.branch_id, record.taken)

    log.debug("lcov.parsed", source=source, files=len(files))
    return CoverageReport(
        source=source,
        files={path: acc.snapshot() for path, acc in files.items()},
    )


class LcovParser:
    """Parser for LCOV trace files on disk."""

    @property
    def format_id(self) -> str:
        return "lcov"

    def can_parse(self, path: Path) -> bool:
        """Check if file looks like LCOV format."""
        if not path.is_file():
            return False
        if path.suffix in (".info", ".lcov"):
            return True
        # Content sniff: first meaningful line should be TN: or SF:
        try:
            with path.open(encoding="utf-8", errors="replace") as f:
                for line in f:
                    stripped = line.strip()
                    if stripped.startswith(("SF:", "TN:")):
                        return True
                    if stripped and not stripped.startswith("#"):
                        break
        except OSError:
            pass
        return False

    def parse(
        self,
        path: Path,
        *,
        base_path: Path | None = None,
        diagnostics: DiagnosticsSink | None = None,
        strict_paths: bool = True,
    ) -> CoverageReport:
        """Parse an LCOV file into a CoverageReport.

        Args:
            path: Trace file.
            base_path: Base for relative SF paths. Defaults to the trace's directory.
            diagnostics: See build_report().
            strict_paths: See resolve_path().

        Raises:
            UnreadableInputError: The trace file is missing or cannot be read.
        """
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            raise UnreadableInputError.for_path(str(path), "file not found") from None
        except OSError as e:
            raise UnreadableInputError.for_path(str(path), str(e)) from e

        return build_report(
            content.splitlines(),
            base_path if base_path is not None else path.parent,
            diagnostics=diagnostics,
            strict_paths=strict_paths,
            source=str(path),
        )

"""LCOV coverage parsing, merging, and measures.

This package provides:
- Record classification and SF path canonicalization
- Per-file accumulation of DA and BRDA counts
- Sum merge across reports (unit + integration)
- Per-file measures and structured summaries

Usage:
    from lcovkit.coverage import LcovParser, merge, compute_measures

    ut = LcovParser().parse(Path("coverage/ut/lcov.info"), base_path=root)
    it = LcovParser().parse(Path("coverage/it/lcov.info"), base_path=root)
    overall = merge(ut, it)
    measures = compute_measures(overall)
"""

from lcovkit.coverage.accumulator import FileCoverageAccumulator
from lcovkit.coverage.builder import LcovParser, build_report
from lcovkit.coverage.diagnostics import (
    CollectingDiagnostics,
    Diagnostic,
    DiagnosticsSink,
    LoggingDiagnostics,
)
from lcovkit.coverage.measures import (
    FileMeasures,
    apply_zero_coverage,
    build_summary,
    compute_file_measures,
    compute_measures,
    discover_source_files,
    zero_coverage_measures,
)
from lcovkit.coverage.merge import merge, merge_file_coverage, merge_reports
from lcovkit.coverage.models import (
    BranchHit,
    BranchSummary,
    CoverageReport,
    CoverageSummary,
    FileCoverage,
    FileStart,
    Ignored,
    LineHit,
    TraceRecord,
)
from lcovkit.coverage.paths import resolve_path
from lcovkit.coverage.records import branch_key, parse_record
from lcovkit.coverage.views import CoverageView, collect_views, load_reports

__all__ = [
    # Models
    "BranchHit",
    "BranchSummary",
    "CoverageReport",
    "CoverageSummary",
    "FileCoverage",
    "FileStart",
    "Ignored",
    "LineHit",
    "TraceRecord",
    # Parsing
    "FileCoverageAccumulator",
    "LcovParser",
    "branch_key",
    "build_report",
    "parse_record",
    "resolve_path",
    # Diagnostics
    "CollectingDiagnostics",
    "Diagnostic",
    "DiagnosticsSink",
    "LoggingDiagnostics",
    # Merge
    "merge",
    "merge_file_coverage",
    "merge_reports",
    # Measures
    "FileMeasures",
    "apply_zero_coverage",
    "build_summary",
    "compute_file_measures",
    "compute_measures",
    "discover_source_files",
    "zero_coverage_measures",
    # Views
    "CoverageView",
    "collect_views",
    "load_reports",
]

"""Coverage measures and structured summaries.

Turns CoverageReport facts into the per-file measures a quality dashboard
consumes:

- lines_to_cover: lines with a DA entry
- uncovered_lines: lines whose hit count is 0
- conditions_to_cover: sum of per-line conditions
- uncovered_conditions: sum of (conditions - covered) per line

plus the serialized per-line data ("1=8;2=0") and a JSON-ready summary.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lcovkit.coverage.models import CoverageReport, FileCoverage

TYPE_DEFINITION_SUFFIX = ".d.ts"

_SKIPPED_DIRS = frozenset({"node_modules"})


@dataclass(frozen=True, slots=True)
class FileMeasures:
    """Coverage measures for one file."""

    path: str
    lines_to_cover: int
    uncovered_lines: int
    conditions_to_cover: int
    uncovered_conditions: int
    line_hits_data: str
    conditions_by_line: str
    covered_conditions_by_line: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "lines_to_cover": self.lines_to_cover,
            "uncovered_lines": self.uncovered_lines,
            "conditions_to_cover": self.conditions_to_cover,
            "uncovered_conditions": self.uncovered_conditions,
            "line_hits_data": self.line_hits_data,
            "conditions_by_line": self.conditions_by_line,
            "covered_conditions_by_line": self.covered_conditions_by_line,
        }


def _format_line_data(data: Mapping[int, int]) -> str:
    return ";".join(f"{line}={value}" for line, value in sorted(data.items()))


def compute_file_measures(path: str, fc: FileCoverage) -> FileMeasures:
    """Measures for a single file."""
    summary = fc.branch_summary()
    return FileMeasures(
        path=path,
        lines_to_cover=len(fc.line_hits),
        uncovered_lines=sum(1 for hits in fc.line_hits.values() if hits == 0),
        conditions_to_cover=sum(s.conditions for s in summary.values()),
        uncovered_conditions=sum(s.uncovered for s in summary.values()),
        line_hits_data=_format_line_data(fc.line_hits),
        conditions_by_line=_format_line_data({ln: s.conditions for ln, s in summary.items()}),
        covered_conditions_by_line=_format_line_data(
            {ln: s.covered for ln, s in summary.items()}
        ),
    )


def compute_measures(report: CoverageReport) -> list[FileMeasures]:
    """Measures for every file in a report, sorted by path."""
    return [compute_file_measures(path, report.files[path]) for path in sorted(report.files)]


def zero_coverage_measures(path: Path) -> FileMeasures:
    """Measures for a source file no trace mentions.

    Every non-blank line counts as a line to cover with zero hits.
    """
    text = path.read_text(encoding="utf-8", errors="replace")
    lines = [n for n, line in enumerate(text.splitlines(), start=1) if line.strip()]
    return FileMeasures(
        path=str(path),
        lines_to_cover=len(lines),
        uncovered_lines=len(lines),
        conditions_to_cover=0,
        uncovered_conditions=0,
        line_hits_data=_format_line_data(dict.fromkeys(lines, 0)),
        conditions_by_line="",
        covered_conditions_by_line="",
    )


def is_type_definition(path: str) -> bool:
    return path.endswith(TYPE_DEFINITION_SUFFIX)


def discover_source_files(
    root: Path,
    suffixes: Iterable[str],
    *,
    exclude_type_definitions: bool = True,
) -> list[Path]:
    """Source files under root, skipping hidden directories and node_modules.

    Returned paths are canonical, matching report keys.
    """
    suffix_tuple = tuple(suffixes)
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in _SKIPPED_DIRS
        )
        for name in sorted(filenames):
            if not name.endswith(suffix_tuple):
                continue
            if exclude_type_definitions and is_type_definition(name):
                continue
            found.append(Path(os.path.normcase(str((Path(dirpath) / name).resolve()))))
    return found


def apply_zero_coverage(
    report: CoverageReport,
    source_files: Iterable[Path],
) -> list[FileMeasures]:
    """Report measures plus zero coverage for source files absent from the report."""
    measures = compute_measures(report)
    for path in source_files:
        if str(path) not in report.files:
            measures.append(zero_coverage_measures(path))
    measures.sort(key=lambda m: m.path)
    return measures


def _compress_ranges(lines: list[int]) -> str:
    """Compress sorted line numbers into range notation, e.g. "1-3,5,7-9"."""
    if not lines:
        return ""
    ranges: list[str] = []
    start = prev = lines[0]
    for line in lines[1:]:
        if line == prev + 1:
            prev = line
            continue
        ranges.append(f"{start}-{prev}" if start != prev else str(start))
        start = prev = line
    ranges.append(f"{start}-{prev}" if start != prev else str(start))
    return ",".join(ranges)


def build_summary(
    report: CoverageReport,
    *,
    include_files: bool = True,
    max_missed_lines: int = 20,
) -> dict[str, Any]:
    """Build a structured coverage summary from a report.

    Output schema:
    {
        "source": str,
        "summary": {"total_files", "total_lines", "covered_lines",
                    "line_coverage_percent", "total_conditions",
                    "covered_conditions", "condition_coverage_percent"},
        "files": [{"path", "total_lines", "covered_lines", "coverage_percent",
                   "missed_lines", "conditions", "covered_conditions"}, ...]
    }

    Files are sorted by coverage percent, lowest first.
    """
    summary = report.summary

    line_percent = summary.line_rate * 100.0 if summary.lines_found else 100.0
    condition_percent = summary.branch_rate * 100.0 if summary.branches_found else None

    result: dict[str, Any] = {
        "source": report.source,
        "summary": {
            "total_files": summary.files,
            "total_lines": summary.lines_found,
            "covered_lines": summary.lines_hit,
            "line_coverage_percent": round(line_percent, 2),
            "total_conditions": summary.branches_found,
            "covered_conditions": summary.branches_hit,
            "condition_coverage_percent": (
                round(condition_percent, 2) if condition_percent is not None else None
            ),
        },
    }

    if include_files:
        file_stats: list[dict[str, Any]] = []
        for path in sorted(report.files):
            fc = report.files[path]
            missed = fc.uncovered_lines
            stats: dict[str, Any] = {
                "path": path,
                "total_lines": fc.lines_found,
                "covered_lines": fc.lines_hit,
                "coverage_percent": round(fc.line_rate * 100.0, 2) if fc.line_hits else 100.0,
                "missed_lines": missed[:max_missed_lines],
                "missed_ranges": _compress_ranges(missed),
                "conditions": fc.branches_found,
                "covered_conditions": fc.branches_hit,
            }
            if len(missed) > max_missed_lines:
                stats["missed_lines_truncated"] = True
            file_stats.append(stats)

        file_stats.sort(key=lambda f: f["coverage_percent"])
        result["files"] = file_stats

    return result

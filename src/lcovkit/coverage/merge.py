"""Coverage report merging with sum semantics.

When merging reports from independent runs (unit and integration tests),
counts add up:

- line[i] = sum(line[i] across all reports that mention it)
- branch[line, id] = sum(taken across all reports that mention it)

Branch summaries are derived from the merged totals, so a branch covered
in two runs still counts once. Merging is equivalent to parsing one trace
holding every input's records for each path.
"""

from collections.abc import Iterable

from lcovkit.coverage.accumulator import FileCoverageAccumulator
from lcovkit.coverage.models import CoverageReport, FileCoverage


def merge_file_coverage(files: Iterable[FileCoverage]) -> FileCoverage:
    """Merge multiple FileCoverage snapshots for the same file.

    Raises:
        ValueError: If no snapshots are given.
    """
    files_list = list(files)
    if not files_list:
        raise ValueError("Cannot merge empty file coverage list")

    acc = FileCoverageAccumulator()
    for fc in files_list:
        acc.add_coverage(fc)
    return acc.snapshot()


def merge_reports(reports: Iterable[CoverageReport], *, source: str = "merged") -> CoverageReport:
    """Merge multiple CoverageReport objects.

    Inputs are read, never modified. Files present in only one report are
    carried over unchanged.

    Args:
        reports: CoverageReport objects to merge.
        source: Label for the merged report.
    """
    files_by_path: dict[str, list[FileCoverage]] = {}
    for report in reports:
        for path, fc in report.files.items():
            files_by_path.setdefault(path, []).append(fc)

    merged_files: dict[str, FileCoverage] = {}
    for path, file_list in files_by_path.items():
        if len(file_list) == 1:
            merged_files[path] = file_list[0]
        else:
            merged_files[path] = merge_file_coverage(file_list)

    return CoverageReport(source=source, files=merged_files)


def merge(*reports: CoverageReport) -> CoverageReport:
    """Convenience function to merge reports as varargs."""
    return merge_reports(reports)

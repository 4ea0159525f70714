"""Mutable per-file accumulation of line and branch counts."""

from lcovkit.coverage.models import FileCoverage


class FileCoverageAccumulator:
    """Sums DA and BRDA counts for one source file.

    Counts only ever grow: a repeated line or (line, branch) pair adds to
    the running total, so record order never changes the result.
    """

    __slots__ = ("_hits", "_branches")

    def __init__(self) -> None:
        # line number -> execution count
        self._hits: dict[int, int] = {}
        # line number -> branch id -> taken
        self._branches: dict[int, dict[str, int]] = {}

    def add_line_hit(self, line: int, count: int) -> None:
        self._hits[line] = self._hits.get(line, 0) + count

    def add_branch_hit(self, line: int, branch_id: str, taken: int) -> None:
        branches_for_line = self._branches.setdefault(line, {})
        branches_for_line[branch_id] = branches_for_line.get(branch_id, 0) + taken

    def add_coverage(self, fc: FileCoverage) -> None:
        """Fold an existing snapshot into this accumulator."""
        for line, hits in fc.line_hits.items():
            self.add_line_hit(line, hits)
        for line, branches in fc.branch_hits.items():
            for branch_id, taken in branches.items():
                self.add_branch_hit(line, branch_id, taken)

    def snapshot(self) -> FileCoverage:
        """Immutable copy of the current totals."""
        return FileCoverage.from_counts(self._hits, self._branches)

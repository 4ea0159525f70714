"""Coverage data model.

File-centric model for LCOV coverage data. A trace is a sequence of
TraceRecord values; accumulated per canonical source path they become
FileCoverage snapshots, collected into a CoverageReport.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# =============================================================================
# Trace records
# =============================================================================


@dataclass(frozen=True, slots=True)
class FileStart:
    """SF:<path> - opens the section for a source file."""

    path: str


@dataclass(frozen=True, slots=True)
class LineHit:
    """DA:<line>,<count>[,<checksum>]"""

    line: int
    count: int


@dataclass(frozen=True, slots=True)
class BranchHit:
    """BRDA:<line>,<block>,<branch>,<taken>

    branch_id is the block token followed by the branch token.
    """

    line: int
    branch_id: str
    taken: int


@dataclass(frozen=True, slots=True)
class Ignored:
    """Any line that carries no line or branch data."""


TraceRecord = FileStart | LineHit | BranchHit | Ignored


# =============================================================================
# Per-file coverage
# =============================================================================


@dataclass(frozen=True, slots=True)
class BranchSummary:
    """Per-line branch summary derived from cumulative taken counts."""

    conditions: int
    covered: int

    @property
    def uncovered(self) -> int:
        return self.conditions - self.covered


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Immutable coverage facts for one source file.

    line_hits maps line number → cumulative execution count.
    branch_hits maps line number → branch id → cumulative taken count.
    Lines and branches are independent: a line may carry branch data
    without a line_hits entry.
    """

    line_hits: Mapping[int, int] = field(default_factory=lambda: MappingProxyType({}))
    branch_hits: Mapping[int, Mapping[str, int]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_counts(
        cls,
        line_hits: Mapping[int, int],
        branch_hits: Mapping[int, Mapping[str, int]],
    ) -> FileCoverage:
        """Build a snapshot from plain dicts, copying them."""
        return cls(
            line_hits=MappingProxyType(dict(line_hits)),
            branch_hits=MappingProxyType(
                {line: MappingProxyType(dict(branches)) for line, branches in branch_hits.items()}
            ),
        )

    def branch_summary(self) -> dict[int, BranchSummary]:
        """Conditions and covered conditions per line with branch data."""
        return {
            line: BranchSummary(
                conditions=len(branches),
                covered=sum(1 for taken in branches.values() if taken > 0),
            )
            for line, branches in self.branch_hits.items()
        }

    @property
    def lines_found(self) -> int:
        """Total number of instrumented lines."""
        return len(self.line_hits)

    @property
    def lines_hit(self) -> int:
        """Number of lines with at least one hit."""
        return sum(1 for hits in self.line_hits.values() if hits > 0)

    @property
    def line_rate(self) -> float:
        """Fraction of lines covered (0.0 to 1.0)."""
        if not self.line_hits:
            return 0.0
        return self.lines_hit / len(self.line_hits)

    @property
    def uncovered_lines(self) -> list[int]:
        """Sorted list of line numbers with zero hits."""
        return sorted(line for line, hits in self.line_hits.items() if hits == 0)

    @property
    def branches_found(self) -> int:
        """Total number of distinct (line, branch) pairs."""
        return sum(len(branches) for branches in self.branch_hits.values())

    @property
    def branches_hit(self) -> int:
        """Number of branches whose cumulative taken count is positive."""
        return sum(
            1
            for branches in self.branch_hits.values()
            for taken in branches.values()
            if taken > 0
        )

    @property
    def branch_rate(self) -> float:
        """Fraction of branches covered (0.0 to 1.0)."""
        found = self.branches_found
        if not found:
            return 0.0
        return self.branches_hit / found


# =============================================================================
# Reports
# =============================================================================


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate coverage statistics across a report."""

    files: int
    lines_found: int
    lines_hit: int
    branches_found: int
    branches_hit: int
    line_rate: float
    branch_rate: float


@dataclass(slots=True)
class CoverageReport:
    """Coverage facts from one or more LCOV traces.

    Files are keyed by canonical absolute path.
    """

    source: str  # trace path, view name, or "merged"
    files: dict[str, FileCoverage] = field(default_factory=dict)  # path → coverage

    @property
    def summary(self) -> CoverageSummary:
        """Compute aggregate summary across all files."""
        lines_found = sum(f.lines_found for f in self.files.values())
        lines_hit = sum(f.lines_hit for f in self.files.values())
        branches_found = sum(f.branches_found for f in self.files.values())
        branches_hit = sum(f.branches_hit for f in self.files.values())

        return CoverageSummary(
            files=len(self.files),
            lines_found=lines_found,
            lines_hit=lines_hit,
            branches_found=branches_found,
            branches_hit=branches_hit,
            line_rate=lines_hit / lines_found if lines_found > 0 else 0.0,
            branch_rate=branches_hit / branches_found if branches_found > 0 else 0.0,
        )

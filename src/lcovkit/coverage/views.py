"""Unit, integration and overall coverage views.

Unit and integration traces are parsed independently and merged per view.
The overall view merges every trace. A trace that cannot be read
contributes nothing unless the configuration asks to fail.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path

import structlog

from lcovkit.config.loader import resolve_base_dir
from lcovkit.config.models import LcovKitConfig
from lcovkit.core.errors import UnreadableInputError
from lcovkit.coverage.builder import LcovParser
from lcovkit.coverage.diagnostics import DiagnosticsSink
from lcovkit.coverage.measures import is_type_definition
from lcovkit.coverage.merge import merge_reports
from lcovkit.coverage.models import CoverageReport

log = structlog.get_logger(__name__)


class CoverageView(str, Enum):
    UNIT = "ut"
    INTEGRATION = "it"
    OVERALL = "overall"


def load_reports(
    paths: Sequence[Path],
    base_dir: Path,
    *,
    strict_paths: bool = True,
    fail_on_unreadable: bool = False,
    diagnostics: DiagnosticsSink | None = None,
    max_workers: int = 1,
) -> list[CoverageReport]:
    """Parse each trace into its own report.

    Each parse owns its report; with max_workers > 1 they run on a thread pool.
    Results keep the order of paths, minus unreadable traces.

    Raises:
        UnreadableInputError: Only when fail_on_unreadable is set.
    """
    parser = LcovParser()

    def _load(path: Path) -> CoverageReport | None:
        try:
            return parser.parse(
                path,
                base_path=base_dir,
                diagnostics=diagnostics,
                strict_paths=strict_paths,
            )
        except UnreadableInputError as e:
            if fail_on_unreadable:
                raise
            log.warning("views.report_unreadable", **e.details)
            return None

    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(paths))) as executor:
            results = list(executor.map(_load, paths))
    else:
        results = [_load(p) for p in paths]

    return [r for r in results if r is not None]


def drop_type_definitions(report: CoverageReport) -> CoverageReport:
    """Copy of report without .d.ts files."""
    return CoverageReport(
        source=report.source,
        files={p: fc for p, fc in report.files.items() if not is_type_definition(p)},
    )


def collect_views(
    config: LcovKitConfig,
    project_root: Path,
    *,
    diagnostics: DiagnosticsSink | None = None,
) -> dict[CoverageView, CoverageReport]:
    """Build the unit, integration and overall views for a project."""
    cov = config.coverage
    base_dir = resolve_base_dir(config, project_root)

    def _paths(raw: list[str]) -> list[Path]:
        return [p if p.is_absolute() else project_root / p for p in map(Path, raw)]

    ut_paths = _paths(cov.ut_report_paths)
    it_paths = _paths(cov.it_report_paths)

    # A trace listed more than once (or under both kinds) is parsed and counted once
    distinct = list(dict.fromkeys([*ut_paths, *it_paths]))
    reports = load_reports(
        distinct,
        base_dir,
        strict_paths=cov.strict_paths,
        fail_on_unreadable=cov.fail_on_unreadable,
        diagnostics=diagnostics,
        max_workers=cov.max_workers,
    )
    by_source = {r.source: r for r in reports}

    def _pick(paths: list[Path]) -> list[CoverageReport]:
        return [by_source[s] for s in dict.fromkeys(map(str, paths)) if s in by_source]

    views = {
        CoverageView.UNIT: merge_reports(_pick(ut_paths), source=CoverageView.UNIT.value),
        CoverageView.INTEGRATION: merge_reports(
            _pick(it_paths), source=CoverageView.INTEGRATION.value
        ),
        CoverageView.OVERALL: merge_reports(reports, source=CoverageView.OVERALL.value),
    }

    if cov.exclude_type_definitions:
        views = {view: drop_type_definitions(report) for view, report in views.items()}

    for view, report in views.items():
        log.debug("views.collected", view=view.value, files=len(report.files))
    return views

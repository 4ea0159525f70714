"""lcovkit measures command - per-view coverage measures from project config."""

import json
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.table import Table

from lcovkit.config.loader import load_config, resolve_base_dir
from lcovkit.core.errors import ConfigError, UnreadableInputError
from lcovkit.core.logging import configure_logging, get_log_file_path
from lcovkit.coverage.measures import (
    FileMeasures,
    apply_zero_coverage,
    compute_measures,
    discover_source_files,
)
from lcovkit.coverage.views import CoverageView, collect_views

log = structlog.get_logger(__name__)


def _make_measures_table(view: CoverageView, measures: list[FileMeasures]) -> Table:
    table = Table(title=f"{view.value} coverage", title_justify="left")
    table.add_column("file", style="cyan", overflow="fold")
    table.add_column("lines to cover", justify="right")
    table.add_column("uncovered lines", justify="right")
    table.add_column("conditions to cover", justify="right")
    table.add_column("uncovered conditions", justify="right")
    for m in measures:
        table.add_row(
            m.path,
            str(m.lines_to_cover),
            str(m.uncovered_lines),
            str(m.conditions_to_cover),
            str(m.uncovered_conditions),
        )
    return table


@click.command()
@click.argument(
    "path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def measures_command(ctx: click.Context, path: Path, as_json: bool) -> None:
    """Compute unit, integration and overall coverage measures.

    PATH is the project root holding .lcovkit/config.yaml (default: current directory).
    """
    project_root = path.resolve()
    try:
        config = load_config(project_root)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    # Project logging config replaces the bootstrap setup; -v still forces DEBUG
    logging_config = config.logging
    if (ctx.obj or {}).get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    try:
        views = collect_views(config, project_root)
    except UnreadableInputError as e:
        log.error("measures.report_unreadable", **e.details)
        log_file = get_log_file_path()
        if log_file:
            raise click.ClickException(f"{e.message}. See {log_file} for details.") from e
        raise click.ClickException(e.message) from e

    cov = config.coverage
    if not cov.ut_report_paths and not cov.it_report_paths and not cov.force_zero_coverage:
        raise click.ClickException(
            "No LCOV report paths configured. Set coverage.ut_report_paths or "
            "coverage.it_report_paths in .lcovkit/config.yaml"
        )

    source_files = (
        discover_source_files(
            resolve_base_dir(config, project_root),
            cov.source_suffixes,
            exclude_type_definitions=cov.exclude_type_definitions,
        )
        if cov.force_zero_coverage
        else []
    )

    results: dict[CoverageView, list[FileMeasures]] = {}
    for view, report in views.items():
        if cov.force_zero_coverage:
            results[view] = apply_zero_coverage(report, source_files)
        else:
            results[view] = compute_measures(report)

    if as_json:
        click.echo(
            json.dumps(
                {view.value: [m.to_dict() for m in measures] for view, measures in results.items()},
                indent=2,
            )
        )
        return

    console = Console()
    for view, measures in results.items():
        console.print(_make_measures_table(view, measures))

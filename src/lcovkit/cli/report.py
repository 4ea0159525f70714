"""lcovkit report command - summarize one or more LCOV traces."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from lcovkit.core.errors import UnreadableInputError
from lcovkit.coverage.builder import LcovParser
from lcovkit.coverage.diagnostics import CollectingDiagnostics, Diagnostic, LoggingDiagnostics
from lcovkit.coverage.measures import build_summary
from lcovkit.coverage.merge import merge_reports
from lcovkit.coverage.models import CoverageReport


class _TeeDiagnostics(CollectingDiagnostics):
    """Collects issues and logs them."""

    def __init__(self) -> None:
        super().__init__()
        self._logging = LoggingDiagnostics()

    def record_issue(self, issue: Diagnostic) -> None:
        super().record_issue(issue)
        self._logging.record_issue(issue)


def _make_report_table(report: CoverageReport) -> Table:
    table = Table(title=f"Coverage: {report.source}", title_justify="left")
    table.add_column("file", style="cyan", overflow="fold")
    table.add_column("lines", justify="right")
    table.add_column("uncovered", justify="right")
    table.add_column("line %", justify="right")
    table.add_column("conditions", justify="right")
    table.add_column("uncovered cond.", justify="right")

    for path in sorted(report.files):
        fc = report.files[path]
        table.add_row(
            path,
            str(fc.lines_found),
            str(fc.lines_found - fc.lines_hit),
            f"{fc.line_rate * 100:.1f}" if fc.line_hits else "-",
            str(fc.branches_found),
            str(fc.branches_found - fc.branches_hit),
        )

    summary = report.summary
    table.add_row(
        "total",
        str(summary.lines_found),
        str(summary.lines_found - summary.lines_hit),
        f"{summary.line_rate * 100:.1f}" if summary.lines_found else "-",
        str(summary.branches_found),
        str(summary.branches_found - summary.branches_hit),
        style="bold",
    )
    return table


@click.command()
@click.argument(
    "traces", nargs=-1, required=True, type=click.Path(dir_okay=False, path_type=Path)
)
@click.option(
    "--base-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Base directory for relative SF paths (default: current directory)",
)
@click.option("--separate", is_flag=True, help="Report each trace on its own instead of merging")
@click.option(
    "--lenient-paths", is_flag=True, help="Keep sections whose SF path does not exist on disk"
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def report_command(
    traces: tuple[Path, ...],
    base_dir: Path | None,
    separate: bool,
    lenient_paths: bool,
    as_json: bool,
) -> None:
    """Summarize line and condition coverage from LCOV TRACES."""
    base_dir = (base_dir or Path.cwd()).resolve()
    parser = LcovParser()
    diagnostics = _TeeDiagnostics()

    reports: list[CoverageReport] = []
    unreadable: list[str] = []
    for trace in traces:
        try:
            reports.append(
                parser.parse(
                    trace,
                    base_path=base_dir,
                    diagnostics=diagnostics,
                    strict_paths=not lenient_paths,
                )
            )
        except UnreadableInputError as e:
            unreadable.append(str(trace))
            click.echo(f"Error: {e.message}", err=True)

    if not reports:
        raise click.ClickException("No readable LCOV traces")

    if not separate:
        reports = [merge_reports(reports)]

    if as_json:
        payload = {
            "reports": [build_summary(r) for r in reports],
            "unreadable": unreadable,
            "issues": [
                {"level": i.level, "source": i.source, "line": i.line_number, **i.error.to_dict()}
                for i in diagnostics.issues
            ],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    console = Console()
    for report in reports:
        console.print(_make_report_table(report))
    if diagnostics.issues:
        console.print(
            f"[yellow]{len(diagnostics.warnings)} malformed record(s) skipped, "
            f"{len(diagnostics.errors)} section(s) with unresolved paths[/yellow]"
        )

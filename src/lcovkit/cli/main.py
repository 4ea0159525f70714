"""lcovkit CLI - lcovkit command."""

import click

from lcovkit.cli.measures import measures_command
from lcovkit.cli.report import report_command
from lcovkit.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="lcovkit")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """lcovkit - LCOV trace parsing and coverage merging."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(report_command, name="report")
cli.add_command(measures_command, name="measures")


if __name__ == "__main__":
    cli()

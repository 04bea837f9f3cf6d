"""Status command — what loaded, what did not, and why."""

import json
from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape
from rich.table import Table

from ..logging_config import setup_logging
from ..results import LoadReport, Severity, summarize
from . import app
from ._common import (
    CONFIG_OPTION,
    QUIET_OPTION,
    STRICT_ACCESS_OPTION,
    VERBOSE_OPTION,
    console,
    load_manager,
    resolve_config,
)


@app.command()
def status(
    dot_discopop: Path = typer.Argument(
        ...,
        help="Path to the .discopop directory",
        file_okay=False,
        dir_okay=True,
    ),
    project: Optional[Path] = typer.Option(
        None,
        "--project",
        "-p",
        help="Project directory the analysis was run on",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        click_type=click.Choice(["rich", "json"], case_sensitive=False),
        help="Output format: rich (human-readable) or json",
    ),
    hotspots_optional: bool = typer.Option(
        False,
        "--hotspots-optional",
        help="Do not treat missing hotspot results as an error",
    ),
    strict: Optional[bool] = STRICT_ACCESS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """
    Show which result categories could be loaded from a .discopop directory.

    Exits with status 1 when none of suggestions, hotspots and data
    dependencies could be loaded.

    [bold cyan]Examples:[/bold cyan]

      discopop-results status ./.discopop

      discopop-results status ./.discopop --format json
    """
    settings = resolve_config(config=config, strict=strict, verbose=verbose, quiet=quiet)
    setup_logging(settings.verbosity)

    manager = load_manager(dot_discopop, project, settings)
    report = summarize(manager, hotspots_missing_ok=hotspots_optional)

    if fmt == "json":
        _output_json(report)
    else:
        _output_rich(report)

    if report.all_failed:
        raise typer.Exit(1)


def _output_json(report: LoadReport) -> None:
    payload = {
        "suggestions": {"valid": report.suggestions_valid, "count": report.suggestion_count},
        "hotspots": {"valid": report.hotspots_valid, "count": report.hotspot_count},
        "data_dependencies": {
            "valid": report.data_dependencies_valid,
            "dependents": report.data_dependent_count,
        },
        "errors": report.error_message.splitlines() if report.error_message else [],
    }
    typer.echo(json.dumps(payload, indent=2))


def _output_rich(report: LoadReport) -> None:
    table = Table(title="DiscoPoP results")
    table.add_column("Category", style="cyan")
    table.add_column("Status")
    table.add_column("Records", justify="right")

    rows = (
        ("Suggestions", report.suggestions_valid, report.suggestion_count),
        ("Hotspots", report.hotspots_valid, report.hotspot_count),
        ("Data dependents", report.data_dependencies_valid, report.data_dependent_count),
    )
    for name, valid, count in rows:
        table.add_row(name, "[green]loaded[/green]" if valid else "[red]invalid[/red]", str(count))
    console.print(table)

    for notice in report.notices:
        color = "red" if notice.severity is Severity.ERROR else "dim"
        # Only the first line: the full error list follows below
        console.print(f"[{color}]{escape(notice.message.splitlines()[0])}[/{color}]")

    if report.error_message:
        console.print()
        for line in report.error_message.splitlines():
            console.print(f"  [yellow]•[/yellow] {escape(line)}", highlight=False)

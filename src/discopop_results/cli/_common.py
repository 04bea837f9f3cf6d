"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import ResultsConfig, load_config
from ..exceptions import ConfigurationError
from ..results import ResultManager

console = Console()

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logging")
QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Only log errors")
STRICT_ACCESS_OPTION = typer.Option(
    None,
    "--strict-access/--lenient-access",
    help="Keep only INIT/RAW/WAR/WAW static dependencies (default: from config)",
)


def resolve_config(
    config: Optional[Path] = None,
    strict: Optional[bool] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ResultsConfig:
    """Build the configuration from CLI options, exiting on invalid settings."""
    overrides: dict = {"verbose": verbose, "quiet": quiet}
    if strict is not None:
        overrides["strict_access_kinds"] = strict
    try:
        return load_config(config_file=config, **overrides)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(2)


def load_manager(
    dot_discopop: Path, project: Optional[Path], settings: ResultsConfig
) -> ResultManager:
    return ResultManager(dot_discopop, project, config=settings)

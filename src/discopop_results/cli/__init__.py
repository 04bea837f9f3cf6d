"""CLI entry point — registers all subcommands."""

import typer

app = typer.Typer(
    name="discopop-results",
    help="DiscoPoP Results - inspect the combined results of a DiscoPoP run",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .status import status as _status  # noqa: F401, E402
from .dependents import dependencies as _dependencies, dependents as _dependents  # noqa: F401, E402


def main() -> None:
    app()

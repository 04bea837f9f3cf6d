"""Dependent commands — the directory/file/dependent index and per-dependent accesses."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.tree import Tree

from ..index import AccessPartition, DirectoryNode, FileNode, build_trie, partition_access
from ..logging_config import setup_logging
from ..results.models import CombinedDataDependency
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
def dependents(
    dot_discopop: Path = typer.Argument(
        ...,
        help="Path to the .discopop directory",
        file_okay=False,
        dir_okay=True,
    ),
    project: Path = typer.Option(
        ...,
        "--project",
        "-p",
        help="Project directory the analysis was run on",
    ),
    strict: Optional[bool] = STRICT_ACCESS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """
    List every declared dependent, grouped by directory and file.

    [bold cyan]Examples:[/bold cyan]

      discopop-results dependents ./.discopop --project .
    """
    settings = resolve_config(config=config, strict=strict, verbose=verbose, quiet=quiet)
    setup_logging(settings.verbosity)
    manager = load_manager(dot_discopop, project, settings)

    if not manager.valid_data_dependencies:
        console.print(f"[red]No data dependencies found:[/red] {escape(manager.error_message or '')}")
        raise typer.Exit(1)

    # Paths in FileMapping.txt are absolute
    trie = build_trie(manager.data_dependencies, str(project.absolute()))

    tree = Tree(f"[bold]{escape(trie.project_root)}[/bold]")
    _add_children(tree, trie)
    console.print(tree)

    if trie.rejected:
        console.print(
            f"[yellow]{len(trie.rejected)} dependents outside the project were skipped[/yellow]"
        )


def _add_children(branch: Tree, node: DirectoryNode) -> None:
    for child in node.get_children():
        if isinstance(child, FileNode):
            file_branch = branch.add(f"[cyan]{escape(child.name)}[/cyan]")
            for dependent in child.get_children():
                file_branch.add(f"{escape(dependent.label)} [dim]({escape(dependent.id)})[/dim]")
        else:
            _add_children(branch.add(f"[bold blue]{escape(child.name)}/[/bold blue]"), child)


@app.command()
def dependencies(
    dot_discopop: Path = typer.Argument(
        ...,
        help="Path to the .discopop directory",
        file_okay=False,
        dir_okay=True,
    ),
    dependent_id: str = typer.Argument(..., help="Id of the dependent, as shown by 'dependents'"),
    strict: Optional[bool] = STRICT_ACCESS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """
    Show where one dependent is declared, read and written.

    [bold cyan]Examples:[/bold cyan]

      discopop-results dependencies ./.discopop 42
    """
    settings = resolve_config(config=config, strict=strict, verbose=verbose, quiet=quiet)
    setup_logging(settings.verbosity)
    manager = load_manager(dot_discopop, None, settings)

    if not manager.valid_data_dependencies:
        console.print(f"[red]No data dependencies found:[/red] {escape(manager.error_message or '')}")
        raise typer.Exit(1)

    records = manager.get_data_dependencies(dependent_id)
    if not records:
        console.print(f"[yellow]Unknown dependent:[/yellow] {escape(dependent_id)}")
        raise typer.Exit(1)

    partition = partition_access(records, unknown_as_write=settings.unknown_as_write)
    console.print(_partition_tree(dependent_id, partition))


def _partition_tree(dependent_id: str, partition: AccessPartition) -> Tree:
    name = partition.init.dependent_name if partition.init else dependent_id
    tree = Tree(f"[bold]{escape(name)}[/bold] [dim]({escape(dependent_id)})[/dim]")
    if partition.init is not None:
        tree.add(f"declared in {_location(partition.init)}")

    for title, bucket in (
        ("Read access", partition.reads),
        ("Write access", partition.writes),
        ("Unrecognized access", partition.unrecognized),
    ):
        if not bucket:
            continue
        branch = tree.add(f"[cyan]{title}[/cyan] ({len(bucket)})")
        for record in bucket:
            branch.add(f"{_location(record)}, access {escape(record.access)}")
    return tree


def _location(record: CombinedDataDependency) -> str:
    return f"File : {escape(record.file_name)} , Ln : {record.mapped_line}"

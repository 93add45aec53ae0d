"""CLI entry point for statekeep.

Invoked as::

    statekeep [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m statekeep.cli.main

Commands
--------
convert     Group a model's annotated members by class and link parents
check       Report members rejected by the modifier policy
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from statekeep.diagnostics import Diagnostic
    from statekeep.model.descriptors import ClassGroups
    from statekeep.model.loader import Batch

console = Console()
err_console = Console(stderr=True)

_MODIFIER_CHOICES = ["public", "protected", "private", "static", "final", "transient", "volatile"]


def _load_or_exit(path: str) -> "Batch":
    """Load a model file, printing the problem and exiting on failure."""
    from statekeep.errors import ModelError
    from statekeep.model.loader import ModelLoader

    try:
        return ModelLoader().load(path)
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    except ModelError as exc:
        err_console.print(f"[red]Model error:[/red] {escape(str(exc))}")
        sys.exit(1)


def _print_diagnostics(diagnostics: list["Diagnostic"]) -> None:
    for d in diagnostics:
        err_console.print(
            f"[red]{d.severity.name}[/red] {escape(str(d.location))}: {escape(d.message)}",
            soft_wrap=True,
        )


def _groups_table(groups: "ClassGroups", title: str) -> Table:
    table = Table(title=title, show_lines=True)
    table.add_column("Class", style="bold")
    table.add_column("Binary name")
    table.add_column("Parent")
    table.add_column("Attributes")
    for owner, attributes in groups.items():
        table.add_row(
            owner.qualified_name,
            owner.binary_name,
            owner.parent_qualified_name or "[dim]-[/dim]",
            ", ".join(a.name for a in attributes),
        )
    return table


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="statekeep")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Member classification and hierarchy linking for state-saving generators."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from statekeep import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]statekeep[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# convert command
# ---------------------------------------------------------------------------


@cli.command(name="convert")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    show_default=True,
    help="Output format",
)
@click.option(
    "--accept",
    "accepted",
    multiple=True,
    type=click.Choice(_MODIFIER_CHOICES, case_sensitive=False),
    help="Modifier that makes a member valid (repeatable; default: private, static, final)",
)
@click.option("--strict", is_flag=True, default=False, help="Exit with status 1 if any member is rejected")
def convert_command(file: str, output_format: str, accepted: tuple[str, ...], strict: bool) -> None:
    """Group the annotated members of a model by class and link parents.

    FILE is a YAML or JSON model file.
    """
    from statekeep.converter import DEFAULT_ACCEPTED_MODIFIERS, Converter
    from statekeep.diagnostics import CollectingSink
    from statekeep.model.nodes import Modifier
    from statekeep.model.serializer import ResultSerializer

    batch = _load_or_exit(file)
    modifiers = (
        frozenset(Modifier.from_name(name) for name in accepted)
        if accepted
        else DEFAULT_ACCEPTED_MODIFIERS
    )
    sink = CollectingSink()
    groups = Converter(batch.type_system, sink=sink, accepted_modifiers=modifiers).convert(
        batch.members
    )

    _print_diagnostics(sink.diagnostics)
    serializer = ResultSerializer()
    if output_format == "json":
        click.echo(serializer.to_json(groups))
    elif output_format == "yaml":
        click.echo(serializer.to_yaml(groups), nl=False)
    elif groups:
        console.print(_groups_table(groups, title=f"Classes: {file}"))
    else:
        console.print(f"[yellow]No annotated classes[/yellow] in {file}")

    if strict and sink.error_count:
        sys.exit(1)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False))
def check_command(file: str) -> None:
    """Report members of FILE rejected by the modifier policy."""
    from statekeep.converter import Converter
    from statekeep.diagnostics import CollectingSink

    batch = _load_or_exit(file)
    sink = CollectingSink()
    Converter(batch.type_system, sink=sink).convert(batch.members)

    if not sink.diagnostics:
        console.print(f"[green]OK[/green] {file}: {len(batch.members)} member(s) accepted")
        sys.exit(0)

    _print_diagnostics(sink.diagnostics)
    console.print(
        f"\n[bold]Summary:[/bold] {sink.error_count} of {len(batch.members)} member(s) rejected"
    )
    sys.exit(1)


if __name__ == "__main__":
    cli()

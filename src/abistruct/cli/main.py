"""abistruct CLI - ABI struct catalogue tool.

This module provides the command-line interface for abistruct,
enabling inspection, export and validation of struct catalogues.
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="abistruct",
    help="Collect and resolve struct declarations from contract ABIs",
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()
err_console = Console(stderr=True)

# Global verbose flag
_verbose: bool = False

AbiPathArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to an ABI JSON file (or artifact with an 'abi' key)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]


def set_verbose(verbose: bool) -> None:
    """Set global verbose mode."""
    global _verbose
    _verbose = verbose


def is_verbose() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose


def print_exception(e: Exception) -> None:
    """Print exception details in verbose mode."""
    if _verbose:
        err_console.print("\n[dim]--- Traceback (verbose mode) ---[/dim]")
        err_console.print(f"[dim]{traceback.format_exc()}[/dim]")


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    from abistruct.core.config import get_config

    level = "DEBUG" if verbose else get_config().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with full tracebacks"),
    ] = False,
) -> None:
    """abistruct CLI - ABI struct catalogue tool."""
    set_verbose(verbose)
    configure_logging(verbose)


def build_or_exit(abi_path: Path, validate: bool = True):
    """Build the catalogue for an ABI file, exiting on failure."""
    from abistruct.services.build_service import CatalogueBuildService

    result = CatalogueBuildService().build(abi_path, validate=validate)
    if result.errors:
        err_console.print(f"[red]Error:[/red] Failed to build catalogue for {abi_path.name}")
        for error in result.errors:
            err_console.print(f"  - {error}")
        raise typer.Exit(1)
    return result


@app.command()
def inspect(
    abi_path: AbiPathArgument,
    scope: Annotated[
        Optional[str],
        typer.Option("--scope", "-s", help="Only show structs declared in this scope"),
    ] = None,
    global_only: Annotated[
        bool,
        typer.Option("--global", "-g", help="Only show globally declared structs"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output machine-readable JSON"),
    ] = False,
) -> None:
    """Show the struct declarations of an ABI.

    Example:
        abistruct inspect build/Pool.json
        abistruct inspect build/Pool.json --scope IPool
    """
    from abistruct.cli._tables import build_declarations_table
    from abistruct.core.serializer import serialize_catalogue

    if scope is not None and global_only:
        err_console.print("[red]Error:[/red] --scope and --global are mutually exclusive")
        raise typer.Exit(1)

    result = build_or_exit(abi_path, validate=False)
    catalogue = result.catalogue

    if json_output:
        typer.echo(serialize_catalogue(catalogue))
        return

    if catalogue.is_empty():
        console.print("[yellow]No struct types found[/yellow]")
        return

    if scope is not None:
        declarations = catalogue.scope_declarations(scope)
        title = f"Structs in {scope}"
    elif global_only:
        declarations = catalogue.global_declarations()
        title = "Global structs"
    else:
        declarations = catalogue.all_declarations()
        title = f"Structs in {abi_path.name}"

    if not declarations:
        console.print("[yellow]No matching struct types[/yellow]")
        return

    console.print(build_declarations_table(catalogue, declarations, title=title))
    console.print(f"  Entries: {result.entries_count}")
    console.print(f"  Structs: {result.declarations_count} ({result.global_count} global)")
    for scope_name, count in result.scope_counts.items():
        console.print(f"  Scope [cyan]{scope_name}[/cyan]: {count}")


@app.command()
def export(
    abi_path: AbiPathArgument,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output JSON file path"),
    ] = Path("catalogue.json"),
) -> None:
    """Export the struct catalogue of an ABI to JSON.

    Example:
        abistruct export build/Pool.json -o structs.json
    """
    from abistruct.core.serializer import SerializationError
    from abistruct.services.build_service import CatalogueBuildService

    result = build_or_exit(abi_path)
    if not result.success:
        err_console.print("[red]Error:[/red] Catalogue failed validation, run 'check' for details")
        raise typer.Exit(1)

    try:
        CatalogueBuildService().export(result, output)
    except SerializationError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        if e.details:
            err_console.print(f"  {e.details}")
        print_exception(e)
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Exported to: {output}")
    console.print(f"  Structs: {result.declarations_count}")


@app.command()
def check(abi_path: AbiPathArgument) -> None:
    """Validate that every struct reference of an ABI resolves.

    Example:
        abistruct check build/Pool.json
    """
    from abistruct.cli._tables import build_validation_table

    result = build_or_exit(abi_path)

    if result.validation is not None and not result.validation.is_valid:
        err_console.print(build_validation_table(result.validation.errors))
        err_console.print(
            f"[red]✗[/red] {len(result.validation.errors)} problem(s) in {abi_path.name}"
        )
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {abi_path.name}: {result.declarations_count} structs resolved")


if __name__ == "__main__":
    app()

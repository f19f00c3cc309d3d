# Author: PB
# Maintainer: PB
# Original date: 2026.10.15
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/cli/main.py

"""
treerep command line interface.

A thin caller around the replication engine: it resolves arguments,
invokes replicate(), and reports either the created replica or the error
that came back.
"""

# Standard library imports
import os
from importlib.metadata import version, PackageNotFoundError
from pathlib import Path
from typing import Optional

# Third-party imports
import typer
from rich.console import Console

# Local treerep imports
from treerep.cli.utils import display_path, handle_operation_error, load_config_with_console
from treerep.core.replicator import replicate
from treerep.core.snapshots import TreeSnapshot, hash_file, hash_tree
from treerep.data.path_validation import validate_absolute_path
from treerep.storage.json_store import save_json
from treerep.storage.records import ReplicationRecord
from treerep.system.exceptions import TreeRepError
from treerep.system.logging_setup import setup_logging

# Initialize Typer app
app = typer.Typer(
    help="""treerep - all-or-nothing directory tree replication

[bold green]Core Operations:[/bold green] copy
[bold red]Validation:[/bold red] check-path, hash
""",
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        try:
            pkg_version = version("treerep")
        except PackageNotFoundError as e:
            handle_operation_error(console, "retrieving version", e)
        console.print(f"treerep version {pkg_version}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable info logging"),
) -> None:
    """treerep - copy a directory tree completely, or not at all."""
    level = "DEBUG" if debug else "INFO" if verbose else None
    setup_logging(level=level)


# =============================================================================
# CORE OPERATIONS
# =============================================================================

@app.command()
def copy(
    paths: list[str] = typer.Argument(..., help="SOURCE... DEST: directories to replicate, then the destination parent"),
    verify: Optional[bool] = typer.Option(None, "--verify/--no-verify", help="Compare source and replica digests after copying"),
    record: Optional[Path] = typer.Option(None, "--record", help="Write a JSON record of each replica to this file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """[bold green]Core Operations[/bold green]: Replicate SOURCE directories into DEST."""
    if len(paths) < 2:
        console.print("[red]✗[/red] Need at least one SOURCE and a DEST")
        raise typer.Exit(2)

    config = load_config_with_console(console)
    if verify is None:
        verify = config.verify_after_copy

    *sources, destination = paths
    # The engine wants an absolute destination; relative CLI input means cwd
    destination = os.path.abspath(destination)

    records = []
    try:
        for source in sources:
            snapshot = TreeSnapshot(Path(source)) if verify else None
            try:
                dest_root = replicate(source, destination, long_path_threshold=config.long_path_threshold)
            except TreeRepError as e:
                handle_operation_error(console, f"replicating {source}", e)

            tree_hash = None
            if snapshot is not None:
                if not snapshot.is_not_changed():
                    console.print(f"[yellow]![/yellow] {source} changed while it was being copied")
                    raise typer.Exit(1)
                tree_hash = hash_tree(dest_root)
                if tree_hash != snapshot.current_id:
                    console.print(f"[red]✗[/red] Replica {display_path(dest_root)} does not match {source}")
                    raise typer.Exit(1)

            records.append(ReplicationRecord(source=Path(source).absolute(),
                                             destination=Path(display_path(dest_root)),
                                             tree_hash=tree_hash))
            if not quiet:
                suffix = " [dim](verified)[/dim]" if tree_hash else ""
                console.print(f"[green]✓[/green] Replicated {source} → {display_path(dest_root)}{suffix}")
    finally:
        # Replicas made before a failure stay on disk, so they are recorded too
        if record is not None:
            _write_record(records, record)


def _write_record(records: list[ReplicationRecord], record: Path) -> None:
    try:
        save_json(records, os.path.abspath(record))
    except TreeRepError as e:
        handle_operation_error(console, "writing record", e)


# =============================================================================
# VALIDATION
# =============================================================================

@app.command(name="check-path")
def check_path(
    path: str = typer.Argument(..., help="Path to check"),
) -> None:
    """[bold red]Validation[/bold red]: Check that PATH is a well-formed absolute path."""
    ok, message = validate_absolute_path(path)
    if ok:
        console.print(f"[green]✓[/green] {message}")
    else:
        console.print(f"[red]✗[/red] {message}")
        raise typer.Exit(1)


@app.command(name="hash")
def hash_command(
    path: Path = typer.Argument(..., help="File or directory to hash"),
) -> None:
    """[bold red]Validation[/bold red]: Print the SHA-256 digest of a file or directory tree."""
    try:
        if path.is_dir():
            digest = hash_tree(path)
        else:
            digest = hash_file(path)
    except OSError as e:
        handle_operation_error(console, f"hashing {path}", e)
    console.print(f"{digest}  {path}")


# =============================================================================
# ENTRY POINT
# =============================================================================

def main() -> None:  # pragma: no cover - entry point
    """Entry point for the treerep CLI application."""
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

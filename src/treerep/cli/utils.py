# Author: PB
# Maintainer: PB
# Original date: 2026.10.15
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/cli/utils.py

"""
CLI utility functions shared by treerep commands.

All functions handle console output and typer exits consistently.
"""

import typer
from rich.console import Console

from treerep.config.manager import UserConfig, load_merged_user_config
from treerep.core.long_paths import strip_long_path_prefix
from treerep.system.exceptions import ConfigError, ReplicationIOError


def load_config_with_console(console: Console, verbose: bool = False) -> UserConfig:
    """
    Load user configuration with proper error handling and console output.

    Raises:
        typer.Exit: If configuration loading fails
    """
    if verbose:
        console.print("[dim]Loading configuration...[/dim]")

    try:
        return load_merged_user_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] Configuration error: {e}")
        raise typer.Exit(1)


def display_path(path) -> str:
    return strip_long_path_prefix(str(path))


def handle_operation_error(console: Console, operation: str, error: Exception) -> None:
    """Handle operation errors with consistent formatting."""
    console.print(f"[red]✗[/red] Error {operation}: {error}")
    if error.__cause__ is not None:
        console.print(f"  [dim]caused by: {error.__cause__}[/dim]")
    if isinstance(error, ReplicationIOError) and error.rollback_error is not None:
        console.print(f"  [yellow]![/yellow] {error.rollback_error}")
    raise typer.Exit(1)

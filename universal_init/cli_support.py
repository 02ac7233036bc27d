"""Shared utilities for universal-init CLI modules."""
from __future__ import annotations

import os
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from universal_init.core.materializer import RenameFailure
from universal_init.models.settings import InitSettings

PACKAGE_MANAGER_ENV_VAR = "UNIVERSAL_INIT_PACKAGE_MANAGER"


def preferred_package_manager(option: Optional[str] = None) -> Optional[str]:
    """Return the package manager forced by option or environment, if any."""
    if option:
        return option
    return os.environ.get(PACKAGE_MANAGER_ENV_VAR) or None


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from universal_init.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def show_templates(console: Console, settings: InitSettings) -> None:
    """Print the configured template choices."""
    table = Table(title="Available templates")
    table.add_column("Key", style="bold cyan")
    table.add_column("Name")
    table.add_column("Package", style="dim")
    for choice in settings.templates:
        table.add_row(choice.key, choice.label, choice.package)
    table.add_row("custom", "Custom Template (Enter Manually)", "")
    console.print(table)


def report_rename_failures(console: Console, failures: List[RenameFailure]) -> None:
    """Summarise dotfile templates that kept their original names."""
    if not failures:
        return
    print_warning(console, f"{len(failures)} template file(s) could not be renamed:")
    for failure in failures:
        console.print(f"  [yellow]{failure.name}[/yellow] -> .{failure.name}: {escape(failure.reason)}")


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting.

    Args:
        console: Rich console for output
        message: Success message
        prefix: Prefix symbol (default: ✓)
    """
    console.print(f"[green]{prefix}[/green] {message}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {message}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}")

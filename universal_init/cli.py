#!/usr/bin/env python3
"""universal-init CLI - Scaffold universal-scripts projects from template packages."""

import typer
from rich.console import Console

from universal_init.cli_init_commands import register_init_commands

app = typer.Typer(
    name="universal-init",
    add_completion=False,
)

console = Console()

register_init_commands(app, console)

if __name__ == "__main__":
    app()

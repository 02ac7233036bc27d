"""Init command - create a new project from a template package."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from universal_init import __version__
from universal_init.cli_support import (
    handle_cli_error,
    preferred_package_manager,
    print_error,
    print_info,
    print_success,
    report_rename_failures,
    setup_file_logging,
    show_templates,
)
from universal_init.config.loader import load_settings
from universal_init.core.errors import InitError, SettingsError, TargetExistsError
from universal_init.core.initializer import ProjectInitializer, ensure_target_available
from universal_init.core.logger import set_verbose
from universal_init.core.selector import TemplateSelector
from universal_init.services.package_manager import detect_package_manager

# Module-level console (will be set by register function)
console: Console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"universal-init {__version__}")
        raise typer.Exit()


def init(
    name: Optional[str] = typer.Argument(
        None, help="Name of the project directory to create (default: my-app)"
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t",
        help="Template key, name or package (skips the selection prompt)"
    ),
    template_version: Optional[str] = typer.Option(
        None, "--template-version", help="Version of the template package to fetch"
    ),
    package_manager: Optional[str] = typer.Option(
        None, "--package-manager", help="Force 'yarn' or 'npm' instead of detecting"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings file path"),
    list_templates: bool = typer.Option(
        False, "--list-templates", help="List available templates and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """Create a new universal-scripts project from a template package.

    Fetches the template with yarn (or npm when yarn is missing), copies its
    files and merges its scripts and dependencies into package.json.

    Examples:
        universal-init my-app                       # Pick a template interactively
        universal-init my-app -t typescript         # Use the Typescript template
        universal-init my-app -t my-template --template-version 2.0.0
        universal-init --list-templates             # Show available templates
    """
    set_verbose(verbose)
    if log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        settings = load_settings(config)
    except SettingsError as e:
        handle_cli_error(e, console, verbose)

    if list_templates:
        show_templates(console, settings)
        return

    project_name = name or settings.default_project_name
    project_path = Path.cwd() / project_name

    console.print(f"[green]🚀 Creating project in: {escape(str(project_path))}[/green]")

    try:
        ensure_target_available(project_path)
    except TargetExistsError:
        print_error(console, "This directory already exists. Use another name.", prefix="⚠️")
        raise typer.Exit(1)

    selection = TemplateSelector(settings, console).select(template)
    print_info(console, f"Using template: {selection.package}", prefix="📦")

    try:
        manager = detect_package_manager(preferred_package_manager(package_manager))
    except ValueError as e:
        handle_cli_error(e, console, verbose)

    try:
        result = ProjectInitializer(settings, manager).run(
            project_path, selection.package, version=template_version
        )
    except InitError as e:
        if project_path.exists():
            console.print(
                f"[dim]The partially created project at {escape(str(project_path))} was left in place; "
                "remove it before trying again.[/dim]"
            )
        handle_cli_error(e, console, verbose)

    report_rename_failures(console, result.rename_failures)

    print_success(console, "[bold]Init completed.[/bold] Now you might want to run:", prefix="✅")
    console.print(f"[dim]  $ [/dim][cyan]cd {project_name} && {result.package_manager.start_hint}[/cyan]")


def register_init_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register the init command with the main Typer app."""
    global console
    console = shared_console

    app.command()(init)

"""
booz.cli - Command Line Interface
=================================

This module provides the interactive entry point for booz using Typer and
questionary. There are no options: running ``booz`` walks the user through
a fixed sequence of questions and then hands the answers to the generator.

Prompt Flow
-----------
    1. Project type            frontend | backend | fullstack
    2. Frontend framework      (frontend and fullstack only)
    3. Backend framework       (backend and fullstack only)
    4. Project name
    5. Install dependencies?
    6. Package manager         (only when installing)

Any prompt can be cancelled with Ctrl-C; the run then stops with a
cancellation notice and exit code 0. Setup errors exit with code 1.

Usage Examples
--------------
    $ booz
    $ booz --help

See Also
--------
- generator.py: Project setup pipeline
- models.py: Configuration data models
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import questionary
import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from booz import __version__
from booz.generator import CommandError, create_project
from booz.models import (
    BackendStack,
    FrontendStack,
    PackageManager,
    ProjectType,
    SetupConfig,
    project_name_error,
)
from booz.renderer import RenderError


if TYPE_CHECKING:
    from questionary import Question


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="booz",
    help="Scaffold frontend, backend and fullstack projects from templates.",
    rich_markup_mode="rich",
    add_completion=False,
)

# Console for rich output
console = Console()


class SetupCancelled(Exception):
    """Raised when the user cancels a prompt."""


def ask(question: Question) -> Any:
    """
    Ask a questionary question and return the answer.

    questionary returns None when the prompt is interrupted.

    Raises
    ------
    SetupCancelled
        If the user cancelled the prompt.
    """
    answer = question.ask()
    if answer is None:
        raise SetupCancelled()
    return answer


def choice_title(label: str, hint: str | None) -> str:
    """Format a choice as "Label (hint)", or just "Label" without a hint."""
    if hint:
        return f"{label} ({hint})"
    return label


# =============================================================================
# Interactive Prompts
# =============================================================================

def prompt_project_type() -> ProjectType:
    """
    Interactively prompt the user to select a project type.

    Returns
    -------
    ProjectType
        The selected project type enum value.
    """
    choices = [
        questionary.Choice(title=pt.description, value=pt)
        for pt in ProjectType
    ]

    return ask(questionary.select(
        "What type of project do you want to create?",
        choices=choices,
    ))


def prompt_frontend_stack() -> FrontendStack:
    """
    Interactively prompt for a frontend framework.

    Returns
    -------
    FrontendStack
        The selected framework.
    """
    choices = [
        questionary.Choice(title=choice_title(fs.label, fs.hint), value=fs)
        for fs in FrontendStack
    ]

    return ask(questionary.select(
        "Choose a frontend framework:",
        choices=choices,
    ))


def prompt_backend_stack() -> BackendStack:
    """
    Interactively prompt for a backend framework.

    Returns
    -------
    BackendStack
        The selected framework.
    """
    choices = [
        questionary.Choice(title=choice_title(bs.label, bs.hint), value=bs)
        for bs in BackendStack
    ]

    return ask(questionary.select(
        "Choose a backend framework:",
        choices=choices,
    ))


def validate_name_answer(value: str) -> bool | str:
    """
    questionary validator for the project name.

    Returns
    -------
    bool | str
        True if the name is usable, otherwise the message to show.
    """
    return project_name_error(value) or True


def prompt_project_name() -> str:
    """
    Prompt for the project name.

    Invalid names are rejected in the prompt itself, so the user is asked
    again instead of the run failing after the last question.

    Returns
    -------
    str
        The project name as typed.
    """
    return ask(questionary.text(
        "Enter the project name:",
        default="my-app",
        validate=validate_name_answer,
    ))


def prompt_install_deps() -> bool:
    """
    Ask whether dependencies should be installed after setup.

    Returns
    -------
    bool
        True to install (the default).
    """
    return ask(questionary.confirm(
        "Install dependencies after setup?",
        default=True,
    ))


def prompt_package_manager() -> PackageManager:
    """
    Prompt for the package manager used to install dependencies.

    Returns
    -------
    PackageManager
        Selected package manager (pnpm is pre-selected).
    """
    choices = [
        questionary.Choice(title=pm.value, value=pm)
        for pm in PackageManager
    ]

    return ask(questionary.select(
        "Choose a package manager:",
        choices=choices,
        default=PackageManager.PNPM,
    ))


def collect_config() -> SetupConfig:
    """
    Run the prompt flow and build the setup configuration.

    Returns
    -------
    SetupConfig
        Validated configuration for the generator.

    Raises
    ------
    SetupCancelled
        If any prompt is cancelled.
    pydantic.ValidationError
        If the answers do not form a valid configuration.
    """
    project_type = prompt_project_type()

    frontend: FrontendStack | None = None
    backend: BackendStack | None = None

    if project_type.needs_frontend:
        frontend = prompt_frontend_stack()

    if project_type.needs_backend:
        backend = prompt_backend_stack()

    name = prompt_project_name()
    install_deps = prompt_install_deps()

    package_manager = PackageManager.NPM
    if install_deps:
        package_manager = prompt_package_manager()

    return SetupConfig(
        name=name,
        project_type=project_type,
        frontend=frontend,
        backend=backend,
        install_deps=install_deps,
        package_manager=package_manager,
    )


def show_summary(config: SetupConfig) -> None:
    """Print the collected configuration as a table."""
    table = Table(title="Project Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", config.name)
    table.add_row("Directory", str(config.project_dir))
    table.add_row("Type", config.project_type.value)
    if config.frontend is not None:
        table.add_row("Frontend", config.frontend.label)
    if config.backend is not None:
        table.add_row("Backend", config.backend.label)
    table.add_row(
        "Install",
        config.package_manager.value if config.install_deps else "skipped",
    )

    console.print()
    console.print(table)


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def main() -> None:
    """
    [bold]booz[/] - Interactive project scaffolding.

    Asks for a project type, framework(s), a project name and whether to
    install dependencies, then renders the matching templates into a new
    directory and initializes a git repository.
    """
    console.print(Panel(
        f"[bold magenta]BOOZ[/] [dim]v{__version__}[/]\n\n"
        "Welcome to BOOZ! 🐐",
        border_style="magenta",
    ))

    try:
        config = collect_config()
    except SetupCancelled:
        rprint("[yellow]Operation cancelled.[/]")
        return
    except ValidationError as e:
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    show_summary(config)

    try:
        create_project(config, verbose=True)
    except (RenderError, CommandError, FileExistsError) as e:
        rprint("[red]❌ Setup failed.[/]")
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)
    except Exception as e:
        rprint("[red]❌ Setup failed.[/]")
        console.print_exception()
        raise typer.Exit(1) from e


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()

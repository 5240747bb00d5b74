"""
booz.generator - Project Setup Pipeline
=======================================

This module turns a validated :class:`~booz.models.SetupConfig` into a
project on disk. It resolves template subtrees, renders them, initializes a
git repository and optionally installs dependencies.

Architecture
------------
The generator follows a pipeline pattern:

    1. Resolve every template subtree (fails before anything is written)
    2. Check the project directory is free
    3. Render templates (once, or twice for fullstack projects)
    4. Initialize git repository
    5. Install dependencies (optional)

Each step runs to completion before the next starts. The first error stops
the pipeline and is re-raised; files already written stay on disk.

Template Layout
---------------
Templates ship inside the package:

    booz/templates/
    ├── frontend/<stack>/...
    └── backend/<stack>/...

Usage Example
-------------
>>> from booz.generator import create_project
>>> from booz.models import SetupConfig, ProjectType, BackendStack
>>>
>>> config = SetupConfig(
...     name="api",
...     project_type=ProjectType.BACKEND,
...     backend=BackendStack.HONO,
...     install_deps=False,
... )
>>> result = create_project(config)
>>> print(result.project_path)
/current/dir/api

See Also
--------
- renderer.py: The template tree walk
- models.py: Configuration data models
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel

from booz.models import ProjectType, SetupConfig
from booz.renderer import TemplateNotFoundError, create_jinja_env, render_templates


if TYPE_CHECKING:
    from importlib.resources.abc import Traversable


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Console for rich output
console = Console()

# Root of the packaged template tree
TEMPLATE_ROOT: Traversable = files("booz") / "templates"

# Subdirectories used by fullstack projects
CLIENT_DIR = "client"
SERVER_DIR = "server"


# =============================================================================
# Exceptions and Result Data Classes
# =============================================================================


class CommandError(RuntimeError):
    """
    An external command failed to start or exited with a non-zero status.

    Attributes
    ----------
    command : list[str]
        The argument vector that was run.

    cwd : Path
        Directory the command ran in.

    returncode : int | None
        Exit status, or None if the executable could not be started.
    """

    def __init__(self, command: list[str], cwd: Path, returncode: int | None) -> None:
        self.command = command
        self.cwd = cwd
        self.returncode = returncode

        joined = " ".join(command)
        if returncode is None:
            message = f"Command not found: '{joined}' (in {cwd})"
        else:
            message = f"Command '{joined}' failed with exit code {returncode} (in {cwd})"
        super().__init__(message)


@dataclass(frozen=True)
class RenderTarget:
    """
    One template subtree and where it is rendered to.

    Attributes
    ----------
    label : str
        "frontend" or "backend", used in progress messages.

    source : Traversable
        The template subtree root.

    destination : Path
        Directory the subtree is rendered into.
    """

    label: str
    source: Traversable
    destination: Path


@dataclass
class GenerationResult:
    """
    Result of a project setup run.

    Attributes
    ----------
    project_path : Path
        Absolute path to the project directory.

    files_rendered : list[Path]
        Files written from template files.

    files_copied : list[Path]
        Files copied verbatim.

    git_initialized : bool
        Whether ``git init`` ran.

    installed_dirs : list[Path]
        Directories in which dependencies were installed.
    """

    project_path: Path
    files_rendered: list[Path] = field(default_factory=list)
    files_copied: list[Path] = field(default_factory=list)
    git_initialized: bool = False
    installed_dirs: list[Path] = field(default_factory=list)

    @property
    def files_created(self) -> list[Path]:
        return [*self.files_rendered, *self.files_copied]


# =============================================================================
# Template Resolution
# =============================================================================


def resolve_template(
    kind: str,
    stack: str,
    template_root: Traversable = TEMPLATE_ROOT,
) -> Traversable:
    """
    Locate the template subtree for a stack.

    Parameters
    ----------
    kind : str
        "frontend" or "backend".

    stack : str
        Stack name, e.g. "react" or "node-ts".

    template_root : Traversable
        Root of the template tree.

    Returns
    -------
    Traversable
        ``template_root / kind / stack``.

    Raises
    ------
    TemplateNotFoundError
        If the subtree does not exist.
    """
    source = template_root / kind / stack
    if not source.is_dir():
        raise TemplateNotFoundError(source)
    return source


def plan_renders(
    config: SetupConfig,
    template_root: Traversable = TEMPLATE_ROOT,
) -> list[RenderTarget]:
    """
    Build the list of render operations for a configuration.

    All template subtrees are resolved here, so a missing template is
    reported before the first file is written.

    Returns
    -------
    list[RenderTarget]
        One target for frontend and backend projects, two for fullstack
        (frontend into ``client/``, backend into ``server/``).
    """
    project_dir = config.project_dir

    if config.project_type == ProjectType.FULLSTACK:
        frontend_src = resolve_template("frontend", config.frontend.value, template_root)
        backend_src = resolve_template("backend", config.backend.value, template_root)
        return [
            RenderTarget("frontend", frontend_src, project_dir / CLIENT_DIR),
            RenderTarget("backend", backend_src, project_dir / SERVER_DIR),
        ]

    if config.project_type == ProjectType.FRONTEND:
        source = resolve_template("frontend", config.frontend.value, template_root)
        return [RenderTarget("frontend", source, project_dir)]

    source = resolve_template("backend", config.backend.value, template_root)
    return [RenderTarget("backend", source, project_dir)]


def install_directories(config: SetupConfig) -> list[Path]:
    """
    Directories that hold a ``package.json`` after rendering.

    Returns
    -------
    list[Path]
        ``client/`` then ``server/`` for fullstack projects, otherwise the
        project root.
    """
    if config.project_type == ProjectType.FULLSTACK:
        return [config.project_dir / CLIENT_DIR, config.project_dir / SERVER_DIR]
    return [config.project_dir]


def ensure_project_dir_available(project_dir: Path) -> None:
    """
    Refuse to write into an existing, non-empty directory.

    An existing empty directory is accepted.

    Raises
    ------
    FileExistsError
        If ``project_dir`` is a file or a non-empty directory.
    """
    if not project_dir.exists():
        return

    if not project_dir.is_dir() or any(project_dir.iterdir()):
        raise FileExistsError(
            f"Directory '{project_dir}' already exists. "
            "Use a different name or remove the existing directory."
        )


# =============================================================================
# External Commands
# =============================================================================


def run_command(args: list[str], cwd: Path, *, quiet: bool = False) -> None:
    """
    Run an external command and fail on a non-zero exit status.

    Parameters
    ----------
    args : list[str]
        Command and arguments. The executable is looked up on PATH with
        ``shutil.which`` so Windows ``.cmd`` shims (npm, pnpm, yarn) work.

    cwd : Path
        Working directory for the command.

    quiet : bool, default=False
        If True, capture the command's output instead of showing it.

    Raises
    ------
    CommandError
        If the executable is missing or exits with a non-zero status.
    """
    executable = shutil.which(args[0]) or args[0]

    try:
        completed = subprocess.run(
            [executable, *args[1:]],
            cwd=cwd,
            capture_output=quiet,
            check=False,
        )
    except FileNotFoundError as e:
        raise CommandError(args, cwd, None) from e

    if completed.returncode != 0:
        raise CommandError(args, cwd, completed.returncode)


def init_git_repository(project_dir: Path) -> None:
    """
    Run ``git init`` in the project directory.

    Raises
    ------
    CommandError
        If git is not installed or ``git init`` fails.
    """
    run_command(["git", "init"], cwd=project_dir, quiet=True)


def install_dependencies(config: SetupConfig, *, verbose: bool = True) -> list[Path]:
    """
    Install dependencies with the configured package manager.

    The package manager's own output goes straight to the terminal.

    Returns
    -------
    list[Path]
        Directories the install ran in.

    Raises
    ------
    CommandError
        If an install fails. Later directories are not attempted.
    """
    installed: list[Path] = []
    command = config.package_manager.install_command

    for directory in install_directories(config):
        if verbose:
            console.print(f"[bold]📦 Installing dependencies in {directory.name}/...[/]")

        run_command(command, cwd=directory)
        installed.append(directory)

        if verbose:
            console.print(f"  [green]✓[/] Dependencies installed in {directory.name}/")

    return installed


# =============================================================================
# Main Generation Function
# =============================================================================


def create_project(
    config: SetupConfig,
    *,
    template_root: Traversable = TEMPLATE_ROOT,
    verbose: bool = True,
) -> GenerationResult:
    """
    Create a new project from the given configuration.

    This is the main entry point for project generation. It orchestrates
    template resolution, rendering, git initialization and dependency
    installation.

    Parameters
    ----------
    config : SetupConfig
        Complete setup configuration.

    template_root : Traversable
        Root of the template tree. Defaults to the packaged templates.

    verbose : bool, default=True
        If True, display progress information to the console.

    Returns
    -------
    GenerationResult
        Details of what was created.

    Raises
    ------
    TemplateNotFoundError
        If a requested template subtree is missing. Nothing is written.
    FileExistsError
        If the project directory exists and is not empty.
    RenderError
        If rendering fails.
    CommandError
        If ``git init`` or the dependency install fails.

    Notes
    -----
    There is no rollback: if a step fails, whatever was written before it
    stays on disk.
    """
    targets = plan_renders(config, template_root)
    ensure_project_dir_available(config.project_dir)

    result = GenerationResult(project_path=config.project_dir)

    if verbose:
        console.print()
        stacks = " + ".join(
            stack.value for stack in (config.frontend, config.backend) if stack is not None
        )
        console.print(
            Panel(
                f"[bold blue]Creating project:[/] [green]{config.name}[/]\n"
                f"[dim]Type: {config.project_type.value} | Stack: {stacks}[/]",
                title="[bold]booz[/]",
                border_style="blue",
            )
        )
        console.print()

    # Step 1: Render templates
    env = create_jinja_env()
    context = config.render_context

    for target in targets:
        if verbose:
            with console.status(f"Rendering {target.label} template..."):
                rendered = render_templates(target.source, target.destination, context, env=env)
            console.print(
                f"  [green]✓[/] {target.label.capitalize()} template rendered "
                f"into {target.destination.relative_to(config.output_dir)}/"
            )
        else:
            rendered = render_templates(target.source, target.destination, context, env=env)

        result.files_rendered.extend(rendered.rendered_files)
        result.files_copied.extend(rendered.copied_files)

    # Step 2: Initialize git repository
    if verbose:
        with console.status("Initializing git repository..."):
            init_git_repository(config.project_dir)
        console.print("  [green]✓[/] Git repository initialized")
    else:
        init_git_repository(config.project_dir)
    result.git_initialized = True

    # Step 3: Install dependencies
    if config.install_deps:
        if verbose:
            console.print()
        result.installed_dirs.extend(install_dependencies(config, verbose=verbose))

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold green]🚀 Project setup complete![/]\n\n"
                f"[dim]Location:[/] {config.project_dir}\n"
                f"[dim]Files:[/] {len(result.files_created)}",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return result

"""
booz.models - Pydantic Models for Setup Configuration
=====================================================

This module defines the data models produced by the interactive prompt flow
and consumed by the generator. Every prompt answer is a closed enumeration,
so the rest of the code never has to deal with loosely typed strings.

Architecture Notes
------------------
The models are organized in a hierarchy:

    SetupConfig (main)
    ├── ProjectType (enum)      frontend | backend | fullstack
    ├── FrontendStack (enum)    react | vue | nextjs
    ├── BackendStack (enum)     hono | node-ts
    └── PackageManager (enum)   pnpm | npm | yarn

Stack values double as template directory names, e.g.
``FrontendStack.REACT`` renders ``templates/frontend/react``.

Usage Example
-------------
>>> from booz.models import SetupConfig, ProjectType, FrontendStack
>>> config = SetupConfig(
...     name="my app",
...     project_type=ProjectType.FRONTEND,
...     frontend=FrontendStack.REACT,
... )
>>> config.directory_name
'my-app'
>>> config.render_context
{'name': 'my app'}
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Enumerations
# =============================================================================

class ProjectType(str, Enum):
    """
    Kinds of project booz can scaffold.

    Attributes
    ----------
    FRONTEND : str
        A single frontend template rendered into the project root.

    BACKEND : str
        A single backend template rendered into the project root.

    FULLSTACK : str
        A frontend template rendered into ``client/`` and a backend
        template rendered into ``server/``.

    Examples
    --------
    >>> ProjectType("fullstack").needs_backend
    True
    """

    FRONTEND = "frontend"
    BACKEND = "backend"
    FULLSTACK = "fullstack"

    @property
    def description(self) -> str:
        """Human-readable label for CLI prompts."""
        descriptions = {
            ProjectType.FRONTEND: "Frontend",
            ProjectType.BACKEND: "Backend",
            ProjectType.FULLSTACK: "Fullstack (Frontend + Backend)",
        }
        return descriptions[self]

    @property
    def needs_frontend(self) -> bool:
        return self in {ProjectType.FRONTEND, ProjectType.FULLSTACK}

    @property
    def needs_backend(self) -> bool:
        return self in {ProjectType.BACKEND, ProjectType.FULLSTACK}


class FrontendStack(str, Enum):
    """Frontend frameworks with a template under ``templates/frontend``."""

    REACT = "react"
    VUE = "vue"
    NEXTJS = "nextjs"

    @property
    def label(self) -> str:
        labels = {
            FrontendStack.REACT: "React",
            FrontendStack.VUE: "Vue",
            FrontendStack.NEXTJS: "Next.js",
        }
        return labels[self]

    @property
    def hint(self) -> str | None:
        if self is FrontendStack.REACT:
            return "vite+ts"
        return None


class BackendStack(str, Enum):
    """Backend frameworks with a template under ``templates/backend``."""

    HONO = "hono"
    NODE_TS = "node-ts"

    @property
    def label(self) -> str:
        labels = {
            BackendStack.HONO: "Hono",
            BackendStack.NODE_TS: "node-ts",
        }
        return labels[self]

    @property
    def hint(self) -> str | None:
        if self is BackendStack.NODE_TS:
            return "Node + Express + TypeScript"
        return None


class PackageManager(str, Enum):
    """
    Package managers that can install the generated project's dependencies.

    Each one is invoked as ``<value> install`` inside the directory that
    holds a ``package.json``.
    """

    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"

    @property
    def install_command(self) -> list[str]:
        """
        Argument vector used to install dependencies.

        Returns
        -------
        list[str]
            For example ``["pnpm", "install"]``.
        """
        return [self.value, "install"]


# =============================================================================
# Name Validation
# =============================================================================

# Upper bound on project name length
MAX_NAME_LENGTH = 100


def project_name_error(name: str) -> str | None:
    """
    Check a project name and describe what is wrong with it.

    Shared by the ``SetupConfig`` validator and the interactive name prompt,
    so a bad name is asked again instead of failing after the last question.

    Parameters
    ----------
    name : str
        The name as typed; surrounding whitespace is ignored.

    Returns
    -------
    str | None
        An error message, or None if the name is acceptable.

    Examples
    --------
    >>> project_name_error("my app") is None
    True
    >>> project_name_error("..")
    "Invalid project name '..'. Names cannot contain path separators."
    """
    name = name.strip()
    if not name:
        return "Project name cannot be empty."

    if len(name) > MAX_NAME_LENGTH:
        return f"Project name cannot be longer than {MAX_NAME_LENGTH} characters."

    if "/" in name or "\\" in name or name in {".", ".."}:
        return f"Invalid project name '{name}'. Names cannot contain path separators."

    return None


# =============================================================================
# Main Configuration Model
# =============================================================================

class SetupConfig(BaseModel):
    """
    Complete configuration for one booz run.

    Built once from the prompt answers and passed unchanged to the
    generator. The project name is kept as typed (minus surrounding
    whitespace) because it is what templates receive; the directory name
    is derived from it.

    Attributes
    ----------
    name : str
        Project name as entered by the user.

    project_type : ProjectType
        Which template subtrees are rendered.

    frontend : FrontendStack | None
        Frontend framework. Required for frontend and fullstack projects.

    backend : BackendStack | None
        Backend framework. Required for backend and fullstack projects.

    install_deps : bool
        Whether to run the package manager after rendering.

    package_manager : PackageManager
        Package manager used when ``install_deps`` is set.

    output_dir : Path
        Directory in which the project directory is created.

    Examples
    --------
    >>> config = SetupConfig(
    ...     name="shop",
    ...     project_type=ProjectType.FULLSTACK,
    ...     frontend=FrontendStack.VUE,
    ...     backend=BackendStack.HONO,
    ...     install_deps=False,
    ... )
    >>> config.project_dir.name
    'shop'
    """

    name: Annotated[str, Field(
        description="Project name, substituted into templates",
        min_length=1,
        max_length=MAX_NAME_LENGTH,
    )]
    project_type: ProjectType = Field(
        description="Type of project to generate",
    )
    frontend: FrontendStack | None = Field(
        default=None,
        description="Frontend framework",
    )
    backend: BackendStack | None = Field(
        default=None,
        description="Backend framework",
    )
    install_deps: bool = Field(
        default=True,
        description="Install dependencies after setup",
    )
    package_manager: PackageManager = Field(
        default=PackageManager.NPM,
        description="Package manager used to install dependencies",
    )
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory where the project will be created",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("name", mode="before")
    @classmethod
    def validate_project_name(cls, v: Any) -> Any:
        """
        Strip the project name and reject names that are not a single path
        component.

        Raises
        ------
        ValueError
            If :func:`project_name_error` reports a problem.
        """
        if not isinstance(v, str):
            return v

        error = project_name_error(v)
        if error:
            raise ValueError(error)

        return v.strip()

    @model_validator(mode="after")
    def validate_stacks(self) -> SetupConfig:
        """Check that exactly the stacks the project type uses are set."""
        if self.project_type.needs_frontend and self.frontend is None:
            msg = f"A frontend framework is required for {self.project_type.value} projects."
            raise ValueError(msg)
        if not self.project_type.needs_frontend and self.frontend is not None:
            msg = f"{self.project_type.value} projects do not take a frontend framework."
            raise ValueError(msg)

        if self.project_type.needs_backend and self.backend is None:
            msg = f"A backend framework is required for {self.project_type.value} projects."
            raise ValueError(msg)
        if not self.project_type.needs_backend and self.backend is not None:
            msg = f"{self.project_type.value} projects do not take a backend framework."
            raise ValueError(msg)

        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def directory_name(self) -> str:
        """
        Directory name derived from the project name.

        Every run of whitespace becomes a single hyphen.

        Examples
        --------
        >>> SetupConfig(name="my  cool app", project_type="backend",
        ...             backend="hono").directory_name
        'my-cool-app'
        """
        return re.sub(r"\s+", "-", self.name)

    @property
    def project_dir(self) -> Path:
        """Full path to the project directory (``output_dir / directory_name``)."""
        return self.output_dir / self.directory_name

    @property
    def render_context(self) -> dict[str, str]:
        """Placeholder values handed to the template renderer."""
        return {"name": self.name}

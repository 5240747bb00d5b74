"""
booz - Interactive Project Scaffolding
======================================

A CLI tool that scaffolds JavaScript/TypeScript projects from bundled
templates. It asks a few questions, renders the matching template tree,
initializes git and can install dependencies with pnpm, npm or yarn.

Features
--------
- **Project Types**: frontend, backend, or fullstack (client + server)
- **Frontends**: React (Vite + TS), Vue, Next.js
- **Backends**: Hono, Node + Express + TypeScript
- **Templates**: plain files are copied verbatim, ``*.j2`` files get their
  ``{{ name }}`` placeholders filled in

Quick Start
-----------
```bash
pip install booz
booz
```

Example
-------
>>> from booz import SetupConfig, create_project
>>> config = SetupConfig(name="shop", project_type="fullstack",
...                      frontend="vue", backend="hono", install_deps=False)
>>> create_project(config).project_path.name
'shop'

Architecture
------------
- ``cli``: Typer + questionary prompt flow
- ``generator``: Template resolution, git init and dependency install
- ``renderer``: Recursive template tree rendering with Jinja2
- ``models``: Pydantic models for the setup configuration
- ``templates``: The bundled template trees
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from booz.generator import create_project
from booz.models import ProjectType, SetupConfig
from booz.renderer import render_templates


__all__ = [
    "ProjectType",
    "SetupConfig",
    "__version__",
    "create_project",
    "render_templates",
]

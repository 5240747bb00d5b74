"""
booz.renderer - Template Tree Rendering
=======================================

This module reproduces a template directory under a destination directory.
It is the only part of booz that touches template contents.

Rules
-----
- Directories are recreated at the same relative path (empty ones too).
- Files ending in ``.j2`` are *template files*: their text is rendered with
  Jinja2 and written without the ``.j2`` suffix.
- Every other file is a *plain file* and is copied byte-for-byte.
- The kind of a file depends only on its name, never on its content.

Placeholders use the mustache-style expression syntax ``{{ name }}``.
Names missing from the context are written back unchanged, so a template
may contain placeholders meant for a later tool.

The source may be a ``pathlib.Path`` or any ``Traversable`` (for example
``importlib.resources.files("booz") / "templates"``), which lets the walk
run straight off the installed package.

Usage Example
-------------
>>> from pathlib import Path
>>> from booz.renderer import render_templates
>>> result = render_templates(
...     Path("templates/frontend/react"),
...     Path("my-app"),
...     {"name": "my app"},
... )
>>> len(result.rendered_files) > 0
True

See Also
--------
- generator.py: resolves template subtrees and calls this module
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import DebugUndefined, Environment, TemplateError, meta, nodes


if TYPE_CHECKING:
    from collections.abc import Mapping

    from importlib.resources.abc import Traversable


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Marker suffix identifying template files
TEMPLATE_SUFFIX = ".j2"


# =============================================================================
# Exceptions
# =============================================================================


class RenderError(Exception):
    """
    Base class for failures while rendering a template tree.

    Attributes
    ----------
    path : str
        The source or destination path the failure relates to.
    """

    def __init__(self, message: str, path: Any) -> None:
        super().__init__(message)
        self.path = str(path)


class TemplateNotFoundError(RenderError):
    """The template directory does not exist or is not a directory."""

    def __init__(self, path: Any) -> None:
        super().__init__(f"Template not found: {path}", path)


class TemplateRenderError(RenderError):
    """A template file could not be compiled or rendered."""


class RenderIOError(RenderError):
    """Reading from the template tree or writing the destination failed."""


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class RenderResult:
    """
    Files produced by one call to :func:`render_templates`.

    Attributes
    ----------
    rendered_files : list[Path]
        Destination paths written from template files.

    copied_files : list[Path]
        Destination paths copied verbatim from plain files.
    """

    rendered_files: list[Path] = field(default_factory=list)
    copied_files: list[Path] = field(default_factory=list)

    @property
    def files_created(self) -> list[Path]:
        return [*self.rendered_files, *self.copied_files]

    def extend(self, other: RenderResult) -> None:
        self.rendered_files.extend(other.rendered_files)
        self.copied_files.extend(other.copied_files)


# =============================================================================
# Template Engine Setup
# =============================================================================


def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment used for placeholder substitution.

    The environment is configured with:
    - Autoescaping disabled (we're generating source files, not HTML)
    - No block trimming, so output only differs where placeholders are
    - Trailing newlines preserved
    - ``DebugUndefined``, which renders unknown names back as ``{{ name }}``

    ``DebugUndefined`` writes the placeholder back with canonical spacing,
    so ``{{missing}}`` comes out as ``{{ missing }}``. Unknown names used in
    anything but a bare placeholder are rejected by
    :func:`find_unresolved_expressions` before rendering.

    Returns
    -------
    Environment
        Configured Jinja2 environment.
    """
    return Environment(
        autoescape=False,
        keep_trailing_newline=True,
        undefined=DebugUndefined,
    )


def is_template_file(name: str) -> bool:
    """Return True if ``name`` carries the template suffix."""
    return name.endswith(TEMPLATE_SUFFIX) and len(name) > len(TEMPLATE_SUFFIX)


def output_name(name: str) -> str:
    """
    Destination file name for a source entry.

    Examples
    --------
    >>> output_name("package.json.j2")
    'package.json'
    >>> output_name("logo.png")
    'logo.png'
    """
    if is_template_file(name):
        return name[: -len(TEMPLATE_SUFFIX)]
    return name


def find_unresolved_expressions(
    ast: nodes.Template,
    context: Mapping[str, Any],
) -> list[str]:
    """
    Names missing from ``context`` that are used in more than a bare
    ``{{ name }}`` placeholder.

    A bare placeholder can be written back literally; a filter, attribute,
    call, test or control statement on a missing name has no literal form.

    Returns
    -------
    list[str]
        Sorted offending names; empty if the template can be rendered.

    Examples
    --------
    >>> env = create_jinja_env()
    >>> find_unresolved_expressions(env.parse("{{ port }}"), {})
    []
    >>> find_unresolved_expressions(env.parse("{{ port | int }}"), {})
    ['port']
    """
    missing = meta.find_undeclared_variables(ast) - set(context)
    if not missing:
        return []

    bare = {
        id(child)
        for output in ast.find_all(nodes.Output)
        for child in output.nodes
        if isinstance(child, nodes.Name)
    }

    return sorted({
        name.name
        for name in ast.find_all(nodes.Name)
        if name.ctx == "load" and name.name in missing and id(name) not in bare
    })


# =============================================================================
# File Handlers
# =============================================================================


def render_file(
    env: Environment,
    source: Traversable,
    destination: Path,
    context: Mapping[str, Any],
) -> None:
    """
    Render one template file to ``destination``.

    Raises
    ------
    TemplateRenderError
        If the file is not valid UTF-8 or the template fails to compile or
        render.
    RenderIOError
        If the source cannot be read or the destination cannot be written.
    """
    try:
        raw = source.read_bytes()
    except OSError as e:
        raise RenderIOError(f"Failed to read template {source}: {e}", source) from e

    try:
        text = raw.decode("utf-8")
        # Jinja2 rewrites every line ending to newline_sequence
        if "\r\n" in text:
            env = env.overlay(newline_sequence="\r\n")
        ast = env.parse(text)
    except (TemplateError, UnicodeDecodeError) as e:
        raise TemplateRenderError(f"Failed to compile template {source}: {e}", source) from e

    unresolved = find_unresolved_expressions(ast, context)
    if unresolved:
        names = ", ".join(f"'{name}'" for name in unresolved)
        raise TemplateRenderError(
            f"Failed to compile template {source}: unresolved placeholder(s) {names} "
            "used in an expression",
            source,
        )

    try:
        content = env.from_string(ast).render(**context)
    except TemplateError as e:
        raise TemplateRenderError(f"Failed to render template {source}: {e}", source) from e

    try:
        destination.write_bytes(content.encode("utf-8"))
    except OSError as e:
        raise RenderIOError(f"Failed to write {destination}: {e}", destination) from e


def copy_file(source: Traversable, destination: Path) -> None:
    """
    Copy a plain file byte-for-byte.

    Real filesystem sources go through ``shutil.copy2`` so permission bits
    (e.g. executable scripts) survive; other traversables are copied by
    content.

    Raises
    ------
    RenderIOError
        If the copy fails.
    """
    try:
        if isinstance(source, Path):
            shutil.copy2(source, destination)
        else:
            destination.write_bytes(source.read_bytes())
    except OSError as e:
        raise RenderIOError(f"Failed to copy {source} to {destination}: {e}", source) from e


# =============================================================================
# Directory Walk
# =============================================================================


def render_templates(
    source: Traversable,
    destination: str | Path,
    context: Mapping[str, Any],
    *,
    env: Environment | None = None,
) -> RenderResult:
    """
    Reproduce the ``source`` tree under ``destination``.

    Parameters
    ----------
    source : Traversable
        Template directory to read. Never modified.

    destination : str | Path
        Output directory. Created along with missing ancestors.

    context : Mapping[str, Any]
        Placeholder values for template files. The same mapping is used for
        the whole tree.

    env : Environment | None
        Jinja2 environment to reuse; one is created if omitted.

    Returns
    -------
    RenderResult
        The destination files that were rendered and copied.

    Raises
    ------
    TemplateNotFoundError
        If ``source`` is not an existing directory. Nothing is written.
    TemplateRenderError
        If a template file fails to compile or render. Files written before
        the failure are left in place.
    RenderIOError
        If any filesystem operation fails.

    Notes
    -----
    Entries are visited in name order so repeated runs produce the same
    progress output; the resulting tree does not depend on the order.
    """
    if not source.is_dir():
        raise TemplateNotFoundError(source)

    if env is None:
        env = create_jinja_env()

    destination = Path(destination)
    result = RenderResult()

    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RenderIOError(f"Failed to create directory {destination}: {e}", destination) from e

    try:
        entries = sorted(source.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        raise RenderIOError(f"Failed to list {source}: {e}", source) from e

    for entry in entries:
        if entry.is_dir():
            result.extend(render_templates(entry, destination / entry.name, context, env=env))
        elif is_template_file(entry.name):
            target = destination / output_name(entry.name)
            render_file(env, entry, target, context)
            result.rendered_files.append(target)
        else:
            target = destination / entry.name
            copy_file(entry, target)
            result.copied_files.append(target)

    return result

"""
pytest configuration and shared fixtures for booz tests.

Fixtures
--------
template_root : Path
    A small template tree with frontend/react, frontend/vue and
    backend/hono subtrees.

output_dir : Path
    An empty directory projects are generated into.

mock_run : MagicMock
    ``subprocess.run`` as seen by the generator, always succeeding.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """
    Build a template tree on disk.

    Returns
    -------
    Path
        Root directory holding ``frontend/`` and ``backend/``.
    """
    root = tmp_path / "templates"

    react = root / "frontend" / "react"
    (react / "src").mkdir(parents=True)
    (react / "public").mkdir()
    (react / "package.json.j2").write_text('{\n  "name": "{{ name }}"\n}\n')
    (react / "index.html.j2").write_text("<title>{{ name }}</title>\n")
    (react / "src" / "main.tsx").write_text('import App from "./App";\n')
    (react / "public" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff\xfe")

    vue = root / "frontend" / "vue"
    (vue / "src").mkdir(parents=True)
    (vue / "package.json.j2").write_text('{"name": "{{ name }}"}\n')
    (vue / "src" / "App.vue").write_text("<template>{{ count }}</template>\n")

    hono = root / "backend" / "hono"
    (hono / "src").mkdir(parents=True)
    (hono / "package.json.j2").write_text('{"name": "{{ name }}"}\n')
    (hono / "src" / "index.ts").write_text("const app = new Hono();\n")

    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Create an empty directory for generated projects."""
    directory = tmp_path / "output"
    directory.mkdir()
    return directory


@pytest.fixture
def mock_run():
    """
    Replace ``subprocess.run`` in the generator with a successful stub.

    ``shutil.which`` is patched to return None so recorded commands keep
    their bare executable names.
    """
    with patch("booz.generator.shutil.which", return_value=None), \
            patch("booz.generator.subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        yield run


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the test suite."""
    config.addinivalue_line(
        "markers", "integration: marks tests that use the bundled templates"
    )

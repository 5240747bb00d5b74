"""
Tests for booz.cli
==================

This module contains tests for the interactive command. Prompts are
patched so no terminal is needed; Typer's CliRunner drives the app.

Test Organization
-----------------
- TestAsk: Tests for the cancellation helper
- TestNamePrompt: Tests for name validation in the prompt
- TestPromptFlow: Tests for collect_config
- TestMainCommand: Tests for the command's exit behaviour
- TestHelpOutput: Tests for help text
"""

import subprocess
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from booz.cli import (
    SetupCancelled,
    app,
    ask,
    collect_config,
    prompt_project_name,
    validate_name_answer,
)
from booz.generator import CommandError
from booz.models import (
    BackendStack,
    FrontendStack,
    PackageManager,
    ProjectType,
    SetupConfig,
)
from booz.renderer import TemplateNotFoundError


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def prompts() -> Iterator[dict[str, MagicMock]]:
    """
    Patch every prompt function with defaults for a frontend React project.

    Yields
    ------
    dict[str, MagicMock]
        The mocks keyed by prompt name.
    """
    answers = {
        "prompt_project_type": ProjectType.FRONTEND,
        "prompt_frontend_stack": FrontendStack.REACT,
        "prompt_backend_stack": BackendStack.HONO,
        "prompt_project_name": "my app",
        "prompt_install_deps": False,
        "prompt_package_manager": PackageManager.PNPM,
    }
    patchers = {
        name: patch(f"booz.cli.{name}", return_value=value)
        for name, value in answers.items()
    }
    mocks = {name: p.start() for name, p in patchers.items()}
    yield mocks
    for p in patchers.values():
        p.stop()


# =============================================================================
# ask() Tests
# =============================================================================

class TestAsk:
    """Tests for the ask helper."""

    def test_returns_answer(self) -> None:
        question = MagicMock()
        question.ask.return_value = "react"

        assert ask(question) == "react"

    def test_false_is_an_answer(self) -> None:
        """A declined confirm is not a cancellation."""
        question = MagicMock()
        question.ask.return_value = False

        assert ask(question) is False

    def test_none_cancels(self) -> None:
        question = MagicMock()
        question.ask.return_value = None

        with pytest.raises(SetupCancelled):
            ask(question)


# =============================================================================
# Name Prompt Tests
# =============================================================================

class TestNamePrompt:
    """Tests for project name validation inside the prompt."""

    @pytest.mark.parametrize("name", ["my-app", "my app", "  shop  "])
    def test_accepts_valid_names(self, name: str) -> None:
        assert validate_name_answer(name) is True

    @pytest.mark.parametrize("name", ["", "   ", "a/b", "a\\b", ".", "..", "x" * 101])
    def test_rejects_invalid_names(self, name: str) -> None:
        """Names the config would refuse are re-asked with a message."""
        message = validate_name_answer(name)

        assert isinstance(message, str)
        assert message

    def test_prompt_uses_validator(self) -> None:
        with patch("booz.cli.questionary.text") as text:
            text.return_value.ask.return_value = "shop"

            assert prompt_project_name() == "shop"

        assert text.call_args.kwargs["validate"] is validate_name_answer


# =============================================================================
# Prompt Flow Tests
# =============================================================================

class TestPromptFlow:
    """Tests for collect_config."""

    def test_frontend_flow(self, prompts: dict[str, MagicMock]) -> None:
        config = collect_config()

        assert config.project_type is ProjectType.FRONTEND
        assert config.frontend is FrontendStack.REACT
        assert config.backend is None
        assert config.name == "my app"
        prompts["prompt_backend_stack"].assert_not_called()

    def test_backend_flow(self, prompts: dict[str, MagicMock]) -> None:
        prompts["prompt_project_type"].return_value = ProjectType.BACKEND

        config = collect_config()

        assert config.backend is BackendStack.HONO
        assert config.frontend is None
        prompts["prompt_frontend_stack"].assert_not_called()

    def test_fullstack_asks_both(self, prompts: dict[str, MagicMock]) -> None:
        prompts["prompt_project_type"].return_value = ProjectType.FULLSTACK

        config = collect_config()

        assert config.frontend is FrontendStack.REACT
        assert config.backend is BackendStack.HONO

    def test_package_manager_skipped_when_not_installing(
        self, prompts: dict[str, MagicMock]
    ) -> None:
        config = collect_config()

        assert config.install_deps is False
        assert config.package_manager is PackageManager.NPM
        prompts["prompt_package_manager"].assert_not_called()

    def test_package_manager_asked_when_installing(
        self, prompts: dict[str, MagicMock]
    ) -> None:
        prompts["prompt_install_deps"].return_value = True

        config = collect_config()

        assert config.package_manager is PackageManager.PNPM

    def test_cancel_stops_flow(self, prompts: dict[str, MagicMock]) -> None:
        prompts["prompt_frontend_stack"].side_effect = SetupCancelled()

        with pytest.raises(SetupCancelled):
            collect_config()

        prompts["prompt_project_name"].assert_not_called()


# =============================================================================
# Main Command Tests
# =============================================================================

class TestMainCommand:
    """Tests for the booz command."""

    def test_cancellation_exits_cleanly(
        self, runner: CliRunner, prompts: dict[str, MagicMock]
    ) -> None:
        prompts["prompt_project_type"].side_effect = SetupCancelled()

        with patch("booz.cli.create_project") as create:
            result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Operation cancelled." in result.stdout
        create.assert_not_called()

    def test_passes_config_to_generator(
        self, runner: CliRunner, prompts: dict[str, MagicMock]
    ) -> None:
        with patch("booz.cli.create_project") as create:
            result = runner.invoke(app, [])

        assert result.exit_code == 0
        config = create.call_args.args[0]
        assert isinstance(config, SetupConfig)
        assert config.directory_name == "my-app"
        assert config.output_dir == Path.cwd()

    def test_missing_template_fails(
        self, runner: CliRunner, prompts: dict[str, MagicMock]
    ) -> None:
        error = TemplateNotFoundError("/templates/frontend/react")

        with patch("booz.cli.create_project", side_effect=error):
            result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Setup failed." in result.stdout
        assert "Template not found" in result.stdout

    def test_command_failure_fails(
        self, runner: CliRunner, prompts: dict[str, MagicMock]
    ) -> None:
        error = CommandError(["git", "init"], Path("/tmp/x"), 128)

        with patch("booz.cli.create_project", side_effect=error):
            result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Setup failed." in result.stdout

    def test_unexpected_error_fails(
        self, runner: CliRunner, prompts: dict[str, MagicMock]
    ) -> None:
        with patch("booz.cli.create_project", side_effect=PermissionError("denied")):
            result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Setup failed." in result.stdout

    def test_end_to_end(
        self,
        runner: CliRunner,
        prompts: dict[str, MagicMock],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """The command renders the bundled template into the working directory."""
        monkeypatch.chdir(tmp_path)

        with patch("booz.generator.shutil.which", return_value=None), \
                patch("booz.generator.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
            result = runner.invoke(app, [])

        assert result.exit_code == 0, result.stdout
        assert (tmp_path / "my-app" / "package.json").exists()
        assert run.call_args.args[0] == ["git", "init"]


# =============================================================================
# Help Output Tests
# =============================================================================

class TestHelpOutput:
    """Tests for help text."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "booz" in result.stdout.lower()

    def test_rejects_unknown_options(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--type", "frontend"])

        assert result.exit_code != 0

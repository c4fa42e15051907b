"""Tests for the blueprint command line interface."""

from __future__ import annotations

import json
import sys
import textwrap
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from blueprint.cli.main import app

MODULE_NAME = "cli_fixture_settings"

MODULE_SOURCE = textwrap.dedent(
    '''
    from blueprint import blueprint
    from blueprint.options.pydantic import PydanticValidator


    @blueprint(
        schema={
            "host": {"type": "string", "required": True, "doc": "Bind address"},
            "port": {"type": "pos_integer", "default": 8080},
        },
        validator=PydanticValidator(),
    )
    class ServerSettings:
        """Server settings."""


    class NotABlueprint:
        pass
    '''
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def settings_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / f"{MODULE_NAME}.py").write_text(MODULE_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield f"{MODULE_NAME}:ServerSettings"
    sys.modules.pop(MODULE_NAME, None)


def write_yaml(path: Path, data: object) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


class TestDocsCommand:
    """Tests for `blueprint docs`."""

    def test_docs(self, runner: CliRunner, settings_module: str) -> None:
        """Test the rendered field list."""
        result = runner.invoke(app, ["docs", settings_module])
        assert result.exit_code == 0
        assert result.stdout == "* host (type: string) - Bind address\n* port (type: pos_integer)\n"

    def test_docs_json(self, runner: CliRunner, settings_module: str) -> None:
        """Test machine-readable output."""
        result = runner.invoke(app, ["--json", "docs", settings_module])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["validator"] == "pydantic"
        assert payload["fields"][0] == {
            "name": "host",
            "type": "string",
            "required": True,
            "default": None,
            "doc": "Bind address",
        }
        assert payload["fields"][1]["default"] == 8080

    def test_docs_dotted_path(self, runner: CliRunner) -> None:
        """Test module.Class notation."""
        result = runner.invoke(app, ["docs", f"{MODULE_NAME}.ServerSettings"])
        assert result.exit_code == 0
        assert "* host" in result.stdout

    def test_not_a_blueprint(self, runner: CliRunner) -> None:
        """Test a plain class."""
        result = runner.invoke(app, ["docs", f"{MODULE_NAME}:NotABlueprint"])
        assert result.exit_code == 1
        assert "not a declared blueprint" in result.stdout

    def test_unknown_module(self, runner: CliRunner) -> None:
        """Test an import failure."""
        result = runner.invoke(app, ["docs", "no_such_module_here:Thing"])
        assert result.exit_code != 0


class TestCheckCommand:
    """Tests for `blueprint check`."""

    def test_valid_file(self, runner: CliRunner, settings_module: str, tmp_path: Path) -> None:
        """Test a file that satisfies the schema."""
        path = write_yaml(tmp_path / "settings.yaml", {"host": "0.0.0.0"})
        result = runner.invoke(app, ["check", settings_module, str(path)])
        assert result.exit_code == 0
        assert "✓" in result.stdout
        assert "0.0.0.0" in result.stdout

    def test_valid_file_json(
        self, runner: CliRunner, settings_module: str, tmp_path: Path
    ) -> None:
        """Test that the built record is printed with defaults filled in."""
        path = write_yaml(tmp_path / "settings.yaml", {"host": "localhost"})
        result = runner.invoke(app, ["--json", "check", settings_module, str(path)])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"host": "localhost", "port": 8080}

    def test_invalid_values(self, runner: CliRunner, settings_module: str, tmp_path: Path) -> None:
        """Test a file that violates the schema."""
        path = write_yaml(tmp_path / "settings.yaml", {"host": "localhost", "port": -1})
        result = runner.invoke(app, ["check", settings_module, str(path)])
        assert result.exit_code == 1
        assert "Unable to build" in result.stdout

    def test_not_a_mapping(self, runner: CliRunner, settings_module: str, tmp_path: Path) -> None:
        """Test a YAML list."""
        path = write_yaml(tmp_path / "settings.yaml", ["host", "port"])
        result = runner.invoke(app, ["check", settings_module, str(path)])
        assert result.exit_code == 1

    def test_missing_file(self, runner: CliRunner, settings_module: str, tmp_path: Path) -> None:
        """Test that the YAML file must exist."""
        result = runner.invoke(app, ["check", settings_module, str(tmp_path / "nope.yaml")])
        assert result.exit_code != 0


class TestInfoCommand:
    """Tests for `blueprint info`."""

    def test_info_json(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test reporting a forced fallback."""
        monkeypatch.setenv("BLUEPRINT_VALIDATOR", "fallback")
        result = runner.invoke(app, ["--json", "info"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"validator": "fallback", "configured": "fallback"}

    def test_info_pretty(self, runner: CliRunner) -> None:
        """Test the default output."""
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "pydantic" in result.stdout

"""Tests for the command line interface."""

from __future__ import annotations

import json

import pytest
import structlog
from typer.testing import CliRunner

from widgetize import __version__
from widgetize.cli.app import app

runner = CliRunner()

# Keeps log lines out of stdout so JSON output parses
QUIET = ["--log-level", "ERROR"]


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the logging setup each invocation performs."""
    yield
    structlog.reset_defaults()


class TestMain:
    """Tests for global options."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_log_level(self, snapshot_file):
        result = runner.invoke(app, ["--log-level", "LOUD", "recognize", str(snapshot_file)])
        assert result.exit_code == 1
        assert "Unknown log level" in result.output

    def test_missing_config_file(self, tmp_path, snapshot_file):
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "recognize", str(snapshot_file)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output


class TestRecognize:
    """Tests for the recognize command."""

    def test_json_output(self, snapshot_file):
        """The component tree is printed as JSON."""
        result = runner.invoke(app, [*QUIET, "recognize", str(snapshot_file), "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["nodes_visited"] == 34
        assert data["partial"] is False
        assert [c["type"] for c in data["root"]["children"]] == [
            "header",
            "hero",
            "section",
            "image-carousel",
            "footer",
        ]

    def test_tree_output(self, snapshot_file):
        result = runner.invoke(app, [*QUIET, "recognize", str(snapshot_file)])
        assert result.exit_code == 0
        assert "image-carousel" in result.output
        assert "components from" in result.output

    def test_missing_snapshot(self, tmp_path):
        result = runner.invoke(app, [*QUIET, "recognize", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Snapshot file not found" in result.output

    def test_invalid_snapshot(self, tmp_path):
        """A JSON file without a root element is rejected."""
        path = tmp_path / "bad.json"
        path.write_text("{}")
        result = runner.invoke(app, [*QUIET, "recognize", str(path)])
        assert result.exit_code == 1
        assert "Invalid snapshot" in result.output


class TestExport:
    """Tests for the export command."""

    def test_export_to_file(self, tmp_path, snapshot_file):
        """The page document is written where -o points."""
        output = tmp_path / "out" / "page.json"
        result = runner.invoke(app, [*QUIET, "export", str(snapshot_file), "-o", str(output)])
        assert result.exit_code == 0
        assert "Exported 14 widgets" in result.output

        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["title"] == "Acme - Build faster"
        assert document["version"] == "3.16.0"
        assert len(document["content"]) == 5

    def test_export_to_stdout(self, snapshot_file):
        result = runner.invoke(app, [*QUIET, "export", str(snapshot_file), "--title", "Home"])
        assert result.exit_code == 0
        document = json.loads(result.stdout)
        assert document["title"] == "Home"
        assert document["type"] == "page"


class TestPatterns:
    """Tests for the patterns command."""

    def test_all_patterns(self):
        result = runner.invoke(app, [*QUIET, "patterns"])
        assert result.exit_code == 0
        assert "patterns" in result.output

    def test_patterns_for_type(self):
        """Only the named type's patterns are listed."""
        result = runner.invoke(app, [*QUIET, "patterns", "--type", "footer"])
        assert result.exit_code == 0
        assert "footer" in result.output

    def test_unknown_type(self):
        result = runner.invoke(app, [*QUIET, "patterns", "--type", "widgetron"])
        assert result.exit_code == 1
        assert "Unknown component type" in result.output


class TestConfigCommand:
    """Tests for the config command."""

    def test_init_and_validate(self, tmp_path):
        """An initialized config file validates."""
        path = tmp_path / "widgetize.yaml"
        result = runner.invoke(app, [*QUIET, "config", "init", "--file", str(path)])
        assert result.exit_code == 0
        assert path.exists()

        result = runner.invoke(app, [*QUIET, "config", "validate", "--file", str(path)])
        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_validate_rejects_bad_values(self, tmp_path):
        path = tmp_path / "widgetize.yaml"
        path.write_text("recognition:\n  max_depth: 0\n")
        result = runner.invoke(app, [*QUIET, "config", "validate", "--file", str(path)])
        assert result.exit_code == 1

    def test_validate_needs_file(self):
        result = runner.invoke(app, [*QUIET, "config", "validate"])
        assert result.exit_code == 1

    def test_show(self, tmp_path):
        """show prints the loaded file's values."""
        path = tmp_path / "widgetize.yaml"
        path.write_text("export:\n  page_title: Landing\n")
        result = runner.invoke(app, [*QUIET, "config", "show", "--file", str(path)])
        assert result.exit_code == 0
        assert "Landing" in result.output
        assert "elementor_version" in result.output

    def test_unknown_action(self):
        result = runner.invoke(app, [*QUIET, "config", "reset"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output

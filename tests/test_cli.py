"""Tests for CLI commands."""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from ordo.cli import _build_choices, app
from ordo.config import ConfigError
from ordo.engine import NoSelectableChoicesError
from ordo.models import Choice, Separator

runner = CliRunner()


def _recording_console():
    return Console(file=io.StringIO(), width=120)


class TestBuildChoices:
    def test_plain_and_separator(self):
        assert _build_choices(["a", "---", "b"], [], []) == ["a", Separator(), "b"]

    def test_disabled_and_checked(self):
        choices = _build_choices(["a", "b", "c"], ["b"], ["c", "a"])
        assert choices == [
            Choice(value="a", checked=True, order=2),
            Choice(value="b", disabled=True),
            Choice(value="c", checked=True, order=1),
        ]


class TestPick:
    def test_prints_values_in_order(self):
        with patch("ordo.ui.prompt.ordered_checkbox", return_value=["c", "a"]) as prompt:
            result = runner.invoke(app, ["pick", "a", "b", "c", "-m", "Pick"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["c", "a"]
        args, kwargs = prompt.call_args
        assert args == ("Pick", ["a", "b", "c"])
        assert kwargs["required"] is False
        assert kwargs["loop"] is None

    def test_json_format(self):
        with patch("ordo.ui.prompt.ordered_checkbox", return_value=["b", "a"]):
            result = runner.invoke(app, ["pick", "a", "b", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == ["b", "a"]

    def test_format_from_config(self, monkeypatch):
        monkeypatch.setenv("ORDO_OUTPUT_FORMAT", "json")
        with patch("ordo.ui.prompt.ordered_checkbox", return_value=[]):
            result = runner.invoke(app, ["pick", "a"])
        assert json.loads(result.output) == []

    def test_invalid_format(self):
        with patch("ordo.ui.prompt.ordered_checkbox") as prompt:
            result = runner.invoke(app, ["pick", "a", "--format", "yaml"])
        assert result.exit_code == 1
        assert "Invalid output_format" in result.output
        prompt.assert_not_called()

    def test_options_forwarded(self):
        with patch("ordo.ui.prompt.ordered_checkbox", return_value=["a"]) as prompt:
            runner.invoke(
                app,
                ["pick", "a", "--required", "--no-loop", "--page-size", "3", "--no-help"],
            )
        kwargs = prompt.call_args.kwargs
        assert kwargs["required"] is True
        assert kwargs["loop"] is False
        assert kwargs["page_size"] == 3
        assert kwargs["instructions"] is False

    def test_choices_from_file(self, tmp_path: Path):
        source = tmp_path / "choices.txt"
        source.write_text("x\n\n---\ny\n")
        with patch("ordo.ui.prompt.ordered_checkbox", return_value=["y"]) as prompt:
            result = runner.invoke(app, ["pick", "w", "--file", str(source)])
        assert result.exit_code == 0
        assert prompt.call_args.args[1] == ["w", "x", Separator(), "y"]

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["pick", "--file", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Can't read" in result.output

    def test_no_choices(self):
        result = runner.invoke(app, ["pick"])
        assert result.exit_code == 1
        assert "Provide choices" in result.output

    def test_errors_go_to_stderr(self, monkeypatch):
        out, err = _recording_console(), _recording_console()
        monkeypatch.setattr("ordo.cli.console", out)
        monkeypatch.setattr("ordo.cli.err_console", err)
        result = runner.invoke(app, ["pick"])
        assert result.exit_code == 1
        assert "Provide choices" in err.file.getvalue()
        assert out.file.getvalue() == ""

    def test_no_selectable_choices(self):
        with patch(
            "ordo.ui.prompt.ordered_checkbox",
            side_effect=NoSelectableChoicesError("No selectable choices found"),
        ):
            result = runner.invoke(app, ["pick", "a", "--disabled", "a"])
        assert result.exit_code == 1
        assert "No selectable choices found" in result.output

    def test_cancelled(self):
        with patch("ordo.ui.prompt.ordered_checkbox", return_value=None):
            result = runner.invoke(app, ["pick", "a"])
        assert result.exit_code == 130

    def test_log_file(self, tmp_path: Path):
        log_file = tmp_path / "ordo.log"
        with patch("ordo.ui.prompt.ordered_checkbox", return_value=["a"]), patch(
            "logging.basicConfig"
        ) as basic_config:
            runner.invoke(app, ["pick", "a", "--log-file", str(log_file)])
        assert basic_config.call_args.kwargs["filename"] == log_file


class TestConfigCommand:
    def test_show_all(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "page_size" in result.output
        assert "help_mode" in result.output

    def test_set_and_get(self):
        result = runner.invoke(app, ["config", "page_size", "12"])
        assert result.exit_code == 0
        assert "page_size = 12" in result.output

        result = runner.invoke(app, ["config", "page_size"])
        assert result.output.strip() == "12"

    def test_set_invalid(self):
        result = runner.invoke(app, ["config", "help_mode", "sometimes"])
        assert result.exit_code == 1
        assert "Invalid help_mode" in result.output

    def test_get_unknown(self):
        result = runner.invoke(app, ["config", "nope"])
        assert result.exit_code == 1

    @pytest.mark.parametrize("key", ["items", "set", "get"])
    def test_get_method_name_rejected(self, key):
        result = runner.invoke(app, ["config", key])
        assert result.exit_code == 1
        assert "Unknown setting" in result.output
        assert "bound method" not in result.output

    @pytest.mark.parametrize("args", [[], ["page_size"], ["loop", "false"]])
    def test_bad_env_value_reported(self, monkeypatch, args):
        monkeypatch.setenv("ORDO_PAGE_SIZE", "abc")
        result = runner.invoke(app, ["config", *args])
        assert result.exit_code == 1
        assert "Expected an integer" in result.output
        assert not isinstance(result.exception, ConfigError)

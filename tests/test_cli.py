from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from click.testing import CliRunner
import pytest

from csscompat import __version__, cli
from csscompat.compat_data import KnowledgeBase
from csscompat.exceptions import NetworkError


class _FakeInOut:
    def __init__(self, is_tty: bool) -> None:
        self._is_tty = is_tty

    def isatty(self) -> bool:
        return self._is_tty

    def fileno(self) -> int:
        return 0


@pytest.fixture
def data_file(tmp_path: Path, sample_document: dict[str, Any]) -> Path:
    path = tmp_path / "bcd.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


def test_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.main, ["--help"])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "--edit" in result.output


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_analyzes_stdin(data_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli.main, ["--data", str(data_file)], input="a { display: grid; gap: 1rem; }"
    )

    assert result.exit_code == 0
    assert "Analyzed CSS features: 3" in result.output
    assert "Chrome: >= 84" in result.output
    assert "Limited by: gap (since version 84)" in result.output


@pytest.mark.filterwarnings("error::DeprecationWarning")
def test_stdin_is_read_without_deprecated_click_helpers(data_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--data", str(data_file)], input="a { color: red; }")

    assert result.exit_code == 0, result.output
    assert "Analyzed CSS features: 2" in result.output


def test_analyzes_files(tmp_path: Path, data_file: Path) -> None:
    first = tmp_path / "a.css"
    second = tmp_path / "b.css"
    first.write_text("a { color: red; }\n", encoding="utf-8")
    second.write_text(".x { & .y { color: blue; } }", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--data", str(data_file), str(first), str(second)])

    assert result.exit_code == 0
    assert "CSS nesting" in result.output
    assert "Safari: >= 17.2" in result.output


def test_empty_input_shows_prompt(data_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--data", str(data_file)], input="   ")

    assert result.exit_code == 0
    assert "Add CSS code to analyze" in result.output
    assert "Chrome: n/a" in result.output


def test_data_path_from_environment(data_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli.main, [], input="a { display: flex; }", env={"CSSCOMPAT_DATA": str(data_file)}
    )

    assert result.exit_code == 0
    assert "Chrome: >= 29" in result.output


def test_missing_css_file_is_usage_error(data_file: Path, tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--data", str(data_file), str(tmp_path / "none.css")])

    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_invalid_dataset_reports_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--data", str(bad)], input="a { color: red; }")

    assert result.exit_code != 0
    assert "Error: Invalid compatibility data" in result.output


def test_download_failure_reports_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def _offline(_settings: object, *, refresh: bool = False) -> KnowledgeBase:
        raise NetworkError("https://example.test/data.json")

    monkeypatch.setattr(cli, "load_knowledge_base", _offline)
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--refresh"], input="a {}")

    assert result.exit_code != 0
    assert "Error: Unable to download compatibility data" in result.output


def test_refresh_flag_is_forwarded(
    monkeypatch: pytest.MonkeyPatch, knowledge_base: KnowledgeBase
) -> None:
    seen: dict[str, bool] = {}

    def _load(_settings: object, *, refresh: bool = False) -> KnowledgeBase:
        seen["refresh"] = refresh
        return knowledge_base

    monkeypatch.setattr(cli, "load_knowledge_base", _load)
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--refresh"], input="a { color: red; }")

    assert result.exit_code == 0
    assert seen == {"refresh": True}


def test_invalid_timeout_env_reports_error(data_file: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli.main,
        ["--data", str(data_file)],
        input="a {}",
        env={"CSSCOMPAT_TIMEOUT": "soon"},
    )

    assert result.exit_code != 0
    assert "Invalid value for CSSCOMPAT_TIMEOUT" in result.output


def test_edit_rejects_files(tmp_path: Path) -> None:
    css = tmp_path / "a.css"
    css.write_text("a {}", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--edit", str(css)])

    assert result.exit_code != 0
    assert "--edit cannot be combined with CSS files." in result.output


def test_edit_requires_terminal() -> None:
    runner = CliRunner()

    result = runner.invoke(cli.main, ["--edit"])

    assert result.exit_code != 0
    assert "--edit needs an interactive terminal." in result.output


def test_tty_without_input_is_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli.sys, "stdin", _FakeInOut(is_tty=True))

    callback = cli.main.callback
    assert callback is not None
    with pytest.raises(click.UsageError, match="pipe CSS on stdin"):
        callback(paths=(), data_path=None, refresh=False, edit_mode=False)


def test_edit_mode_runs_editor(
    monkeypatch: pytest.MonkeyPatch, data_file: Path
) -> None:
    opened: list[KnowledgeBase] = []
    monkeypatch.setattr(cli.sys, "stdin", _FakeInOut(is_tty=True))
    monkeypatch.setattr(cli.sys, "stdout", _FakeInOut(is_tty=True))
    monkeypatch.setattr(cli, "run_editor", opened.append)

    callback = cli.main.callback
    assert callback is not None
    callback(paths=(), data_path=data_file, refresh=False, edit_mode=True)

    assert len(opened) == 1
    assert opened[0].property_node("gap") is not None

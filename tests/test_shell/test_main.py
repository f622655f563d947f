"""Tests for the command-line entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from treeshell.__main__ import run

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TREESHELL_CONFIG", str(tmp_path / "no-config.yaml"))


def test_one_shot_commands_run_in_start_directory(sample_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run(["-C", str(sample_tree), "-c", "cd sub", "-c", "findlike .txt -r"])

    out = capsys.readouterr().out
    assert "Found 2 matches." in out
    assert "y.txt" in out


def test_exit_stops_remaining_commands(sample_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run(["-C", str(sample_tree), "-c", "exit", "-c", "cwd"])
    assert str(sample_tree) not in capsys.readouterr().out


def test_bad_start_directory_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        run(["-C", str(tmp_path / "missing")])


def test_bad_config_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("tree_depth: nope\n")
    with pytest.raises(SystemExit):
        run(["--config", str(config), "-c", "cwd"])

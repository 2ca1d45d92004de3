"""Tests for running graphopt as a module (`python -m graphopt`).

These tests exercise the `graphopt.__main__` entrypoint.
"""

from __future__ import annotations

import runpy
from pathlib import Path
from unittest.mock import patch

import pytest

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def test_module_help_exits_zero() -> None:
    """Running with --help should exit cleanly with code 0."""
    with patch("sys.argv", ["graphopt", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("graphopt", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_cli_subcommand_help_exits_zero() -> None:
    """Invoking a subcommand's help via module entrypoint should exit 0."""
    with patch("sys.argv", ["graphopt", "tsp", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("graphopt", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_runs_command(capsys) -> None:
    """A full command runs through the module entrypoint."""
    with patch("sys.argv", ["graphopt", "--quiet", "euler", str(DATA_DIR / "bowtie.txt")]):
        runpy.run_module("graphopt", run_name="__main__")
    assert "1 -> 2 -> 3 -> 4 -> 5 -> 3 -> 1" in capsys.readouterr().out

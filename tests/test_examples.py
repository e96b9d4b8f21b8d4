"""Smoke tests that execute every example script without emitting warnings."""

from __future__ import annotations

import asyncio
import inspect
import runpy
import warnings
from pathlib import Path

import pytest

EXAMPLES_ROOT = Path(__file__).resolve().parent.parent / "examples"
EXAMPLE_FILES = sorted(EXAMPLES_ROOT.glob("*.py"))


@pytest.mark.parametrize("script_path", EXAMPLE_FILES, ids=lambda path: path.name)
def test_example_main_prints_without_deprecations(
    script_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    runner = runpy.run_path(str(script_path))["main"]

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        if inspect.iscoroutinefunction(runner):
            asyncio.run(runner())
        else:
            runner()

    assert capsys.readouterr().out


def test_examples_are_discovered() -> None:
    assert {path.name for path in EXAMPLE_FILES} == {
        "basic_usage.py",
        "plugin_votes.py",
        "async_results.py",
    }

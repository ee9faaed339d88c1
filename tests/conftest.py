"""Pytest configuration, shared instances & custom summary hook.

Also ensures the project root is on sys.path so ``import jobshop`` works
without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from jobshop.models import DataInstance  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def two_by_two() -> DataInstance:
    """2 jobs x 2 machines: Job0 = [(m0, 3), (m1, 2)], Job1 = [(m0, 2), (m1, 4)]."""
    return DataInstance.from_pairs(
        [
            [(0, 3), (1, 2)],
            [(0, 2), (1, 4)],
        ],
        machines_number=2,
    )


@pytest.fixture
def ft06_path() -> str:
    return str(FIXTURES_DIR / "ft06")


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        f"Passed: {passed} | Failed: {failed} | Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")

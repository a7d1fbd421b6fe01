"""Pytest configuration and shared fixtures for jsonstore tests."""

from __future__ import annotations

from itertools import count
import sys
from pathlib import Path
from typing import Callable

import pytest

_ENV_VARIABLES = (
    "JSONSTORE_INDENTED",
    "JSONSTORE_SNAPSHOT_DIR",
    "JSONSTORE_SNAPSHOT_INDENTED",
    "JSONSTORE_SNAPSHOT_MAX",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove jsonstore environment settings inherited from the shell."""
    for name in _ENV_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def counter_clock() -> Callable[[], int]:
    """Deterministic epoch-millisecond clock advancing by one per call."""
    ticks = count(1_000)
    return lambda: next(ticks)

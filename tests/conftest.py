"""Pytest fixtures and path configuration for generator profiler tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from generator_profiler.counter import reset_counter  # noqa: E402


class RecordingPerformance:
    """Backend that keeps a readable log of every call it receives."""

    def __init__(self) -> None:
        self.data: List[str] = []

    def mark(self, name: str) -> None:
        self.data.append(f"mark({name})")

    def measure(self, name: str, start_mark: str, end_mark: str) -> None:
        self.data.append(f"measure({name}, {start_mark}, {end_mark})")


class FakeClock:
    """Manually advanced clock for deterministic timeline tests."""

    def __init__(self, start: float = 100.0) -> None:
        self.value = start

    def tick(self, seconds: float) -> None:
        self.value += seconds

    def __call__(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def _fresh_generator_ids() -> None:
    reset_counter()


@pytest.fixture
def recording_performance() -> RecordingPerformance:
    return RecordingPerformance()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()

"""Timing backends that record marks and measures for profiled generators.

``PerformanceTimeline`` mirrors the subset of the web Performance interface
used by the profiler: named marks on a monotonic clock and named measures
spanning two marks. Aggregation of recorded measures lives here as well so
that profiled generators stay free of reporting concerns.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Literal, Optional, Protocol

import numpy as np

from .utils.logging import get_logger

LOGGER = get_logger("timeline")

EntryType = Literal["mark", "measure"]


class Performance(Protocol):
    """Timing backend consumed by :func:`generator_profiler.profile`."""

    def mark(self, name: str) -> None:
        """Record a timestamp keyed by ``name``."""

    def measure(self, name: str, start_mark: str, end_mark: str) -> None:
        """Record the duration between two previously recorded marks."""


class UnknownMarkError(KeyError):
    """Raised when a measure references a mark that was never recorded."""


@dataclass(frozen=True, slots=True)
class PerformanceEntry:
    """A recorded mark (zero duration) or measure."""

    name: str
    entry_type: EntryType
    start_time: float  # seconds since the timeline origin
    duration: float = 0.0


@dataclass(frozen=True, slots=True)
class MeasureSummary:
    """Aggregate statistics over a group of measures, in seconds."""

    count: int
    total: float
    mean: float
    p50: float
    p95: float
    max: float


class NullPerformance:
    """Backend that discards every mark and measure."""

    def mark(self, name: str) -> None:
        return None

    def measure(self, name: str, start_mark: str, end_mark: str) -> None:
        return None


class PerformanceTimeline:
    """In-memory performance timeline.

    Parameters
    ----------
    clock:
        Monotonic clock returning seconds. Defaults to ``time.perf_counter``;
        tests inject a deterministic clock.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.perf_counter
        self._origin = self._clock()
        self._entries: List[PerformanceEntry] = []

    def now(self) -> float:
        """Seconds elapsed since the timeline was created."""

        return self._clock() - self._origin

    def mark(self, name: str) -> None:
        entry = PerformanceEntry(name=name, entry_type="mark", start_time=self.now())
        self._entries.append(entry)
        LOGGER.debug("mark | name=%s | t=%.6f", name, entry.start_time)

    def measure(self, name: str, start_mark: str, end_mark: str) -> None:
        start = self._latest_mark(start_mark)
        end = self._latest_mark(end_mark)
        entry = PerformanceEntry(
            name=name,
            entry_type="measure",
            start_time=start.start_time,
            duration=end.start_time - start.start_time,
        )
        self._entries.append(entry)
        LOGGER.debug("measure | name=%s | duration=%.6f", name, entry.duration)

    def get_entries(self) -> List[PerformanceEntry]:
        """All entries in recording order."""

        return list(self._entries)

    def get_entries_by_name(
        self, name: str, entry_type: Optional[EntryType] = None
    ) -> List[PerformanceEntry]:
        return [
            entry
            for entry in self._entries
            if entry.name == name and (entry_type is None or entry.entry_type == entry_type)
        ]

    def get_entries_by_type(self, entry_type: EntryType) -> List[PerformanceEntry]:
        return [entry for entry in self._entries if entry.entry_type == entry_type]

    def clear_marks(self, name: Optional[str] = None) -> None:
        self._clear("mark", name)

    def clear_measures(self, name: Optional[str] = None) -> None:
        self._clear("measure", name)

    def _clear(self, entry_type: EntryType, name: Optional[str]) -> None:
        self._entries = [
            entry
            for entry in self._entries
            if entry.entry_type != entry_type or (name is not None and entry.name != name)
        ]

    def _latest_mark(self, name: str) -> PerformanceEntry:
        for entry in reversed(self._entries):
            if entry.entry_type == "mark" and entry.name == name:
                return entry
        raise UnknownMarkError(name)


def summarize_measures(entries: Iterable[PerformanceEntry]) -> MeasureSummary:
    """Summarise the durations of the measure entries in ``entries``.

    Marks are ignored. An empty selection yields an all-zero summary.
    """

    durations = np.asarray(
        [entry.duration for entry in entries if entry.entry_type == "measure"],
        dtype=np.float64,
    )
    if durations.size == 0:
        return MeasureSummary(count=0, total=0.0, mean=0.0, p50=0.0, p95=0.0, max=0.0)
    return MeasureSummary(
        count=int(durations.size),
        total=float(durations.sum()),
        mean=float(durations.mean()),
        p50=float(np.percentile(durations, 50)),
        p95=float(np.percentile(durations, 95)),
        max=float(durations.max()),
    )


__all__ = [
    "EntryType",
    "MeasureSummary",
    "NullPerformance",
    "Performance",
    "PerformanceEntry",
    "PerformanceTimeline",
    "UnknownMarkError",
    "summarize_measures",
]

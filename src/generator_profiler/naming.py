"""Mark and measure identifiers recorded on the timing backend."""

from __future__ import annotations

from typing import Any


def generator_name(generator: Any) -> str:
    """Declared name of a generator function, used to label measures."""

    name = getattr(generator, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return type(generator).__name__


def generator_start_mark(generator_id: int) -> str:
    return f"gen{generator_id}-start"


def generator_end_mark(generator_id: int) -> str:
    return f"gen{generator_id}-end"


def step_start_mark(generator_id: int, step_index: int) -> str:
    return f"gen{generator_id}-next{step_index}-start"


def step_end_mark(generator_id: int, step_index: int) -> str:
    return f"gen{generator_id}-next{step_index}-end"


def generator_measure(name: str, generator_id: int) -> str:
    """Name of the end-to-end measure, e.g. ``numbers(#3)``."""

    return f"{name}(#{generator_id})"


def step_measure(name: str, generator_id: int, step_index: int) -> str:
    """Name of a single step's measure, e.g. ``numbers(#3).next(#0)``."""

    return f"{generator_measure(name, generator_id)}.next(#{step_index})"


__all__ = [
    "generator_end_mark",
    "generator_measure",
    "generator_name",
    "generator_start_mark",
    "step_end_mark",
    "step_measure",
    "step_start_mark",
]

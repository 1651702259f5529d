"""Process-wide allocation of profiled generator ids.

This is the only global state in the package. Every read and write goes
through :func:`allocate_generator_id` and :func:`reset_counter`.
"""

from __future__ import annotations

import threading

_lock = threading.Lock()
_next_id = 0


def allocate_generator_id() -> int:
    """Return the next generator id and advance the counter."""

    global _next_id
    with _lock:
        generator_id = _next_id
        _next_id += 1
    return generator_id


def reset_counter() -> None:
    """Reset the counter back to zero.

    Intended for test isolation only. Not safe while other threads are
    starting profiled generators.
    """

    global _next_id
    with _lock:
        _next_id = 0


__all__ = ["allocate_generator_id", "reset_counter"]

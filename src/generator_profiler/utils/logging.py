"""Logging setup for profiler diagnostics."""

from __future__ import annotations

import logging
from logging import Logger
from typing import Iterable, Optional, Union

ROOT_LOGGER_NAME = "generator profiler"


def get_logger(module: str) -> Logger:
    """Return the child logger used by ``module`` (e.g. ``"profiler"``)."""

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    name: str = ROOT_LOGGER_NAME,
    propagate: bool = False,
    extra_loggers: Optional[Iterable[str]] = None,
) -> Logger:
    """Configure and return a logger instance, optionally binding child loggers.

    Parameters
    ----------
    level: int or str
        Logging verbosity, numeric or a level name such as ``"DEBUG"``.
        DEBUG surfaces per-generator lifecycle events.
    name: str
        Logical logger namespace.
    """

    resolved = level.upper() if isinstance(level, str) else level
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    handler.setFormatter(formatter)

    def _attach(target: Logger) -> None:
        if not any(isinstance(existing, logging.StreamHandler) for existing in target.handlers):
            target.addHandler(handler)
        target.setLevel(resolved)
        target.propagate = propagate

    logger = logging.getLogger(name)
    _attach(logger)

    if extra_loggers:
        for logger_name in extra_loggers:
            _attach(logging.getLogger(logger_name))

    return logger


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "get_logger"]

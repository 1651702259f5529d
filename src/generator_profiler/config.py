"""Runtime configuration for generator profiling."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from .utils.env import load_repo_dotenv
from .utils.logging import configure_logging

ENABLED_ENV = "GENPROF_ENABLED"
CLOSE_WINDOW_ON_FAILURE_ENV = "GENPROF_CLOSE_WINDOW_ON_FAILURE"
LOG_LEVEL_ENV = "GENPROF_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class ProfilerConfig:
    """Controls how profiled generators talk to their timing backend."""

    enabled: bool = True  # False: delegate only, never touch the backend
    close_window_on_failure: bool = True  # record the end-to-end measure when a step raises
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{key} must be a boolean flag, got {raw!r}")


def load_profiler_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    env_file: Optional[Union[str, Path]] = None,
) -> ProfilerConfig:
    """Build a :class:`ProfilerConfig` from environment variables.

    When ``env`` is omitted the dotenv file (``env_file``, ``GENPROF_ENV_FILE``
    or the repository ``.env``) is loaded first and ``os.environ`` is consulted.
    """

    if env is None:
        load_repo_dotenv(env_file)
        env = os.environ
    log_level = (env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"{LOG_LEVEL_ENV} must name a logging level, got {log_level!r}")
    return ProfilerConfig(
        enabled=_parse_flag(env, ENABLED_ENV, True),
        close_window_on_failure=_parse_flag(env, CLOSE_WINDOW_ON_FAILURE_ENV, True),
        log_level=log_level,
    )


def init_profiling(
    env: Optional[Mapping[str, str]] = None,
    *,
    env_file: Optional[Union[str, Path]] = None,
) -> ProfilerConfig:
    """Load the configuration and apply its log level to the package loggers."""

    config = load_profiler_config(env, env_file=env_file)
    configure_logging(config.log_level)
    return config


__all__ = [
    "CLOSE_WINDOW_ON_FAILURE_ENV",
    "DEFAULT_LOG_LEVEL",
    "ENABLED_ENV",
    "LOG_LEVEL_ENV",
    "ProfilerConfig",
    "init_profiling",
    "load_profiler_config",
]

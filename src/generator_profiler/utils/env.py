"""Locate and load the dotenv file holding ``GENPROF_*`` settings."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

ENV_FILE_ENV = "GENPROF_ENV_FILE"
DEFAULT_ENV_FILE = ".env"

_REPO_ROOT = Path(__file__).resolve().parents[3]


def resolve_env_file(env_file: Optional[Union[str, Path]] = None) -> Path:
    """Pick the dotenv file: explicit argument, then ``GENPROF_ENV_FILE``, then ``.env``.

    Relative paths are taken from the repository root.
    """

    chosen = Path(env_file or os.getenv(ENV_FILE_ENV) or DEFAULT_ENV_FILE).expanduser()
    if not chosen.is_absolute():
        chosen = _REPO_ROOT / chosen
    return chosen


@lru_cache(maxsize=None)
def load_repo_dotenv(env_file: Optional[Union[str, Path]] = None) -> bool:
    """Load the profiler dotenv file once per distinct ``env_file``.

    Values already present in the process environment win over the file.
    Returns ``False`` when the file does not exist.
    """

    env_path = resolve_env_file(env_file)
    if not env_path.is_file():
        return False
    load_dotenv(env_path, override=False)
    return True


__all__ = ["DEFAULT_ENV_FILE", "ENV_FILE_ENV", "load_repo_dotenv", "resolve_env_file"]

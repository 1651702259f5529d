"""Utility helpers for logging and environment loading."""

from .env import load_repo_dotenv, resolve_env_file
from .logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "load_repo_dotenv",
    "resolve_env_file",
]

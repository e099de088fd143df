"""Configuration helpers for loading environment variables.

Variables defined in a project-level ``.env`` file are loaded before any of
them is read.  Consumers should rely on :func:`get_env` and the typed helpers
below instead of calling :func:`os.getenv` directly so that configuration is
loaded in a single, well-defined place.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"

MAX_UNDOS_ENV = "UNDOSTACK_MAX_UNDOS"
DEFAULT_MAX_UNDOS = 20


@lru_cache(maxsize=1)
def _load_environment() -> None:
    """Load environment variables from the project's ``.env`` file.

    When the file does not exist :func:`load_dotenv` still runs so its default
    discovery mechanism can find a file stored elsewhere.  Subsequent calls are
    cached so the file is only read once per process.
    """

    if _ENV_PATH.exists():
        load_dotenv(_ENV_PATH, override=False)
    else:
        load_dotenv(override=False)


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the value for ``key`` from the environment.

    Parameters
    ----------
    key:
        The name of the environment variable to look up.
    default:
        The value to return when ``key`` is not present.
    """

    _load_environment()
    return os.environ.get(key, default)


def validate_max_undos(value: object) -> int:
    """Return ``value`` as a history bound or raise :class:`ValueError`."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"max_undos must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"max_undos must be positive, got {value}")
    return value


def default_max_undos() -> int:
    """Return the history bound configured through ``UNDOSTACK_MAX_UNDOS``."""

    raw = get_env(MAX_UNDOS_ENV)
    if raw is None or not raw.strip():
        return DEFAULT_MAX_UNDOS
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{MAX_UNDOS_ENV} must be an integer, got {raw!r}") from exc
    return validate_max_undos(value)


__all__ = ["DEFAULT_MAX_UNDOS", "MAX_UNDOS_ENV", "default_max_undos", "get_env", "validate_max_undos"]

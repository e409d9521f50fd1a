"""Local cache for downloaded data files.

Files live under ``$TOPOJAX_CACHE`` when that variable is set, and under
``~/.cache/topojax`` otherwise.  Freshness is judged from the file's
modification time.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

CACHE_ENV_VAR = "TOPOJAX_CACHE"
"""Environment variable overriding the cache root."""


def get_cache_dir(subdirectory: str | None = None) -> Path:
    """Return (and create) the cache directory.

    Args:
        subdirectory: Optional name of a directory below the cache root.

    Returns:
        Path of the existing directory.
    """
    root = os.environ.get(CACHE_ENV_VAR)
    path = Path(root) if root is not None else Path.home() / ".cache" / "topojax"
    if subdirectory is not None:
        path = path / subdirectory
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_eop_cache_dir() -> Path:
    """Directory holding cached Earth Orientation Parameter files."""
    return get_cache_dir("eop")


def file_age_seconds(filepath: str | Path) -> float:
    """Seconds since *filepath* was last modified.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
    """
    mtime = Path(filepath).stat().st_mtime
    # Clock skew can put the mtime slightly in the future
    return max(time.time() - mtime, 0.0)


def is_file_stale(filepath: str | Path, max_age_seconds: float) -> bool:
    """True if *filepath* is missing or older than *max_age_seconds*."""
    try:
        return file_age_seconds(filepath) > max_age_seconds
    except FileNotFoundError:
        return True

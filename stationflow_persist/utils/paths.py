"""
RESPONSIBILITIES
- Resolve and create the workspace directories used for persistence.
PROCESS OVERVIEW
1. resolve_root() expands user input or falls back to the StationFlow home.
2. store_file_path() returns the canonical location of a store file.
"""

from __future__ import annotations

import os
from pathlib import Path

from stationflow.core.settings import ensure_work_dirs, work_dir


def resolve_root(root: str | os.PathLike[str] | None = None) -> Path:
    """Return the persistence root, defaulting to the StationFlow home."""

    base = work_dir() if root is None else Path(root)
    return base.expanduser().resolve()


def store_file_path(filename: str, root: str | os.PathLike[str] | None = None) -> Path:
    """Return the absolute path for a store file under ``store``."""

    directories = ensure_work_dirs(resolve_root(root))
    return directories["store"] / filename

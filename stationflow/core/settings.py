from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv(override=False)

HOME_ENV = "STATIONFLOW_HOME"
LOG_LEVEL_ENV = "STATIONFLOW_LOG_LEVEL"

_WORK_SUBDIRS: tuple[str, ...] = ("store", "out", "logs")


def package_root() -> Path:
    # This file lives under <root>/stationflow/core
    return Path(__file__).resolve().parents[1]


def config_dir() -> Path:
    return package_root() / "config"


def work_dir() -> Path:
    """Writable base for runtime files (store/out/logs).

    ``STATIONFLOW_HOME`` wins over the ``~/StationFlow`` default.
    """
    env = os.getenv(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / "StationFlow"


def ensure_work_dirs(base: Path | None = None) -> dict[str, Path]:
    root = Path(base) if base is not None else work_dir()
    dirs = {name: root / name for name in _WORK_SUBDIRS}
    for path in dirs.values():
        path.mkdir(parents=True, exist_ok=True)
    return dirs

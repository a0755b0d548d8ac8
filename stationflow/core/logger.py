from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import LOG_LEVEL_ENV, work_dir


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOGGER: logging.Logger | None = None


def _initial_level() -> int:
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the ``stationflow`` logger writing to <home>/logs/app.log.

    Handlers are attached on first use only; later calls return the same
    logger regardless of ``log_dir``.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    base = Path(log_dir) if log_dir is not None else work_dir() / "logs"
    base.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("stationflow")
    logger.setLevel(_initial_level())
    logger.propagate = False

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(
        base / "app.log", maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger


def set_level(level_name: str) -> int:
    """Apply ``level_name`` to the application logger and return the numeric level."""

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    get_logger().setLevel(level)
    return level

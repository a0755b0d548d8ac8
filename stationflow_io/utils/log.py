"""Logging helpers for the stationflow_io package."""

# Module responsibilities:
# - Hang IO loggers under the application logger so they share its handlers.
# - Let IO modules log structured ``extra`` payloads without reconfiguring logging.

from __future__ import annotations

import logging

from stationflow.core.logger import get_logger as core_get_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger scoped under ``stationflow.io``.

    Args:
        name: Logger name suffix appended to the IO namespace.

    Returns:
        Child of the configured application logger.
    """

    return core_get_logger().getChild(f"io.{name}")

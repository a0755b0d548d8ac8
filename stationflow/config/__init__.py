"""Configuration helpers for StationFlow runtime files.

Loads the report settings YAML into a validated :class:`ReportConfig` and
exposes the location of the bundled default division mapping.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from stationflow.core.errors import ConfigError
from stationflow.services.report_builder.api import ReportConfig


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_REPORT_CONFIG_PATH = CONFIG_DIR / "report.yaml"
DEFAULT_MAPPING_PATH = CONFIG_DIR / "mapping.json"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Report config not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Report config is not valid YAML: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Report config must be a mapping")
    return data


def load_report_config(path: str | Path | None = None, **overrides: Any) -> ReportConfig:
    """Load report settings, applying non-``None`` keyword overrides on top."""

    config_path = Path(path) if path else DEFAULT_REPORT_CONFIG_PATH
    data = _load_yaml(config_path).get("report", {})
    if not isinstance(data, dict):
        raise ConfigError("'report' section must be a mapping")
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return ReportConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid report config {config_path}: {exc}") from exc


__all__ = [
    "CONFIG_DIR",
    "DEFAULT_MAPPING_PATH",
    "DEFAULT_REPORT_CONFIG_PATH",
    "load_report_config",
]

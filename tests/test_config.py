from __future__ import annotations

from pathlib import Path

import pytest

from stationflow.config import DEFAULT_MAPPING_PATH, load_report_config
from stationflow.core.errors import ConfigError
from stationflow.services.report_builder import LayoutMode, ReportMode
from stationflow_persist import parse_mapping_text


def test_bundled_config_matches_defaults() -> None:
    config = load_report_config()

    assert config.station_field == "STATION"
    assert config.report_mode is ReportMode.MAPPING_DRIVEN
    assert config.layout_mode is LayoutMode.TOTALS_GRID
    assert config.output_prefix == "processed_"


def test_overrides_win_and_none_is_ignored() -> None:
    config = load_report_config(layout_mode="grouped", report_mode=None)

    assert config.layout_mode is LayoutMode.GROUPED_HEADER
    assert config.report_mode is ReportMode.MAPPING_DRIVEN


def test_custom_config_file(tmp_path: Path) -> None:
    path = tmp_path / "report.yaml"
    path.write_text("report:\n  total_label: Sum\n  report_mode: observed\n", encoding="utf-8")

    config = load_report_config(path)

    assert config.total_label == "Sum"
    assert config.report_mode is ReportMode.CLASSIFY_OBSERVED
    assert config.member_label == "Office"


@pytest.mark.parametrize(
    "content",
    [
        "report: [1, 2]\n",
        "report:\n  layout_mode: sideways\n",
        "report:\n  unknown_key: 1\n",
        "report:\n  header_fill_rgb: red\n",
        "- just\n- a list\n",
        "report: {unclosed\n",
    ],
)
def test_invalid_config_raises_config_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "report.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_report_config(path)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_report_config(tmp_path / "absent.yaml")


def test_bundled_mapping_is_valid() -> None:
    payload = parse_mapping_text(DEFAULT_MAPPING_PATH.read_text(encoding="utf-8"))

    assert payload
    assert all(members for members in payload.values())

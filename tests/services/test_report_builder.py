from __future__ import annotations

from typing import Dict, List

import pytest

from stationflow.core.errors import EmptyInputError, InvalidMappingFormatError, MissingColumnError
from stationflow.services.report_builder import (
    LayoutMode,
    ReportConfig,
    ReportMode,
    SheetInput,
    output_name,
    process_sheet,
    process_workbook,
)
from stationflow.services.report_builder.api import snapshot_mapping


def test_end_to_end_totals_grid(station_records: List[Dict[str, object]], div_mapping) -> None:
    result = process_workbook([SheetInput("Sheet1", station_records)], div_mapping)

    assert result.sheet_count == 1
    report = result.reports[0]
    assert report.sheet_name == "Sheet1"
    assert report.station_total == 4
    assert report.grid.rows == [
        ["Div1", "", "Div2", ""],
        ["Office", "No. of Toolkits", "Office", "No. of Toolkits"],
        ["Alpha", 2, "Gamma", 1],
        ["Beta", 1, "", ""],
        ["Total", 3, "Total", 1],
    ]


def test_end_to_end_grouped_observed(station_records, div_mapping) -> None:
    records = station_records + [{"STATION": "Omega"}]
    config = ReportConfig(layout_mode=LayoutMode.GROUPED_HEADER, report_mode=ReportMode.CLASSIFY_OBSERVED)

    report = process_sheet(SheetInput("S", records), div_mapping, config)

    assert report.grid.rows == [
        ["Div1", "", "", "Div2", "", "", "Other", "", ""],
        ["Alpha", 2, "", "Gamma", 1, "", "Omega", 1, ""],
        ["beta", 1, "", "", "", "", "", "", ""],
    ]
    assert report.aggregation.unmapped == {"Omega": 1}


def test_processing_twice_yields_identical_grids(station_records, div_mapping) -> None:
    sheet = SheetInput("Sheet1", station_records)

    first = process_sheet(sheet, div_mapping, ReportConfig())
    second = process_sheet(sheet, div_mapping, ReportConfig())

    assert first.grid == second.grid


def test_sheet_order_and_names_are_preserved(div_mapping) -> None:
    sheets = [
        SheetInput("March", [{"Station": "Gamma"}]),
        SheetInput("April", [{"station ": "Alpha"}]),
    ]

    result = process_workbook(sheets, div_mapping)

    assert [r.sheet_name for r in result.reports] == ["March", "April"]


def test_missing_column_aborts_the_run(div_mapping) -> None:
    sheets = [SheetInput("Good", [{"STATION": "Alpha"}]), SheetInput("Bad", [{"OFFICE": "Alpha"}])]

    with pytest.raises(MissingColumnError) as excinfo:
        process_workbook(sheets, div_mapping)

    assert excinfo.value.sheet == "Bad"


def test_missing_column_can_be_skipped(div_mapping) -> None:
    sheets = [SheetInput("Good", [{"STATION": "Alpha"}]), SheetInput("Bad", [{"OFFICE": "Alpha"}])]

    result = process_workbook(sheets, div_mapping, ReportConfig(skip_invalid_sheets=True))

    assert [r.sheet_name for r in result.reports] == ["Good"]
    assert result.skipped_sheets == ["Bad"]


def test_all_sheets_skipped_is_empty_input(div_mapping) -> None:
    with pytest.raises(EmptyInputError):
        process_workbook([SheetInput("Bad", [])], div_mapping, ReportConfig(skip_invalid_sheets=True))


def test_no_sheets_is_empty_input(div_mapping) -> None:
    with pytest.raises(EmptyInputError):
        process_workbook([], div_mapping)


def test_empty_mapping_is_a_valid_empty_report(station_records) -> None:
    report = process_workbook([SheetInput("S", station_records)], {}).reports[0]

    assert report.grid.rows == [[], []]
    assert report.aggregation.unmapped == {"Alpha": 2, "beta": 1, "Gamma": 1}


def test_snapshot_is_isolated_from_later_edits(div_mapping) -> None:
    frozen = snapshot_mapping(div_mapping)
    div_mapping["Div1"].append("Delta")
    div_mapping["Div3"] = ["Zeta"]

    assert frozen == {"Div1": ("Alpha", "Beta"), "Div2": ("Gamma",)}
    with pytest.raises(TypeError):
        frozen["Div4"] = ()  # type: ignore[index]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("stations.xlsx", "processed_stations.xlsx"),
        ("stations.xls", "processed_stations.xlsx"),
        ("march.report.csv", "processed_march.report.xlsx"),
        ("noext", "processed_noext.xlsx"),
    ],
)
def test_output_name(name: str, expected: str) -> None:
    assert output_name(name) == expected


def test_config_rejects_unknown_modes() -> None:
    with pytest.raises(ValueError):
        ReportConfig(layout_mode="diagonal")
    assert ReportConfig(layout_mode="grouped").layout_mode is LayoutMode.GROUPED_HEADER


@pytest.mark.parametrize("mapping", [{"A": "XYZ"}, {"A": 3}, {"A": ["X", None]}])
def test_process_workbook_rejects_malformed_member_lists(station_records, mapping) -> None:
    with pytest.raises(InvalidMappingFormatError):
        process_workbook([SheetInput("Sheet1", station_records)], mapping)

"""`stationflow_io` exposes the workbook reader and report writer."""

from __future__ import annotations

from .excel_reader import read_workbook
from .excel_writer import render_grid, write_report
from .utils.paths import prepare_output_path

__all__ = [
    "prepare_output_path",
    "read_workbook",
    "render_grid",
    "write_report",
]

"""Workbook output helpers for rendered report grids."""

# Module responsibilities:
# - Render OutputGrid objects into openpyxl worksheets (values, merges, widths, styles).
# - Save all sheets of a run into one workbook, or nothing when rendering fails.

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from stationflow.services.report_builder.models import BLANK, OutputGrid, SheetReport, WidthHint

from .utils.log import get_logger

logger = get_logger("excel_writer")

DEFAULT_WIDTHS: Mapping[WidthHint, float] = {WidthHint.WIDE: 28, WidthHint.NARROW: 16}
_INVALID_TITLE_CHARS = set('[]:*?/\\')


def _safe_title(name: str) -> str:
    cleaned = "".join("_" if ch in _INVALID_TITLE_CHARS else ch for ch in name).strip()
    return (cleaned or "Sheet")[:31]


def render_grid(ws: Worksheet, grid: OutputGrid, widths: Mapping[WidthHint, float] = DEFAULT_WIDTHS) -> None:
    """Write ``grid`` into ``ws`` starting at A1."""

    for r, row in enumerate(grid.rows, start=1):
        for c, value in enumerate(row, start=1):
            if value == BLANK:
                continue
            ws.cell(row=r, column=c, value=value)

    for region in grid.merges:
        ws.merge_cells(
            start_row=region.first_row + 1,
            start_column=region.first_col + 1,
            end_row=region.last_row + 1,
            end_column=region.last_col + 1,
        )
        anchor = ws.cell(row=region.first_row + 1, column=region.first_col + 1)
        anchor.alignment = Alignment(horizontal="center")

    for style in grid.styles:
        cell = ws.cell(row=style.row + 1, column=style.col + 1)
        cell.font = Font(bold=style.bold, size=style.font_size)
        if style.fill_rgb:
            cell.fill = PatternFill(fill_type="solid", start_color=style.fill_rgb, end_color=style.fill_rgb)

    for idx, hint in enumerate(grid.column_widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = widths[hint]


def write_report(
    reports: Iterable[SheetReport],
    out_path: Path,
    *,
    widths: Mapping[WidthHint, float] = DEFAULT_WIDTHS,
) -> Path:
    """Save one worksheet per report, in order, into ``out_path``.

    Args:
        reports: Processed sheets; worksheet names follow ``sheet_name``.
        out_path: Target ``.xlsx`` path; parent directories are created.
        widths: Column widths (characters) per width hint.

    Returns:
        The written path.
    """

    wb = Workbook()
    wb.remove(wb.active)
    for report in reports:
        ws = wb.create_sheet(title=_safe_title(report.sheet_name))
        render_grid(ws, report.grid, widths)
        logger.info(
            "Sheet rendered",
            extra={"sheet": ws.title, "rows": report.grid.height, "columns": report.grid.width},
        )

    if not wb.worksheets:
        raise ValueError("no reports to write")

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = out_path.with_name(out_path.name + ".tmp")
    try:
        wb.save(tmp_path)
        os.replace(tmp_path, out_path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("Report written", extra={"output": str(out_path), "sheets": wb.sheetnames})
    return out_path

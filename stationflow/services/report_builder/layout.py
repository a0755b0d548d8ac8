"""Grid layout of aggregated divisions as side-by-side column blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .models import (
    BLANK,
    CellStyle,
    CellValue,
    DivisionGroup,
    LayoutMode,
    MergeRegion,
    OutputGrid,
    WidthHint,
)


@dataclass(frozen=True, slots=True)
class LayoutOptions:
    """Literal labels and header styling used when rendering a grid."""

    member_label: str = "Office"
    count_label: str = "No. of Toolkits"
    total_label: str = "Total"
    header_font_size: int = 20
    header_fill_rgb: str = "E0E0E0"


def max_rows(groups: Sequence[DivisionGroup]) -> int:
    """Length of the tallest division, 0 when there are no divisions."""

    return max((len(group) for group in groups), default=0)


def _column_widths(groups: Sequence[DivisionGroup], mode: LayoutMode) -> List[WidthHint]:
    block = [WidthHint.WIDE, WidthHint.NARROW]
    if mode is LayoutMode.GROUPED_HEADER:
        block.append(WidthHint.NARROW)
    return block * len(groups)


def _data_rows(groups: Sequence[DivisionGroup], mode: LayoutMode) -> List[List[CellValue]]:
    spacer = [BLANK] if mode is LayoutMode.GROUPED_HEADER else []
    rows: List[List[CellValue]] = []
    for index in range(max_rows(groups)):
        row: List[CellValue] = []
        for group in groups:
            if index < len(group.members):
                item = group.members[index]
                row.extend([item.member, item.count])
            else:
                row.extend([BLANK, BLANK])
            row.extend(spacer)
        rows.append(row)
    return rows


def _totals_grid(groups: Sequence[DivisionGroup], options: LayoutOptions) -> OutputGrid:
    header: List[CellValue] = []
    sub_header: List[CellValue] = []
    total_row: List[CellValue] = []
    merges: List[MergeRegion] = []
    for block, group in enumerate(groups):
        first_col = block * 2
        header.extend([group.name, BLANK])
        sub_header.extend([options.member_label, options.count_label])
        total_row.extend([options.total_label, group.subtotal])
        merges.append(MergeRegion(first_row=0, first_col=first_col, last_row=0, last_col=first_col + 1))

    rows = [header, sub_header, *_data_rows(groups, LayoutMode.TOTALS_GRID)]
    if groups:
        rows.append(total_row)
    return OutputGrid(
        rows=rows,
        merges=merges,
        column_widths=_column_widths(groups, LayoutMode.TOTALS_GRID),
    )


def _grouped_header(groups: Sequence[DivisionGroup], options: LayoutOptions) -> OutputGrid:
    header: List[CellValue] = []
    styles: List[CellStyle] = []
    for block, group in enumerate(groups):
        header.extend([group.name, BLANK, BLANK])
        styles.append(
            CellStyle(
                row=0,
                col=block * 3,
                bold=True,
                font_size=options.header_font_size,
                fill_rgb=options.header_fill_rgb,
            )
        )
    return OutputGrid(
        rows=[header, *_data_rows(groups, LayoutMode.GROUPED_HEADER)],
        column_widths=_column_widths(groups, LayoutMode.GROUPED_HEADER),
        styles=styles,
    )


def build_grid(
    groups: Sequence[DivisionGroup],
    mode: LayoutMode = LayoutMode.TOTALS_GRID,
    options: LayoutOptions | None = None,
) -> OutputGrid:
    """Lay out ``groups`` (already in column-block order) as a flat grid.

    Every row has ``len(groups) * mode.block_width`` cells. Divisions shorter
    than the tallest one are padded with blanks. With no groups the grid
    keeps its header rows but has zero columns.
    """

    options = options or LayoutOptions()
    mode = LayoutMode(mode)
    if mode is LayoutMode.TOTALS_GRID:
        return _totals_grid(groups, options)
    return _grouped_header(groups, options)

"""Data models used by the report builder service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

CellValue = Union[str, int]
Record = Mapping[str, Any]
MappingTable = Mapping[str, Sequence[str]]

BLANK: CellValue = ""


class ReportMode(str, Enum):
    """How division member lists are derived from the station counts."""

    MAPPING_DRIVEN = "mapping"
    CLASSIFY_OBSERVED = "observed"


class LayoutMode(str, Enum):
    """How aggregated divisions are rendered into a grid."""

    TOTALS_GRID = "totals"
    GROUPED_HEADER = "grouped"

    @property
    def block_width(self) -> int:
        return 2 if self is LayoutMode.TOTALS_GRID else 3


class WidthHint(str, Enum):
    WIDE = "wide"
    NARROW = "narrow"


@dataclass(frozen=True, slots=True)
class MemberCount:
    """One ``(member, count)`` row inside a division block."""

    member: str
    count: int


@dataclass(frozen=True, slots=True)
class DivisionGroup:
    """A division with its sorted members and their subtotal."""

    name: str
    members: Tuple[MemberCount, ...] = ()

    @property
    def subtotal(self) -> int:
        return sum(item.count for item in self.members)

    def __len__(self) -> int:
        return len(self.members)


@dataclass(slots=True)
class AggregationResult:
    """Groups in column-block order plus stations no division claimed."""

    groups: List[DivisionGroup]
    unmapped: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, List[Tuple[str, int]]]:
        return {g.name: [(m.member, m.count) for m in g.members] for g in self.groups}


@dataclass(frozen=True, slots=True)
class MergeRegion:
    """Inclusive, zero-based rectangular cell span."""

    first_row: int
    first_col: int
    last_row: int
    last_col: int


@dataclass(frozen=True, slots=True)
class CellStyle:
    """Renderer-agnostic style marker attached to a single cell."""

    row: int
    col: int
    bold: bool = True
    font_size: int | None = None
    fill_rgb: str | None = None


@dataclass(slots=True)
class OutputGrid:
    """Complete description of one output sheet."""

    rows: List[List[CellValue]]
    merges: List[MergeRegion] = field(default_factory=list)
    column_widths: List[WidthHint] = field(default_factory=list)
    styles: List[CellStyle] = field(default_factory=list)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)


@dataclass(slots=True)
class SheetInput:
    """Fully materialized records of one input sheet."""

    name: str
    records: Sequence[Record]
    columns: Sequence[str] | None = None


@dataclass(slots=True)
class SheetReport:
    """Processed result for one input sheet."""

    sheet_name: str
    grid: OutputGrid
    aggregation: AggregationResult
    station_total: int = 0


__all__ = [
    "AggregationResult",
    "BLANK",
    "CellStyle",
    "CellValue",
    "DivisionGroup",
    "LayoutMode",
    "MappingTable",
    "MemberCount",
    "MergeRegion",
    "OutputGrid",
    "Record",
    "ReportMode",
    "SheetInput",
    "SheetReport",
    "WidthHint",
]

"""Public API for the report builder service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from stationflow.core.errors import EmptyInputError, InvalidMappingFormatError, MissingColumnError

from .aggregate import aggregate
from .classify import FALLBACK_DIVISION
from .counting import DEFAULT_STATION_FIELD, count_stations
from .layout import LayoutOptions, build_grid
from .models import LayoutMode, MappingTable, ReportMode, SheetInput, SheetReport

LOGGER = logging.getLogger(__name__)


class ReportConfig(BaseModel):
    """Settings shared by every sheet of a processing run."""

    model_config = ConfigDict(extra="forbid")

    station_field: str = DEFAULT_STATION_FIELD
    fallback_label: str = FALLBACK_DIVISION
    report_mode: ReportMode = ReportMode.MAPPING_DRIVEN
    layout_mode: LayoutMode = LayoutMode.TOTALS_GRID
    member_label: str = "Office"
    count_label: str = "No. of Toolkits"
    total_label: str = "Total"
    header_font_size: int = Field(default=20, gt=0)
    header_fill_rgb: str = Field(default="E0E0E0", pattern=r"^[0-9A-Fa-f]{6}$")
    output_prefix: str = "processed_"
    skip_invalid_sheets: bool = False
    wide_width: float = Field(default=28, gt=0)
    narrow_width: float = Field(default=16, gt=0)

    def layout_options(self) -> LayoutOptions:
        return LayoutOptions(
            member_label=self.member_label,
            count_label=self.count_label,
            total_label=self.total_label,
            header_font_size=self.header_font_size,
            header_fill_rgb=self.header_fill_rgb,
        )


@dataclass(slots=True)
class ProcessResult:
    """Aggregated outcome returned to callers."""

    reports: List[SheetReport]
    skipped_sheets: List[str] = field(default_factory=list)

    @property
    def sheet_count(self) -> int:
        return len(self.reports)


def snapshot_mapping(mapping: MappingTable) -> MappingTable:
    """Freeze ``mapping`` so later edits cannot leak into a running batch.

    Raises:
        InvalidMappingFormatError: A division does not list station names.
    """

    frozen = {}
    for division, members in mapping.items():
        if isinstance(members, (str, bytes)) or not isinstance(members, Iterable):
            raise InvalidMappingFormatError(f"Division {division!r} must list station names, got {members!r}")
        members = tuple(members)
        if not all(isinstance(member, str) for member in members):
            raise InvalidMappingFormatError(f"Division {division!r} has non-text members: {members!r}")
        frozen[str(division)] = members
    return MappingProxyType(frozen)


def process_sheet(sheet: SheetInput, mapping: MappingTable, config: ReportConfig) -> SheetReport:
    """Run counting, aggregation and layout for a single sheet."""

    counts = count_stations(
        sheet.records,
        config.station_field,
        sheet=sheet.name,
        columns=sheet.columns,
    )
    aggregation = aggregate(counts, mapping, config.report_mode, fallback=config.fallback_label)
    grid = build_grid(aggregation.groups, config.layout_mode, config.layout_options())
    LOGGER.info(
        "Sheet %s: %s station(s), %s division(s), grid %sx%s",
        sheet.name,
        len(counts),
        len(aggregation.groups),
        grid.height,
        grid.width,
    )
    return SheetReport(
        sheet_name=sheet.name,
        grid=grid,
        aggregation=aggregation,
        station_total=sum(counts.values()),
    )


def process_workbook(
    sheets: Iterable[SheetInput],
    mapping: MappingTable,
    config: ReportConfig | None = None,
) -> ProcessResult:
    """Process every sheet in input order and return one report per sheet.

    A sheet without a station column aborts the whole run unless
    ``config.skip_invalid_sheets`` is set.
    """

    config = config or ReportConfig()
    sheets = list(sheets)
    if not sheets:
        raise EmptyInputError("no sheets supplied for processing")

    frozen = snapshot_mapping(mapping)
    reports: List[SheetReport] = []
    skipped: List[str] = []
    for sheet in sheets:
        try:
            reports.append(process_sheet(sheet, frozen, config))
        except MissingColumnError as exc:
            if not config.skip_invalid_sheets:
                raise
            LOGGER.warning("Skipping sheet: %s", exc)
            skipped.append(sheet.name)

    if not reports:
        raise EmptyInputError(f"no processable sheets; skipped: {', '.join(skipped)}")
    return ProcessResult(reports=reports, skipped_sheets=skipped)


def output_name(input_name: str, prefix: str = "processed_") -> str:
    """Derive the report file name; openpyxl only writes ``.xlsx``."""

    stem, dot, suffix = input_name.rpartition(".")
    if not dot:
        return f"{prefix}{input_name}.xlsx"
    if suffix.lower() != "xlsx":
        return f"{prefix}{stem}.xlsx"
    return f"{prefix}{input_name}"


__all__ = [
    "ProcessResult",
    "ReportConfig",
    "output_name",
    "process_sheet",
    "process_workbook",
    "snapshot_mapping",
]

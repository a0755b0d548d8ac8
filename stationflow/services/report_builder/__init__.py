"""Report builder service package."""

from .aggregate import aggregate, aggregate_by_mapping, aggregate_observed
from .api import ProcessResult, ReportConfig, output_name, process_sheet, process_workbook
from .classify import FALLBACK_DIVISION, DivisionClassifier, classify
from .counting import count_stations
from .layout import LayoutOptions, build_grid
from .models import LayoutMode, ReportMode, SheetInput

__all__ = [
    "DivisionClassifier",
    "FALLBACK_DIVISION",
    "LayoutMode",
    "LayoutOptions",
    "ProcessResult",
    "ReportConfig",
    "ReportMode",
    "SheetInput",
    "aggregate",
    "aggregate_by_mapping",
    "aggregate_observed",
    "build_grid",
    "classify",
    "count_stations",
    "output_name",
    "process_sheet",
    "process_workbook",
]

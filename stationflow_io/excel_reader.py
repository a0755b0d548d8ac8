"""Workbook input helpers."""

# Module responsibilities:
# - Turn every sheet of a workbook (or a single CSV) into fully materialized records.
# - Emit structured logs for traceability.

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import List

import pandas as pd

from stationflow.core.errors import EmptyInputError, WorkbookReadError
from stationflow.services.report_builder.models import SheetInput

from .utils.log import get_logger

logger = get_logger("excel_reader")

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def _to_sheet(name: str, frame: pd.DataFrame) -> SheetInput:
    frame = frame.copy()
    frame.columns = [str(col) for col in frame.columns]
    return SheetInput(
        name=name,
        records=frame.to_dict(orient="records"),
        columns=list(frame.columns),
    )


def read_workbook(path: Path) -> List[SheetInput]:
    """Load every sheet of ``path`` in workbook order.

    Cells are read with ``dtype=object`` so station codes keep their text.

    Args:
        path: Excel workbook or CSV file.

    Returns:
        One ``SheetInput`` per sheet; a CSV yields a single sheet named
        after the file stem.

    Raises:
        FileNotFoundError: When the file does not exist.
        WorkbookReadError: When pandas cannot parse the file.
        EmptyInputError: When the workbook holds no sheets.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source workbook not found: {path}")

    suffix = path.suffix.lower()
    logger.info("Reading workbook", extra={"path": str(path)})
    try:
        if suffix == ".csv":
            frames = {path.stem: pd.read_csv(path, dtype=object)}
        elif suffix in EXCEL_SUFFIXES:
            frames = pd.read_excel(path, sheet_name=None, dtype=object)
        else:
            raise WorkbookReadError(f"Unsupported input file: {path.name}")
    except (ValueError, ImportError, zipfile.BadZipFile) as exc:
        logger.error("Failed to read workbook", extra={"path": str(path), "error": str(exc)})
        raise WorkbookReadError(f"Cannot read {path.name}: {exc}") from exc

    if not frames:
        raise EmptyInputError(f"Workbook has no sheets: {path.name}")

    sheets = [_to_sheet(str(name), frame) for name, frame in frames.items()]
    logger.info(
        "Workbook loaded",
        extra={"sheets": [s.name for s in sheets], "rows": [len(s.records) for s in sheets]},
    )
    return sheets

"""Filesystem helpers for report output locations."""

# Module responsibilities:
# - Resolve the default ``out`` directory and build ``processed_`` file names.

from __future__ import annotations

from pathlib import Path
from typing import Optional

from stationflow.core.settings import ensure_work_dirs
from stationflow.services.report_builder.api import output_name


def prepare_output_path(
    input_path: Path,
    out_dir: Optional[Path] = None,
    prefix: str = "processed_",
) -> Path:
    """Return where the report for ``input_path`` should be written.

    Args:
        input_path: Source workbook; only its file name is used.
        out_dir: Target directory, defaults to ``<home>/out``.
        prefix: Prefix prepended to the source file name.

    Returns:
        Output path inside an existing directory.
    """

    target_dir = Path(out_dir) if out_dir is not None else ensure_work_dirs()["out"]
    target_dir.mkdir(parents=True, exist_ok=True)
    return target_dir / output_name(Path(input_path).name, prefix)

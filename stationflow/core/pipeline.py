from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from stationflow.services.report_builder import ReportConfig, process_workbook
from stationflow.services.report_builder.models import WidthHint
from stationflow_io import prepare_output_path, read_workbook, write_report
from stationflow_persist import MappingStore, init_mapping_store

from .errors import EmptyInputError
from .logger import get_logger


ProgressCB = Callable[[str, str], None]


@dataclass
class PipelineResult:
    input_path: str
    output_path: str
    sheet_names: List[str]
    skipped_sheets: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Successfully processed {len(self.sheet_names)} sheet(s)!"


class Pipeline:
    """Coordinates Read -> Count/Aggregate/Layout -> Write for one workbook."""

    def __init__(
        self,
        logger=None,
        mapping_store: MappingStore | None = None,
        config: ReportConfig | None = None,
    ) -> None:
        self.logger = logger or get_logger()
        self.mapping_store = mapping_store or init_mapping_store()
        self.config = config or ReportConfig()

    def run(
        self,
        input_path: Optional[Path],
        out_dir: Path | None = None,
        progress_cb: ProgressCB | None = None,
    ) -> PipelineResult:
        def progress(stage: str, detail: str = "") -> None:
            if progress_cb:
                progress_cb(stage, detail)
            self.logger.info("%s - %s", stage, detail)

        if input_path is None:
            raise EmptyInputError("Please select an Excel file first")
        input_path = Path(input_path)

        # Snapshot before reading so a concurrent mapping update is not observed mid-run.
        mapping = self.mapping_store.snapshot()

        progress("1/3 read", input_path.name)
        sheets = read_workbook(input_path)

        progress("2/3 process", f"{len(sheets)} sheet(s), {len(mapping)} division(s) mapped")
        result = process_workbook(sheets, mapping, self.config)

        output_path = prepare_output_path(input_path, out_dir, self.config.output_prefix)
        progress("3/3 write", output_path.name)
        write_report(
            result.reports,
            output_path,
            widths={WidthHint.WIDE: self.config.wide_width, WidthHint.NARROW: self.config.narrow_width},
        )

        return PipelineResult(
            input_path=str(input_path),
            output_path=str(output_path),
            sheet_names=[r.sheet_name for r in result.reports],
            skipped_sheets=result.skipped_sheets,
        )

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from openpyxl import load_workbook

from stationflow.core.errors import EmptyInputError, MissingColumnError
from stationflow.core.pipeline import Pipeline
from stationflow.services.report_builder import ReportConfig
from stationflow_persist import MappingStore


@pytest.fixture()
def store(div_mapping) -> MappingStore:
    store = MappingStore()
    store.replace(div_mapping)
    return store


def _write_source(path: Path, sheets: dict[str, pd.DataFrame]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for name, frame in sheets.items():
            frame.to_excel(writer, sheet_name=name, index=False)
    return path


def test_pipeline_writes_processed_workbook(tmp_path: Path, store: MappingStore) -> None:
    source = _write_source(
        tmp_path / "toolkits.xlsx",
        {"Sheet1": pd.DataFrame({"STATION": ["Alpha", "beta", "Alpha", "Gamma"]})},
    )
    stages: list[str] = []

    result = Pipeline(mapping_store=store).run(
        source, out_dir=tmp_path / "out", progress_cb=lambda stage, _detail: stages.append(stage)
    )

    assert Path(result.output_path) == tmp_path / "out" / "processed_toolkits.xlsx"
    assert result.sheet_names == ["Sheet1"]
    assert result.message == "Successfully processed 1 sheet(s)!"
    assert stages == ["1/3 read", "2/3 process", "3/3 write"]
    ws = load_workbook(result.output_path)["Sheet1"]
    assert [c.value for c in ws[5]] == ["Total", 3, "Total", 1]


def test_pipeline_missing_column_produces_no_file(tmp_path: Path, store: MappingStore) -> None:
    source = _write_source(
        tmp_path / "bad.xlsx",
        {
            "Good": pd.DataFrame({"STATION": ["Alpha"]}),
            "Bad": pd.DataFrame({"OFFICE": ["Alpha"]}),
        },
    )

    with pytest.raises(MissingColumnError):
        Pipeline(mapping_store=store).run(source, out_dir=tmp_path / "out")

    assert not (tmp_path / "out" / "processed_bad.xlsx").exists()


def test_pipeline_skip_invalid_sheets(tmp_path: Path, store: MappingStore) -> None:
    source = _write_source(
        tmp_path / "mixed.xlsx",
        {
            "Good": pd.DataFrame({"STATION": ["Alpha"]}),
            "Bad": pd.DataFrame({"OFFICE": ["Alpha"]}),
        },
    )

    result = Pipeline(mapping_store=store, config=ReportConfig(skip_invalid_sheets=True)).run(
        source, out_dir=tmp_path
    )

    assert result.skipped_sheets == ["Bad"]
    assert load_workbook(result.output_path).sheetnames == ["Good"]


def test_pipeline_requires_input(store: MappingStore) -> None:
    with pytest.raises(EmptyInputError):
        Pipeline(mapping_store=store).run(None)


def test_pipeline_uses_mapping_snapshot(tmp_path: Path, store: MappingStore) -> None:
    source = _write_source(tmp_path / "s.xlsx", {"S": pd.DataFrame({"STATION": ["Gamma"]})})
    pipeline = Pipeline(mapping_store=store)
    pipeline.run(source, out_dir=tmp_path)

    store.replace({"Solo": ["Gamma"]})
    result = pipeline.run(source, out_dir=tmp_path)

    ws = load_workbook(result.output_path)["S"]
    assert ws["A1"].value == "Solo"
    assert ws["B3"].value == 1

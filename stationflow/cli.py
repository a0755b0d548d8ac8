"""Typer based command line entry points for StationFlow."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from stationflow.config import load_report_config
from stationflow.core.errors import InvalidMappingFormatError, StationFlowError
from stationflow.core.logger import get_logger, set_level
from stationflow.core.pipeline import Pipeline
from stationflow.services.report_builder import LayoutMode, ReportMode
from stationflow_persist import MappingStore, init_mapping_store

app = typer.Typer(help="Division summary reports from station spreadsheets.")
mapping_app = typer.Typer(name="mapping", help="Inspect or change the division mapping.")
app.add_typer(mapping_app, name="mapping")


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _store(root: Optional[Path]) -> MappingStore:
    return init_mapping_store(root)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure logging before executing commands."""

    get_logger()
    try:
        set_level(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("process")
def cli_process(
    input_file: Path = typer.Argument(
        ...,
        help="Excel workbook (or CSV) with a STATION column.",
        exists=True,
        readable=True,
        resolve_path=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for the processed workbook."),
    layout: Optional[LayoutMode] = typer.Option(None, "--layout", case_sensitive=False, help="Grid layout."),
    mode: Optional[ReportMode] = typer.Option(None, "--mode", case_sensitive=False, help="Member list source."),
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, help="Report settings YAML."),
    mapping_file: Optional[Path] = typer.Option(
        None, "--mapping", exists=True, readable=True, help="Use this mapping JSON for this run only."
    ),
    skip_invalid: Optional[bool] = typer.Option(
        None, "--skip-invalid/--abort-on-invalid", help="Skip sheets without a STATION column."
    ),
    root: Optional[Path] = typer.Option(None, help="Alternate workspace root (defaults to ~/StationFlow)."),
) -> None:
    """Build the division summary workbook for INPUT_FILE."""

    logger = get_logger()
    try:
        config = load_report_config(
            config_path,
            layout_mode=layout,
            report_mode=mode,
            skip_invalid_sheets=skip_invalid,
        )
        store = _store(root)
        if mapping_file is not None:
            # Run-only mapping: validated but never persisted.
            store = MappingStore(logger=store.logger)
            store.replace(mapping_file.read_text(encoding="utf-8"))
        result = Pipeline(mapping_store=store, config=config).run(input_file, out_dir=output)
    except StationFlowError as exc:
        logger.error("Processing failed: %s", exc)
        _fail(f"Error processing file: {exc}")
        return

    typer.echo(result.message)
    if result.skipped_sheets:
        typer.echo(f"Skipped sheets: {', '.join(result.skipped_sheets)}")
    typer.echo(f"Output: {result.output_path}")


@mapping_app.command("show")
def mapping_show(root: Optional[Path] = typer.Option(None, help="Alternate workspace root.")) -> None:
    """Print the active division mapping as JSON."""

    try:
        text = _store(root).to_text()
    except StationFlowError as exc:
        _fail(f"Error reading division mapping: {exc}")
        return
    typer.echo(text)


@mapping_app.command("set")
def mapping_set(
    path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Mapping JSON file."),
    root: Optional[Path] = typer.Option(None, help="Alternate workspace root."),
) -> None:
    """Validate and persist a new division mapping."""

    store = _store(root)
    try:
        payload = store.replace(path.read_text(encoding="utf-8"))
    except InvalidMappingFormatError as exc:
        _fail(str(exc))
        return
    except StationFlowError as exc:
        _fail(f"Error saving division mapping: {exc}")
        return
    typer.echo("Division mapping updated successfully!")
    typer.echo(f"Divisions: {len(payload)}")


@mapping_app.command("reset")
def mapping_reset(root: Optional[Path] = typer.Option(None, help="Alternate workspace root.")) -> None:
    """Forget the persisted mapping and return to the bundled default."""

    try:
        payload = _store(root).reset()
    except StationFlowError as exc:
        _fail(f"Error resetting division mapping: {exc}")
        return
    typer.echo(f"Division mapping reset to default ({len(payload)} divisions).")


if __name__ == "__main__":
    app()

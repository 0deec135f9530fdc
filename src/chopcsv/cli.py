"""Command-line entry points for chop-csv."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import typer

from chopcsv import __version__
from chopcsv.config import dump_example_config, load_config
from chopcsv.errors import ChopError
from chopcsv.pipeline import chop_paths
from chopcsv.util.logging import configure_logging
from chopcsv.util.manifest import write_manifest

app = typer.Typer(add_completion=False, help="Split dated CSV files into compressed year/month/day partitions.")


@app.command()
def chop(
    paths: List[Path] = typer.Argument(..., help="CSV files or directories to search for *.csv"),
    date_format: Optional[str] = typer.Option(
        None, "--date-format", help="strptime format of the first column [default: %Y%m%d]"
    ),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="The output directory [default: chopped]"),
    utf8: Optional[bool] = typer.Option(
        None, "--utf8/--no-utf8", help="Decode input as UTF-8 instead of Shift-JIS (cp932)"
    ),
    fields_per_record: Optional[int] = typer.Option(
        None, help="Expected fields per row; 0 takes it from the first row, negative disables the check"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML/TOML/JSON config file"),
    log_file: Optional[Path] = typer.Option(None, help="Also write the log to this file"),
    manifest_dir: Optional[Path] = typer.Option(None, help="Write a JSON run manifest into this directory"),
) -> None:
    """Chop CSV files by the date in their first column."""

    logger = configure_logging(log_path=log_file)

    overrides: dict[str, Any] = {}
    if date_format is not None:
        overrides["input.date_format"] = date_format
    if utf8 is not None:
        overrides["input.utf8"] = utf8
    if fields_per_record is not None:
        overrides["input.fields_per_record"] = fields_per_record
    if out_dir is not None:
        overrides["output.root"] = str(out_dir)

    try:
        cfg = load_config(config_path, overrides=overrides)
        summary = chop_paths(paths, cfg)
    except ChopError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    logger.info(
        "done: files=%d written=%d skipped=%d",
        len(summary.files),
        summary.records_written,
        summary.records_skipped,
    )
    if manifest_dir is not None:
        dest = write_manifest(
            {"step": "chop", "config": cfg.model_dump(mode="json"), **summary.to_dict()},
            directory=manifest_dir,
        )
        logger.info("Wrote manifest %s", dest)


@app.command("init-config")
def init_config(
    dest: Path = typer.Argument(Path("chopcsv.yaml"), help="Where to write the example config (.yaml or .json)"),
) -> None:
    """Write the default configuration as a starting point for --config."""

    try:
        dump_example_config(dest)
    except ChopError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Wrote {dest}")


@app.command()
def version() -> None:
    """Print the chop-csv version."""

    typer.echo(f"chop-csv {__version__}")


def main() -> None:
    app()


__all__ = ["main", "app"]

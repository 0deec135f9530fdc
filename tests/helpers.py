from __future__ import annotations

import bz2
import csv
import io
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from chopcsv.config import ChopConfig, load_config
from chopcsv.parse.records import Record


def write_csv(path: Path, rows: Iterable[Sequence[str]], *, encoding: str = "utf-8") -> Path:
    """Write `rows` as CSV to `path` in the given encoding."""

    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow(row)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(buffer.getvalue().encode(encoding))
    return path


def make_config(out_root: Path, **input_overrides: object) -> ChopConfig:
    """Build a config writing under `out_root`, decoding UTF-8 by default."""

    overrides: dict[str, object] = {"output.root": str(out_root), "input.utf8": True}
    for key, value in input_overrides.items():
        overrides[f"input.{key}"] = value
    return load_config(overrides=overrides)


def records(rows: Iterable[Sequence[str]]) -> list[Record]:
    return [Record(number, list(row)) for number, row in enumerate(rows, start=1)]


def read_partition(path: Path) -> list[list[str]]:
    """Decompress and parse one output file."""

    with bz2.open(path, "rt", encoding="utf-8", errors="surrogateescape", newline="") as handle:
        return [row for row in csv.reader(handle)]


def read_partition_frame(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, header=None, dtype=str, keep_default_na=False, compression="bz2")


def output_files(root: Path) -> list[Path]:
    return sorted(root.rglob("*.csv.bz2"))

"""Partition keys and the on-disk layout of chopped output."""

from __future__ import annotations

import re
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path

from chopcsv.errors import DateParseError
from chopcsv.parse.records import Record

OUTPUT_SUFFIX = ".csv.bz2"

# Numeric directives must be written at full width ("20240305", not "202435").
_FIXED_WIDTH = {
    "Y": r"\d{4}",
    "y": r"\d{2}",
    "m": r"\d{2}",
    "d": r"\d{2}",
    "H": r"\d{2}",
    "I": r"\d{2}",
    "M": r"\d{2}",
    "S": r"\d{2}",
    "j": r"\d{3}",
}


@lru_cache(maxsize=32)
def _shape_of(date_format: str) -> re.Pattern[str]:
    """Return a regex a value must fully match before it is handed to strptime."""

    parts: list[str] = []
    index = 0
    while index < len(date_format):
        char = date_format[index]
        if char == "%" and index + 1 < len(date_format):
            directive = date_format[index + 1]
            if directive == "%":
                parts.append("%")
            else:
                parts.append(_FIXED_WIDTH.get(directive, ".+?"))
            index += 2
            continue
        parts.append(re.escape(char))
        index += 1
    return re.compile("".join(parts), re.DOTALL)


def partition_key(record: Record, date_format: str) -> date:
    """Return the calendar date encoded in field 0 of `record`."""

    value = record.fields[0] if record.fields else ""
    if not _shape_of(date_format).fullmatch(value):
        raise DateParseError(
            f"time data {value!r} does not match format {date_format!r}",
            record_number=record.number,
            value=value,
        )
    try:
        return datetime.strptime(value, date_format).date()
    except ValueError as exc:
        raise DateParseError(str(exc), record_number=record.number, value=value) from exc


def partition_dir(root: Path, key: date) -> Path:
    """Return ``root/year=YYYY/month=M/day=D``; month and day are not zero-padded."""

    return root / f"year={key.year:04d}" / f"month={key.month}" / f"day={key.day}"


def partition_path(root: Path, key: date, fingerprint: str) -> Path:
    """Return the output file for one (partition, input file) pair."""

    return partition_dir(root, key) / f"{fingerprint}{OUTPUT_SUFFIX}"


__all__ = ["OUTPUT_SUFFIX", "partition_dir", "partition_key", "partition_path"]

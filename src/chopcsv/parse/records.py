"""Lazy CSV record reader with a selectable input encoding."""

from __future__ import annotations

import csv
import io
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from chopcsv.config.models import InputConfig
from chopcsv.errors import FieldCountError, InputOpenError, StructuralReadError


@dataclass(frozen=True)
class Record:
    """One CSV row and its 1-based position among the rows of its file."""

    number: int
    fields: list[str]


class RecordSource:
    """Decode a byte stream and yield one `Record` per CSV row.

    The sequence is produced on demand and cannot be restarted. A row whose
    field count differs from the expected count raises `FieldCountError`;
    iteration may continue after it. Any other parse failure raises
    `StructuralReadError` and the source should be discarded.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        encoding: str,
        errors: str = "strict",
        fields_per_record: int = 0,
        name: str = "<stream>",
    ) -> None:
        self.name = name
        self._text = io.TextIOWrapper(stream, encoding=encoding, errors=errors, newline="")
        # Fields of any length are valid CSV.
        csv.field_size_limit(sys.maxsize)
        self._reader = csv.reader(self._text, strict=True)
        self._expected = fields_per_record if fields_per_record > 0 else None
        self._infer_count = fields_per_record == 0
        self._count = 0

    @classmethod
    def open(cls, path: Path, settings: InputConfig) -> "RecordSource":
        """Open `path` for reading with the encoding chosen in `settings`."""

        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise InputOpenError(f"failed to open file: {path}: {exc}") from exc
        return cls(
            handle,
            encoding=settings.encoding,
            errors=settings.decode_errors,
            fields_per_record=settings.fields_per_record,
            name=str(path),
        )

    @property
    def records_read(self) -> int:
        return self._count

    def __iter__(self) -> "RecordSource":
        return self

    def __next__(self) -> Record:
        fields = self._read_row()
        while not fields:
            fields = self._read_row()

        self._count += 1
        if self._expected is None and self._infer_count:
            self._expected = len(fields)
        elif self._expected is not None and len(fields) != self._expected:
            raise FieldCountError(
                f"{self.name}: record {self._count} has {len(fields)} fields, expected {self._expected}",
                record_number=self._count,
                value=fields,
            )
        return Record(self._count, fields)

    def _read_row(self) -> list[str]:
        try:
            return next(self._reader)
        except csv.Error as exc:
            raise StructuralReadError(f"{self.name}: line {self._reader.line_num}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise StructuralReadError(f"{self.name}: cannot decode input: {exc}") from exc
        except OSError as exc:
            raise InputOpenError(f"{self.name}: read failed: {exc}") from exc

    def close(self) -> None:
        self._text.close()

    def __enter__(self) -> "RecordSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["Record", "RecordSource"]

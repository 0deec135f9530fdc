"""Exception hierarchy shared by the reader, sink and pipeline."""

from __future__ import annotations


class ChopError(RuntimeError):
    """Base class for every error raised by chopcsv."""


class InputOpenError(ChopError):
    """Raised when an input file cannot be opened or read."""


class StructuralReadError(ChopError):
    """Raised when decoded text does not parse as CSV."""


class RowError(ChopError):
    """A single record is unusable; the caller skips it and carries on."""

    def __init__(self, message: str, *, record_number: int, value: object = None) -> None:
        super().__init__(message)
        self.record_number = record_number
        self.value = value


class DateParseError(RowError):
    """Raised when field 0 of a record does not match the date format."""


class FieldCountError(RowError):
    """Raised when a record has an unexpected number of fields."""


class OutputCreateError(ChopError):
    """Raised when an output directory or stream cannot be created."""


class OutputWriteError(ChopError):
    """Raised when writing to or closing an output stream fails."""


__all__ = [
    "ChopError",
    "DateParseError",
    "FieldCountError",
    "InputOpenError",
    "OutputCreateError",
    "OutputWriteError",
    "RowError",
    "StructuralReadError",
]

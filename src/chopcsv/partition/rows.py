"""CSV row formatting for partition files.

A field is quoted when it contains a comma, a double quote, CR or LF, when it
starts with whitespace, or when it is exactly ``\\.``. `csv.writer` never quotes leading
whitespace, so partition files are formatted here instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

_SPECIALS = frozenset(',"\r\n')


def needs_quotes(field: str) -> bool:
    if field == "":
        return False
    if field == "\\.":
        return True
    if field[0].isspace():
        return True
    return any(char in _SPECIALS for char in field)


def format_row(fields: Sequence[str]) -> str:
    """Return one CSV line, including its ``\\n`` terminator."""

    cells = []
    for field in fields:
        if needs_quotes(field):
            cells.append('"' + field.replace('"', '""') + '"')
        else:
            cells.append(field)
    return ",".join(cells) + "\n"


class RowWriter:
    """`csv.writer`-shaped wrapper that writes `format_row` lines to a text stream."""

    def __init__(self, handle: TextIO) -> None:
        self._handle = handle

    def writerow(self, fields: Sequence[str]) -> None:
        self._handle.write(format_row(fields))


__all__ = ["RowWriter", "format_row", "needs_quotes"]

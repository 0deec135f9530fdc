"""Expand command-line paths into the CSV files to chop."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from chopcsv.errors import InputOpenError

logger = logging.getLogger(__name__)


def discover_inputs(path: Path, *, extension: str = ".csv") -> Iterator[Path]:
    """Yield `path` itself, or every file below it ending in `extension`.

    Directories are walked depth-first in name order. The suffix comparison
    is case-sensitive.
    """

    if not path.exists():
        raise InputOpenError(f"failed to get file information: {path}: no such file or directory")

    if not path.is_dir():
        yield path
        return

    logger.info("search CSV files from %s", path)
    for dirpath, dirnames, filenames in os.walk(path, onerror=_raise_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(extension):
                yield Path(dirpath) / name


def _raise_walk_error(exc: OSError) -> None:
    raise InputOpenError(f"failed to walk directory: {exc}") from exc


__all__ = ["discover_inputs"]

"""Stable identifiers for input files."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path


def path_fingerprint(path: str | Path) -> str:
    """Return the MD5 hex digest of the absolute, normalised form of `path`.

    Symlinks are not resolved, so two links to the same file get different
    fingerprints.
    """
    absolute = os.path.abspath(os.fspath(path))
    return hashlib.md5(absolute.encode("utf-8")).hexdigest()


__all__ = ["path_fingerprint"]

"""Route records of one input file into bzip2 CSV partitions.

A sink owns at most one open output stream. Consecutive records that map to
the same partition reuse it; a record for another partition closes it and
opens the next one. Input sorted (or at least grouped) by date therefore
opens each partition file once, while memory use stays constant however
many partitions there are.

Reopening a partition that was already closed earlier in the same run
truncates it, so records from the earlier visit are lost.
"""

from __future__ import annotations

import bz2
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, TextIO

from chopcsv.config.models import ChopConfig
from chopcsv.errors import (
    ChopError,
    DateParseError,
    FieldCountError,
    OutputCreateError,
    OutputWriteError,
)
from chopcsv.parse.records import Record
from chopcsv.partition.layout import partition_key, partition_path
from chopcsv.partition.rows import RowWriter
from chopcsv.util.hashing import path_fingerprint

logger = logging.getLogger(__name__)


@dataclass
class SinkStats:
    """Counters for one input file."""

    records_read: int = 0
    records_written: int = 0
    bad_dates: int = 0
    bad_field_counts: int = 0
    streams_opened: int = 0

    @property
    def skipped(self) -> int:
        return self.bad_dates + self.bad_field_counts

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class ActiveStream:
    """The single open output file of a sink."""

    path: Path
    handle: TextIO
    writer: RowWriter


class PartitionedSink:
    """Write the records of one input file to per-day compressed partitions."""

    def __init__(self, input_path: Path, config: ChopConfig) -> None:
        self.input_path = input_path
        self.fingerprint = path_fingerprint(input_path)
        self.stats = SinkStats()
        self._root = config.output.root
        self._date_format = config.input.date_format
        self._compress_level = config.output.compress_level
        self._active: ActiveStream | None = None

    @property
    def path(self) -> Path | None:
        """Path of the open output file, or None while idle."""

        return self._active.path if self._active is not None else None

    def write(self, record: Record) -> bool:
        """Write `record` to its partition; return False if it was skipped."""

        self.stats.records_read += 1
        try:
            key = partition_key(record, self._date_format)
        except DateParseError as exc:
            self.stats.bad_dates += 1
            logger.warning(
                "ignore row %d because invalid timestamp: %s: %s",
                exc.record_number,
                exc.value,
                exc,
            )
            return False

        target = partition_path(self._root, key, self.fingerprint)
        if self._active is None or self._active.path != target:
            self._switch_to(target)

        try:
            self._active.writer.writerow(record.fields)
        except OSError as exc:
            self._abort()
            raise OutputWriteError(f"failed to write to {target}: {exc}") from exc
        self.stats.records_written += 1
        return True

    def consume(self, records: Iterable[Record]) -> SinkStats:
        """Drain `records` into partitions and close the last stream.

        Rows with the wrong field count are skipped. Any other error closes
        the open stream, so data written so far is flushed, and propagates.
        """

        iterator = iter(records)
        try:
            while True:
                try:
                    record = next(iterator)
                except StopIteration:
                    break
                except FieldCountError as exc:
                    self.stats.records_read += 1
                    self.stats.bad_field_counts += 1
                    logger.warning("ignore row %d: %s", exc.record_number, exc)
                    continue
                self.write(record)
        except BaseException:
            self._abort()
            raise
        self.close()
        return self.stats

    def close(self) -> None:
        """Flush and release the open stream; a no-op while idle."""

        if self._active is None:
            return
        active, self._active = self._active, None
        try:
            active.handle.close()
        except OSError as exc:
            raise OutputWriteError(f"failed to close {active.path}: {exc}") from exc

    def _switch_to(self, target: Path) -> None:
        self.close()
        logger.info("write to %s", target)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            handle = bz2.open(
                target,
                "wt",
                compresslevel=self._compress_level,
                encoding="utf-8",
                errors="surrogateescape",
                newline="",
            )
        except OSError as exc:
            raise OutputCreateError(f"failed to create {target}: {exc}") from exc
        self._active = ActiveStream(target, handle, RowWriter(handle))
        self.stats.streams_opened += 1

    def _abort(self) -> None:
        try:
            self.close()
        except ChopError as exc:
            logger.error("%s", exc)

    def __enter__(self) -> "PartitionedSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self._abort()


__all__ = ["ActiveStream", "PartitionedSink", "SinkStats"]

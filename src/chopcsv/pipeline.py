"""Compose record sources and partition sinks over a set of inputs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chopcsv.config.models import ChopConfig
from chopcsv.io.discover import discover_inputs
from chopcsv.parse.records import RecordSource
from chopcsv.partition.sink import PartitionedSink, SinkStats

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    path: Path
    fingerprint: str
    stats: SinkStats


@dataclass
class RunSummary:
    """Per-file results of a run, in processing order."""

    files: list[FileResult] = field(default_factory=list)

    @property
    def records_written(self) -> int:
        return sum(item.stats.records_written for item in self.files)

    @property
    def records_skipped(self) -> int:
        return sum(item.stats.skipped for item in self.files)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [
                {"path": str(item.path), "fingerprint": item.fingerprint, **item.stats.to_dict()}
                for item in self.files
            ],
            "records_written": self.records_written,
            "records_skipped": self.records_skipped,
        }


def chop_file(path: Path, config: ChopConfig) -> FileResult:
    """Split one input file into its date partitions."""

    logger.info("open input file: %s", path)
    with RecordSource.open(path, config.input) as source:
        sink = PartitionedSink(path, config)
        stats = sink.consume(source)

    logger.info(
        "finished %s: written=%d skipped=%d partitions_opened=%d",
        path,
        stats.records_written,
        stats.skipped,
        stats.streams_opened,
    )
    return FileResult(path=path, fingerprint=sink.fingerprint, stats=stats)


def chop_paths(paths: Iterable[Path], config: ChopConfig) -> RunSummary:
    """Chop every file reachable from `paths`; the first fatal error stops the run."""

    summary = RunSummary()
    for path in paths:
        for input_path in discover_inputs(path, extension=config.input.extension):
            summary.files.append(chop_file(input_path, config))
    return summary


__all__ = ["FileResult", "RunSummary", "chop_file", "chop_paths"]

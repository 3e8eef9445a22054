"""Generation of reports from directory trees."""

import asyncio
import logging
import os
from asyncio import TaskGroup
from pathlib import Path
from typing import Callable, Iterable

from .path import normalize_path
from .record import FileRecord, Report, make_report
from ..utils.processor import Processor
from ..utils.throttler import Throttler

logger = logging.getLogger(__name__)

FileProcessed = Callable[[FileRecord], None]


class ReportBuilder:
    """Builder for one report that encapsulates state and logic."""

    def __init__(self, processor: Processor, root: Path, file_processed: FileProcessed | None = None):
        self._processor = processor
        self._root = root
        self._file_processed = file_processed
        self._records: list[FileRecord] = []

    async def run(self, relative_paths: Iterable[str | os.PathLike]) -> Report:
        """Fingerprint every file and assemble the report.

        Files are scheduled in canonical order and may complete in any order. The first failure cancels the
        remaining work and is raised; no report is produced in that case.
        """
        async with TaskGroup() as tg:
            throttler = Throttler(tg, self._processor.concurrency * 2)

            for relative_path in sorted(Path(p) for p in relative_paths):
                await throttler.schedule(self._handle_file(relative_path))

        return make_report(self._records)

    async def _handle_file(self, relative_path: Path):
        size, digest = await self._processor.fingerprint(self._root / relative_path)
        record = FileRecord(normalize_path(relative_path), size, digest)
        self._records.append(record)

        if self._file_processed is not None:
            self._file_processed(record)


async def build_report(
        processor: Processor,
        root: str | os.PathLike,
        relative_paths: Iterable[str | os.PathLike],
        file_processed: FileProcessed | None = None) -> Report:
    """Build a report for files of a directory tree.

    Args:
        processor: Process pool computing the fingerprints
        root: Directory the paths are relative to
        relative_paths: Platform native paths relative to root, typically from list_files()
        file_processed: Called with each record once its file has been fingerprinted, in completion order

    Returns:
        The report

    Raises:
        OSError: If any file cannot be read. When several files fail, the first failure is raised.
    """
    root = Path(root)
    relative_paths = list(relative_paths)
    logger.info(f"Building report for {len(relative_paths)} files under {root}")

    builder = ReportBuilder(processor, root, file_processed)
    try:
        report = await builder.run(relative_paths)
    except ExceptionGroup as eg:
        logger.error(f"Failed to build report for {root}: {eg.exceptions[0]}")
        raise eg.exceptions[0] from eg

    logger.info(f"Completed report for {root} with {len(report)} files")
    return report


def generate_report(
        processor: Processor,
        root: str | os.PathLike,
        relative_paths: Iterable[str | os.PathLike],
        file_processed: FileProcessed | None = None) -> Report:
    """Synchronous variant of build_report() running its own event loop."""
    return asyncio.run(build_report(processor, root, relative_paths, file_processed))

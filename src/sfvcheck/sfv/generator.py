"""Checksum file generation pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from sfvcheck.errors import SfvError
from sfvcheck.models import ChecksumRecord
from sfvcheck.sfv.codec import write_document
from sfvcheck.utils.files import CHUNK_SIZE, compute_crc32, display_path, find_files

LOGGER = logging.getLogger(__name__)

RecordCallback = Callable[[ChecksumRecord], None]


@dataclass(slots=True)
class GenerationStats:
    records: list[ChecksumRecord] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)
    out_file: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.failed


class SfvGenerator:
    """Enumerates files, hashes them and collects SFV records."""

    def __init__(
        self,
        *,
        recursive: bool = False,
        skip_errors: bool = False,
        base_dir: Path | None = None,
        chunk_size: int = CHUNK_SIZE,
        encoding: str = "utf-8",
    ) -> None:
        self.recursive = recursive
        self.skip_errors = skip_errors
        self.base_dir = base_dir
        self.chunk_size = chunk_size
        self.encoding = encoding

    def create(
        self,
        paths: Sequence[Path],
        *,
        out_file: Path | None = None,
        on_record: RecordCallback | None = None,
    ) -> GenerationStats:
        """Checksum every file under ``paths``.

        Each record is handed to ``on_record`` as soon as it is computed. The
        output file, when requested, is written once after all files are done.
        """
        files = find_files(paths, recursive=self.recursive, skip_errors=self.skip_errors)
        stats = GenerationStats()

        for path in files:
            try:
                record = self._checksum_single(path)
            except SfvError as exc:
                if not self.skip_errors:
                    raise
                LOGGER.warning("Skipping %s: %s", path, exc.message)
                stats.failed.append(path)
                continue

            stats.records.append(record)
            if on_record is not None:
                on_record(record)

        if out_file is not None:
            write_document(out_file, stats.records, encoding=self.encoding)
            stats.out_file = Path(out_file)

        return stats

    def _checksum_single(self, path: Path) -> ChecksumRecord:
        crc = compute_crc32(path, chunk_size=self.chunk_size)
        name = display_path(path, self.base_dir)
        LOGGER.debug("Checksummed %s", name)
        return ChecksumRecord(path=name, crc32=crc)

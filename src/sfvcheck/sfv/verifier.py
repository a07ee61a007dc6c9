"""Checksum file verification."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from sfvcheck.errors import FilesystemError, SfvError
from sfvcheck.models import (
    ChecksumRecord,
    OutcomeStatus,
    SfvDocument,
    VerificationOutcome,
    VerificationReport,
)
from sfvcheck.sfv.codec import read_document
from sfvcheck.utils.files import CHUNK_SIZE, compute_crc32

LOGGER = logging.getLogger(__name__)

OutcomeCallback = Callable[[VerificationOutcome], None]


class Verifier:
    """Checks the records of an SFV document against files on disk.

    Record paths are resolved against the directory holding the checksum
    file. The process working directory is never changed.
    """

    def __init__(self, *, chunk_size: int = CHUNK_SIZE, encoding: str = "utf-8") -> None:
        self.chunk_size = chunk_size
        self.encoding = encoding

    def verify(
        self, sfv_path: Path, *, on_outcome: OutcomeCallback | None = None
    ) -> VerificationReport:
        sfv_path = Path(sfv_path)
        document = read_document(sfv_path, encoding=self.encoding)
        try:
            base_dir = sfv_path.resolve(strict=True).parent
        except (OSError, RuntimeError) as exc:
            raise FilesystemError(
                f"Failed to get canonical path for {sfv_path}: {exc}", path=sfv_path
            ) from exc
        return self.verify_document(document, base_dir, on_outcome=on_outcome)

    def verify_document(
        self,
        document: SfvDocument,
        base_dir: Path,
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> VerificationReport:
        report = VerificationReport()
        for record in document.records:
            outcome = self._check(record, Path(base_dir))
            report.add(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
        LOGGER.debug(
            "Verified %d record(s): %d ok, %d mismatched, %d errors",
            len(report.outcomes),
            report.passed,
            report.mismatched,
            report.errors,
        )
        return report

    def _check(self, record: ChecksumRecord, base_dir: Path) -> VerificationOutcome:
        target = base_dir / record.path
        try:
            actual = compute_crc32(target, chunk_size=self.chunk_size)
        except SfvError as exc:
            return VerificationOutcome(
                path=record.path,
                status=OutcomeStatus.ERROR,
                expected=record.crc32,
                error=exc,
            )

        status = OutcomeStatus.OK if actual == record.crc32 else OutcomeStatus.MISMATCH
        return VerificationOutcome(
            path=record.path, status=status, expected=record.crc32, actual=actual
        )

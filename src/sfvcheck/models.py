"""Core sfvcheck data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


def format_crc32(value: int) -> str:
    """Render a checksum as 8 uppercase hexadecimal digits."""
    return f"{value & 0xFFFFFFFF:08X}"


@dataclass(frozen=True, slots=True)
class ChecksumRecord:
    """A path paired with its CRC32 checksum."""

    path: str
    crc32: int

    @property
    def hex(self) -> str:
        return format_crc32(self.crc32)

    def to_line(self) -> str:
        return f"{self.path} {self.hex}"


class OutcomeStatus(str, Enum):
    OK = "OK"
    MISMATCH = "MISMATCH"
    ERROR = "ERROR"


@dataclass(slots=True)
class VerificationOutcome:
    """Result of checking one record against the file on disk."""

    path: str
    status: OutcomeStatus
    expected: int
    actual: int | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK


@dataclass(slots=True)
class VerificationReport:
    outcomes: List[VerificationOutcome] = field(default_factory=list)

    def add(self, outcome: VerificationOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def passed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is OutcomeStatus.OK)

    @property
    def mismatched(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is OutcomeStatus.MISMATCH)

    @property
    def errors(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is OutcomeStatus.ERROR)


@dataclass(slots=True)
class SfvDocument:
    """Parsed checksum file: records in file order plus comment lines."""

    records: List[ChecksumRecord] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

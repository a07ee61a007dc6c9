"""Reading and writing SFV checksum files.

An SFV document is plain text with one ``<path> <CRC32>`` record per line.
The checksum is always the last 8 characters of the trimmed line, so paths
may contain spaces. Lines starting with ``;`` are comments and blank lines
are ignored.
"""

from __future__ import annotations

import logging
import string
from pathlib import Path
from typing import Iterable

from sfvcheck.errors import FormatError, IoError
from sfvcheck.models import ChecksumRecord, SfvDocument

LOGGER = logging.getLogger(__name__)

CHECKSUM_WIDTH = 8
COMMENT_PREFIX = ";"

_HEX_DIGITS = frozenset(string.hexdigits)


def render_records(records: Iterable[ChecksumRecord]) -> str:
    """Render records as SFV text, one newline-terminated line each."""
    return "".join(f"{record.to_line()}\n" for record in records)


def write_document(
    path: Path, records: Iterable[ChecksumRecord], *, encoding: str = "utf-8"
) -> None:
    """Write records to ``path`` in a single call."""
    path = Path(path)
    text = render_records(records)
    try:
        path.write_text(text, encoding=encoding, newline="\n")
    except OSError as exc:
        raise IoError(f"Failed to write to {path}: {exc.strerror or exc}", path=path) from exc
    LOGGER.debug("Wrote %s", path)


def _is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIX)


def parse_line(line: str, *, line_number: int | None = None) -> ChecksumRecord | None:
    """Parse one SFV line.

    Returns ``None`` for blank and comment lines. Raises ``FormatError`` when
    the line is too short to hold both a path and a checksum, or when the
    checksum field is not hexadecimal.
    """
    line = line.strip()
    if not line or _is_comment(line):
        return None

    where = f"line {line_number}" if line_number is not None else "line"
    if len(line) <= CHECKSUM_WIDTH:
        raise FormatError(
            f"Malformed {where}: expected '<path> <CRC32>', got {line!r}",
            line_number=line_number,
        )

    checksum = line[-CHECKSUM_WIDTH:]
    path = line[:-CHECKSUM_WIDTH].strip()
    if not path:
        raise FormatError(f"Malformed {where}: missing path in {line!r}", line_number=line_number)
    if not _HEX_DIGITS.issuperset(checksum):
        raise FormatError(
            f"Malformed {where}: {checksum!r} is not a CRC32 value", line_number=line_number
        )

    return ChecksumRecord(path=path, crc32=int(checksum, 16))


def parse_document(text: str) -> SfvDocument:
    """Parse SFV text. The first malformed line aborts parsing."""
    document = SfvDocument()
    text = text.removeprefix("\ufeff")
    for number, line in enumerate(text.split("\n"), start=1):
        stripped = line.strip()
        if _is_comment(stripped):
            document.comments.append(stripped)
            continue
        record = parse_line(stripped, line_number=number)
        if record is not None:
            document.records.append(record)
    return document


def read_document(path: Path, *, encoding: str = "utf-8") -> SfvDocument:
    """Read and parse the checksum file at ``path``."""
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding)
    except OSError as exc:
        raise IoError(f"Failed to read file {path}: {exc.strerror or exc}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise IoError(f"Failed to decode file {path} as {encoding}", path=path) from exc

    try:
        document = parse_document(text)
    except FormatError as exc:
        exc.context["path"] = path
        raise
    LOGGER.debug("Parsed %d record(s) from %s", len(document.records), path)
    return document

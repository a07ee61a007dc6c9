"""Utility helpers for working with files."""

from __future__ import annotations

import logging
import zlib
from pathlib import Path
from typing import Callable, Iterable, Iterator, List

from sfvcheck.errors import FilesystemError, IoError, PathResolutionError

LOGGER = logging.getLogger(__name__)

CHUNK_SIZE = 1 << 20

DirectoryLister = Callable[[Path], Iterable[Path]]


def compute_crc32(path: Path, *, chunk_size: int = CHUNK_SIZE) -> int:
    """Compute the CRC32 (zlib/gzip variant) of a file.

    The file is streamed in ``chunk_size`` blocks so arbitrarily large files
    never have to fit in memory. Returns an unsigned 32-bit integer.

    Raises:
        IoError: If the file cannot be opened or a read fails.
    """
    path = Path(path)
    try:
        handle = path.open("rb")
    except (OSError, ValueError) as exc:
        reason = getattr(exc, "strerror", None) or exc
        raise IoError(f"Failed to open file {path}: {reason}", path=path) from exc

    crc = 0
    with handle:
        try:
            for chunk in iter(lambda: handle.read(chunk_size), b""):
                crc = zlib.crc32(chunk, crc)
        except OSError as exc:
            raise IoError(
                f"Error while reading file {path}: {exc.strerror or exc}", path=path
            ) from exc
    return crc & 0xFFFFFFFF


def _list_directory(directory: Path) -> Iterable[Path]:
    return directory.iterdir()


def _iter_directory(
    directory: Path,
    *,
    recursive: bool,
    skip_errors: bool,
    lister: DirectoryLister,
) -> Iterator[Path]:
    try:
        entries = list(lister(directory))
    except OSError as exc:
        error = FilesystemError(f"Failed to read directory {directory}: {exc}", path=directory)
        if not skip_errors:
            raise error from exc
        LOGGER.warning("%s", error.message)
        return

    for entry in entries:
        try:
            is_file = entry.is_file()
            is_dir = not is_file and entry.is_dir()
        except OSError as exc:
            error = FilesystemError(f"Failed to read entry {entry}: {exc}", path=entry)
            if not skip_errors:
                raise error from exc
            LOGGER.warning("%s", error.message)
            continue

        if is_file:
            yield entry
        elif is_dir and recursive:
            yield from _iter_directory(
                entry, recursive=True, skip_errors=skip_errors, lister=lister
            )


def find_files(
    paths: Iterable[Path],
    *,
    recursive: bool = False,
    skip_errors: bool = False,
    lister: DirectoryLister = _list_directory,
) -> List[Path]:
    """Resolve files and directories into a sorted list of file paths.

    Directories contribute their immediate files, and their subdirectories
    too when ``recursive`` is set. The result is sorted by path string no
    matter what order the directory listing returns.

    By default the first error aborts enumeration. With ``skip_errors`` the
    offending path is logged and skipped instead.
    """
    files: List[Path] = []
    for item in paths:
        item = Path(item)
        try:
            is_file = item.is_file()
            is_dir = not is_file and item.is_dir()
        except OSError as exc:
            error = FilesystemError(f"Failed to read {item}: {exc}", path=item)
            if not skip_errors:
                raise error from exc
            LOGGER.warning("%s", error.message)
            continue

        if is_file:
            files.append(item)
        elif is_dir:
            files.extend(
                _iter_directory(item, recursive=recursive, skip_errors=skip_errors, lister=lister)
            )
        else:
            error = PathResolutionError(f"{item} is neither a file nor a directory", path=item)
            if not skip_errors:
                raise error
            LOGGER.warning("%s", error.message)

    files.sort(key=str)
    LOGGER.debug("Found %d file(s)", len(files))
    return files


def display_path(path: Path, base_dir: Path | None = None) -> str:
    """Canonicalize ``path`` and express it relative to ``base_dir``.

    ``base_dir`` defaults to the current working directory. Paths outside of
    it keep their canonical absolute form. Separators are always ``/``.
    """
    path = Path(path)
    try:
        canonical = path.resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as exc:
        raise FilesystemError(f"Failed to get canonical path for {path}: {exc}", path=path) from exc

    try:
        base = (base_dir if base_dir is not None else Path.cwd()).resolve()
    except OSError as exc:
        raise FilesystemError(f"Failed to get current directory: {exc}", path=base_dir) from exc

    try:
        return canonical.relative_to(base).as_posix()
    except ValueError:
        return canonical.as_posix()

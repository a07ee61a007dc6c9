"""Error types raised by sfvcheck."""

from __future__ import annotations

from typing import Any, Dict


class SfvError(Exception):
    """Base exception for all sfvcheck errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    @property
    def path(self) -> Any:
        return self.context.get("path")


class IoError(SfvError):
    """A file could not be opened, read or written."""


class FilesystemError(SfvError):
    """A directory could not be listed or a path could not be canonicalized."""


class FormatError(SfvError):
    """A checksum file line does not follow the SFV layout."""

    @property
    def line_number(self) -> int | None:
        return self.context.get("line_number")


class PathResolutionError(SfvError):
    """A path is neither a regular file nor a directory."""

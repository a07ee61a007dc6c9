"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sfvcheck.utils.files import CHUNK_SIZE


@dataclass(slots=True)
class AppConfig:
    chunk_size: int = CHUNK_SIZE
    recursive: bool = False
    skip_errors: bool = False
    out_file: Path | None = None
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

    def resolve_out_file(self, base_dir: Path | None = None) -> Path | None:
        if self.out_file is None:
            return None
        if Path(self.out_file).is_absolute() or base_dir is None:
            return Path(self.out_file)
        return base_dir / self.out_file

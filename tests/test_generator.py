"""Tests for SfvGenerator."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from sfvcheck.errors import IoError, PathResolutionError
from sfvcheck.models import ChecksumRecord
from sfvcheck.sfv.generator import GenerationStats, SfvGenerator


class TestGenerationStats:
    """Test GenerationStats tracking."""

    def test_init_defaults(self):
        """Test default initialization."""
        stats = GenerationStats()
        assert stats.records == []
        assert stats.failed == []
        assert stats.out_file is None
        assert stats.ok

    def test_failures_make_run_not_ok(self):
        """Any failed file makes the run unsuccessful."""
        stats = GenerationStats(failed=[Path("/tmp/a.bin")])
        assert not stats.ok


class TestSfvGenerator:
    """Test SfvGenerator pipeline."""

    @pytest.fixture
    def files(self, tmp_path: Path) -> Path:
        """Directory with two files and a nested one."""
        root = tmp_path / "data"
        root.mkdir()
        (root / "b.txt").write_bytes(b"123456789")
        (root / "a.txt").write_bytes(b"")
        (root / "nested").mkdir()
        (root / "nested" / "c.txt").write_bytes(b"The quick brown fox jumps over the lazy dog")
        return root

    def test_records_relative_to_base(self, files: Path, tmp_path: Path):
        """Records are sorted and relative to the base directory."""
        generator = SfvGenerator(base_dir=tmp_path)

        stats = generator.create([files])

        assert stats.records == [
            ChecksumRecord(path="data/a.txt", crc32=0),
            ChecksumRecord(path="data/b.txt", crc32=0xCBF43926),
        ]
        assert stats.ok

    def test_recursive(self, files: Path, tmp_path: Path):
        """Nested files are included with recursion."""
        generator = SfvGenerator(recursive=True, base_dir=tmp_path)

        stats = generator.create([files])

        assert [r.path for r in stats.records] == [
            "data/a.txt",
            "data/b.txt",
            "data/nested/c.txt",
        ]
        assert stats.records[-1].crc32 == 0x414FA339

    def test_on_record_called_per_file(self, files: Path, tmp_path: Path):
        """The callback sees every record in order."""
        seen = []
        generator = SfvGenerator(base_dir=tmp_path)

        stats = generator.create([files], on_record=seen.append)

        assert seen == stats.records

    def test_writes_out_file(self, files: Path, tmp_path: Path):
        """The output file holds the rendered records."""
        out = tmp_path / "out.sfv"
        generator = SfvGenerator(base_dir=tmp_path)

        stats = generator.create([files], out_file=out)

        assert stats.out_file == out
        assert out.read_text(encoding="utf-8") == "data/a.txt 00000000\ndata/b.txt CBF43926\n"

    def test_missing_input_aborts(self, tmp_path: Path):
        """A missing input path aborts without writing output."""
        out = tmp_path / "out.sfv"
        generator = SfvGenerator(base_dir=tmp_path)

        with pytest.raises(PathResolutionError):
            generator.create([tmp_path / "missing"], out_file=out)

        assert not out.exists()

    def test_hash_failure_aborts(self, files: Path, tmp_path: Path):
        """A hashing failure aborts the run and skips the output file."""
        out = tmp_path / "out.sfv"
        seen = []
        generator = SfvGenerator(base_dir=tmp_path)

        def flaky(path, *, chunk_size):
            if path.name == "b.txt":
                raise IoError(f"Failed to open file {path}", path=path)
            return 0

        with patch("sfvcheck.sfv.generator.compute_crc32", side_effect=flaky):
            with pytest.raises(IoError):
                generator.create([files], out_file=out, on_record=seen.append)

        assert [r.path for r in seen] == ["data/a.txt"]
        assert not out.exists()

    def test_hash_failure_skipped(self, files: Path, tmp_path: Path):
        """In skip mode a failure is counted and the rest is written."""
        out = tmp_path / "out.sfv"
        generator = SfvGenerator(base_dir=tmp_path, skip_errors=True)

        def flaky(path, *, chunk_size):
            if path.name == "b.txt":
                raise IoError(f"Failed to open file {path}", path=path)
            return 0

        with patch("sfvcheck.sfv.generator.compute_crc32", side_effect=flaky):
            stats = generator.create([files], out_file=out)

        assert not stats.ok
        assert stats.failed == [files / "b.txt"]
        assert out.read_text(encoding="utf-8") == "data/a.txt 00000000\n"

"""Command line interface for sfvcheck."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from sfvcheck.config import AppConfig
from sfvcheck.errors import SfvError
from sfvcheck.models import ChecksumRecord, OutcomeStatus, VerificationOutcome, format_crc32
from sfvcheck.sfv.generator import SfvGenerator
from sfvcheck.sfv.verifier import Verifier


console = Console()
app = typer.Typer(help="sfvcheck - CRC32 checksums and SFV verification")

_STATUS_STYLES = {
    OutcomeStatus.OK: "bold green",
    OutcomeStatus.MISMATCH: "bold yellow",
    OutcomeStatus.ERROR: "bold red",
}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        current = package_version("sfvcheck")
    except PackageNotFoundError:
        current = "unknown"
    console.print(f"sfvcheck {current}")
    raise typer.Exit()


def _print(text: str) -> None:
    console.print(text, highlight=False, soft_wrap=True)


def _print_error(exc: SfvError) -> None:
    _print(f"[bold red]\\[ERROR][/bold red] {escape(exc.message)}")


def _print_record(record: ChecksumRecord) -> None:
    _print(escape(record.to_line()))


def format_outcome(outcome: VerificationOutcome) -> str:
    """Render a verification outcome as Rich markup."""
    style = _STATUS_STYLES[outcome.status]
    path = escape(outcome.path)
    if outcome.status is OutcomeStatus.OK:
        return f"{path} [{style}]OK[/{style}]"
    if outcome.status is OutcomeStatus.MISMATCH:
        actual = format_crc32(outcome.actual or 0)
        expected = format_crc32(outcome.expected)
        return f"{path} [{style}]FAILED[/{style}] {actual} != {expected}"
    cause = outcome.error.message if isinstance(outcome.error, SfvError) else str(outcome.error)
    return f"{path} [{style}]ERROR[/{style}] {escape(cause)}"


def _run_create(paths: List[Path], config: AppConfig) -> bool:
    generator = SfvGenerator(
        recursive=config.recursive,
        skip_errors=config.skip_errors,
        chunk_size=config.chunk_size,
        encoding=config.encoding,
    )
    try:
        stats = generator.create(
            paths,
            out_file=config.resolve_out_file(Path.cwd()),
            on_record=_print_record,
        )
    except SfvError as exc:
        _print_error(exc)
        return False

    if stats.failed:
        _print(f"[yellow]{len(stats.failed)} file(s) could not be checksummed.[/yellow]")
    return stats.ok


def _run_verify(sfv_path: Path, config: AppConfig) -> bool:
    verifier = Verifier(chunk_size=config.chunk_size, encoding=config.encoding)
    try:
        report = verifier.verify(
            sfv_path, on_outcome=lambda outcome: _print(format_outcome(outcome))
        )
    except SfvError as exc:
        _print_error(exc)
        return False

    _print(f"{report.passed} OK, {report.mismatched} failed, {report.errors} errors")
    return report.ok


@app.command()
def main(
    paths: List[Path] = typer.Argument(..., help="File and directory paths"),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="Parse directories recursively"
    ),
    out_file: Optional[Path] = typer.Option(None, "--out-file", "-o", help="Output file name"),
    verify: bool = typer.Option(False, "--verify", "-v", help="Verify a checksum file"),
    skip_errors: bool = typer.Option(
        False, "--skip-errors", help="Warn about unreadable paths instead of aborting"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Compute CRC32 checksums of files, or verify an SFV checksum file."""
    _setup_logging(verbose)
    config = AppConfig(recursive=recursive, skip_errors=skip_errors, out_file=out_file)

    if verify:
        if len(paths) > 1:
            raise typer.BadParameter(
                "Verify mode takes exactly one checksum file", param_hint="PATHS"
            )
        if out_file is not None:
            raise typer.BadParameter(
                "Cannot be combined with --verify", param_hint="--out-file"
            )
        ok = _run_verify(paths[0], config)
    else:
        ok = _run_create(paths, config)

    if not ok:
        raise typer.Exit(code=1)

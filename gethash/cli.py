"""
Command-line interface for the gethash decoder.

This module provides the CLI entry point: one-shot decoding of text, files or
stdin, and a watch mode that re-decodes a file every time it changes.
"""

import sys
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gethash.config import get_settings
from gethash.decoder.pipeline import LinePipeline
from gethash.models import DecodeReport, LineFailurePolicy, LineStatus, ShortGroupPolicy
from gethash.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

# Initialize Typer app and Rich console
app = typer.Typer(
    name="gethash",
    help="Recover numeric identifiers from six-bit packed hash exports",
    add_completion=False,
)
console = Console(stderr=True)

_STATUS_STYLES = {
    LineStatus.DECODED: "green",
    LineStatus.BLANK: "dim",
    LineStatus.NO_DIGITS: "yellow",
}


def _build_pipeline(
    short_groups: Optional[ShortGroupPolicy], on_error: Optional[LineFailurePolicy]
) -> LinePipeline:
    return LinePipeline(short_group_policy=short_groups, failure_policy=on_error)


def _emit(output: str, destination: Optional[Path]) -> None:
    """Write decoded text verbatim and mirror it to the log."""
    if destination:
        destination.write_text(output, encoding="utf-8")
    else:
        typer.echo(output, nl=False)

    if get_settings().echo_output:
        logger.info(output)


def _print_report(report: DecodeReport) -> None:
    table = Table(title=f"Decoded lines ({len(report.lines)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Status")
    table.add_column("Digits", style="cyan")
    table.add_column("Error", style="red")

    for line in report.lines:
        style = _STATUS_STYLES.get(line.status, "red")
        table.add_row(
            str(line.line_number),
            f"[{style}]{line.status.value}[/{style}]",
            line.digits,
            line.error_message or "",
        )

    console.print(table)
    if report.failed:
        console.print(f"[yellow]{len(report.failed)} line(s) could not be decoded[/yellow]")


@app.command()
def decode(
    text: Optional[str] = typer.Argument(
        None,
        help="Text to decode (reads --file or stdin when omitted)",
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Read input from a file",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write decoded text to a file instead of stdout",
    ),
    report: bool = typer.Option(
        False,
        "--report",
        "-r",
        help="Print a per-line status table to stderr",
    ),
    short_groups: Optional[ShortGroupPolicy] = typer.Option(
        None,
        "--short-groups",
        help="Handling of a short final character group",
    ),
    on_error: Optional[LineFailurePolicy] = typer.Option(
        None,
        "--on-error",
        help="Output for lines that cannot be decoded",
    ),
):
    """Decode <prefix>|<payload> lines."""
    if text is None:
        if file is not None:
            try:
                text = file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                console.print(f"[red]Error:[/red] Cannot read {file}: {e}")
                raise typer.Exit(1)
        else:
            text = sys.stdin.read()

    pipeline = _build_pipeline(short_groups, on_error)
    result = pipeline.decode(text)
    _emit(result.output, output)

    if report:
        _print_report(result)


@app.command()
def watch(
    path: Path = typer.Argument(..., help="File to re-decode whenever it changes"),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        min=0.01,
        help="Polling interval in seconds",
    ),
    max_updates: int = typer.Option(
        0,
        "--max-updates",
        min=0,
        help="Stop after this many decodes (0 runs until interrupted)",
    ),
    short_groups: Optional[ShortGroupPolicy] = typer.Option(
        None,
        "--short-groups",
        help="Handling of a short final character group",
    ),
    on_error: Optional[LineFailurePolicy] = typer.Option(
        None,
        "--on-error",
        help="Output for lines that cannot be decoded",
    ),
):
    """Re-decode a file every time it is modified."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    pipeline = _build_pipeline(short_groups, on_error)
    interval = interval or get_settings().watch_interval
    last_mtime: Optional[int] = None
    updates = 0

    console.print(f"Watching {path} (Ctrl+C to stop)")
    try:
        while True:
            try:
                mtime = path.stat().st_mtime_ns
            except FileNotFoundError:
                mtime = None

            if mtime is not None and mtime != last_mtime:
                last_mtime = mtime
                try:
                    text = path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    logger.warning(f"Cannot read {path}: {e}")
                else:
                    _emit(pipeline.decode_text(text), None)
                    updates += 1
                    if max_updates and updates >= max_updates:
                        break

            time.sleep(interval)
    except KeyboardInterrupt:
        console.print("\nStopped watching")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """gethash - decode six-bit packed hash exports."""
    log_level = "DEBUG" if debug else None
    setup_logging(log_level=log_level)


if __name__ == "__main__":
    app()

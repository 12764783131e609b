"""Scan command for the vinv CLI."""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path

import click

from vinv.cli.exit_codes import ExitCode
from vinv.config import (
    ConfigError,
    ConfigSource,
    build_config,
    require_scan_config,
)
from vinv.core import format_duration, format_rate, format_size_mb, truncate_filename
from vinv.domain import RunStatus
from vinv.inventory import PersistenceError
from vinv.scanner.orchestrator import RunOrchestrator, RunResult

logger = logging.getLogger(__name__)


class ProgressDisplay:
    """Display progress for an inventory run.

    Shows a counter with ETA that updates in place using carriage return.
    Only active when output is a TTY and not JSON mode.
    """

    def __init__(self, *, enabled: bool = True):
        self._enabled = enabled and sys.stdout.isatty()
        self._has_output = False
        self._started: float | None = None

    def _write(self, text: str) -> None:
        """Write text to stdout, clearing previous line."""
        if not self._enabled:
            return
        # \r moves to start of line, \033[K clears to end of line
        sys.stdout.write(f"\r\033[K{text}")
        sys.stdout.flush()
        self._has_output = True

    def on_discover_complete(self, total: int) -> None:
        self._started = time.monotonic()
        self._write(f"Found {total:,} files")

    def on_file_progress(
        self,
        processed: int,
        total: int,
        current_file: str,
        eta_seconds: float | None,
    ) -> None:
        name = truncate_filename(current_file, 40)
        rate = ""
        if self._started is not None:
            elapsed = time.monotonic() - self._started
            if elapsed > 0:
                rate = f", {format_rate(processed / elapsed)}"
        self._write(
            f"Probing... {processed:,}/{total:,} "
            f"(ETA {format_duration(eta_seconds)}{rate}) [{name}]"
        )

    def finish(self) -> None:
        """Finish current line with newline."""
        if self._enabled and self._has_output:
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._has_output = False


def _cli_source(
    roots: tuple[Path, ...],
    extensions: tuple[str, ...],
    csv_path: Path | None,
    db_path: Path | None,
    log_dir: Path | None,
    append: bool,
    debug_log: bool,
    workers: int | None,
    limit: int | None,
    ffprobe: Path | None,
    timeout: float | None,
) -> ConfigSource:
    """Build the CLI layer; unset options stay None so lower layers apply."""
    ext_list = None
    if extensions:
        ext_list = [
            part.strip()
            for value in extensions
            for part in value.split(",")
            if part.strip()
        ]
    return ConfigSource(
        ffprobe_path=ffprobe,
        probe_timeout=timeout,
        scan_roots=list(roots) or None,
        scan_extensions=ext_list,
        scan_workers=workers,
        scan_limit=limit,
        csv_path=csv_path,
        csv_mode="append" if append else None,
        database_path=db_path,
        log_dir=log_dir,
        debug_log=True if debug_log else None,
    )


@click.command("scan")
@click.argument("roots", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--ext",
    "extensions",
    multiple=True,
    help="Accepted extension (repeatable or comma-separated, e.g. mkv,mp4).",
)
@click.option(
    "--csv", "csv_path", type=click.Path(path_type=Path), help="CSV output file."
)
@click.option(
    "--db", "db_path", type=click.Path(path_type=Path), help="SQLite output file."
)
@click.option(
    "--log-dir", type=click.Path(path_type=Path), help="Directory for run logs."
)
@click.option("--append", is_flag=True, default=False, help="Append to the CSV file.")
@click.option(
    "--debug-log",
    is_flag=True,
    default=False,
    help="Write raw ffprobe output to the debug log.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Parallel ffprobe processes (default: 1).",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Process at most this many files.",
)
@click.option("--ffprobe", type=click.Path(path_type=Path), help="ffprobe executable.")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds allowed per ffprobe call (default: 60).",
)
@click.option("--json", "json_output", is_flag=True, help="Output summary as JSON.")
@click.pass_context
def scan_command(
    ctx: click.Context,
    roots: tuple[Path, ...],
    extensions: tuple[str, ...],
    csv_path: Path | None,
    db_path: Path | None,
    log_dir: Path | None,
    append: bool,
    debug_log: bool,
    workers: int | None,
    limit: int | None,
    ffprobe: Path | None,
    timeout: float | None,
    json_output: bool,
) -> None:
    """Inventory video files under ROOTS.

    Every matching file is probed with ffprobe. Results are written to a
    CSV file and to the `inventory` table of a SQLite database, with an
    estimated size after re-encoding to H.265.

    Examples:

        vinv scan /media/movies /media/tv

        vinv scan --ext mkv,mp4 --csv movies.csv --db movies.db /media/movies

        vinv scan --workers 4 --debug-log /media/videos
    """
    obj = ctx.obj or {}
    cli_source = _cli_source(
        roots, extensions, csv_path, db_path, log_dir, append, debug_log,
        workers, limit, ffprobe, timeout,
    )

    try:
        config, _ = build_config(obj.get("file_config", {}), cli_source)
        require_scan_config(config)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    progress = ProgressDisplay(enabled=not json_output)
    orchestrator = RunOrchestrator.from_config(
        config, prober=obj.get("prober"), progress=progress
    )

    try:
        result = orchestrator.run(config.scan.roots, config.scan.extensions)
    except PersistenceError as e:
        progress.finish()
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.DATABASE_ERROR)
    except OSError as e:
        progress.finish()
        click.echo(f"Error: Could not write output: {e}", err=True)
        sys.exit(ExitCode.GENERAL_ERROR)
    except KeyboardInterrupt:
        progress.finish()
        click.echo("Interrupted.", err=True)
        sys.exit(ExitCode.INTERRUPTED)
    progress.finish()

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        output_human(result)


def output_human(result: RunResult) -> None:
    """Output the run summary in human-readable format."""
    if result.status == RunStatus.NO_FILES:
        click.echo("No matching video files found. Nothing written.")
        click.echo(f"Summary log: {result.summary_log}")
        return

    click.echo(f"Files found: {result.files_found:,}")
    click.echo(f"  Processed: {result.files_processed:,}")
    click.echo(f"  Records: {len(result.records):,}")
    click.echo(f"  Skipped: {result.files_skipped:,}")
    if result.warnings:
        click.echo(f"  Warnings: {len(result.warnings):,}")

    if result.status == RunStatus.NO_RECORDS:
        click.echo("No valid inventory records. Nothing written.")
    elif result.sink_result is not None:
        sink = result.sink_result
        total_mb = sum(r.size_mb for r in result.records)
        est_mb = sum(r.est_size_h265_mb for r in result.records)
        click.echo(f"  Total size: {format_size_mb(total_mb)}")
        click.echo(f"  Est. size as H.265: {format_size_mb(est_mb)}")
        click.echo(f"\nCSV: {sink.csv_path} ({sink.rows_written:,} rows)")
        click.echo(f"Database: {sink.database_path}")

    click.echo(f"Summary log: {result.summary_log}")
    if result.errors:
        where = f" (see {result.error_log})" if result.error_log else ""
        click.echo(f"Failures: {len(result.errors):,}{where}")
    line = f"\nRun complete in {format_duration(result.elapsed_seconds)}"
    if result.files_processed and result.elapsed_seconds > 0:
        line += f" ({format_rate(result.files_processed / result.elapsed_seconds)})"
    click.echo(line)

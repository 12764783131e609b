"""Per-run data logs: summary, debug, and error files.

Each run writes into a log directory, naming its files after the run's start
time (YYYYmmdd_HHMMSS):

- inventory_summary_<ts>.log: start line, one line per processed file,
  totals, end line. Always written.
- inventory_debug_<ts>.log: raw probe documents. Only when enabled.
- inventory_errors_<ts>.log: one line per failure. Only when at least one
  failure occurred.

These are data files for the operator, separate from application logging.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TextIO

from vinv.domain.enums import FailureKind
from vinv.domain.models import FileError, InventoryRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
_ENCODING_ERRORS = "backslashreplace"


def run_timestamp(started_at: datetime) -> str:
    """Return the file-name timestamp for a run started at started_at."""
    return started_at.strftime(TIMESTAMP_FORMAT)


def format_summary_line(
    index: int,
    total: int,
    filename: str,
    record: InventoryRecord | None = None,
    error: FileError | None = None,
) -> str:
    """Format the summary-log line for one processed file."""
    prefix = f"[{index}/{total}] {filename}"
    if record is not None:
        langs = record.audio_langs or "-"
        return (
            f"{prefix} | Duration: {record.duration_min:.2f} min"
            f" | Video: {record.video_codec or '-'}"
            f" | Audio langs: {langs}"
        )
    if error is not None:
        return f"{prefix} | SKIPPED: {error.kind.value}"
    return prefix


class RunLogs:
    """Writes the data logs of a single run.

    Use as a context manager; the summary file is open for the lifetime of
    the run and the error log is written once on close. A line that cannot
    be written is queued as a PERSISTENCE_FAILURE and the run goes on.

    Example:
        with RunLogs(Path("logs"), datetime.now()) as logs:
            logs.file_processed(1, 3, "a.mkv", record=record)
            logs.finish(totals)
    """

    def __init__(
        self,
        log_dir: Path,
        started_at: datetime,
        *,
        debug: bool = False,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.started_at = started_at
        self.debug = debug

        stamp = run_timestamp(started_at)
        self.summary_path = self.log_dir / f"inventory_summary_{stamp}.log"
        self.debug_path = self.log_dir / f"inventory_debug_{stamp}.log"
        self.errors_path = self.log_dir / f"inventory_errors_{stamp}.log"

        # Set once the error log has actually been written
        self.error_log: Path | None = None

        self._summary: TextIO | None = None
        self._debug: TextIO | None = None
        self._errors: list[FileError] = []

    def __enter__(self) -> RunLogs:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def errors(self) -> list[FileError]:
        return list(self._errors)

    def _open(self, path: Path) -> TextIO:
        # Names from os.walk may hold surrogates; they are written escaped
        return path.open("w", encoding="utf-8", errors=_ENCODING_ERRORS)

    def open(self) -> None:
        """Create the log directory and start the summary (and debug) log.

        Raises:
            OSError: If the directory or files cannot be created.
        """
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._summary = self._open(self.summary_path)
        self._write(
            self._summary,
            f"Inventory run started {self.started_at.strftime(_DISPLAY_FORMAT)}\n",
            self.summary_path,
        )
        if self.debug:
            self._debug = self._open(self.debug_path)
        logger.debug("Run logs in %s", self.log_dir)

    def _write(self, stream: TextIO | None, text: str, path: Path) -> FileError | None:
        """Write text to stream, turning a failed write into a queued error."""
        if stream is None:
            return None
        try:
            stream.write(text)
            stream.flush()
        except (OSError, UnicodeError) as e:
            logger.warning("Could not write to %s for %s: %s", stream.name, path, e)
            error = FileError(
                path=path,
                kind=FailureKind.PERSISTENCE_FAILURE,
                detail=f"Log entry not written to {Path(stream.name).name}: {e}",
            )
            self._errors.append(error)
            return error
        return None

    def file_processed(
        self,
        index: int,
        total: int,
        filename: str,
        *,
        path: Path | None = None,
        record: InventoryRecord | None = None,
        error: FileError | None = None,
    ) -> FileError | None:
        """Record one processed file in the summary log.

        Returns:
            The queued PERSISTENCE_FAILURE if the line could not be written.
        """
        line = format_summary_line(index, total, filename, record=record, error=error)
        return self._write(
            self._summary, line + "\n", path if path is not None else Path(filename)
        )

    def probe_document(self, path: Path, document: str | None) -> FileError | None:
        """Append a raw probe document to the debug log, if enabled.

        Returns:
            The queued PERSISTENCE_FAILURE if the document could not be written.
        """
        body = (document or "").rstrip("\n")
        return self._write(self._debug, f"=== {path}\n{body}\n", path)

    def add_error(self, error: FileError) -> None:
        """Queue a failure for the error log."""
        self._errors.append(error)

    def message(self, line: str) -> None:
        """Write a free-form line to the summary log."""
        self._write(self._summary, line + "\n", self.summary_path)

    def finish(
        self, totals: dict[str, object], finished_at: datetime | None = None
    ) -> None:
        """Write totals and the end line to the summary log."""
        for key, value in totals.items():
            self.message(f"{key}: {value}")
        finished_at = finished_at or datetime.now()
        self.message(f"Inventory run finished {finished_at.strftime(_DISPLAY_FORMAT)}")

    def write_errors(self) -> Path | None:
        """Write queued failures to the error log.

        A failure to write the error log itself is logged, not raised.

        Returns:
            Path of the error log, or None if there were no failures (in which
            case no file is created) or the file could not be written.
        """
        if not self._errors:
            return None
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with self._open(self.errors_path) as f:
                f.writelines(error.format_line() + "\n" for error in self._errors)
        except OSError as e:
            logger.error("Could not write error log %s: %s", self.errors_path, e)
            return None
        logger.info("Wrote %d failures to %s", len(self._errors), self.errors_path)
        self.error_log = self.errors_path
        return self.errors_path

    def close(self) -> None:
        """Flush the error log and close open files."""
        try:
            self.write_errors()
        finally:
            for stream in (self._summary, self._debug):
                if stream is not None:
                    stream.close()
            self._summary = None
            self._debug = None

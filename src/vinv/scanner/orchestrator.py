"""Run orchestrator: discover, probe, extract, and persist one inventory run."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from vinv.core.formatting import format_duration
from vinv.domain.enums import FailureKind, RunStatus
from vinv.domain.models import (
    ExtractionResult,
    FileError,
    FileWarning,
    InventoryRecord,
    SinkResult,
)
from vinv.introspector.extractor import extract_record
from vinv.introspector.interface import ProbeAdapter, ProbeOutput
from vinv.inventory.sink import InventorySink
from vinv.logging.context import file_context
from vinv.reports.run_logs import RunLogs
from vinv.scanner.discovery import discover_files

if TYPE_CHECKING:
    from vinv.config.models import VinvConfig

logger = logging.getLogger(__name__)


class RunProgressCallback(Protocol):
    """Protocol for run progress callbacks."""

    def on_discover_complete(self, total: int) -> None:
        """Called once discovery has found all matching files."""
        ...

    def on_file_progress(
        self,
        processed: int,
        total: int,
        current_file: str,
        eta_seconds: float | None,
    ) -> None:
        """Called after each processed file with counts and estimated time left."""
        ...


def compute_eta(elapsed: float, processed: int, total: int) -> float | None:
    """Estimate remaining seconds as elapsed / processed * remaining.

    Returns:
        Seconds left, or None before the first file has been processed.
    """
    if processed <= 0:
        return None
    remaining = max(total - processed, 0)
    return elapsed / processed * remaining


@dataclass
class FileOutcome:
    """Result of probing and extracting a single file."""

    index: int
    path: Path
    output: ProbeOutput
    record: InventoryRecord | None = None
    error: FileError | None = None
    warning: FileWarning | None = None


@dataclass
class RunResult:
    """Result of an inventory run."""

    status: RunStatus
    files_found: int = 0
    files_processed: int = 0
    records: list[InventoryRecord] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)
    warnings: list[FileWarning] = field(default_factory=list)
    sink_result: SinkResult | None = None
    elapsed_seconds: float = 0.0
    summary_log: Path | None = None
    error_log: Path | None = None
    debug_log: Path | None = None

    @property
    def records_written(self) -> int:
        return self.sink_result.rows_written if self.sink_result else 0

    @property
    def files_skipped(self) -> int:
        return self.files_processed - len(self.records)

    def to_dict(self) -> dict[str, Any]:
        """Summary suitable for JSON output."""
        sink = self.sink_result
        return {
            "status": self.status.value,
            "files_found": self.files_found,
            "files_processed": self.files_processed,
            "records": len(self.records),
            "records_written": self.records_written,
            "files_skipped": self.files_skipped,
            "warnings": len(self.warnings),
            "errors": [
                {
                    "path": str(e.path),
                    "kind": e.kind.value,
                    "detail": e.detail,
                }
                for e in self.errors
            ],
            "csv_path": str(sink.csv_path) if sink and sink.csv_path else None,
            "database_path": (
                str(sink.database_path) if sink and sink.database_path else None
            ),
            "summary_log": str(self.summary_log) if self.summary_log else None,
            "error_log": str(self.error_log) if self.error_log else None,
            "elapsed_seconds": round(self.elapsed_seconds, 2),
        }


def _file_size(path: Path) -> int | None:
    try:
        return path.stat().st_size
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return None


def process_file(prober: ProbeAdapter, index: int, path: Path) -> FileOutcome:
    """Probe one file and turn its document into a record.

    Never raises for per-file problems; they are returned as the outcome's
    error. Safe to call from worker threads: it only touches its arguments.
    """
    with file_context(index, path):
        logger.debug("Probing %s", path)
        output = prober.probe(path)

        if output.failure is not None or output.document is None:
            kind = output.failure or FailureKind.PROBE_NO_DOCUMENT
            logger.warning("Probe failed: %s", kind.value)
            return FileOutcome(
                index=index,
                path=path,
                output=output,
                error=FileError(path, kind, output.diagnostics),
            )

        warning = None
        if output.diagnostics:
            logger.warning("ffprobe diagnostics: %s", output.diagnostics)
            warning = FileWarning(path, output.diagnostics)

        result: ExtractionResult = extract_record(
            path, output.document, file_size=_file_size(path)
        )
        if result.record is not None:
            return FileOutcome(
                index=index,
                path=path,
                output=output,
                record=result.record,
                warning=warning,
            )

        kind = result.skip_reason or FailureKind.PARSE_ERROR
        logger.warning("Skipped: %s (%s)", kind.value, result.detail)
        return FileOutcome(
            index=index,
            path=path,
            output=output,
            error=FileError(path, kind, result.detail),
            warning=warning,
        )


class RunOrchestrator:
    """Coordinates one inventory run.

    Owns all mutable run state (records, errors, counters). With workers > 1
    probing runs in a thread pool, but outcomes are consumed in discovery
    order on the calling thread, so output order is unchanged.
    """

    def __init__(
        self,
        prober: ProbeAdapter,
        sink: InventorySink,
        log_dir: Path,
        *,
        workers: int = 1,
        limit: int | None = None,
        debug_log: bool = False,
        follow_symlinks: bool = False,
        progress: RunProgressCallback | None = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.prober = prober
        self.sink = sink
        self.log_dir = Path(log_dir)
        self.workers = workers
        self.limit = limit
        self.debug_log = debug_log
        self.follow_symlinks = follow_symlinks
        self.progress = progress
        self._clock = clock
        self._now = now

    @classmethod
    def from_config(
        cls,
        config: VinvConfig,
        *,
        prober: ProbeAdapter | None = None,
        progress: RunProgressCallback | None = None,
    ) -> RunOrchestrator:
        """Build an orchestrator (with ffprobe and a file sink) from config."""
        from vinv.introspector.ffprobe import FFprobeAdapter
        from vinv.inventory.tabular import CsvMode

        if prober is None:
            adapter = FFprobeAdapter(
                ffprobe_path=config.tools.ffprobe,
                timeout=config.tools.probe_timeout,
            )
            if not adapter.is_available():
                logger.warning(
                    "ffprobe not found (%s); every file will fail to probe",
                    adapter.ffprobe_path,
                )
            prober = adapter
        sink = InventorySink(
            csv_path=config.output.csv_path,
            database_path=config.output.database_path,
            csv_mode=CsvMode(config.output.csv_mode),
        )
        return cls(
            prober,
            sink,
            config.output.log_dir,
            workers=config.scan.workers,
            limit=config.scan.limit,
            debug_log=config.output.debug_log,
            follow_symlinks=config.scan.follow_symlinks,
            progress=progress,
        )

    def _outcomes(self, files: list[Path]) -> Iterable[FileOutcome]:
        indexed = list(enumerate(files, start=1))
        if self.workers == 1 or len(files) <= 1:
            for index, path in indexed:
                yield process_file(self.prober, index, path)
            return

        # map() yields in submission order regardless of completion order
        with ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="vinv-probe"
        ) as executor:
            yield from executor.map(
                lambda item: process_file(self.prober, item[0], item[1]),
                indexed,
            )

    def run(self, roots: Iterable[Path], extensions: Iterable[str]) -> RunResult:
        """Run discovery, probing, extraction, and persistence.

        Args:
            roots: Directories to walk.
            extensions: Accepted file extensions.

        Returns:
            RunResult with the terminal status. NO_FILES and NO_RECORDS skip
            persistence entirely.

        Raises:
            OSError: If the run logs or the CSV file cannot be written.
            PersistenceError: If the database cannot be written.
        """
        started_at = self._now()
        start = self._clock()
        roots = [Path(r) for r in roots]

        with RunLogs(self.log_dir, started_at, debug=self.debug_log) as logs:
            logs.message("Roots: " + ", ".join(str(r) for r in roots))

            files = discover_files(
                roots, extensions, follow_symlinks=self.follow_symlinks
            )
            files_found = len(files)
            if self.limit is not None and files_found > self.limit:
                logger.info("Limiting run to %d of %d files", self.limit, files_found)
                files = files[: self.limit]

            total = len(files)
            if self.progress is not None:
                self.progress.on_discover_complete(total)

            result = RunResult(
                status=RunStatus.COMPLETED,
                files_found=files_found,
                summary_log=logs.summary_path,
                debug_log=logs.debug_path if self.debug_log else None,
            )

            if total == 0:
                logger.info("No matching files found")
                logs.message("No matching files found.")
                result.status = RunStatus.NO_FILES
                result.elapsed_seconds = self._clock() - start
                logs.finish(self._totals(result), self._now())
                return result

            logger.info("Processing %d files", total)
            for outcome in self._outcomes(files):
                self._consume(outcome, total, logs, result)
                if self.progress is not None:
                    elapsed = self._clock() - start
                    self.progress.on_file_progress(
                        result.files_processed,
                        total,
                        outcome.path.name,
                        compute_eta(elapsed, result.files_processed, total),
                    )

            if not result.records:
                logger.info("No valid inventory records produced")
                logs.message("No valid inventory records; nothing written.")
                result.status = RunStatus.NO_RECORDS
            else:
                for record in result.records:
                    self.sink.add(record)
                result.sink_result = self.sink.flush()
                for error in result.sink_result.errors:
                    result.errors.append(error)
                    logs.add_error(error)

            result.elapsed_seconds = self._clock() - start
            logs.finish(self._totals(result), self._now())

        result.error_log = logs.error_log
        return result

    def _consume(
        self,
        outcome: FileOutcome,
        total: int,
        logs: RunLogs,
        result: RunResult,
    ) -> None:
        result.files_processed += 1
        log_failures = [logs.probe_document(outcome.path, outcome.output.document)]
        if outcome.warning is not None:
            result.warnings.append(outcome.warning)
        if outcome.record is not None:
            result.records.append(outcome.record)
        if outcome.error is not None:
            result.errors.append(outcome.error)
            logs.add_error(outcome.error)
        log_failures.append(
            logs.file_processed(
                outcome.index,
                total,
                outcome.path.name,
                path=outcome.path,
                record=outcome.record,
                error=outcome.error,
            )
        )
        # Already queued for the error log by RunLogs
        result.errors.extend(f for f in log_failures if f is not None)

    @staticmethod
    def _totals(result: RunResult) -> dict[str, object]:
        return {
            "Status": result.status.value,
            "Files found": result.files_found,
            "Files processed": result.files_processed,
            "Records": len(result.records),
            "Records written": result.records_written,
            "Skipped": result.files_skipped,
            "Warnings": len(result.warnings),
            "Failures": len(result.errors),
            "Elapsed": format_duration(result.elapsed_seconds),
        }

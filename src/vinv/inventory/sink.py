"""Inventory sink: buffer records, then persist them to CSV and SQLite."""

from __future__ import annotations

import logging
from pathlib import Path

from vinv.domain.models import InventoryRecord, SinkResult
from vinv.inventory.database import write_database
from vinv.inventory.tabular import CsvMode, write_records

logger = logging.getLogger(__name__)


class InventorySink:
    """Accumulates records for one run and persists them once.

    Records are kept in the order they were added. flush() writes the CSV
    file first and then replaces the database; with nothing buffered it
    writes neither.
    """

    def __init__(
        self,
        csv_path: Path,
        database_path: Path,
        csv_mode: CsvMode = CsvMode.CREATE,
    ) -> None:
        self.csv_path = csv_path
        self.database_path = database_path
        self.csv_mode = csv_mode
        self._records: list[InventoryRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[InventoryRecord]:
        return list(self._records)

    def add(self, record: InventoryRecord) -> None:
        self._records.append(record)

    def flush(self) -> SinkResult:
        """Persist all buffered records.

        Returns:
            SinkResult. nothing_to_write is True (and no file is touched) when
            no records were added.

        Raises:
            OSError: If the CSV file cannot be opened.
            PersistenceError: If the database cannot be written.
        """
        if not self._records:
            logger.info("No inventory records to write")
            return SinkResult(nothing_to_write=True)

        written, errors = write_records(self.csv_path, self._records, self.csv_mode)
        write_database(self.database_path, self._records)

        logger.info(
            "Wrote %d records to %s and %s",
            written,
            self.csv_path,
            self.database_path,
        )
        return SinkResult(
            rows_written=written,
            csv_path=self.csv_path,
            database_path=self.database_path,
            errors=errors,
        )

"""CSV persistence for inventory records."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path

from vinv.domain.enums import FailureKind
from vinv.domain.models import INVENTORY_COLUMNS, FileError, InventoryRecord

logger = logging.getLogger(__name__)


class CsvMode(Enum):
    """How an existing tabular file is treated."""

    CREATE = "create"  # Replace the file, header first
    APPEND = "append"  # Append rows; header only if the file is new or empty


def _needs_header(path: Path, mode: CsvMode) -> bool:
    if mode is CsvMode.CREATE:
        return True
    try:
        return path.stat().st_size == 0
    except FileNotFoundError:
        return True


def write_records(
    path: Path,
    records: Iterable[InventoryRecord],
    mode: CsvMode = CsvMode.CREATE,
) -> tuple[int, list[FileError]]:
    """Write records to a UTF-8 CSV file.

    A row that cannot be written is reported as a PERSISTENCE_FAILURE and the
    remaining rows are still attempted.

    Args:
        path: Target CSV file.
        records: Records to write, in output order.
        mode: CREATE to start a fresh file, APPEND to add to an existing one.

    Returns:
        Tuple of (rows written, per-row errors).

    Raises:
        OSError: If the file cannot be opened.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = _needs_header(path, mode)
    open_mode = "w" if mode is CsvMode.CREATE else "a"

    written = 0
    errors: list[FileError] = []
    with path.open(open_mode, encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        if write_header:
            writer.writerow(INVENTORY_COLUMNS)
        for record in records:
            try:
                writer.writerow(record.as_tuple())
            except (OSError, csv.Error, UnicodeEncodeError) as e:
                logger.warning("Could not write CSV row for %s: %s", record.path, e)
                errors.append(
                    FileError(
                        path=Path(record.path),
                        kind=FailureKind.PERSISTENCE_FAILURE,
                        detail=f"CSV row not written: {e}",
                    )
                )
                continue
            written += 1

    logger.debug("Wrote %d rows to %s (mode=%s)", written, path, mode.value)
    return written, errors


def _to_float(value: str) -> float:
    return float(value) if value else 0.0


def read_records(path: Path) -> Iterator[InventoryRecord]:
    """Read records back from a CSV file written by write_records.

    Extra columns (such as a later enrichment column) are ignored.

    Raises:
        OSError: If the file cannot be opened.
        KeyError: If a required column is missing from the header.
    """
    with path.open("r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            yield InventoryRecord(
                path=row["Path"],
                filename=row["Filename"],
                container=row["Container"],
                duration_min=_to_float(row["DurationMin"]),
                size_mb=_to_float(row["SizeMB"]),
                video_codec=row["VideoCodec"],
                audio_codec=row["AudioCodec"],
                audio_langs=row["AudioLangs"],
                resolution=row["Resolution"],
                sar=row["SAR"],
                dar=row["DAR"],
            )

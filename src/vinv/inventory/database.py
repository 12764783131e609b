"""SQLite persistence for inventory records.

Each run replaces the database file, bulk-loads the ``inventory`` table, and
then runs one enrichment pass adding the EstSizeH265MB column.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from vinv.domain.models import (
    ESTIMATE_COLUMN,
    INVENTORY_COLUMNS,
    NUMERIC_COLUMNS,
    InventoryRecord,
)
from vinv.inventory.estimate import estimate_h265_size_mb

logger = logging.getLogger(__name__)

TABLE_NAME = "inventory"

# Files SQLite may leave next to the database
_SIDECAR_SUFFIXES = ("-journal", "-wal", "-shm")


class PersistenceError(Exception):
    """Raised when the inventory database cannot be written or read."""

    pass


def _column_type(column: str) -> str:
    return "REAL" if column in NUMERIC_COLUMNS else "TEXT"


def _storable(value: object) -> object:
    """Escape lone surrogates, which SQLite cannot store as UTF-8 text.

    os.walk decodes undecodable bytes in file names to surrogates; they are
    stored as backslash escapes, the same form the run logs use.
    """
    if isinstance(value, str):
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    return value


def create_table_sql() -> str:
    """Return the CREATE TABLE statement for the inventory table."""
    columns = ", ".join(f'"{c}" {_column_type(c)}' for c in INVENTORY_COLUMNS)
    return f"CREATE TABLE {TABLE_NAME} ({columns})"


def insert_sql() -> str:
    """Return the parameterized INSERT statement for one record."""
    names = ", ".join(f'"{c}"' for c in INVENTORY_COLUMNS)
    placeholders = ", ".join("?" for _ in INVENTORY_COLUMNS)
    return f"INSERT INTO {TABLE_NAME} ({names}) VALUES ({placeholders})"


@contextmanager
def get_connection(
    db_path: Path, timeout: float = 30.0
) -> Iterator[sqlite3.Connection]:
    """Open a database connection with the settings used across the package.

    Args:
        db_path: Path to the database file.
        timeout: How long to wait for locks (seconds).

    Yields:
        An sqlite3 Connection with rows returned as sqlite3.Row.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), timeout=timeout)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def remove_database(db_path: Path) -> None:
    """Delete a database file and any journal files beside it."""
    db_path.unlink(missing_ok=True)
    for suffix in _SIDECAR_SUFFIXES:
        Path(f"{db_path}{suffix}").unlink(missing_ok=True)


def add_estimate_column(conn: sqlite3.Connection) -> None:
    """Add and populate the EstSizeH265MB column.

    The estimate is computed by the same Python function used everywhere
    else, registered as an SQL function, so the stored value always equals
    estimate_h265_size_mb(SizeMB, VideoCodec).
    """
    conn.create_function(
        "h265_estimate", 2, estimate_h265_size_mb, deterministic=True
    )
    conn.execute(f'ALTER TABLE {TABLE_NAME} ADD COLUMN "{ESTIMATE_COLUMN}" REAL')
    conn.execute(
        f'UPDATE {TABLE_NAME} SET "{ESTIMATE_COLUMN}" = '
        'h265_estimate("SizeMB", "VideoCodec")'
    )


def write_database(db_path: Path, records: Iterable[InventoryRecord]) -> int:
    """Replace the database file with a freshly loaded inventory table.

    Args:
        db_path: Target database file (replaced if it exists).
        records: Records to load.

    Returns:
        Number of rows loaded.

    Raises:
        PersistenceError: If the database cannot be created or written.
    """
    rows = [tuple(map(_storable, record.as_tuple())) for record in records]
    try:
        remove_database(db_path)
        with get_connection(db_path) as conn:
            with conn:
                conn.execute(create_table_sql())
                conn.executemany(insert_sql(), rows)
            with conn:
                add_estimate_column(conn)
    except (sqlite3.Error, OSError, UnicodeError) as e:
        raise PersistenceError(f"Could not write database {db_path}: {e}") from e

    logger.debug("Loaded %d rows into %s", len(rows), db_path)
    return len(rows)


def get_codec_summary(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    """Aggregate the inventory by video codec.

    Returns:
        One dict per codec (largest total size first) with keys video_codec,
        files, size_mb, est_size_h265_mb, est_savings_mb.
    """
    cursor = conn.execute(
        f"""
        SELECT lower("VideoCodec") AS video_codec,
               COUNT(*) AS files,
               ROUND(SUM("SizeMB"), 2) AS size_mb,
               ROUND(SUM("{ESTIMATE_COLUMN}"), 2) AS est_size_h265_mb
        FROM {TABLE_NAME}
        GROUP BY lower("VideoCodec")
        ORDER BY size_mb DESC, video_codec
        """
    )
    summary = []
    for row in cursor.fetchall():
        size_mb = row["size_mb"] or 0.0
        est = row["est_size_h265_mb"] or 0.0
        summary.append(
            {
                "video_codec": row["video_codec"] or "",
                "files": row["files"],
                "size_mb": size_mb,
                "est_size_h265_mb": est,
                "est_savings_mb": round(size_mb - est, 2),
            }
        )
    return summary


def load_codec_summary(db_path: Path) -> list[dict[str, Any]]:
    """Open an inventory database and return its codec summary.

    Raises:
        PersistenceError: If the file is missing or not an inventory database.
    """
    if not db_path.is_file():
        raise PersistenceError(f"Inventory database not found: {db_path}")
    try:
        with get_connection(db_path) as conn:
            return get_codec_summary(conn)
    except sqlite3.Error as e:
        raise PersistenceError(f"Could not read database {db_path}: {e}") from e

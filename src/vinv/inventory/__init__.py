"""Inventory persistence: CSV file, SQLite table, and the H.265 estimate."""

from vinv.inventory.database import (
    TABLE_NAME,
    PersistenceError,
    get_codec_summary,
    load_codec_summary,
    write_database,
)
from vinv.inventory.estimate import (
    DEFAULT_H265_RATIO,
    H265_SIZE_RATIOS,
    estimate_h265_size_mb,
    h265_ratio,
)
from vinv.inventory.sink import InventorySink
from vinv.inventory.tabular import CsvMode, read_records, write_records

__all__ = [
    "InventorySink",
    "CsvMode",
    "PersistenceError",
    "TABLE_NAME",
    "DEFAULT_H265_RATIO",
    "H265_SIZE_RATIOS",
    "estimate_h265_size_mb",
    "h265_ratio",
    "get_codec_summary",
    "load_codec_summary",
    "read_records",
    "write_database",
    "write_records",
]

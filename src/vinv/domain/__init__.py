"""Domain models and enums for Video Inventory.

- Domain models: InventoryRecord, ExtractionResult, FileError, FileWarning,
  SinkResult
- Domain enums: FailureKind, RunStatus
- Column layout: INVENTORY_COLUMNS, NUMERIC_COLUMNS, ESTIMATE_COLUMN

Usage:
    from vinv.domain import InventoryRecord, FailureKind
"""

from .enums import FailureKind, RunStatus
from .models import (
    ESTIMATE_COLUMN,
    INVENTORY_COLUMNS,
    NUMERIC_COLUMNS,
    ExtractionResult,
    FileError,
    FileWarning,
    InventoryRecord,
    SinkResult,
)

__all__ = [
    # Models
    "InventoryRecord",
    "ExtractionResult",
    "FileError",
    "FileWarning",
    "SinkResult",
    # Column layout
    "INVENTORY_COLUMNS",
    "NUMERIC_COLUMNS",
    "ESTIMATE_COLUMN",
    # Enums
    "FailureKind",
    "RunStatus",
]

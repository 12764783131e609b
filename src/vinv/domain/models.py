"""Domain models for Video Inventory.

These models are independent of the CSV and SQLite layers; the inventory
package maps them to rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vinv.domain.enums import FailureKind

# Column order of the tabular file and the inventory table (before enrichment)
INVENTORY_COLUMNS: tuple[str, ...] = (
    "Path",
    "Filename",
    "Container",
    "DurationMin",
    "SizeMB",
    "VideoCodec",
    "AudioCodec",
    "AudioLangs",
    "Resolution",
    "SAR",
    "DAR",
)

# Columns stored as REAL in the database; everything else is TEXT
NUMERIC_COLUMNS: frozenset[str] = frozenset({"DurationMin", "SizeMB"})

ESTIMATE_COLUMN = "EstSizeH265MB"


@dataclass(frozen=True)
class InventoryRecord:
    """Normalized per-file metadata row.

    Immutable once built by the extractor. The H.265 size estimate is not a
    field; it is derived from size_mb and video_codec on demand.
    """

    path: str
    filename: str
    container: str
    duration_min: float
    size_mb: float
    video_codec: str
    audio_codec: str
    audio_langs: str
    resolution: str
    sar: str
    dar: str

    @property
    def est_size_h265_mb(self) -> float:
        """Estimated size after re-encoding to H.265, in MiB."""
        from vinv.inventory.estimate import estimate_h265_size_mb

        return estimate_h265_size_mb(self.size_mb, self.video_codec)

    def as_row(self) -> dict[str, str | float]:
        """Return the record keyed by inventory column name."""
        return {
            "Path": self.path,
            "Filename": self.filename,
            "Container": self.container,
            "DurationMin": self.duration_min,
            "SizeMB": self.size_mb,
            "VideoCodec": self.video_codec,
            "AudioCodec": self.audio_codec,
            "AudioLangs": self.audio_langs,
            "Resolution": self.resolution,
            "SAR": self.sar,
            "DAR": self.dar,
        }

    def as_tuple(self) -> tuple[str | float, ...]:
        """Return the record values in INVENTORY_COLUMNS order."""
        row = self.as_row()
        return tuple(row[column] for column in INVENTORY_COLUMNS)


@dataclass
class ExtractionResult:
    """Outcome of turning one probe document into a record.

    Exactly one of ``record`` and ``skip_reason`` is set.
    """

    record: InventoryRecord | None = None
    skip_reason: FailureKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class FileError:
    """A soft failure recorded against a single file."""

    path: Path
    kind: FailureKind
    detail: str | None = None

    def format_line(self) -> str:
        """Format as one error-log line."""
        if self.detail:
            return f"{self.path}: {self.kind.value}: {self.detail}"
        return f"{self.path}: {self.kind.value}"


@dataclass(frozen=True)
class FileWarning:
    """Non-fatal diagnostics recorded against a single file."""

    path: Path
    message: str


@dataclass
class SinkResult:
    """Result of flushing the inventory sink."""

    rows_written: int = 0
    csv_path: Path | None = None
    database_path: Path | None = None
    nothing_to_write: bool = False
    errors: list[FileError] = field(default_factory=list)

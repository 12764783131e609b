"""Configuration data models.

This module defines dataclasses for Video Inventory configuration options.
Validation happens in __post_init__ and raises ValueError.
"""

from dataclasses import dataclass, field
from pathlib import Path

from vinv.scanner.discovery import DEFAULT_EXTENSIONS, normalize_extensions

VALID_CSV_MODES = frozenset({"create", "append"})


@dataclass
class ToolPathsConfig:
    """Configuration for the external prober.

    If ffprobe is not specified it is looked up in PATH.
    """

    ffprobe: Path | None = None

    # Seconds to wait for a single probe
    probe_timeout: float = 60.0

    def __post_init__(self) -> None:
        if self.probe_timeout <= 0:
            raise ValueError(
                f"probe_timeout must be positive, got {self.probe_timeout}"
            )


@dataclass
class ScanConfig:
    """Configuration for directory scanning."""

    roots: list[Path] = field(default_factory=list)

    # Accepted extensions, matched case-insensitively; dot optional
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))

    # Parallel probe workers (1 = sequential)
    workers: int = 1

    # Stop after this many files (None = no limit)
    limit: int | None = None

    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")

    @property
    def normalized_extensions(self) -> frozenset[str]:
        return normalize_extensions(self.extensions)


@dataclass
class OutputConfig:
    """Where inventory results and run logs are written."""

    csv_path: Path = Path("video_inventory.csv")

    # "create" rewrites the CSV each run, "append" adds to it
    csv_mode: str = "create"

    # Replaced on every run
    database_path: Path = Path("video_inventory.db")

    # Summary, error, and debug logs
    log_dir: Path = Path("logs")

    # Write raw probe documents to the debug log
    debug_log: bool = False

    def __post_init__(self) -> None:
        if self.csv_mode.lower() not in VALID_CSV_MODES:
            raise ValueError(
                f"csv_mode must be one of {sorted(VALID_CSV_MODES)}, "
                f"got {self.csv_mode}"
            )
        self.csv_mode = self.csv_mode.lower()


@dataclass
class LoggingConfig:
    """Configuration for application logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    def __post_init__(self) -> None:
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class VinvConfig:
    """Main configuration container."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

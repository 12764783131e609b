"""Scanner: file discovery and run orchestration."""

from vinv.scanner.discovery import (
    DEFAULT_EXTENSIONS,
    discover_files,
    iter_files,
    normalize_extensions,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "discover_files",
    "iter_files",
    "normalize_extensions",
]

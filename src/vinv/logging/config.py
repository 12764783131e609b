"""Root logger setup for the vinv command line.

Records go to one destination: the configured log file, or stderr when no
file is set or the file cannot be opened. Every handler carries the file
context filter so lines logged while a file is processed are tagged with it.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from vinv.logging.context import FileContextFilter
from vinv.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from vinv.config.models import LoggingConfig

# Rotation limits for --log-file
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

TEXT_FORMAT = "%(asctime)s - %(file_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _formatter(fmt: str) -> logging.Formatter:
    if fmt.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _open_log_file(path: Path) -> logging.Handler | None:
    """Open a rotating handler on path, or return None if that fails."""
    path = path.expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Paths from os.walk may hold surrogates
        return RotatingFileHandler(
            path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
            errors="backslashreplace",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = _open_log_file(Path(config.file)) if config.file else None
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(config.format))
    handler.addFilter(FileContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

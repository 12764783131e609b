"""File context for structured logging.

Provides context propagation using contextvars so that log records emitted
while a file is being processed carry its index and path.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_file_index: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "file_index", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


def set_file_context(file_index: int, file_path: Path | str | None = None) -> None:
    """Set the current file context.

    Args:
        file_index: 1-based position of the file in the run.
        file_path: Full path to the file being processed, or None.
    """
    _file_index.set(file_index)
    _file_path.set(str(file_path) if file_path is not None else None)


def clear_file_context() -> None:
    """Clear the current file context."""
    _file_index.set(None)
    _file_path.set(None)


@contextmanager
def file_context(
    file_index: int,
    file_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager for per-file processing context.

    Sets the context on entry and restores the previous one on exit.

    Example:
        with file_context(7, "/media/movie.mkv"):
            logger.info("Probing")  # Tagged [F0007]
    """
    old_index = _file_index.get()
    old_path = _file_path.get()
    try:
        set_file_context(file_index, file_path)
        yield
    finally:
        _file_index.set(old_index)
        _file_path.set(old_path)


def get_file_context() -> tuple[int | None, str | None]:
    """Return the current (file_index, file_path), either may be None."""
    return _file_index.get(), _file_path.get()


class FileContextFilter(logging.Filter):
    """Logging filter that injects file context into log records.

    Adds file_index and file_path attributes for JSON output and a compact
    file_tag such as "[F0007] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        file_index, file_path = get_file_context()

        record.file_index = file_index
        record.file_path = file_path
        record.file_tag = f"[F{file_index:04d}] " if file_index is not None else ""

        return True  # Never filter out records

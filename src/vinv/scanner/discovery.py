"""File discovery: walk root directories and filter by extension."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = [
    "mkv",
    "mp4",
    "avi",
    "webm",
    "m4v",
    "mov",
    "mpg",
    "mpeg",
    "wmv",
    "flv",
    "ts",
]


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Normalize extensions to lowercase dotted form.

    "mkv", ".mkv" and ".MKV" all become ".mkv". Blank entries are dropped.
    """
    normalized = set()
    for ext in extensions:
        ext = ext.strip().casefold()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(normalized)


def _walk_error(error: OSError) -> None:
    logger.warning("Cannot read directory %s: %s", error.filename, error.strerror)


def iter_files(root: Path, follow_symlinks: bool = False) -> Iterator[Path]:
    """Yield regular files under root, recursively, in sorted order."""
    for dirpath, dirnames, filenames in os.walk(
        root, onerror=_walk_error, followlinks=follow_symlinks
    ):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_file():
                yield path


def discover_files(
    roots: Iterable[Path],
    extensions: Iterable[str],
    follow_symlinks: bool = False,
) -> list[Path]:
    """Find all files under the roots whose extension is accepted.

    Roots are walked in the order given; within a root the order is sorted
    by directory then file name, so discovery order is deterministic. A root
    that does not exist or is not a directory is logged and skipped.

    Args:
        roots: Directories to walk.
        extensions: Accepted extensions (any case, dot optional).
        follow_symlinks: Whether to descend into symlinked directories.

    Returns:
        Matching file paths in discovery order, without duplicates.
    """
    accepted = normalize_extensions(extensions)
    found: list[Path] = []
    seen: set[Path] = set()

    for root in roots:
        root = Path(root).expanduser()
        if not root.exists():
            logger.warning("Scan root does not exist: %s", root)
            continue
        if not root.is_dir():
            logger.warning("Scan root is not a directory: %s", root)
            continue

        matched = 0
        for path in iter_files(root, follow_symlinks=follow_symlinks):
            if path.suffix.casefold() not in accepted or path in seen:
                continue
            seen.add(path)
            found.append(path)
            matched += 1
        logger.info("Found %d matching files under %s", matched, root)

    return found

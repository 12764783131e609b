"""Pure parsing helpers for ffprobe JSON output.

No I/O and no side effects beyond warning logs, so they are easy to test.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

BYTES_PER_MIB = 1_048_576


def parse_float(value: Any) -> float | None:
    """Parse a numeric value (ffprobe reports most numbers as strings).

    Args:
        value: Value from ffprobe JSON, e.g. "3600.000" or 3600.

    Returns:
        Float value, or None if absent or not numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_int(value: Any) -> int | None:
    """Parse an integer value, accepting integral strings and floats."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    number = parse_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def validate_dimension(
    value: Any,
    field_name: str,
    file_path: str | None = None,
) -> int | None:
    """Validate a width/height value.

    Args:
        value: Raw value from the stream descriptor.
        field_name: Field name for warning messages.
        file_path: File path context for warnings.

    Returns:
        Non-negative integer, or None if missing or invalid.
    """
    if value is None:
        return None
    number = parse_int(value)
    if number is None:
        logger.warning(
            "Expected int for %s, got %r in %s",
            field_name,
            value,
            file_path or "unknown",
        )
        return None
    if number < 0:
        logger.warning(
            "Invalid negative %s: %d in %s", field_name, number, file_path or "unknown"
        )
        return None
    return number


def as_text(value: Any) -> str:
    """Render an optional descriptor value as a column string."""
    if value is None:
        return ""
    return str(value)


def streams_of_type(streams: Any, codec_type: str) -> list[dict]:
    """Return streams whose codec_type matches, in document order.

    Non-dict entries and a non-list ``streams`` value are ignored.
    """
    if not isinstance(streams, list):
        return []
    return [
        s for s in streams if isinstance(s, dict) and s.get("codec_type") == codec_type
    ]


def stream_language(stream: dict) -> str:
    """Return the stream's language tag, or "" when untagged."""
    tags = stream.get("tags")
    if not isinstance(tags, dict):
        return ""
    language = tags.get("language")
    return str(language) if language else ""


def minutes_from_seconds(seconds: float | None) -> float:
    """Convert seconds to minutes rounded to 2 decimals (absent counts as 0)."""
    if seconds is None:
        return 0.0
    return round(seconds / 60, 2)


def mib_from_bytes(size_bytes: int | float | None) -> float:
    """Convert bytes to MiB rounded to 2 decimals (absent counts as 0)."""
    if size_bytes is None:
        return 0.0
    return round(size_bytes / BYTES_PER_MIB, 2)

"""JSON log formatting for ``--log-json``."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has; anything else arrived through extra=
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

# Set by FileContextFilter; reported under their own keys, not as extras
_FILE_FIELDS = ("file_index", "file_path")
_FILTER_ATTRS = frozenset({*_FILE_FIELDS, "file_tag"})


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Keys: timestamp (UTC), level, logger, message, and, when present,
    context (file index/path of the file being processed plus any extra=
    values) and exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and key not in _FILTER_ATTRS
            and not key.startswith("_")
        }
        for key in _FILE_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                context[key] = value
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)

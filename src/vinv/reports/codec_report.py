"""Per-codec inventory report.

Renders the rows of vinv.inventory.load_codec_summary (one per video codec,
largest total size first) as an aligned text table, CSV or JSON, and writes
a rendered report to a file without clobbering an existing one by accident.
"""

from __future__ import annotations

import csv
import io
import json
import os
import tempfile
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Any

Row = dict[str, Any]


class ReportFormat(Enum):
    """Output formats of the report command."""

    TEXT = "text"
    CSV = "csv"
    JSON = "json"


SUMMARY_COLUMNS = (
    "video_codec",
    "files",
    "size_mb",
    "est_size_h265_mb",
    "est_savings_mb",
)
_MB_COLUMNS = ("size_mb", "est_size_h265_mb", "est_savings_mb")

_HEADINGS = {
    "video_codec": "CODEC",
    "files": "FILES",
    "size_mb": "SIZE MB",
    "est_size_h265_mb": "EST H.265 MB",
    "est_savings_mb": "EST SAVINGS MB",
}

EMPTY_MESSAGE = "Inventory is empty."


def total_row(rows: Sequence[Row]) -> Row:
    """Sum every numeric column over all codecs."""
    total: Row = {"video_codec": "TOTAL", "files": sum(r["files"] for r in rows)}
    for key in _MB_COLUMNS:
        total[key] = round(sum(r[key] for r in rows), 2)
    return total


def _cell(key: str, value: Any) -> str:
    if key == "video_codec":
        return value or "-"
    if key == "files":
        return f"{value:,}"
    return f"{value:,.2f}"


def render_text(rows: Sequence[Row]) -> str:
    """Aligned table with a TOTAL line; codecs left, numbers right."""
    if not rows:
        return EMPTY_MESSAGE

    body = [[_cell(k, row[k]) for k in SUMMARY_COLUMNS] for row in rows]
    total = [_cell(k, v) for k, v in total_row(rows).items()]
    headings = [_HEADINGS[k] for k in SUMMARY_COLUMNS]
    widths = [
        max(len(line[i]) for line in [headings, *body, total])
        for i in range(len(SUMMARY_COLUMNS))
    ]

    def fmt(line: list[str]) -> str:
        codec, *numbers = line
        parts = [codec.ljust(widths[0])]
        parts += [n.rjust(w) for n, w in zip(numbers, widths[1:], strict=True)]
        return "  ".join(parts).rstrip()

    rule = "-" * len(fmt(headings))
    return "\n".join([fmt(headings), rule, *map(fmt, body), rule, fmt(total)])


def render_csv(rows: Sequence[Row]) -> str:
    """CSV with a header line; values unformatted."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(SUMMARY_COLUMNS)
    for row in rows:
        writer.writerow(["" if row[k] is None else row[k] for k in SUMMARY_COLUMNS])
    return output.getvalue()


def render_json(rows: Sequence[Row]) -> str:
    return json.dumps([{k: row[k] for k in SUMMARY_COLUMNS} for row in rows], indent=2)


def render_report(rows: Sequence[Row], fmt: ReportFormat) -> str:
    """Render rows in the requested format."""
    if fmt is ReportFormat.JSON:
        return render_json(rows)
    if fmt is ReportFormat.CSV:
        return render_csv(rows)
    return render_text(rows)


def write_report(content: str, path: Path, *, force: bool = False) -> None:
    """Write content to path through a temp file in the same directory.

    Raises:
        FileExistsError: If path exists and force is False.
        OSError: If the file cannot be written.
    """
    if path.exists() and not force:
        raise FileExistsError(f"File exists: {path}. Use --force to overwrite.")

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

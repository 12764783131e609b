"""Reporting: per-run data logs and the codec summary report."""

from vinv.reports.codec_report import (
    ReportFormat,
    render_report,
    total_row,
    write_report,
)
from vinv.reports.run_logs import RunLogs, format_summary_line, run_timestamp

__all__ = [
    "ReportFormat",
    "RunLogs",
    "format_summary_line",
    "render_report",
    "run_timestamp",
    "total_row",
    "write_report",
]

"""Tests for the codec summary report."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from vinv.reports import ReportFormat, render_report, total_row, write_report

ROWS = [
    {
        "video_codec": "h264",
        "files": 1200,
        "size_mb": 1500.0,
        "est_size_h265_mb": 975.0,
        "est_savings_mb": 525.0,
    },
    {
        "video_codec": "",
        "files": 1,
        "size_mb": 10.0,
        "est_size_h265_mb": 5.0,
        "est_savings_mb": 5.0,
    },
]


class TestTotalRow:
    def test_sums_columns(self) -> None:
        assert total_row(ROWS) == {
            "video_codec": "TOTAL",
            "files": 1201,
            "size_mb": 1510.0,
            "est_size_h265_mb": 980.0,
            "est_savings_mb": 530.0,
        }


class TestRenderReport:
    def test_text_table(self) -> None:
        lines = render_report(ROWS, ReportFormat.TEXT).splitlines()

        assert lines[0].startswith("CODEC")
        assert lines[0].endswith("EST SAVINGS MB")
        assert set(lines[1]) == {"-"}
        assert lines[2].split() == ["h264", "1,200", "1,500.00", "975.00", "525.00"]
        assert lines[3].split()[0] == "-"
        assert lines[-1].split() == ["TOTAL", "1,201", "1,510.00", "980.00", "530.00"]
        # Numbers are right-aligned under their headings
        assert len({len(line) for line in lines[2:4]}) == 1

    def test_text_empty(self) -> None:
        assert render_report([], ReportFormat.TEXT) == "Inventory is empty."

    def test_csv(self) -> None:
        text = render_report(ROWS, ReportFormat.CSV)
        assert text.splitlines() == [
            "video_codec,files,size_mb,est_size_h265_mb,est_savings_mb",
            "h264,1200,1500.0,975.0,525.0",
            ",1,10.0,5.0,5.0",
        ]

    def test_json(self) -> None:
        assert json.loads(render_report(ROWS, ReportFormat.JSON)) == ROWS


class TestWriteReport:
    def test_writes(self, tmp_path: Path) -> None:
        target = tmp_path / "r" / "report.txt"
        write_report("hello", target)
        assert target.read_text(encoding="utf-8") == "hello"
        assert [p.name for p in target.parent.iterdir()] == ["report.txt"]

    def test_refuses_overwrite(self, tmp_path: Path) -> None:
        target = tmp_path / "report.txt"
        target.write_text("old")
        with pytest.raises(FileExistsError, match="--force"):
            write_report("new", target)
        write_report("new", target, force=True)
        assert target.read_text() == "new"

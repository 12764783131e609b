"""Tests for the SQLite inventory table."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from pathlib import Path

import pytest

from vinv.domain import ESTIMATE_COLUMN, INVENTORY_COLUMNS
from vinv.inventory import (
    TABLE_NAME,
    PersistenceError,
    load_codec_summary,
    write_database,
)


def _rows(db_path: Path) -> list[sqlite3.Row]:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        return conn.execute(f"SELECT * FROM {TABLE_NAME}").fetchall()
    finally:
        conn.close()


class TestWriteDatabase:
    def test_columns_and_estimate(self, tmp_path: Path, sample_record) -> None:
        db_path = tmp_path / "inv.db"
        assert write_database(db_path, [sample_record]) == 1

        rows = _rows(db_path)
        assert list(rows[0].keys()) == [*INVENTORY_COLUMNS, ESTIMATE_COLUMN]
        assert rows[0]["SizeMB"] == 1000.0
        assert rows[0][ESTIMATE_COLUMN] == 650.0

    def test_estimate_case_insensitive(self, tmp_path: Path, sample_record) -> None:
        db_path = tmp_path / "inv.db"
        write_database(
            db_path,
            [
                replace(sample_record, video_codec="MPEG2VIDEO", size_mb=100.0),
                replace(sample_record, video_codec="av1", size_mb=100.0),
            ],
        )

        estimates = [row[ESTIMATE_COLUMN] for row in _rows(db_path)]
        assert estimates == [30.0, 50.0]

    def test_numeric_columns_are_real(self, tmp_path: Path, sample_record) -> None:
        db_path = tmp_path / "inv.db"
        write_database(db_path, [sample_record])

        conn = sqlite3.connect(db_path)
        try:
            types = {
                row[1]: row[2]
                for row in conn.execute(f"PRAGMA table_info({TABLE_NAME})")
            }
        finally:
            conn.close()
        assert types["DurationMin"] == "REAL"
        assert types["SizeMB"] == "REAL"
        assert types["Path"] == "TEXT"
        assert types[ESTIMATE_COLUMN] == "REAL"

    def test_database_replaced_each_run(self, tmp_path: Path, sample_record) -> None:
        db_path = tmp_path / "inv.db"
        write_database(db_path, [sample_record, sample_record])
        write_database(db_path, [sample_record])

        assert len(_rows(db_path)) == 1

    def test_unwritable_location_raises(self, tmp_path: Path, sample_record) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(PersistenceError):
            write_database(blocker / "inv.db", [sample_record])


    def test_undecodable_file_name_stored_escaped(
        self, tmp_path: Path, sample_record
    ) -> None:
        record = replace(
            sample_record, path="/media/\udcff.mkv", filename="\udcff.mkv"
        )
        db_path = tmp_path / "inv.db"

        assert write_database(db_path, [record, sample_record]) == 2

        rows = _rows(db_path)
        assert rows[0]["Path"] == "/media/\\udcff.mkv"
        assert rows[0]["Filename"] == "\\udcff.mkv"
        assert rows[0][ESTIMATE_COLUMN] == 650.0
        assert rows[1]["Filename"] == "movie.mkv"


class TestCodecSummary:
    def test_grouped_by_codec(self, tmp_path: Path, sample_record) -> None:
        db_path = tmp_path / "inv.db"
        write_database(
            db_path,
            [
                sample_record,
                replace(sample_record, video_codec="H264", size_mb=500.0),
                replace(sample_record, video_codec="hevc", size_mb=200.0),
            ],
        )

        summary = load_codec_summary(db_path)
        assert summary[0] == {
            "video_codec": "h264",
            "files": 2,
            "size_mb": 1500.0,
            "est_size_h265_mb": 975.0,
            "est_savings_mb": 525.0,
        }
        assert summary[1]["video_codec"] == "hevc"
        assert summary[1]["est_savings_mb"] == 0.0

    def test_missing_database(self, tmp_path: Path) -> None:
        with pytest.raises(PersistenceError):
            load_codec_summary(tmp_path / "nope.db")

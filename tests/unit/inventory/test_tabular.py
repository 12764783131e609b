"""Tests for the CSV inventory file."""

from __future__ import annotations

import csv
from dataclasses import replace
from pathlib import Path

from vinv.domain import INVENTORY_COLUMNS, FailureKind
from vinv.inventory import CsvMode, read_records, write_records

HEADER = (
    "Path,Filename,Container,DurationMin,SizeMB,"
    "VideoCodec,AudioCodec,AudioLangs,Resolution,SAR,DAR"
)


def _lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


class TestWriteRecords:
    def test_header_and_row(self, tmp_path: Path, sample_record) -> None:
        target = tmp_path / "out.csv"
        written, errors = write_records(target, [sample_record])

        assert written == 1
        assert errors == []
        lines = _lines(target)
        assert lines[0] == HEADER
        assert len(lines) == 2

    def test_create_mode_replaces_file(self, tmp_path: Path, sample_record) -> None:
        target = tmp_path / "out.csv"
        write_records(target, [sample_record, sample_record])
        write_records(target, [sample_record], CsvMode.CREATE)

        assert len(_lines(target)) == 2

    def test_append_writes_header_once(self, tmp_path: Path, sample_record) -> None:
        target = tmp_path / "out.csv"
        write_records(target, [sample_record], CsvMode.APPEND)
        write_records(target, [sample_record], CsvMode.APPEND)

        lines = _lines(target)
        assert lines.count(HEADER) == 1
        assert len(lines) == 3

    def test_append_to_empty_file_writes_header(
        self, tmp_path: Path, sample_record
    ) -> None:
        target = tmp_path / "out.csv"
        target.touch()
        write_records(target, [sample_record], CsvMode.APPEND)

        assert _lines(target)[0] == HEADER

    def test_commas_and_quotes_escaped(self, tmp_path: Path, sample_record) -> None:
        record = replace(
            sample_record,
            path='/media/Movie, "The".mkv',
            filename='Movie, "The".mkv',
        )
        target = tmp_path / "out.csv"
        write_records(target, [record])

        with target.open(encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[1][1] == 'Movie, "The".mkv'
        assert len(rows[1]) == len(INVENTORY_COLUMNS)

    def test_unencodable_row_is_reported_and_skipped(
        self, tmp_path: Path, sample_record
    ) -> None:
        # os.walk turns the byte 0xff in a file name into a lone surrogate
        bad = replace(sample_record, path="/media/\udcff.mkv", filename="\udcff.mkv")
        good = replace(sample_record, path="/media/b.mkv", filename="b.mkv")
        target = tmp_path / "out.csv"

        written, errors = write_records(target, [sample_record, bad, good])

        assert written == 2
        assert len(errors) == 1
        assert errors[0].kind is FailureKind.PERSISTENCE_FAILURE
        assert errors[0].path == Path("/media/\udcff.mkv")
        assert [r.filename for r in read_records(target)] == ["movie.mkv", "b.mkv"]

    def test_creates_parent_directory(self, tmp_path: Path, sample_record) -> None:
        target = tmp_path / "nested" / "out.csv"
        write_records(target, [sample_record])
        assert target.exists()


class TestReadRecords:
    def test_round_trip(self, tmp_path: Path, sample_record) -> None:
        other = replace(
            sample_record,
            path="/media/b.avi",
            filename="b.avi",
            audio_codec="",
            audio_langs="",
            resolution="",
        )
        target = tmp_path / "out.csv"
        write_records(target, [sample_record, other])

        assert list(read_records(target)) == [sample_record, other]

    def test_unicode_preserved(self, tmp_path: Path, sample_record) -> None:
        record = replace(sample_record, filename="Amélie – 天気.mkv")
        target = tmp_path / "out.csv"
        write_records(target, [record])

        assert next(read_records(target)).filename == "Amélie – 天気.mkv"

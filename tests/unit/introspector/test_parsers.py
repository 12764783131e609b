"""Tests for ffprobe value parsers."""

import logging

import pytest

from vinv.introspector.parsers import (
    mib_from_bytes,
    minutes_from_seconds,
    parse_float,
    parse_int,
    stream_language,
    streams_of_type,
    validate_dimension,
)


class TestNumbers:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("125.4", 125.4), (60, 60.0), ("N/A", None), (None, None), (True, None)],
    )
    def test_parse_float(self, value, expected) -> None:
        assert parse_float(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1048576000", 1048576000), (12, 12), ("12.0", 12), ("12.5", None)],
    )
    def test_parse_int(self, value, expected) -> None:
        assert parse_int(value) == expected

    def test_minutes_rounded(self) -> None:
        assert minutes_from_seconds(125.4) == 2.09
        assert minutes_from_seconds(None) == 0.0

    def test_mib_rounded(self) -> None:
        assert mib_from_bytes(1_048_576_000) == 1000.0
        assert mib_from_bytes(1_500_000) == 1.43
        assert mib_from_bytes(None) == 0.0


class TestValidateDimension:
    def test_valid(self) -> None:
        assert validate_dimension("1920", "width") == 1920

    def test_invalid_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            assert validate_dimension("wide", "width", "/a.mkv") is None
        assert "width" in caplog.text

    def test_negative_rejected(self) -> None:
        assert validate_dimension(-1, "height") is None


class TestStreams:
    def test_streams_of_type_keeps_order(self) -> None:
        streams = [
            {"codec_type": "audio", "codec_name": "a"},
            {"codec_type": "video"},
            "garbage",
            {"codec_type": "audio", "codec_name": "b"},
        ]
        audio = streams_of_type(streams, "audio")
        assert [s["codec_name"] for s in audio] == ["a", "b"]

    def test_streams_not_a_list(self) -> None:
        assert streams_of_type(None, "video") == []

    def test_stream_language(self) -> None:
        assert stream_language({"tags": {"language": "eng"}}) == "eng"
        assert stream_language({"tags": {}}) == ""
        assert stream_language({}) == ""

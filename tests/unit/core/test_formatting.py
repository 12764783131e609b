"""Tests for display formatting helpers."""

import pytest

from vinv.core import format_duration, format_rate, format_size_mb, truncate_filename


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (None, "-"),
            (-1, "-"),
            (0, "0s"),
            (45.4, "45s"),
            (187, "3m 07s"),
            (3720, "1h 02m"),
        ],
    )
    def test_values(self, seconds, expected) -> None:
        assert format_duration(seconds) == expected


class TestFormatSizeMb:
    def test_mib(self) -> None:
        assert format_size_mb(650.0) == "650.00 MiB"

    def test_gib(self) -> None:
        assert format_size_mb(2048.0) == "2.00 GiB"


class TestFormatRate:
    def test_fast(self) -> None:
        assert format_rate(1234.9) == "1,234/sec"

    def test_slow(self) -> None:
        assert format_rate(0.3) == "0.3/sec"


class TestTruncateFilename:
    def test_short_unchanged(self) -> None:
        assert truncate_filename("a.mkv", 10) == "a.mkv"

    def test_keeps_tail(self) -> None:
        assert truncate_filename("a_very_long_name.mkv", 10) == "...ame.mkv"

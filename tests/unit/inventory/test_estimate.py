"""Tests for the H.265 size estimate."""

import pytest

from vinv.inventory import (
    DEFAULT_H265_RATIO,
    H265_SIZE_RATIOS,
    estimate_h265_size_mb,
    h265_ratio,
)


class TestH265Ratio:
    @pytest.mark.parametrize(
        ("codec", "ratio"),
        [
            ("mpeg2video", 0.3),
            ("mpeg4", 0.45),
            ("h264", 0.65),
            ("vp8", 0.6),
            ("hevc", 1.0),
            ("wmv3", 0.4),
            ("divx", 0.4),
            ("h263", 0.3),
        ],
    )
    def test_known_codecs(self, codec: str, ratio: float) -> None:
        assert h265_ratio(codec) == ratio

    def test_case_insensitive(self) -> None:
        assert h265_ratio("H264") == 0.65
        assert h265_ratio("HEVC") == 1.0

    @pytest.mark.parametrize("codec", ["av1", "vp9", "", None])
    def test_unknown_uses_default(self, codec) -> None:
        assert h265_ratio(codec) == DEFAULT_H265_RATIO == 0.5

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            H265_SIZE_RATIOS["av1"] = 0.9  # type: ignore[index]


class TestEstimate:
    def test_reference_value(self) -> None:
        assert estimate_h265_size_mb(1000.0, "h264") == 650.0

    def test_rounded_to_two_places(self) -> None:
        assert estimate_h265_size_mb(123.45, "mpeg4") == 55.55

    def test_missing_size(self) -> None:
        assert estimate_h265_size_mb(None, "h264") == 0.0

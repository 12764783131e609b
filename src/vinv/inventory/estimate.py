"""H.265 re-encode size estimate.

The ratios are a static heuristic: the expected size of an H.265 encode
relative to the source, keyed by the source video codec.
"""

from types import MappingProxyType

H265_SIZE_RATIOS = MappingProxyType(
    {
        "mpeg2video": 0.3,
        "mpeg4": 0.45,
        "h264": 0.65,
        "vp8": 0.6,
        "hevc": 1.0,
        "wmv3": 0.4,
        "divx": 0.4,
        "h263": 0.3,
    }
)

DEFAULT_H265_RATIO = 0.5


def h265_ratio(video_codec: str | None) -> float:
    """Return the size ratio for a codec name (case-insensitive)."""
    if not video_codec:
        return DEFAULT_H265_RATIO
    return H265_SIZE_RATIOS.get(video_codec.strip().casefold(), DEFAULT_H265_RATIO)


def estimate_h265_size_mb(size_mb: float | None, video_codec: str | None) -> float:
    """Estimate the H.265 size in MiB, rounded to 2 decimals.

    Args:
        size_mb: Current size in MiB.
        video_codec: Source video codec name as reported by ffprobe.

    Returns:
        round(size_mb * ratio, 2); 0.0 when size_mb is None.
    """
    if size_mb is None:
        return 0.0
    return round(float(size_mb) * h265_ratio(video_codec), 2)

"""Turn an ffprobe document into an InventoryRecord.

Stream selection rules:

- The first stream with codec_type "video" is used; later video streams are
  ignored (first match, not best match).
- Every stream with codec_type "audio" is kept, in document order, and
  contributes one segment to AudioCodec and AudioLangs.

A document without a format block or without a video stream yields a skip
reason instead of a record.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from vinv.domain.enums import FailureKind
from vinv.domain.models import ExtractionResult, InventoryRecord
from vinv.introspector.parsers import (
    as_text,
    mib_from_bytes,
    minutes_from_seconds,
    parse_float,
    parse_int,
    stream_language,
    streams_of_type,
    validate_dimension,
)

logger = logging.getLogger(__name__)

AUDIO_SEPARATOR = ";"


def _skip(reason: FailureKind, detail: str) -> ExtractionResult:
    return ExtractionResult(skip_reason=reason, detail=detail)


def parse_document(document: str) -> dict[str, Any] | None:
    """Parse a probe document, returning None unless it is a JSON object."""
    try:
        data = json.loads(document)
    except (json.JSONDecodeError, TypeError):
        return None
    return data if isinstance(data, dict) else None


def format_resolution(video: dict, file_path: str | None = None) -> str:
    """Build "{width}x{height}", or "" unless both are numeric."""
    width = validate_dimension(video.get("width"), "width", file_path)
    height = validate_dimension(video.get("height"), "height", file_path)
    if width is None or height is None:
        return ""
    return f"{width}x{height}"


def join_audio(audio_streams: list[dict]) -> tuple[str, str]:
    """Join audio codecs and languages, one segment per stream.

    Returns:
        Tuple of (AudioCodec, AudioLangs) with equal segment counts.
    """
    codecs = [as_text(s.get("codec_name")) for s in audio_streams]
    languages = [stream_language(s) for s in audio_streams]
    return AUDIO_SEPARATOR.join(codecs), AUDIO_SEPARATOR.join(languages)


def build_record(
    path: Path,
    data: dict[str, Any],
    *,
    file_size: int | None = None,
) -> ExtractionResult:
    """Build a record from an already-parsed probe document.

    Args:
        path: Path of the probed file.
        data: Parsed ffprobe JSON object.
        file_size: On-disk size used when format.size is missing.

    Returns:
        ExtractionResult with a record or a skip reason.
    """
    file_path = str(path)

    format_info = data.get("format")
    if not isinstance(format_info, dict):
        return _skip(FailureKind.MISSING_FORMAT, "no format block in probe output")

    streams = data.get("streams")
    video_streams = streams_of_type(streams, "video")
    if not video_streams:
        return _skip(FailureKind.MISSING_VIDEO_STREAM, "no video stream found")
    video = video_streams[0]
    if len(video_streams) > 1:
        logger.debug(
            "%d video streams in %s, using the first", len(video_streams), file_path
        )

    audio_codec, audio_langs = join_audio(streams_of_type(streams, "audio"))

    size_bytes = parse_int(format_info.get("size"))
    if size_bytes is None:
        size_bytes = file_size

    record = InventoryRecord(
        path=file_path,
        filename=path.name,
        container=as_text(format_info.get("format_name")),
        duration_min=minutes_from_seconds(parse_float(format_info.get("duration"))),
        size_mb=mib_from_bytes(size_bytes),
        video_codec=as_text(video.get("codec_name")),
        audio_codec=audio_codec,
        audio_langs=audio_langs,
        resolution=format_resolution(video, file_path),
        sar=as_text(video.get("sample_aspect_ratio")),
        dar=as_text(video.get("display_aspect_ratio")),
    )
    return ExtractionResult(record=record)


def extract_record(
    path: Path,
    document: str,
    *,
    file_size: int | None = None,
) -> ExtractionResult:
    """Parse a raw probe document and build a record from it.

    Args:
        path: Path of the probed file.
        document: Raw JSON text produced by the prober.
        file_size: On-disk size used when format.size is missing.

    Returns:
        ExtractionResult with a record, or a skip reason of PARSE_ERROR,
        MISSING_FORMAT, or MISSING_VIDEO_STREAM.
    """
    data = parse_document(document)
    if data is None:
        return _skip(FailureKind.PARSE_ERROR, "probe output is not a JSON object")
    return build_record(path, data, file_size=file_size)

"""Shared test fixtures for Video Inventory."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of the user's config file and VINV_* variables."""
    import os

    for name in list(os.environ):
        if name.startswith("VINV_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("VINV_CONFIG_PATH", str(tmp_path / "no-such-config.toml"))


@pytest.fixture
def ffprobe_fixtures_dir() -> Path:
    """Return the path to the canned ffprobe documents."""
    return FIXTURES_DIR / "ffprobe"


@pytest.fixture
def load_ffprobe_fixture(ffprobe_fixtures_dir: Path):
    """Return a loader for canned ffprobe documents as raw JSON text."""

    def _load(name: str) -> str:
        return (ffprobe_fixtures_dir / f"{name}.json").read_text(encoding="utf-8")

    return _load


def make_document(
    *,
    video_codec: str | None = "h264",
    audio: list[tuple[str, str | None]] | None = None,
    duration: str | None = "125.4",
    size: str | None = "1048576000",
    format_name: str = "matroska,webm",
    width: int | str | None = 1920,
    height: int | str | None = 1080,
) -> dict:
    """Build an ffprobe-shaped document.

    Args:
        video_codec: Codec of the single video stream, or None for no video.
        audio: (codec, language) pairs; language None means untagged.
    """
    streams: list[dict] = []
    if video_codec is not None:
        video: dict = {
            "codec_type": "video",
            "codec_name": video_codec,
            "sample_aspect_ratio": "1:1",
            "display_aspect_ratio": "16:9",
        }
        if width is not None:
            video["width"] = width
        if height is not None:
            video["height"] = height
        streams.append(video)
    for codec, language in audio or []:
        stream: dict = {"codec_type": "audio", "codec_name": codec}
        if language is not None:
            stream["tags"] = {"language": language}
        streams.append(stream)

    format_block: dict = {"format_name": format_name}
    if duration is not None:
        format_block["duration"] = duration
    if size is not None:
        format_block["size"] = size
    return {"streams": streams, "format": format_block}


@pytest.fixture
def document_factory():
    """Return make_document for building ffprobe documents in tests."""
    return make_document


@pytest.fixture
def media_tree(tmp_path: Path) -> Path:
    """Create a small directory tree of (empty) media files.

    Layout:
        media/b_show.mp4
        media/a_movie.MKV
        media/notes.txt
        media/season1/ep1.mkv
        media/season1/ep2.avi
    """
    root = tmp_path / "media"
    (root / "season1").mkdir(parents=True)
    for name in ["b_show.mp4", "a_movie.MKV", "notes.txt"]:
        (root / name).write_bytes(b"\0" * 16)
    for name in ["ep1.mkv", "ep2.avi"]:
        (root / "season1" / name).write_bytes(b"\0" * 16)
    return root


@pytest.fixture
def sample_record():
    """Return a typical InventoryRecord."""
    from vinv.domain import InventoryRecord

    return InventoryRecord(
        path="/media/movie.mkv",
        filename="movie.mkv",
        container="matroska,webm",
        duration_min=2.09,
        size_mb=1000.0,
        video_codec="h264",
        audio_codec="aac;ac3",
        audio_langs="eng;jpn",
        resolution="1920x1080",
        sar="1:1",
        dar="16:9",
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by a test (including via the CLI)."""
    import logging

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)

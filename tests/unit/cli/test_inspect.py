"""Tests for the inspect command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vinv.cli import main
from vinv.cli.exit_codes import ExitCode
from vinv.domain import FailureKind
from vinv.introspector import ProbeOutput, StubProbeAdapter


@pytest.fixture
def movie(tmp_path: Path) -> Path:
    path = tmp_path / "movie.mkv"
    path.write_bytes(b"\0")
    return path


class TestInspectCommand:
    def test_human(self, tmp_path, movie, load_ffprobe_fixture) -> None:
        stub = StubProbeAdapter({"movie.mkv": load_ffprobe_fixture("h264_two_audio")})
        result = CliRunner().invoke(main, ["inspect", str(movie)], obj={"prober": stub})

        assert result.exit_code == 0, result.output
        assert "VideoCodec" in result.output
        assert "h264" in result.output
        assert "650.0" in result.output

    def test_json(self, movie, load_ffprobe_fixture) -> None:
        stub = StubProbeAdapter({"movie.mkv": load_ffprobe_fixture("h264_two_audio")})
        result = CliRunner().invoke(
            main,
            ["--log-level", "error", "inspect", "--format", "json", str(movie)],
            obj={"prober": stub},
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["DurationMin"] == 2.09
        assert data["SizeMB"] == 1000.0
        assert data["EstSizeH265MB"] == 650.0
        assert data["AudioLangs"] == "eng;jpn"

    def test_raw(self, movie) -> None:
        stub = StubProbeAdapter({"movie.mkv": '{"format": {}}'})
        result = CliRunner().invoke(
            main,
            ["--log-level", "error", "inspect", "--raw", str(movie)],
            obj={"prober": stub},
        )
        assert result.output.strip() == '{"format": {}}'

    def test_missing_file(self, tmp_path) -> None:
        result = CliRunner().invoke(main, ["inspect", str(tmp_path / "nope.mkv")])
        assert result.exit_code == ExitCode.TARGET_NOT_FOUND

    def test_skipped_file_is_parse_error(self, movie, load_ffprobe_fixture) -> None:
        stub = StubProbeAdapter({"movie.mkv": load_ffprobe_fixture("audio_only")})
        result = CliRunner().invoke(main, ["inspect", str(movie)], obj={"prober": stub})

        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "MissingVideoStream" in result.output

    def test_ffprobe_unavailable(self, movie) -> None:
        stub = StubProbeAdapter(
            {"movie.mkv": ProbeOutput(None, "gone", FailureKind.PROBE_UNAVAILABLE)}
        )
        result = CliRunner().invoke(main, ["inspect", str(movie)], obj={"prober": stub})
        assert result.exit_code == ExitCode.FFPROBE_NOT_FOUND

    def test_ffprobe_not_installed(self, movie, tmp_path) -> None:
        result = CliRunner().invoke(
            main,
            ["inspect", str(movie)],
            env={"VINV_FFPROBE_PATH": str(tmp_path / "none" / "ffprobe-missing")},
        )
        assert result.exit_code == ExitCode.FFPROBE_NOT_FOUND

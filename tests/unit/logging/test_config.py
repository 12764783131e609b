"""Tests for configure_logging and JSONFormatter."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from vinv.config.models import LoggingConfig
from vinv.logging import JSONFormatter, configure_logging, file_context


class TestConfigureLogging:
    def test_text_file_with_file_tag(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "vinv.log"
        configure_logging(LoggingConfig(level="debug", file=log_file))

        with file_context(12, "/media/x.mkv"):
            logging.getLogger("vinv.test").info("probing")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "[F0012] vinv.test - INFO - probing" in text

    def test_level_applied(self) -> None:
        configure_logging(LoggingConfig(level="warning"))
        assert logging.getLogger().level == logging.WARNING

    def test_stderr_fallback_without_file(self) -> None:
        configure_logging(LoggingConfig())
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)


class TestJSONFormatter:
    def test_fields(self) -> None:
        record = logging.LogRecord(
            "vinv.x", logging.WARNING, __file__, 1, "hello %s", ("world",), None
        )
        record.file_index = 3
        record.file_path = "/m/a.mkv"
        record.command = "ffprobe"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["message"] == "hello world"
        assert entry["logger"] == "vinv.x"
        assert entry["context"] == {
            "file_index": 3,
            "file_path": "/m/a.mkv",
            "command": "ffprobe",
        }

    def test_file_accepts_undecodable_names(self, tmp_path: Path) -> None:
        log_file = tmp_path / "vinv.log"
        configure_logging(LoggingConfig(file=log_file))

        logging.getLogger("vinv.test").warning("skipping %s", "/m/\udcff.mkv")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "skipping /m/\\udcff.mkv" in log_file.read_text(encoding="utf-8")

    def test_unopenable_file_falls_back_to_stderr(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        configure_logging(LoggingConfig(file=blocker / "vinv.log"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)

"""Tests for logging_factory module."""

from pathlib import Path

import pytest

from vinv.config.logging_factory import build_logging_config
from vinv.config.models import LoggingConfig


class TestBuildLoggingConfig:
    def test_no_overrides_keeps_base(self) -> None:
        base = LoggingConfig(level="warning", format="json")
        result = build_logging_config(base)
        assert result == base

    def test_overrides(self, tmp_path: Path) -> None:
        base = LoggingConfig()
        result = build_logging_config(
            base, level="debug", file=tmp_path / "v.log", format="json"
        )
        assert result.level == "debug"
        assert result.file == tmp_path / "v.log"
        assert result.format == "json"

    def test_invalid_override(self) -> None:
        with pytest.raises(ValueError):
            build_logging_config(LoggingConfig(), level="loud")

    def test_base_file_kept_when_not_overridden(self, tmp_path: Path) -> None:
        base = LoggingConfig(file=tmp_path / "base.log")
        assert build_logging_config(base, level="error").file == tmp_path / "base.log"

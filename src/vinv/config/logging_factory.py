"""Merging of group-level CLI logging options into LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from vinv.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> LoggingConfig:
    """Return base with every non-None CLI option applied on top.

    Raises:
        ValueError: If an override is not a valid level or format.
    """
    overrides = {
        name: value
        for name, value in (("level", level), ("file", file), ("format", format))
        if value is not None
    }
    # replace() re-runs __post_init__, so overrides are validated
    return replace(base, **overrides)


def configure_logging_from_cli(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> None:
    """Apply CLI overrides to a base config and configure logging."""
    from vinv.logging import configure_logging

    configure_logging(
        build_logging_config(base, level=level, file=file, format=format)
    )

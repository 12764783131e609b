"""Configuration builder with explicit layering.

ConfigBuilder composes VinvConfig from several ConfigSources. Later sources
override earlier ones for every value they specify.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from vinv.config.env import EnvReader
from vinv.config.models import (
    LoggingConfig,
    OutputConfig,
    ScanConfig,
    ToolPathsConfig,
    VinvConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None means "not specified in this source" and never overrides a value
    from a lower-precedence source.
    """

    # Tools
    ffprobe_path: Path | None = None
    probe_timeout: float | None = None

    # Scan
    scan_roots: list[Path] | None = None
    scan_extensions: list[str] | None = None
    scan_workers: int | None = None
    scan_limit: int | None = None
    scan_follow_symlinks: bool | None = None

    # Output
    csv_path: Path | None = None
    csv_mode: str | None = None
    database_path: Path | None = None
    log_dir: Path | None = None
    debug_log: bool | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None


class ConfigBuilder:
    """Builds VinvConfig by layering ConfigSources with precedence.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._sources: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply a source, overriding values it specifies.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value it sets (file, env, cli).
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._sources[field_obj.name] = source_name

    def source_of(self, key: str) -> str:
        """Return where a value came from ("default" if never set)."""
        return self._sources.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> VinvConfig:
        """Build the final VinvConfig with defaults for unset values.

        Raises:
            ValueError: If any value fails model validation.
        """
        tools_defaults = ToolPathsConfig()
        tools = ToolPathsConfig(
            ffprobe=self._get("ffprobe_path", None),
            probe_timeout=float(
                self._get("probe_timeout", tools_defaults.probe_timeout)
            ),
        )

        scan_defaults = ScanConfig()
        scan = ScanConfig(
            roots=list(self._get("scan_roots", scan_defaults.roots)),
            extensions=list(self._get("scan_extensions", scan_defaults.extensions)),
            workers=self._get("scan_workers", scan_defaults.workers),
            limit=self._get("scan_limit", scan_defaults.limit),
            follow_symlinks=self._get(
                "scan_follow_symlinks", scan_defaults.follow_symlinks
            ),
        )

        output_defaults = OutputConfig()
        output = OutputConfig(
            csv_path=self._get("csv_path", output_defaults.csv_path),
            csv_mode=self._get("csv_mode", output_defaults.csv_mode),
            database_path=self._get("database_path", output_defaults.database_path),
            log_dir=self._get("log_dir", output_defaults.log_dir),
            debug_log=self._get("debug_log", output_defaults.debug_log),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
        )

        return VinvConfig(
            scan=scan,
            tools=tools,
            output=output,
            logging=logging_config,
        )


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def _path_list(value: Any) -> list[Path] | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    return [Path(v).expanduser() for v in value if str(v).strip()]


def _str_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [part for part in value.replace(",", " ").split() if part]
    return [str(v) for v in value]


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed config file.

    Args:
        file_config: Parsed TOML dictionary.

    Returns:
        ConfigSource with values from the file.
    """
    scan = file_config.get("scan", {})
    tools = file_config.get("tools", {})
    output = file_config.get("output", {})
    logging_conf = file_config.get("logging", {})

    return ConfigSource(
        # Tools
        ffprobe_path=_optional_path(tools.get("ffprobe")),
        probe_timeout=tools.get("probe_timeout"),
        # Scan
        scan_roots=_path_list(scan.get("roots")),
        scan_extensions=_str_list(scan.get("extensions")),
        scan_workers=scan.get("workers"),
        scan_limit=scan.get("limit"),
        scan_follow_symlinks=scan.get("follow_symlinks"),
        # Output
        csv_path=_optional_path(output.get("csv_path")),
        csv_mode=output.get("csv_mode"),
        database_path=_optional_path(output.get("database_path")),
        log_dir=_optional_path(output.get("log_dir")),
        debug_log=output.get("debug_log"),
        # Logging
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from VINV_* environment variables."""
    return ConfigSource(
        # Tools
        ffprobe_path=reader.get_path("VINV_FFPROBE_PATH"),
        probe_timeout=reader.get_float("VINV_PROBE_TIMEOUT"),
        # Scan
        scan_roots=reader.get_path_list("VINV_SCAN_ROOTS"),
        scan_extensions=_str_list(reader.get_str("VINV_EXTENSIONS")),
        scan_workers=reader.get_int("VINV_WORKERS"),
        scan_limit=None,  # No env var
        scan_follow_symlinks=None,  # No env var
        # Output
        csv_path=reader.get_path("VINV_CSV_PATH"),
        csv_mode=reader.get_str("VINV_CSV_MODE"),
        database_path=reader.get_path("VINV_DATABASE_PATH"),
        log_dir=reader.get_path("VINV_LOG_DIR"),
        debug_log=reader.get_bool("VINV_DEBUG_LOG"),
        # Logging
        logging_level=reader.get_str("VINV_LOG_LEVEL"),
        logging_file=reader.get_path("VINV_LOG_FILE"),
        logging_format=reader.get_str("VINV_LOG_FORMAT"),
    )

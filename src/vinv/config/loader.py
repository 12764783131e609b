"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed as a ConfigSource)
2. Environment variables (VINV_*)
3. Config file (~/.vinv/config.toml)
4. Default values

Environment variables:
- VINV_CONFIG_PATH: Path to config file (overrides default location)
- VINV_FFPROBE_PATH: Path to ffprobe executable
- VINV_PROBE_TIMEOUT: Seconds allowed per ffprobe invocation
- VINV_SCAN_ROOTS: Root directories, separated by os.pathsep
- VINV_EXTENSIONS: Accepted extensions, comma or space separated
- VINV_WORKERS: Parallel probe workers
- VINV_CSV_PATH / VINV_CSV_MODE: Tabular output file and mode
- VINV_DATABASE_PATH: SQLite output file
- VINV_LOG_DIR: Directory for summary/error/debug run logs
- VINV_DEBUG_LOG: Write raw probe documents to the debug log
- VINV_LOG_LEVEL / VINV_LOG_FILE / VINV_LOG_FORMAT: Application logging
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from vinv.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from vinv.config.env import EnvReader
from vinv.config.models import VinvConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".vinv"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(Exception):
    """Raised when configuration cannot be read or is invalid."""

    pass


class ConfigMissingError(ConfigError):
    """Raised when required configuration is absent."""

    pass


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by the VINV_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("VINV_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, required: bool = False) -> dict:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses the default location.
        required: If True, a missing file raises ConfigMissingError; otherwise
            it yields an empty dict.

    Returns:
        Parsed configuration dict.

    Raises:
        ConfigMissingError: If required and the file does not exist.
        ConfigError: If the file cannot be read or parsed.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        if required:
            raise ConfigMissingError(f"Config file not found: {path}")
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"TOML parse error in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def build_config(
    file_config: dict[str, Any],
    cli_source: ConfigSource | None = None,
    env_reader: EnvReader | None = None,
) -> tuple[VinvConfig, ConfigBuilder]:
    """Layer file, environment, and CLI values into a VinvConfig.

    Returns:
        Tuple of (config, builder); the builder reports value sources.

    Raises:
        ConfigError: If a value fails validation.
    """
    reader = env_reader or EnvReader()

    builder = ConfigBuilder()
    try:
        builder.apply(source_from_file(file_config), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        if cli_source is not None:
            builder.apply(cli_source, source_name="cli")
        return builder.build(), builder
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def validate_config(config: VinvConfig) -> list[str]:
    """Check the settings a scan cannot run without.

    Args:
        config: The configuration to validate.

    Returns:
        List of error strings. Empty list means a scan can start.
    """
    errors: list[str] = []

    if not config.scan.roots:
        errors.append(
            "No scan roots configured (pass ROOTS, set [scan] roots, "
            "or VINV_SCAN_ROOTS)"
        )
    if not config.scan.normalized_extensions:
        errors.append("No file extensions configured ([scan] extensions)")

    return errors


def require_scan_config(config: VinvConfig) -> None:
    """Raise ConfigMissingError if validate_config reports problems."""
    errors = validate_config(config)
    if errors:
        raise ConfigMissingError("; ".join(errors))

"""Configuration management for Video Inventory.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (VINV_*)
3. Config file (~/.vinv/config.toml)
4. Default values (lowest priority)
"""

from vinv.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from vinv.config.env import EnvReader
from vinv.config.loader import (
    ConfigError,
    ConfigMissingError,
    build_config,
    get_default_config_path,
    load_config_file,
    require_scan_config,
    validate_config,
)
from vinv.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from vinv.config.models import (
    LoggingConfig,
    OutputConfig,
    ScanConfig,
    ToolPathsConfig,
    VinvConfig,
)

__all__ = [
    # Models
    "LoggingConfig",
    "OutputConfig",
    "ScanConfig",
    "ToolPathsConfig",
    "VinvConfig",
    # Loader
    "ConfigError",
    "ConfigMissingError",
    "build_config",
    "get_default_config_path",
    "load_config_file",
    "require_scan_config",
    "validate_config",
    # Layering
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    "configure_logging_from_cli",
]

"""CLI module for Video Inventory."""

import logging
import sys
from pathlib import Path

import click

from vinv.cli.exit_codes import ExitCode
from vinv.config import (
    ConfigError,
    build_config,
    configure_logging_from_cli,
    load_config_file,
)

logger = logging.getLogger(__name__)


def _load_base_config(config_path: Path | None):
    """Load the config file and build the non-CLI configuration.

    Exits with CONFIG_ERROR when the file is missing (if given explicitly),
    unreadable, or contains invalid values.
    """
    try:
        file_config = load_config_file(config_path, required=config_path is not None)
        config, _ = build_config(file_config)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)
    return file_config, config


@click.group()
@click.version_option(package_name="vinv")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: $VINV_CONFIG_PATH or ~/.vinv/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Video Inventory - catalogue video files with ffprobe."""
    ctx.ensure_object(dict)

    file_config, config = _load_base_config(config_path)
    ctx.obj["file_config"] = file_config
    ctx.obj["config"] = config

    try:
        configure_logging_from_cli(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        click.echo(f"Error: Invalid logging configuration: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    logger.debug("vinv starting: command=%s", ctx.invoked_subcommand)


# Defer import to avoid circular dependency
def _register_commands():
    from vinv.cli.inspect import inspect_command
    from vinv.cli.report import report_command
    from vinv.cli.scan import scan_command

    main.add_command(scan_command)
    main.add_command(inspect_command)
    main.add_command(report_command)


_register_commands()

"""CLI inspect command: probe one file and show its inventory record."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from vinv.cli.exit_codes import ExitCode
from vinv.domain import FailureKind, InventoryRecord
from vinv.introspector import FFprobeAdapter, extract_record
from vinv.inventory import h265_ratio

logger = logging.getLogger(__name__)


def record_to_dict(record: InventoryRecord) -> dict[str, Any]:
    """Return the record as column name -> value, including the estimate."""
    data: dict[str, Any] = dict(record.as_row())
    data["EstSizeH265MB"] = record.est_size_h265_mb
    return data


def format_human(record: InventoryRecord) -> str:
    """Format a record for terminal display."""
    lines = [f"File: {record.path}", ""]
    width = max(len(k) for k in record_to_dict(record))
    for key, value in record_to_dict(record).items():
        if key == "Path":
            continue
        lines.append(f"  {key:<{width}}  {value if value != '' else '-'}")
    lines.append("")
    lines.append(
        f"  H.265 ratio for {record.video_codec or 'unknown codec'}: "
        f"{h265_ratio(record.video_codec)}"
    )
    return "\n".join(lines)


@click.command("inspect")
@click.argument("file", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.option("--raw", is_flag=True, help="Print the raw ffprobe document instead.")
@click.pass_context
def inspect_command(
    ctx: click.Context,
    file: Path,
    output_format: str,
    raw: bool,
) -> None:
    """Probe a single media file and show the record an inventory run stores.

    FILE is the path to the media file to inspect.
    """
    obj = ctx.obj or {}

    if not file.exists():
        click.echo(f"Error: File not found: {file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    prober = obj.get("prober")
    if prober is None:
        config = obj.get("config")
        tools = config.tools if config is not None else None
        adapter = FFprobeAdapter(
            ffprobe_path=tools.ffprobe if tools else None,
            timeout=tools.probe_timeout if tools else 60,
        )
        if not adapter.is_available():
            click.echo(
                "Error: ffprobe is not installed or not in PATH.\n"
                "Install ffmpeg or set [tools] ffprobe in the config file.",
                err=True,
            )
            sys.exit(ExitCode.FFPROBE_NOT_FOUND)
        prober = adapter

    output = prober.probe(file)
    if output.failure == FailureKind.PROBE_UNAVAILABLE:
        click.echo(f"Error: Could not run ffprobe: {output.diagnostics}", err=True)
        sys.exit(ExitCode.FFPROBE_NOT_FOUND)
    if output.document is None:
        click.echo(f"Error: ffprobe produced no output for {file}", err=True)
        if output.diagnostics:
            click.echo(f"Reason: {output.diagnostics}", err=True)
        sys.exit(ExitCode.PARSE_ERROR)

    if raw:
        click.echo(output.document)
        return

    try:
        file_size = file.stat().st_size
    except OSError:
        file_size = None
    result = extract_record(file, output.document, file_size=file_size)

    record = result.record
    if record is None:
        reason = result.skip_reason or FailureKind.PARSE_ERROR
        click.echo(
            f"Error: {file} would be skipped: {reason.value}"
            + (f" ({result.detail})" if result.detail else ""),
            err=True,
        )
        sys.exit(ExitCode.PARSE_ERROR)

    if output_format == "json":
        data = record_to_dict(record)
        if output.diagnostics:
            data["diagnostics"] = output.diagnostics
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(format_human(record))
        if output.diagnostics:
            click.echo(f"\nffprobe warnings: {output.diagnostics}", err=True)

"""CLI report command: per-codec totals from the inventory database."""

import logging
import sys
from pathlib import Path

import click

from vinv.cli.exit_codes import ExitCode
from vinv.inventory import PersistenceError, load_codec_summary
from vinv.reports import ReportFormat, render_report, write_report

logger = logging.getLogger(__name__)


@click.command("report")
@click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Inventory database (default: [output] database_path).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "csv", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write to file instead of stdout.",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite existing output file.",
)
@click.pass_context
def report_command(
    ctx: click.Context,
    db_path: Path | None,
    output_format: str,
    output_path: Path | None,
    force: bool,
) -> None:
    """Summarize the inventory by video codec with H.265 size estimates.

    Examples:

        vinv report

        vinv report --db movies.db --format csv --output codecs.csv
    """
    if db_path is None:
        config = (ctx.obj or {}).get("config")
        db_path = (
            config.output.database_path
            if config is not None
            else Path("video_inventory.db")
        )

    try:
        rows = load_codec_summary(db_path)
    except PersistenceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.DATABASE_ERROR)

    content = render_report(rows, ReportFormat(output_format.casefold()))

    if output_path:
        try:
            write_report(content, output_path, force=force)
            click.echo(f"Report written to {output_path}")
        except FileExistsError as e:
            raise click.ClickException(str(e))
        except OSError as e:
            raise click.ClickException(f"Failed to write report: {e}")
    else:
        click.echo(content)

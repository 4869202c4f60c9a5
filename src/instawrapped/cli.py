"""Command-line interface for instawrapped."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.table import Table

from instawrapped import __version__
from instawrapped.archive import ArchiveError
from instawrapped.config import Config, settings
from instawrapped.extractor.models import CreatorStats, ExtractionResult, RankedEntry
from instawrapped.observability import configure_logging
from instawrapped.pipeline import extract_sync
from instawrapped.utils import format_number, truncate_text

console = Console()
logger = structlog.get_logger(__name__)

NAME_WIDTH = 32


def _load_config(config_path: Optional[Path]) -> Config:
    if config_path is not None:
        return Config.from_yaml(config_path)
    return settings.model_copy(deep=True)


def _ranking(entries: tuple[RankedEntry, ...]) -> str:
    if not entries:
        return "-"
    return ", ".join(f"{truncate_text(entry.name, NAME_WIDTH)} ({format_number(entry.count)})" for entry in entries)


def _creator(stats: CreatorStats) -> str:
    line = format_number(stats.total)
    if stats.top_creator:
        line += f" | top: {truncate_text(stats.top_creator, NAME_WIDTH * 2)} ({format_number(stats.top_creator_count)})"
    return line


def render_summary(result: ExtractionResult) -> Table:
    """Build a rich table summarizing an extraction result."""
    table = Table(title="Your year on Instagram", show_header=False)
    table.add_column("Metric", style="bold cyan")
    table.add_column("Value")

    age = result.account_age
    table.add_row("Account age", f"{age.years}y {age.months}m" if age else "-")
    content = result.content_created
    table.add_row(
        "Content created",
        f"{format_number(content.posts)} posts, {format_number(content.reels)} reels, "
        f"{format_number(content.stories)} stories",
    )
    table.add_row("Likes", _creator(result.likes))
    table.add_row("Comments", _creator(result.comments))
    table.add_row("Top chat partners", _ranking(result.top_chat_partners))
    table.add_row("Shared most to", _ranking(result.top_shared_to))
    table.add_row("Received most from", _ranking(result.top_received_from))
    response = result.avg_response_time
    table.add_row("Avg response time", f"{response.hours}h {response.minutes}m" if response else "-")
    table.add_row("Topics", " ".join(f"{t.emoji} {t.name}" for t in result.topics) or "-")
    return table


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, path_type=Path), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], log_level: Optional[str]) -> None:
    """instawrapped - turn a data export archive into year-in-review stats."""
    ctx.ensure_object(dict)
    config = _load_config(config_path)
    if log_level:
        config.monitoring.log_level = log_level.upper()
    configure_logging(config.monitoring)
    ctx.obj["config"] = config


@cli.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
@click.pass_context
def extract(ctx: click.Context, archive: Path, as_json: bool, indent: int) -> None:
    """Extract wrapped statistics from an export ARCHIVE (ZIP)."""
    config: Config = ctx.obj["config"]
    try:
        result = extract_sync(archive.read_bytes(), settings=config.extraction)
    except ArchiveError as e:
        logger.error("archive_unreadable", path=str(archive), error=str(e))
        click.echo(f"Error: could not process {archive}: {e}", err=True)
        sys.exit(2)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=indent, ensure_ascii=False))
    else:
        console.print(render_summary(result))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

"""CLI interface for wareader."""

from __future__ import annotations

import logging
import sys
from collections import Counter
from pathlib import Path

import click

from . import __version__
from .config import OUTPUT_DIR
from .errors import ChatParseError
from .models import ParsedChat


def _setup_logging(verbose: bool) -> None:
    # stdout carries command output, logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse(path: str, media_dir: Path | None = None) -> ParsedChat:
    from .importer import import_chat

    try:
        return import_chat(path, media_dir=media_dir)
    except ChatParseError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(version=__version__, prog_name="wareader")
@click.option("-v", "--verbose", is_flag=True, help="Log parser diagnostics to stderr")
def cli(verbose: bool):
    """wareader: Read WhatsApp chat exports.

    Parses the .txt transcript (or the .zip archive with media) that
    WhatsApp produces with "Export Chat" into typed messages.
    """
    _setup_logging(verbose)


@cli.command("inspect")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def inspect_cmd(path: str):
    """Show a summary of a chat export.

    Example:
        wareader inspect "~/Downloads/WhatsApp Chat with Jane.zip"
    """
    chat = _parse(path)
    meta = chat.metadata
    types = Counter(m.type.value for m in chat.messages)
    linked = sum(1 for m in chat.messages if m.media_ref)

    click.echo()
    click.echo(click.style(meta.title, bold=True))
    click.echo(f"  Participants:   {', '.join(meta.participants) or '-'}")
    click.echo(f"  Messages:       {meta.message_count:,}")
    for name, count in types.most_common():
        click.echo(f"    {name}: {count:,}")
    if linked:
        click.echo(f"  Linked media:   {linked:,}")

    dated = [m.timestamp for m in chat.messages if m.timestamp is not None]
    if dated:
        click.echo(
            f"  Date range:     {min(dated):%Y-%m-%d} → {max(dated):%Y-%m-%d}"
        )

    if chat.unresolved_timestamps:
        click.echo(
            click.style(
                f"  Warning: {chat.unresolved_timestamps} message(s) with an "
                "unrecognised date format",
                fg="yellow",
            )
        )
    if chat.ambiguous_identity:
        click.echo(
            click.style(
                "  Warning: some anonymized senders could not be identified "
                "and were attributed to you",
                fg="yellow",
            )
        )
    click.echo()


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=OUTPUT_DIR,
    show_default=True,
    help="Directory for the JSON file",
)
@click.option(
    "--media-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Extract attachments here and reference them by file:// URI",
)
def export(path: str, output_dir: Path, media_dir: Path | None):
    """Parse a chat export and write it as JSON.

    Example:
        wareader export chat.zip -o exports --media-dir exports/media
    """
    from .importer import write_json

    chat = _parse(path, media_dir=media_dir)
    out_path = write_json(chat, output_dir)

    click.echo(click.style("Export complete!", fg="green", bold=True))
    click.echo(f"  Messages: {chat.metadata.message_count:,}")
    click.echo(f"  Written:  {out_path}")

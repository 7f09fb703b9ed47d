"""Command line interface for invisible_overlay."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .export import DEFAULT_SUFFIX
from .overlay import (
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_GAP,
    DEFAULT_MARGIN,
    DEFAULT_OPACITY,
    OverlaySettings,
)
from .session import Notification, OverlaySession

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _version_callback(ctx: click.Context, param: click.Option, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"invisible_overlay {__version__}")
    ctx.exit()


def _read_text(text: Optional[str], text_file: Optional[Path]) -> str:
    if text is not None and text_file is not None:
        raise click.UsageError("Use either --text or --text-file, not both.")
    if text is not None:
        return text
    if text_file is not None:
        return text_file.read_text(encoding="utf-8")
    stdin = click.get_text_stream("stdin")
    if stdin.isatty():
        return ""
    return stdin.read()


def _show(notification: Notification) -> None:
    if notification.is_error:
        raise click.ClickException(notification.message)
    click.secho(notification.message, fg="green")


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Overlay near-invisible, machine-readable text onto the first page of a PDF.",
)
@click.option(
    "--version",
    "show_version",
    is_flag=True,
    callback=_version_callback,
    expose_value=False,
    is_eager=True,
    help="Show the invisible_overlay version and exit.",
)
@click.option("--pdf", "pdf_path", type=click.Path(dir_okay=False, path_type=Path), required=True, help="Source PDF file.")
@click.option("--text", default=None, help="Text to overlay. Read from stdin when neither --text nor --text-file is given.")
@click.option("--text-file", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Read the overlay text from this file.")
@click.option("--out", "out_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output PDF path. Defaults to <name>Updated.pdf beside the source.")
@click.option("--suffix", default=DEFAULT_SUFFIX, show_default=True, help="Suffix appended to the source name for the output file.")
@click.option("--font-size", default=DEFAULT_FONT_SIZE, show_default=True, type=click.FloatRange(1.0, 200.0), help="Overlay font size in points.")
@click.option("--margin", default=DEFAULT_MARGIN, show_default=True, type=click.FloatRange(0.0, 1000.0), help="Left and top margin in points.")
@click.option("--line-gap", default=DEFAULT_LINE_GAP, show_default=True, type=click.FloatRange(0.0, 200.0), help="Extra space between lines in points.")
@click.option("--opacity", default=DEFAULT_OPACITY, show_default=True, type=click.FloatRange(0.0, 1.0), help="Fill opacity of the overlay text.")
@click.option("--collapse-lines", is_flag=True, help="Strip line breaks before splitting, drawing the text as a single line.")
@click.option("--visible-qa", is_flag=True, help="Render the text visible in light gray for QA.")
@click.option("--debug-overlay", is_flag=True, help="Draw translucent boxes around each overlay line.")
@click.option("--dump-debug-json", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write overlay line placement to JSON.")
@click.option("--verbose", is_flag=True, help="Enable verbose logging.")
def main(
    pdf_path: Path,
    text: Optional[str],
    text_file: Optional[Path],
    out_path: Optional[Path],
    suffix: str,
    font_size: float,
    margin: float,
    line_gap: float,
    opacity: float,
    collapse_lines: bool,
    visible_qa: bool,
    debug_overlay: bool,
    dump_debug_json: Optional[Path],
    verbose: bool,
) -> None:
    """Overlay hidden text onto a PDF and save the merged copy."""

    _setup_logging(verbose)
    logging.info("Starting invisible_overlay for %s", pdf_path)

    settings = OverlaySettings(
        font_size=font_size,
        margin=margin,
        line_gap=line_gap,
        opacity=opacity,
        preserve_line_breaks=not collapse_lines,
        visible_qa=visible_qa,
        debug_overlay=debug_overlay,
        dump_debug_json=dump_debug_json,
    )
    session = OverlaySession(text=_read_text(text, text_file), suffix=suffix, settings=settings)
    if pdf_path.is_file():
        session.select_file(pdf_path)
    if out_path is not None:
        session.output_dir = out_path.parent
        session.output_name = out_path.name

    notification = asyncio.run(session.process())
    _show(notification)

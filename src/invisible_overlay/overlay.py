"""Build the near-invisible text page that gets stamped onto the source PDF."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import fitz  # type: ignore

from .debug import draw_run_outline, measure_run
from .geometry import Color, PageSize, TextRun, layout_lines, to_page_point
from .text_utils import prepare_lines

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 12.0
DEFAULT_MARGIN = 50.0
DEFAULT_LINE_GAP = 5.0
DEFAULT_COLOR: Color = (0.001, 0.8, 0.8)
DEFAULT_OPACITY = 0.001
DEFAULT_FONT = "helv"

_QA_COLOR: Color = (0.6, 0.6, 0.6)


@dataclass
class OverlaySettings:
    font_size: float = DEFAULT_FONT_SIZE
    margin: float = DEFAULT_MARGIN
    line_gap: float = DEFAULT_LINE_GAP
    color: Color = DEFAULT_COLOR
    opacity: float = DEFAULT_OPACITY
    font_name: str = DEFAULT_FONT
    preserve_line_breaks: bool = True
    visible_qa: bool = False
    debug_overlay: bool = False
    dump_debug_json: Optional[Path] = None


@dataclass
class OverlayDocument:
    """A one-page document holding only the overlay text."""

    doc: fitz.Document
    page_size: PageSize
    runs: List[TextRun] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    @property
    def has_text(self) -> bool:
        return any(run.text for run in self.runs)

    def close(self) -> None:
        if not self.doc.is_closed:
            self.doc.close()

    def __enter__(self) -> "OverlayDocument":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_overlay(
    text: str,
    page_size: PageSize,
    settings: Optional[OverlaySettings] = None,
) -> OverlayDocument:
    """Draw every line of ``text`` onto a fresh page of ``page_size``.

    Lines run downwards from ``height - margin`` and are neither wrapped nor
    clipped, so overflowing lines end up off the page but stay in the content
    stream. A zero-area page size is accepted as is.
    """
    settings = settings or OverlaySettings()
    color, opacity = _resolve_style(settings)

    lines = prepare_lines(text, settings.preserve_line_breaks)
    runs = layout_lines(
        lines,
        page_size,
        font_size=settings.font_size,
        margin=settings.margin,
        line_gap=settings.line_gap,
        color=color,
        opacity=opacity,
    )

    if page_size.is_degenerate:
        logger.warning("Overlay page size %sx%s has no area; text will be off-canvas.", page_size.width, page_size.height)

    doc = fitz.open()
    try:
        page = _new_page(doc, page_size)
        for run in runs:
            _draw_run(page, run, settings.font_name)
        if settings.debug_overlay:
            for run, outline_color in zip(runs, _color_cycle()):
                if run.text:
                    draw_run_outline(page, run, settings.font_name, outline_color)
        if settings.dump_debug_json is not None:
            _dump_runs(runs, settings.font_name, settings.dump_debug_json)
    except Exception:
        doc.close()
        raise

    logger.info("Built overlay page %.1fx%.1f with %d line(s).", page_size.width, page_size.height, len(runs))

    return OverlayDocument(doc=doc, page_size=page_size, runs=runs)


def _new_page(doc: fitz.Document, page_size: PageSize) -> fitz.Page:
    page = doc.new_page(width=page_size.width, height=page_size.height)
    if not page_size.is_degenerate:
        return page
    # new_page swaps an empty size for Letter; write the requested box back.
    box = f"[0 0 {max(page_size.width, 0):g} {max(page_size.height, 0):g}]"
    doc.xref_set_key(page.xref, "MediaBox", box)
    return doc[page.number]


def _draw_run(page: fitz.Page, run: TextRun, font_name: str) -> None:
    if not run.text:
        # Blank lines only move the cursor.
        return
    # Flip against the page MuPDF actually built so negative y stays below the bottom edge.
    point = fitz.Point(*to_page_point(run.x, run.y, page.rect.height))
    page.insert_text(
        point,
        run.text,
        fontname=font_name,
        fontsize=run.size,
        color=run.color,
        fill_opacity=run.opacity,
        stroke_opacity=run.opacity,
        render_mode=0,
        overlay=True,
    )
    logger.debug("Drew %r at (%.1f, %.1f)", run.text, run.x, run.y)


def _resolve_style(settings: OverlaySettings) -> Tuple[Color, float]:
    if settings.visible_qa:
        return _QA_COLOR, 1.0
    return settings.color, settings.opacity


def _color_cycle() -> Iterable[Color]:
    colors = [
        (1.0, 0.2, 0.2),
        (0.2, 1.0, 0.2),
        (0.2, 0.5, 1.0),
        (1.0, 0.7, 0.2),
        (0.8, 0.2, 1.0),
    ]
    idx = 0
    while True:
        yield colors[idx % len(colors)]
        idx += 1


def _dump_runs(runs: List[TextRun], font_name: str, path: Path) -> None:
    payload: List[Dict[str, object]] = [
        {
            "text": run.text,
            "origin_pt": [run.x, run.y],
            "width_pt": measure_run(run, font_name),
            "font_size": run.size,
            "color": list(run.color),
            "opacity": run.opacity,
        }
        for run in runs
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Dumped overlay layout to %s", path)

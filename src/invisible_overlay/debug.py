"""Debug drawing helpers for visualising overlay placement."""

from __future__ import annotations

import logging
from typing import Tuple

import fitz  # type: ignore

from .geometry import Rect, TextRun, run_rect

logger = logging.getLogger(__name__)


def measure_run(run: TextRun, font_name: str) -> float:
    """Width of the run's text in points for the given base-14 font."""
    return fitz.get_text_length(run.text, fontname=font_name, fontsize=run.size)


def draw_run_outline(
    page: fitz.Page,
    run: TextRun,
    font_name: str,
    color: Tuple[float, float, float] = (0, 1, 0),
) -> Rect:
    """Draw a translucent rectangle around a text run and return it."""
    rect = run_rect(run, measure_run(run, font_name), page.rect.height)
    if rect.y1 < 0 or rect.y0 > page.rect.height:
        logger.debug("Run %r lies off the page; outline not drawn.", run.text)
        return rect
    shape = page.new_shape()
    shape.draw_rect(fitz.Rect(rect.x0, rect.y0, rect.x1, rect.y1))
    shape.finish(color=color, fill=color, fill_opacity=0.1)
    shape.commit()
    return rect

"""Geometry helpers for laying out overlay text in PDF space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class PageSize:
    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0


@dataclass
class TextRun:
    """A single drawn line; ``x``/``y`` are the baseline origin in PDF user space."""

    text: str
    x: float
    y: float
    size: float
    color: Color
    opacity: float


def layout_lines(
    lines: Iterable[str],
    page_size: PageSize,
    font_size: float,
    margin: float,
    line_gap: float,
    color: Color,
    opacity: float,
) -> List[TextRun]:
    """Place lines top to bottom starting ``margin`` below the top edge.

    Nothing is wrapped or clipped: once the cursor passes the bottom edge the
    remaining runs get negative y values.
    """
    runs: List[TextRun] = []
    y = page_size.height - margin
    for line in lines:
        runs.append(TextRun(text=line, x=margin, y=y, size=font_size, color=color, opacity=opacity))
        y -= font_size + line_gap
    return runs


def to_page_point(x: float, y: float, page_height: float) -> Tuple[float, float]:
    """Convert a bottom-left PDF point into PyMuPDF's top-left page space."""
    return x, page_height - y


def run_rect(run: TextRun, text_width: float, page_height: float) -> Rect:
    """Bounding box of a run in top-left page space (baseline to ascender)."""
    x, baseline = to_page_point(run.x, run.y, page_height)
    return Rect(x0=x, y0=baseline - run.size, x1=x + text_width, y1=baseline)

"""Stamp the overlay page onto a copy of the source document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import fitz  # type: ignore

from .geometry import PageSize
from .overlay import OverlayDocument, OverlaySettings, build_overlay

logger = logging.getLogger(__name__)


class ProcessingError(RuntimeError):
    """Raised when the source PDF cannot be parsed, overlaid or serialized."""


@dataclass
class OutputDocument:
    data: bytes
    page_sizes: List[PageSize] = field(default_factory=list)
    overlaid_pages: List[int] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.page_sizes)


def load_source(data: bytes) -> fitz.Document:
    """Open PDF bytes; reject anything that is not a PDF with at least one page."""
    if not data:
        raise ProcessingError("Source file is empty.")
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise ProcessingError(f"Source file is not a readable PDF: {exc}") from exc
    if not doc.is_pdf or doc.page_count == 0:
        doc.close()
        raise ProcessingError("Source PDF has no pages.")
    return doc


def first_page_size(source: fitz.Document) -> PageSize:
    rect = source[0].rect
    return PageSize(width=rect.width, height=rect.height)


def composite(source: fitz.Document, overlay: OverlayDocument) -> OutputDocument:
    """Copy every source page and stamp the overlay onto the index-matched page.

    The overlay holds a single page, so only page 0 receives it; later pages
    are copied through untouched even when they differ in size.
    """
    output = fitz.open()
    try:
        output.insert_pdf(source)
        page_sizes: List[PageSize] = []
        overlaid: List[int] = []
        for index in range(output.page_count):
            page = output[index]
            page_sizes.append(PageSize(width=page.rect.width, height=page.rect.height))
            if index >= overlay.page_count:
                logger.debug("Page %d: no overlay page at this index; copied as is.", index)
                continue
            if not overlay.has_text:
                logger.warning("Overlay has no printable text; page %d copied as is.", index)
                continue
            # Form XObject scaled to the target page, drawn from the origin.
            page.show_pdf_page(page.rect, overlay.doc, index, keep_proportion=False, overlay=True)
            overlaid.append(index)
            logger.debug("Page %d: overlay stamped at %.1fx%.1f.", index, page.rect.width, page.rect.height)
        data = output.tobytes(garbage=4, deflate=True)
    except Exception as exc:
        raise ProcessingError(f"Failed to composite overlay: {exc}") from exc
    finally:
        output.close()

    logger.info("Composited %d page(s); overlay on %s.", len(page_sizes), overlaid or "none")
    return OutputDocument(data=data, page_sizes=page_sizes, overlaid_pages=overlaid)


def overlay_pdf_bytes(
    source_bytes: bytes,
    text: str,
    settings: Optional[OverlaySettings] = None,
) -> OutputDocument:
    """Run the whole pipeline: parse, build the overlay, composite, serialize."""
    source = load_source(source_bytes)
    try:
        try:
            overlay = build_overlay(text, first_page_size(source), settings)
        except Exception as exc:
            raise ProcessingError(f"Failed to build overlay: {exc}") from exc
        with overlay:
            return composite(source, overlay)
    finally:
        source.close()

from pathlib import Path
from typing import Optional, Sequence, Tuple

import pytest

A4 = (595.0, 842.0)
LETTER = (612.0, 792.0)


def make_pdf_bytes(sizes: Sequence[Tuple[float, float]], labels: Optional[Sequence[str]] = None) -> bytes:
    fitz = pytest.importorskip("fitz")
    doc = fitz.open()
    try:
        for index, (width, height) in enumerate(sizes):
            page = doc.new_page(width=width, height=height)
            if labels and labels[index]:
                page.insert_text(fitz.Point(72, 72), labels[index], fontsize=14)
        return doc.tobytes()
    finally:
        doc.close()


@pytest.fixture
def blank_a4_pdf() -> bytes:
    return make_pdf_bytes([A4])


@pytest.fixture
def three_page_pdf() -> bytes:
    return make_pdf_bytes([A4, LETTER, LETTER], ["Page 1", "Page 2", "Page 3"])


@pytest.fixture
def source_file(tmp_path: Path, blank_a4_pdf: bytes) -> Path:
    path = tmp_path / "resume.pdf"
    path.write_bytes(blank_a4_pdf)
    return path

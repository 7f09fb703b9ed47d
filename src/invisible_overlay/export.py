"""Write the finished PDF to disk under its derived download name."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = "Updated"

_EXTENSION = re.compile(r"\.[^/.]+$")


def output_name_for(filename: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """``resume.pdf`` -> ``resumeUpdated.pdf``; only the last extension is stripped."""
    stem = _EXTENSION.sub("", Path(filename).name)
    return f"{stem}{suffix}.pdf"


@contextmanager
def _temporary_target(target: Path) -> Iterator[Path]:
    fd, name = tempfile.mkstemp(prefix=f".{target.stem}.", suffix=".tmp.pdf", dir=target.parent)
    os.close(fd)
    temp_path = Path(name)
    try:
        yield temp_path
    finally:
        temp_path.unlink(missing_ok=True)


def save_output(data: bytes, target: Path) -> Path:
    """Write ``data`` next to ``target`` and atomically move it into place."""
    target.parent.mkdir(parents=True, exist_ok=True)
    with _temporary_target(target) as temp_path:
        temp_path.write_bytes(data)
        temp_path.replace(target)
    logger.info("Saved PDF (%d bytes) to %s", len(data), target)
    return target

"""Text sanitization helpers for invisible_overlay."""

from __future__ import annotations

import re
from typing import List, Optional

PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")


def is_printable_ascii(char: str) -> bool:
    """Return True if the character lies in the printable ASCII range."""
    code = ord(char)
    return PRINTABLE_MIN <= code <= PRINTABLE_MAX


def sanitize(text: Optional[str]) -> str:
    """Drop every character outside 0x20-0x7E, line breaks included."""
    return _NON_PRINTABLE.sub("", text or "")


def split_lines(text: Optional[str]) -> List[str]:
    # Only "\n" separates lines; a CRLF "\r" stays on the line for sanitize().
    return (text or "").split("\n")


def prepare_lines(text: Optional[str], preserve_line_breaks: bool = True) -> List[str]:
    """Turn raw input into ordered overlay lines.

    The two steps do not commute. With ``preserve_line_breaks`` the text is
    split first and each line sanitized, so multi-line input keeps its lines.
    Without it the whole string is sanitized first, which strips the line
    breaks and collapses everything into a single line.
    """
    if preserve_line_breaks:
        return [sanitize(line) for line in split_lines(text)]
    return split_lines(sanitize(text))

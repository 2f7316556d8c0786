"""Dedent policy applied when a closing bracket is typed."""

from __future__ import annotations

from typing import Optional

from .analyzer import NESTING_UNIT, required_indent
from .scanner import CharScanner


def find_previous_newline(text: str, offset: int) -> Optional[int]:
    """Index of the newline that starts the caret's line.

    Returns ``None`` when anything other than spaces sits between the line
    start and ``offset``, or when the caret is on the first line.
    """

    index = offset - 1
    while index >= 0 and text[index] == " ":
        index -= 1
    if index >= 0 and text[index] == "\n":
        return index
    return None


def close_dedent(text: str, offset: int) -> int:
    """Number of characters to delete before ``offset`` ahead of a closer."""

    newline = find_previous_newline(text, offset)
    if newline is None:
        return 0
    target = max(0, required_indent(CharScanner(text, 0, newline)) - NESTING_UNIT)
    actual = offset - (newline + 1)
    return max(0, actual - target)


__all__ = ["close_dedent", "find_previous_newline"]

"""Auto-indentation and closing-bracket dedent engine.

Both entry points are pure functions of the text before the caret. They
rescan from offset zero on every call and never raise, whatever the state of
the code being edited.
"""

from __future__ import annotations

from .analyzer import (
    CLOSERS,
    CONTINUATION_UNIT,
    NESTING_UNIT,
    leading_indent,
    required_indent,
    round_indent,
    skip_quoted,
)
from .dedent import close_dedent, find_previous_newline
from .scanner import CharScanner


def _clamp(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def compute_newline_indent(text: str, cursor_offset: int) -> int:
    """Spaces to put after the newline inserted at ``cursor_offset``."""

    return required_indent(CharScanner(text, 0, _clamp(text, cursor_offset)))


def compute_close_dedent(text: str, cursor_offset: int, close_char: str) -> int:
    """Characters to delete before ``cursor_offset`` ahead of ``close_char``."""

    if len(close_char) != 1 or close_char not in CLOSERS:
        return 0
    return close_dedent(text, _clamp(text, cursor_offset))


__all__ = [
    "CLOSERS",
    "CONTINUATION_UNIT",
    "NESTING_UNIT",
    "CharScanner",
    "close_dedent",
    "compute_close_dedent",
    "compute_newline_indent",
    "find_previous_newline",
    "leading_indent",
    "required_indent",
    "round_indent",
    "skip_quoted",
]

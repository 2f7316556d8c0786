"""Offset guards shared across buffer services."""

from __future__ import annotations

from typing import Tuple

from .document import TextDocument
from .sync import BufferValidationError


def ensure_offset(document: TextDocument, offset: int) -> int:
    if offset < 0 or offset > document.length:
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_range(document: TextDocument, start: int, end: int) -> Tuple[int, int]:
    ensure_offset(document, start)
    ensure_offset(document, end)
    if start > end:
        start, end = end, start
    return start, end

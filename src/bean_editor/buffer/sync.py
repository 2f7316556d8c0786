"""Snapshot types handed to host widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .state import Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    caret: int
    selection: Optional[Selection]
    version: int = 0
    dirty: bool = False


class BufferValidationError(RuntimeError):
    """Raised when a host passes an offset outside the document."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset

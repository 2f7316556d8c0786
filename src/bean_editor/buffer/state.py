"""Caret, selection, and change tracking state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Selection = Tuple[int, int]  # (start, end) offsets, start <= end


@dataclass(slots=True)
class BufferState:
    """Mutable caret + selection info tied to a TextDocument version."""

    caret: int = 0
    selection: Optional[Selection] = None
    last_change_tick: int = 0

    def set_caret(self, offset: int) -> None:
        self.caret = offset

    def clear_selection(self) -> None:
        self.selection = None

    def set_selection(self, start: int, end: int) -> None:
        self.selection = (min(start, end), max(start, end))

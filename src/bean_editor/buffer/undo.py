"""Undo/redo history for buffer transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Whole-text snapshots on either side of one transaction."""

    label: str
    before_text: str
    after_text: str
    caret_before: int
    caret_after: int


class UndoTimeline:
    """Two-stack history. Recording a new entry discards anything redoable."""

    def __init__(self) -> None:
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._done) + len(self._undone)

    def record(self, entry: UndoEntry) -> None:
        if entry.before_text == entry.after_text:
            return
        self._undone.clear()
        self._done.append(entry)

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry

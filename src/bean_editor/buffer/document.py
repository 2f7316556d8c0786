"""Offset-addressed text storage for editor buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class TextDocument:
    """Immutable-ish text snapshot.

    Edits return a new document with a bumped ``version``; the indentation
    engine always reads a stable string for the duration of one keypress.
    Lines are 1-based and columns 0-based, matching compiler diagnostics.
    """

    _text: str = ""
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(_text=text, version=0, dirty=False)

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def line_count(self) -> int:
        return self._text.count("\n") + 1

    def get_text(self, start: int, end: int) -> str:
        return self._text[start:end]

    def insert(self, offset: int, text: str) -> "TextDocument":
        updated = self._text[:offset] + text + self._text[offset:]
        return TextDocument(_text=updated, version=self.version + 1, dirty=True)

    def remove(self, offset: int, length: int) -> "TextDocument":
        updated = self._text[:offset] + self._text[offset + length :]
        return TextDocument(_text=updated, version=self.version + 1, dirty=True)

    def mark_clean(self) -> None:
        self.dirty = False

    def line_col(self, offset: int) -> Tuple[int, int]:
        offset = max(0, min(offset, len(self._text)))
        line_start = self._text.rfind("\n", 0, offset) + 1
        return self._text.count("\n", 0, offset) + 1, offset - line_start

    def line_bounds(self, line: int) -> Tuple[int, int]:
        """Return ``(start, end)`` offsets of ``line``, newline excluded."""

        line = max(1, min(line, self.line_count))
        start = 0
        for _ in range(line - 1):
            start = self._text.index("\n", start) + 1
        end = self._text.find("\n", start)
        return start, len(self._text) if end == -1 else end

    def offset_of(self, line: int, column: int) -> int:
        start, end = self.line_bounds(line)
        return start + max(0, min(column, end - start))

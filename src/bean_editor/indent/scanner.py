"""Forward-only character scanner used by the indentation engine."""

from __future__ import annotations

from typing import Optional


class CharScanner:
    """Cursor over ``text[start:end]`` that only ever moves forward.

    There is no peek or rewind: every primitive either consumes the current
    character or leaves the position untouched.
    """

    __slots__ = ("_text", "_pos", "_end")

    def __init__(self, text: str, start: int = 0, end: Optional[int] = None) -> None:
        length = len(text)
        stop = length if end is None else max(0, min(end, length))
        self._text = text
        self._pos = max(0, min(start, stop))
        self._end = stop

    @property
    def position(self) -> int:
        return self._pos

    def has_next(self) -> bool:
        return self._pos < self._end

    def next(self) -> str:
        if self._pos >= self._end:
            raise IndexError("scanner exhausted")
        char = self._text[self._pos]
        self._pos += 1
        return char

    def match(self, char: str) -> bool:
        if self._pos < self._end and self._text[self._pos] == char:
            self._pos += 1
            return True
        return False

    def match_except(self, char: str) -> bool:
        """Consume the current character unless it is ``char`` or input ended."""

        if self._pos < self._end and self._text[self._pos] != char:
            self._pos += 1
            return True
        return False

    def match_any(self, chars: str) -> Optional[str]:
        """Consume and return the current character if it is one of ``chars``."""

        if self._pos < self._end:
            char = self._text[self._pos]
            if char in chars:
                self._pos += 1
                return char
        return None


__all__ = ["CharScanner"]

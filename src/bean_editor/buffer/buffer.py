"""Buffer façade combining document, caret state, and undo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from bean_editor.runtime import telemetry

from .document import TextDocument
from .state import BufferState, Selection
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    caret: int
    selection: Optional[Selection]


@dataclass(slots=True)
class BufferDelta:
    version: int
    offset: int
    removed: str
    inserted: str
    caret: int
    label: str


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or TextDocument()
        self.state = state or BufferState()
        self.history = undo or UndoTimeline()
        self._transaction: Optional[Transaction] = None

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=TextDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def caret(self) -> int:
        return self.state.caret

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            caret=self.state.caret,
            selection=self.state.selection,
        )

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            caret=self.state.caret,
            selection=self.state.selection,
            version=self.document.version,
            dirty=self.document.dirty,
        )

    def transaction(self, label: str) -> "Transaction":
        """Group edits into one undo step; nested groups join the outer one."""

        return Transaction(self, label)

    def insert(self, offset: int, text: str, *, label: str = "insert") -> BufferDelta:
        ensure_offset(self.document, offset)
        with self.transaction(label):
            self.document = self.document.insert(offset, text)
            self._after_edit(offset + len(text))
        return BufferDelta(
            version=self.document.version,
            offset=offset,
            removed="",
            inserted=text,
            caret=self.state.caret,
            label=label,
        )

    def remove(self, offset: int, length: int, *, label: str = "remove") -> BufferDelta:
        start, end = ensure_range(self.document, offset, offset + length)
        removed = self.document.get_text(start, end)
        with self.transaction(label):
            self.document = self.document.remove(start, end - start)
            self._after_edit(start)
        return BufferDelta(
            version=self.document.version,
            offset=start,
            removed=removed,
            inserted="",
            caret=self.state.caret,
            label=label,
        )

    def delete_selection(self) -> bool:
        selection = self.state.selection
        if selection is None:
            return False
        start, end = selection
        self.remove(start, end - start, label="delete_selection")
        return True

    def set_caret(self, offset: int) -> None:
        self.state.set_caret(ensure_offset(self.document, offset))

    def select(self, start: int, end: int) -> None:
        start, end = ensure_range(self.document, start, end)
        self.state.set_selection(start, end)
        self.state.set_caret(end)

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def undo(self) -> bool:
        entry = self.history.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.caret_before)
        return True

    def redo(self) -> bool:
        entry = self.history.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.caret_after)
        return True

    def mark_saved(self) -> None:
        self.document.mark_clean()

    def _after_edit(self, caret: int) -> None:
        self.state.set_caret(caret)
        self.state.clear_selection()
        self.state.last_change_tick = self.document.version

    def _restore(self, text: str, caret: int) -> None:
        version = self.document.version + 1
        self.document = TextDocument(_text=text, version=version, dirty=True)
        self._after_edit(min(caret, len(text)))


class Transaction(AbstractContextManager["Transaction"]):
    """Records one undo entry for every edit made while it is open.

    An edit that raises rolls the buffer back to the text and caret it had
    when the outermost transaction opened.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._outermost = False
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_text = ""
        self._before_caret = 0

    def __enter__(self) -> "Transaction":
        if self.buffer._transaction is not None:
            return self.buffer._transaction
        self._outermost = True
        self.buffer._transaction = self
        self._before_text = self.buffer.document.text
        self._before_caret = self.buffer.state.caret
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._outermost:
            return False
        self.buffer._transaction = None
        if exc_type is None:
            self.buffer.history.record(
                UndoEntry(
                    label=self.label,
                    before_text=self._before_text,
                    after_text=self.buffer.document.text,
                    caret_before=self._before_caret,
                    caret_after=self.buffer.state.caret,
                )
            )
        elif self.buffer.document.text != self._before_text:
            self.buffer._restore(self._before_text, self._before_caret)
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False

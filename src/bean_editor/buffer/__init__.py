"""Buffer abstractions and undo/redo data structures."""

from .buffer import Buffer, BufferDelta, BufferView, Transaction
from .document import TextDocument
from .state import BufferState, Selection
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "Selection",
    "TextDocument",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_offset",
    "ensure_range",
]

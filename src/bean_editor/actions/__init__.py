"""Editor verbs bound to keys by the default keymap."""

from .base import ActionResult, EditorContext, EventBus, KeyInput
from .editing import (
    caret_down,
    caret_left,
    caret_right,
    caret_up,
    delete_backward,
    delete_forward,
    insert_text,
    line_end,
    line_start,
    new_line,
    redo,
    type_close,
    undo,
)
from .project import (
    compile_source,
    run_program,
    save_source,
    select_diagnostic,
    toggle_errors,
)

__all__ = [
    "ActionResult",
    "EditorContext",
    "EventBus",
    "KeyInput",
    "caret_down",
    "caret_left",
    "caret_right",
    "caret_up",
    "compile_source",
    "delete_backward",
    "delete_forward",
    "insert_text",
    "line_end",
    "line_start",
    "new_line",
    "redo",
    "run_program",
    "save_source",
    "select_diagnostic",
    "toggle_errors",
    "type_close",
    "undo",
]

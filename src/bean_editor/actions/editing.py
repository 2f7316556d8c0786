"""Text editing verbs: auto-indented newline, dedenting closers, deletion, motion."""

from __future__ import annotations

from bean_editor.indent import compute_close_dedent, compute_newline_indent
from bean_editor.runtime import telemetry

from .base import ActionResult, EditorContext, KeyInput


def _edited(status: str) -> ActionResult:
    return ActionResult(consumed=True, status=status, changed=True)


def new_line(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    buffer = context.buffer
    with buffer.transaction("new_line"):
        buffer.delete_selection()
        caret = buffer.caret
        indent = compute_newline_indent(buffer.text, caret)
        buffer.insert(caret, "\n" + " " * indent)
    telemetry.record_event(
        "indent.new_line", level="debug", data={"offset": caret, "indent": indent}
    )
    return _edited("new_line")


def type_close(context: EditorContext, key: KeyInput) -> ActionResult:
    close = key.text or key.key
    buffer = context.buffer
    with buffer.transaction("type_close"):
        buffer.delete_selection()
        caret = buffer.caret
        remove = compute_close_dedent(buffer.text, caret, close)
        if remove:
            buffer.remove(caret - remove, remove)
        buffer.insert(caret - remove, close)
    telemetry.record_event(
        "indent.type_close",
        level="debug",
        data={"offset": caret, "close": close, "removed": remove},
    )
    return _edited("type_close")


def insert_text(context: EditorContext, key: KeyInput) -> ActionResult:
    if not key.text:
        return ActionResult(consumed=False, status="miss")
    buffer = context.buffer
    with buffer.transaction("insert_text"):
        buffer.delete_selection()
        buffer.insert(buffer.caret, key.text)
    return _edited("insert_text")


def delete_backward(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    buffer = context.buffer
    if buffer.delete_selection():
        return _edited("delete")
    if buffer.caret == 0:
        return ActionResult(consumed=True, status="noop")
    buffer.remove(buffer.caret - 1, 1, label="delete_backward")
    return _edited("delete")


def delete_forward(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    buffer = context.buffer
    if buffer.delete_selection():
        return _edited("delete")
    if buffer.caret >= buffer.document.length:
        return ActionResult(consumed=True, status="noop")
    buffer.remove(buffer.caret, 1, label="delete_forward")
    return _edited("delete")


def _move_to(context: EditorContext, offset: int) -> ActionResult:
    buffer = context.buffer
    buffer.clear_selection()
    buffer.set_caret(max(0, min(offset, buffer.document.length)))
    return ActionResult(consumed=True, status="move")


def caret_left(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    selection = context.buffer.state.selection
    if selection is not None:
        return _move_to(context, selection[0])
    return _move_to(context, context.buffer.caret - 1)


def caret_right(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    selection = context.buffer.state.selection
    if selection is not None:
        return _move_to(context, selection[1])
    return _move_to(context, context.buffer.caret + 1)


def _vertical(context: EditorContext, delta: int) -> ActionResult:
    document = context.buffer.document
    line, column = document.line_col(context.buffer.caret)
    target = line + delta
    if target < 1:
        return _move_to(context, 0)
    if target > document.line_count:
        return _move_to(context, document.length)
    return _move_to(context, document.offset_of(target, column))


def caret_up(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    return _vertical(context, -1)


def caret_down(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    return _vertical(context, 1)


def line_start(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    document = context.buffer.document
    line, _ = document.line_col(context.buffer.caret)
    return _move_to(context, document.line_bounds(line)[0])


def line_end(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    document = context.buffer.document
    line, _ = document.line_col(context.buffer.caret)
    return _move_to(context, document.line_bounds(line)[1])


def undo(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    if not context.buffer.undo():
        return ActionResult(consumed=True, status="noop", message="nothing to undo")
    return _edited("undo")


def redo(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    if not context.buffer.redo():
        return ActionResult(consumed=True, status="noop", message="nothing to redo")
    return _edited("redo")


__all__ = [
    "caret_down",
    "caret_left",
    "caret_right",
    "caret_up",
    "delete_backward",
    "delete_forward",
    "insert_text",
    "line_end",
    "line_start",
    "new_line",
    "redo",
    "type_close",
    "undo",
]

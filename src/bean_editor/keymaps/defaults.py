"""Built-in actions and the chords that trigger them."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from bean_editor.actions import editing as edit_actions
from bean_editor.actions import project as project_actions

from .models import ActionRef, Binding, KeyChord
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="edit.new_line",
        handler=edit_actions.new_line,
        description="New line",
    ),
    ActionRef(
        id="edit.type_close",
        handler=edit_actions.type_close,
        description="Type a closing bracket, dedenting the line",
    ),
    ActionRef(
        id="edit.insert_text",
        handler=edit_actions.insert_text,
        description="Insert typed text",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=edit_actions.delete_backward,
        description="Delete before the caret",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=edit_actions.delete_forward,
        description="Delete after the caret",
    ),
    ActionRef(id="caret.left", handler=edit_actions.caret_left, description="Left"),
    ActionRef(id="caret.right", handler=edit_actions.caret_right, description="Right"),
    ActionRef(id="caret.up", handler=edit_actions.caret_up, description="Up"),
    ActionRef(id="caret.down", handler=edit_actions.caret_down, description="Down"),
    ActionRef(
        id="caret.line_start",
        handler=edit_actions.line_start,
        description="Start of line",
    ),
    ActionRef(
        id="caret.line_end",
        handler=edit_actions.line_end,
        description="End of line",
    ),
    ActionRef(id="history.undo", handler=edit_actions.undo, description="Undo"),
    ActionRef(id="history.redo", handler=edit_actions.redo, description="Redo"),
    ActionRef(
        id="project.toggle_errors",
        handler=project_actions.toggle_errors,
        description="Errors",
    ),
    ActionRef(
        id="project.run",
        handler=project_actions.run_program,
        description="Run",
    ),
    ActionRef(
        id="project.compile",
        handler=project_actions.compile_source,
        description="Compile",
    ),
    ActionRef(
        id="project.save",
        handler=project_actions.save_source,
        description="Save",
    ),
)


def _bind(
    binding_id: str, token: str, action_id: str, *, menu: bool = False
) -> Binding:
    return Binding(
        id=binding_id,
        chord=KeyChord.parse(token),
        action_id=action_id,
        menu=menu,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("edit.enter", "enter", "edit.new_line"),
    _bind("edit.close_brace", "}", "edit.type_close"),
    _bind("edit.close_paren", ")", "edit.type_close"),
    _bind("edit.close_bracket", "]", "edit.type_close"),
    _bind("edit.backspace", "backspace", "edit.delete_backward"),
    _bind("edit.delete", "delete", "edit.delete_forward"),
    _bind("caret.left", "left", "caret.left"),
    _bind("caret.right", "right", "caret.right"),
    _bind("caret.up", "up", "caret.up"),
    _bind("caret.down", "down", "caret.down"),
    _bind("caret.home", "home", "caret.line_start"),
    _bind("caret.end", "end", "caret.line_end"),
    _bind("history.undo", "ctrl+z", "history.undo"),
    _bind("history.redo", "ctrl+shift+z", "history.redo"),
    _bind("history.redo_alt", "ctrl+y", "history.redo"),
    _bind("project.errors", "ctrl+e", "project.toggle_errors", menu=True),
    _bind("project.run", "ctrl+r", "project.run", menu=True),
    _bind("project.compile", "ctrl+d", "project.compile", menu=True),
    _bind("project.save", "ctrl+s", "project.save", menu=True),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    include_actions: Optional[Iterable[str]] = None,
    include_bindings: Optional[Iterable[str]] = None,
    overrides: Sequence[Binding] = (),
) -> KeymapRegistry:
    """Register the default actions and bindings.

    ``include_*`` restrict what gets installed. ``overrides`` replace default
    bindings with the same id (or claim their chords) after loading.
    """

    action_filter = set(include_actions) if include_actions is not None else None
    binding_filter = set(include_bindings) if include_bindings is not None else None

    for action in DEFAULT_ACTIONS:
        if action_filter is None or action.id in action_filter:
            registry.register_action(action)

    for binding in DEFAULT_BINDINGS:
        if binding_filter is not None and binding.id not in binding_filter:
            continue
        if action_filter is not None and binding.action_id not in action_filter:
            continue
        registry.register_binding(binding)

    for binding in overrides:
        registry.register_binding(binding, replace=True)

    return registry


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]

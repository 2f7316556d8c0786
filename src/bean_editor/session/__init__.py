"""Editing session and key dispatch."""

from bean_editor.actions.base import ActionResult, EditorContext, EventBus, KeyInput

from .session import FALLBACK_ACTION, EditorSession, key_to_token

__all__ = [
    "ActionResult",
    "EditorContext",
    "EditorSession",
    "EventBus",
    "FALLBACK_ACTION",
    "KeyInput",
    "key_to_token",
]

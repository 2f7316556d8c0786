"""Editor session: owns the context and dispatches keys to actions."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from bean_editor.actions import ActionResult, EditorContext, KeyInput
from bean_editor.actions import project as project_actions
from bean_editor.buffer import Buffer
from bean_editor.config import EditorConfig
from bean_editor.keymaps import (
    ActionRef,
    KeyChord,
    KeymapRegistry,
    load_default_keymaps,
)
from bean_editor.runtime import telemetry
from bean_editor.workspace import resolve_source

FALLBACK_ACTION = "edit.insert_text"
_TEXT_BLOCKING_MODIFIERS = frozenset({"ctrl", "alt", "meta"})


def key_to_token(key: KeyInput) -> str:
    return KeyChord(key.key, key.modifiers).token


class EditorSession:
    """Routes key input through the keymap registry into editor actions."""

    def __init__(
        self,
        context: EditorContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.logger = telemetry.get_logger("bean_editor.session")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="bean_editor.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("session", self)

    @classmethod
    def open(
        cls, file_name: str | Path, *, config: Optional[EditorConfig] = None
    ) -> "EditorSession":
        """Resolve ``file_name``, load it (or a new class skeleton), and wrap it."""

        source = resolve_source(file_name)
        buffer = Buffer.from_text(source.load(), name=source.class_name)
        context = EditorContext(
            buffer=buffer,
            source=source,
            config=config or EditorConfig.from_env(),
        )
        return cls(context)

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    def handle_key(self, key: KeyInput) -> ActionResult:
        token = key_to_token(key)
        match = self.keymap_registry.resolve(token)
        if match is not None:
            return self._execute(match.action, key, binding_id=match.binding.id)

        if self._is_text(key):
            action = self.keymap_registry.get_action(FALLBACK_ACTION)
            return self._execute(action, key, binding_id=None)

        return ActionResult(consumed=False, status="miss", message=token)

    def execute(self, action_id: str) -> ActionResult:
        """Run an action by id, as a menu entry would."""

        action = self.keymap_registry.get_action(action_id)
        return self._execute(action, KeyInput(key=action_id), binding_id=None)

    def select_diagnostic(self, index: int) -> ActionResult:
        return project_actions.select_diagnostic(self.context, index)

    def set_program_args(self, text: str) -> None:
        self.context.program_args = text

    def _is_text(self, key: KeyInput) -> bool:
        if not key.text or not key.text.isprintable():
            return False
        return not _TEXT_BLOCKING_MODIFIERS.intersection(
            m.lower() for m in key.modifiers
        )

    def _execute(
        self, action: ActionRef, key: KeyInput, *, binding_id: Optional[str]
    ) -> ActionResult:
        with telemetry.span(
            "session::execute",
            component="session",
            metadata={"action": action.id, "binding_id": binding_id or "-"},
        ):
            outcome = action(self.context, key)

        result = outcome if isinstance(outcome, ActionResult) else ActionResult(
            consumed=True
        )
        if result.changed:
            self.context.bus.emit("buffer.changed", self.context.buffer.mirror())
        return result


__all__ = ["EditorSession", "FALLBACK_ACTION", "key_to_token"]

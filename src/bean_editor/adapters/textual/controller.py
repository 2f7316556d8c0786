"""Adapter that wires EditorSession events into Textual UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

from bean_editor.buffer import BufferMirror
from bean_editor.keymaps import KeyChord
from bean_editor.runtime import telemetry
from bean_editor.session import ActionResult, EditorSession, KeyInput
from bean_editor.toolchain import Diagnostic

BUS_EVENTS = (
    "file.saved",
    "compile.finished",
    "diagnostics.updated",
    "diagnostics.toggled",
    "diagnostic.selected",
    "run.started",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    update_diagnostics: Callable[[Sequence[Diagnostic], bool], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def normalize_textual_key(
    key: str, character: Optional[str], *, modifiers: Iterable[str] = ()
) -> KeyInput:
    """Build a KeyInput from a Textual key name and its character.

    Shift is folded into printable characters (``}`` rather than
    ``shift+}``) so typed brackets resolve to their own bindings.
    """

    chord = KeyChord.parse(key)
    mods = set(chord.modifiers) | {m.lower() for m in modifiers}
    if character and len(character) == 1 and character.isprintable():
        if not mods.intersection({"ctrl", "alt", "meta"}):
            return KeyInput(key=character, modifiers=(), text=character)
        mods.discard("shift")
    return KeyInput(key=chord.key, modifiers=tuple(sorted(mods)), text=None)


class TextualEditorAdapter:
    """Bridges EditorSession + bus events to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.logger = telemetry.get_logger("bean_editor.adapters.textual")
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_diagnostics()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ActionResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = normalize_textual_key(key, text, modifiers=modifiers)
        self._log_state("key ->", key=key_input.key, text=key_input.text)
        result = self.session.handle_key(key_input)
        self._after_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def run_action(self, action_id: str) -> ActionResult:
        result = self.session.execute(action_id)
        self._after_result(result)
        return result

    def select_diagnostic(self, index: int) -> ActionResult:
        result = self.session.select_diagnostic(index)
        self._after_result(result)
        return result

    def _after_result(self, result: ActionResult) -> None:
        status = result.message or result.status
        if status and result.consumed:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        bus = self.session.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name.startswith("diagnostics"):
            self._refresh_diagnostics()
        elif name == "file.saved":
            self.hooks.update_status(f"saved {payload}")
        elif name == "compile.finished" and isinstance(payload, dict):
            outcome = "ok" if payload.get("success") else "failed"
            self.hooks.update_status(
                f"compile {outcome} ({payload.get('diagnostics', 0)} diagnostics)"
            )

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.session.buffer.mirror())

    def _refresh_diagnostics(self) -> None:
        log = self.session.context.diagnostics
        self.hooks.update_diagnostics(log.items, log.visible)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        line = " ".join([prefix] + [f"{key}={value!r}" for key, value in snapshot.items()])
        self.logger.debug(line)
        self.hooks.log(line)

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        return {
            "caret": buffer.state.caret,
            "selection": buffer.state.selection,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_textual_key"]

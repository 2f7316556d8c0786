"""Context and result types shared by every editor action."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from bean_editor.buffer import Buffer
from bean_editor.config import EditorConfig
from bean_editor.toolchain import DiagnosticLog, JavaCompiler, ProgramRunner
from bean_editor.workspace import SourceFile


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to the session."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ActionResult:
    """Outcome of handling one key."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    changed: bool = False


class EventBus:
    """Minimal event bus letting actions notify the host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class EditorContext:
    """Services shared by all actions of one editing session."""

    buffer: Buffer
    bus: EventBus = field(default_factory=EventBus)
    source: Optional[SourceFile] = None
    config: EditorConfig = field(default_factory=EditorConfig)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    compiler: Optional[JavaCompiler] = None
    runner: Optional[ProgramRunner] = None
    program_args: str = ""
    extras: Dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.compiler is None:
            self.compiler = JavaCompiler(self.config)
        if self.runner is None:
            self.runner = ProgramRunner(self.config)


__all__ = ["ActionResult", "EditorContext", "EventBus", "KeyInput"]

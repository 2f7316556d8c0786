"""Save, compile, and run the edited file; diagnostics panel control."""

from __future__ import annotations

from typing import Any, Callable, Dict, cast

from bean_editor.runtime import telemetry

from .base import ActionResult, EditorContext, KeyInput

Step = Callable[[EditorContext], bool]


def chain(*steps: Step) -> Step:
    """Run ``steps`` in order, stopping at the first that reports failure."""

    def run(context: EditorContext) -> bool:
        return all(step(context) for step in steps)

    return run


def save_step(context: EditorContext) -> bool:
    source = context.source
    if source is None:
        telemetry.get_logger("bean_editor.actions").warning(
            "No source file attached to this session"
        )
        return False
    if not source.save(context.buffer.text):
        return False
    context.buffer.mark_saved()
    context.bus.emit("file.saved", str(source.path))
    return True


def compile_step(context: EditorContext) -> bool:
    source = context.source
    if source is None or context.compiler is None:
        return False
    context.diagnostics.clear()
    context.bus.emit("diagnostics.updated", context.diagnostics.items)
    success = context.compiler.compile(
        source, context.buffer.document, context.diagnostics.report
    )
    context.bus.emit("diagnostics.updated", context.diagnostics.items)
    context.bus.emit(
        "compile.finished",
        {"success": success, "diagnostics": len(context.diagnostics)},
    )
    return success


def run_step(context: EditorContext) -> bool:
    source = context.source
    if source is None or context.runner is None:
        return False
    streams = cast(Dict[str, Any], context.extras.get("run_streams", {}))
    process = context.runner.launch(source, context.program_args, **streams)
    if process is None:
        return False
    context.bus.emit("run.started", process)
    return True


SAVE: Step = save_step
COMPILE: Step = chain(save_step, compile_step)
RUN: Step = chain(COMPILE, run_step)


def _outcome(ok: bool, success: str, failure: str) -> ActionResult:
    return ActionResult(consumed=True, status=success if ok else failure)


def save_source(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    return _outcome(SAVE(context), "saved", "save_failed")


def compile_source(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    return _outcome(COMPILE(context), "compiled", "compile_failed")


def run_program(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    return _outcome(RUN(context), "running", "run_failed")


def toggle_errors(context: EditorContext, key: KeyInput) -> ActionResult:
    del key
    visible = context.diagnostics.toggle()
    context.bus.emit("diagnostics.toggled", visible)
    return ActionResult(
        consumed=True, status="errors_shown" if visible else "errors_hidden"
    )


def select_diagnostic(context: EditorContext, index: int) -> ActionResult:
    """Select the text a diagnostic points at.

    Offsets were taken at compile time; later edits may have shortened the
    text, so they are clamped to the current document.
    """

    try:
        diagnostic = context.diagnostics[index]
    except IndexError:
        return ActionResult(consumed=False, status="miss")
    length = context.buffer.document.length
    start = min(diagnostic.start, length)
    end = min(diagnostic.end, length)
    context.buffer.select(start, end)
    context.bus.emit("diagnostic.selected", diagnostic)
    return ActionResult(consumed=True, status="diagnostic", message=diagnostic.label)


__all__ = [
    "COMPILE",
    "RUN",
    "SAVE",
    "chain",
    "compile_source",
    "compile_step",
    "run_program",
    "run_step",
    "save_source",
    "save_step",
    "select_diagnostic",
    "toggle_errors",
]

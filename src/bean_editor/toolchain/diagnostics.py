"""Compiler diagnostics: parsing javac output and the panel model."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from bean_editor.buffer import TextDocument

_HEADER = re.compile(r"^(?P<path>.+?):(?P<line>\d+): (?P<kind>error|warning): (?P<message>.*)$")
_BARE = re.compile(r"^(?P<kind>error|warning): (?P<message>.*)$")
_CARET =re.compile(r"^(?P<pad>\s*)\^\s*$")
_SUMMARY = re.compile(r"^\d+ (error|warning)s?$")


@dataclass(frozen=True, slots=True)
class Diagnostic:
    kind: str
    line: int
    column: int
    message: str
    start: int
    end: int

    @property
    def label(self) -> str:
        return f"{self.line}: {self.message}"

    @property
    def is_error(self) -> bool:
        return self.kind == "error"


@dataclass(slots=True)
class _Pending:
    kind: str
    line: int
    message: List[str]
    echoed: List[str]
    column: Optional[int] = None


def _token_end(text: str, start: int) -> int:
    end = start
    while end < len(text) and (text[end].isalnum() or text[end] in "_$"):
        end += 1
    if end == start and start < len(text) and text[start] != "\n":
        end += 1
    return end


def _finish(pending: _Pending, document: TextDocument) -> Diagnostic:
    message = list(pending.message)
    if pending.column is None:
        # No caret line: everything after the header was message text.
        message.extend(line.strip() for line in pending.echoed)
        column = 0
    else:
        # The line just above the caret echoes the source; earlier ones continue
        # the message.
        message.extend(line.strip() for line in pending.echoed[:-1])
        column = pending.column
    start = document.offset_of(pending.line, column)
    return Diagnostic(
        kind=pending.kind,
        line=pending.line,
        column=column,
        message="\n".join(part for part in message if part),
        start=start,
        end=_token_end(document.text, start),
    )


def parse_javac_output(output: str, document: TextDocument) -> list[Diagnostic]:
    """Turn javac's plain-text report into diagnostics anchored in ``document``."""

    diagnostics: list[Diagnostic] = []
    pending: Optional[_Pending] = None

    for raw in output.splitlines():
        header = _HEADER.match(raw)
        if header:
            if pending is not None:
                diagnostics.append(_finish(pending, document))
            pending = _Pending(
                kind=header.group("kind"),
                line=int(header.group("line")),
                message=[header.group("message").strip()],
                echoed=[],
            )
            continue
        bare = _BARE.match(raw)
        if bare:
            # Command-line and file errors carry no position.
            if pending is not None:
                diagnostics.append(_finish(pending, document))
            pending = _Pending(
                kind=bare.group("kind"),
                line=1,
                message=[bare.group("message").strip()],
                echoed=[],
                column=0,
            )
            continue
        if pending is None or _SUMMARY.match(raw.strip()) or raw.startswith("Note:"):
            continue
        caret = _CARET.match(raw)
        if caret and pending.column is None and pending.echoed:
            pending.column = len(caret.group("pad"))
        elif pending.column is None:
            pending.echoed.append(raw)
        else:
            pending.message.append(raw.strip())

    if pending is not None:
        diagnostics.append(_finish(pending, document))
    return diagnostics


class DiagnosticLog:
    """Ordered diagnostics plus the visibility of the panel showing them."""

    def __init__(self) -> None:
        self._items: List[Diagnostic] = []
        self.visible = False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Diagnostic:
        return self._items[index]

    @property
    def items(self) -> tuple[Diagnostic, ...]:
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def report(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)
        self.visible = True

    def toggle(self) -> bool:
        self.visible = not self.visible
        return self.visible


__all__ = ["Diagnostic", "DiagnosticLog", "parse_javac_output"]

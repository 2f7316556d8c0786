"""Dataclasses describing key chords, actions, and bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIER_ORDER = ("ctrl", "alt", "shift", "meta")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    known = tuple(m for m in MODIFIER_ORDER if m in values)
    return known + tuple(sorted(values.difference(MODIFIER_ORDER)))


@dataclass(frozen=True, slots=True)
class KeyChord:
    """One key press plus held modifiers, e.g. ``ctrl+shift+z``.

    Named keys are lower-cased; single printable characters keep their case
    so ``}`` and ``Z`` stay distinct tokens.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key = self.key if len(self.key) == 1 else self.key.lower()
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return "+".join(self.modifiers + (self.key,))

    @classmethod
    def parse(cls, token: str) -> "KeyChord":
        if len(token) > 1 and token.endswith("++"):
            head, key = token[:-2], "+"
        elif len(token) > 1 and "+" in token:
            head, _, key = token.rpartition("+")
        else:
            return cls(token)
        return cls(key, tuple(head.split("+")))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named, callable editor verb.

    Handlers are invoked as ``handler(context, key)``.
    """

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key chord with an action.

    ``menu`` bindings are also offered by the host's command menu.
    """

    id: str
    chord: KeyChord
    action_id: str
    description: str = ""
    menu: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def token(self) -> str:
        return self.chord.token


__all__ = ["ActionRef", "Binding", "KeyChord"]

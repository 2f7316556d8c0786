"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from bean_editor.runtime.telemetry import span

from .models import ActionRef, Binding, KeyChord


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    menu_count: int


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


class KeymapConflictError(RuntimeError):
    """Raised when a chord is already bound to another binding."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' on {binding.token!r}"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and the chord index used during dispatch."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_token: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            self._revision += 1
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "chord": binding.token},
        ):
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' targets unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding '{binding.id}' already registered")
                self.unregister_binding(binding.id)

            existing_id = self._by_token.get(binding.token)
            if existing_id is not None:
                if not replace:
                    raise KeymapConflictError(binding, self._bindings[existing_id])
                self.unregister_binding(existing_id)

            self._bindings[binding.id] = binding
            self._by_token[binding.token] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Binding:
        binding = self.get_binding(binding_id)
        del self._bindings[binding_id]
        if self._by_token.get(binding.token) == binding_id:
            del self._by_token[binding.token]
        self._revision += 1
        return binding

    def resolve(self, chord: KeyChord | str) -> Optional[ResolutionMatch]:
        token = chord.token if isinstance(chord, KeyChord) else chord
        binding_id = self._by_token.get(token)
        if binding_id is None:
            return None
        binding = self._bindings[binding_id]
        return ResolutionMatch(binding=binding, action=self._actions[binding.action_id])

    def iter_bindings(self) -> Iterator[Binding]:
        return iter(list(self._bindings.values()))

    def menu_bindings(self) -> tuple[Binding, ...]:
        return tuple(b for b in self._bindings.values() if b.menu)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            menu_count=len(self.menu_bindings()),
        )


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
]

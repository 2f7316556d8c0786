"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeyChord
from .registry import (
    KeymapConflictError,
    KeymapRegistry,
    RegistryStats,
    ResolutionMatch,
)
from .defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "KeyChord",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
    "load_default_keymaps",
]

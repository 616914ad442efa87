"""Declarative keymap registry, resolver and default grid bindings."""

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats, is_ambiguous
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import GRID_SCOPE, binding_hints, load_default_keymaps
from .dispatch import KeyDispatcher, KeyInput

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "is_ambiguous",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "GRID_SCOPE",
    "binding_hints",
    "load_default_keymaps",
    "KeyDispatcher",
    "KeyInput",
]

"""Declarative keymap registry and trie resolver.

Built-in bindings live in :mod:`promptline_vim.keymaps.defaults`.
"""

from .models import (
    DEFAULT_SEQUENCE_TIMEOUT_MS,
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    normalize_modifiers,
    stroke_token,
)
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "normalize_modifiers",
    "stroke_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]

"""Host adapters: clipboard providers and the Textual bridge."""

from .clipboard import (
    CallableProvider,
    ClipboardChain,
    ClipboardProvider,
    PyperclipProvider,
    default_chain,
    normalize_newlines,
)

__all__ = [
    "CallableProvider",
    "ClipboardChain",
    "ClipboardProvider",
    "PyperclipProvider",
    "default_chain",
    "normalize_newlines",
]

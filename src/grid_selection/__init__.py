"""UI-agnostic grid selection and clipboard engine."""

__all__ = [
    "adapters",
    "actions",
    "engine",
    "grid",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"

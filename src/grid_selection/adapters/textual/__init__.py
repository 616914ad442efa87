"""Textual host adapter."""

from .controller import GridUIHooks, TextualGridAdapter

__all__ = ["GridUIHooks", "TextualGridAdapter"]

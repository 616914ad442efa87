"""Key-bound verbs operating on a ``SelectionEngine``."""

from .base import ActionContext, ActionResult
from .clipboard import copy_selection, cut_selection, delete_contents, paste_clipboard
from .navigation import (
    extend_down,
    extend_left,
    extend_right,
    extend_up,
    move_down,
    move_left,
    move_right,
    move_up,
)
from .selection import clear_selection, select_all

__all__ = [
    "ActionContext",
    "ActionResult",
    "move_up",
    "move_down",
    "move_left",
    "move_right",
    "extend_up",
    "extend_down",
    "extend_left",
    "extend_right",
    "select_all",
    "clear_selection",
    "copy_selection",
    "cut_selection",
    "paste_clipboard",
    "delete_contents",
]

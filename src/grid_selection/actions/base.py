"""Context and result objects shared by key-bound actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from grid_selection.engine import SelectionEngine


@dataclass(slots=True)
class ActionContext:
    """Services an action handler can reach.

    ``read_clipboard``/``write_clipboard`` are the host's clipboard hooks;
    when absent the engine's internal buffer is used.
    """

    engine: "SelectionEngine"
    read_clipboard: Optional[Callable[[], Optional[str]]] = None
    write_clipboard: Optional[Callable[[str], object]] = None


@dataclass(slots=True)
class ActionResult:
    """Result returned from an action handler."""

    consumed: bool
    changed: bool = False
    status: str = "ok"
    message: Optional[str] = None
    text: Optional[str] = None


__all__ = ["ActionContext", "ActionResult"]

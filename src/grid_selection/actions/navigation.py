"""Arrow-key focus movement and range extension."""

from __future__ import annotations

from typing import TYPE_CHECKING

from grid_selection.engine.navigation import Direction

from .base import ActionContext, ActionResult

if TYPE_CHECKING:
    from grid_selection.keymaps.resolver import ResolutionMatch


def _move(context: ActionContext, direction: Direction, *, extend: bool) -> ActionResult:
    engine = context.engine
    if engine.state.focus is None:
        return ActionResult(consumed=False, status="no_focus")
    changed = engine.move_focus(direction, extend=extend)
    status = "extend" if extend else "move"
    return ActionResult(consumed=True, changed=changed, status=status, message=direction.value)


def move_up(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.UP, extend=False)


def move_down(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.DOWN, extend=False)


def move_left(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.LEFT, extend=False)


def move_right(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.RIGHT, extend=False)


def extend_up(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.UP, extend=True)


def extend_down(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.DOWN, extend=True)


def extend_left(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.LEFT, extend=True)


def extend_right(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.RIGHT, extend=True)


__all__ = [
    "move_up",
    "move_down",
    "move_left",
    "move_right",
    "extend_up",
    "extend_down",
    "extend_left",
    "extend_right",
]

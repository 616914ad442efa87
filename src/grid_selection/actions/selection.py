"""Whole-selection verbs: select all and clear."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ActionContext, ActionResult

if TYPE_CHECKING:
    from grid_selection.keymaps.resolver import ResolutionMatch


def select_all(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    changed = context.engine.select_all()
    return ActionResult(consumed=True, changed=changed, status="select_all")


def clear_selection(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    changed = context.engine.clear()
    return ActionResult(consumed=True, changed=changed, status="clear")


__all__ = ["select_all", "clear_selection"]

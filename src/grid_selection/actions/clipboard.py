"""Copy, cut, paste and delete bound to keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

from grid_selection.runtime import telemetry

from .base import ActionContext, ActionResult

if TYPE_CHECKING:
    from grid_selection.keymaps.resolver import ResolutionMatch


def _publish(context: ActionContext, text: str) -> None:
    if context.write_clipboard is None or not text:
        return
    context.write_clipboard(text)


def copy_selection(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    text = context.engine.copy()
    _publish(context, text)
    return ActionResult(consumed=True, status="copy", text=text)


def cut_selection(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    text = context.engine.cut()
    _publish(context, text)
    return ActionResult(consumed=True, status="cut", text=text)


def paste_clipboard(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    text = context.read_clipboard() if context.read_clipboard is not None else None
    updates = context.engine.paste(text)
    telemetry.record_event(
        "actions.paste",
        level="debug",
        data={"updates": len(updates), "source": "host" if text is not None else "buffer"},
    )
    return ActionResult(
        consumed=True,
        changed=bool(updates),
        status="paste",
        message=f"{len(updates)} cell(s)",
        text=text,
    )


def delete_contents(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    cells = context.engine.delete_contents()
    return ActionResult(
        consumed=True,
        changed=bool(cells),
        status="delete",
        message=f"{len(cells)} cell(s)",
    )


__all__ = ["copy_selection", "cut_selection", "paste_clipboard", "delete_contents"]

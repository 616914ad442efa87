"""Turns key presses into engine actions through the keymap registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from grid_selection.actions.base import ActionContext, ActionResult
from grid_selection.runtime import telemetry

from .defaults import GRID_SCOPE, load_default_keymaps
from .models import KeyStroke
from .registry import KeymapRegistry
from .resolver import KeymapResolver

if TYPE_CHECKING:
    from grid_selection.engine import SelectionEngine


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed over by the host adapter."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def stroke(self) -> KeyStroke:
        return KeyStroke(self.key, self.modifiers)


class KeyDispatcher:
    """Resolves ``KeyInput`` in the grid scope and runs the bound action.

    Context flags exposed to ``when`` clauses: ``has_selection``,
    ``keyboard_enabled``, ``copy_paste_enabled`` and ``delete_enabled``.
    """

    def __init__(
        self,
        engine: "SelectionEngine",
        *,
        registry: Optional[KeymapRegistry] = None,
        scope: str = GRID_SCOPE,
        read_clipboard: Optional[Callable[[], Optional[str]]] = None,
        write_clipboard: Optional[Callable[[str], object]] = None,
        logger_name: str | None = None,
    ) -> None:
        if registry is None:
            registry = KeymapRegistry(logger_name=logger_name)
            load_default_keymaps(registry)
        self.engine = engine
        self.registry = registry
        self.resolver = KeymapResolver(registry, logger_name=logger_name)
        self.scope = scope
        self.context = ActionContext(
            engine=engine,
            read_clipboard=read_clipboard,
            write_clipboard=write_clipboard,
        )

    def flags(self) -> Dict[str, bool]:
        engine = self.engine
        options = engine.options
        return {
            "has_selection": engine.configured and not engine.state.is_empty,
            "keyboard_enabled": options.enable_keyboard,
            "copy_paste_enabled": options.enable_copy_paste,
            "delete_enabled": options.enable_delete,
        }

    def handle_key(self, key: KeyInput) -> ActionResult:
        try:
            stroke = key.stroke
        except ValueError:
            return ActionResult(consumed=False, status="invalid_key")

        resolution = self.resolver.resolve(self.scope, stroke, context=self.flags())
        if resolution.status != "match" or resolution.match is None:
            return ActionResult(consumed=False, status=resolution.status)

        match = resolution.match
        telemetry.increment(f"keymaps.{match.action.telemetry_name}")
        with telemetry.span(
            "keymaps::dispatch",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "token": resolution.token},
        ):
            result = match.action(self.context, match)
        if not isinstance(result, ActionResult):
            raise TypeError(
                f"Action '{match.action.id}' returned {type(result).__name__}, "
                "expected ActionResult"
            )
        return result


__all__ = ["KeyInput", "KeyDispatcher"]

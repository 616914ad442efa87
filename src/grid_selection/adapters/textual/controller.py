"""Adapter that wires SelectionEngine events into Textual-facing callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

from grid_selection.actions import ActionResult
from grid_selection.adapters.clipboard import ClipboardChain, default_chain
from grid_selection.engine import (
    CELLS_CLEARED,
    CELLS_PASTED,
    CLIPBOARD_COPIED,
    SELECTION_CHANGED,
    ClearPayload,
    PastePayload,
    SelectionEngine,
)
from grid_selection.grid import Cell, CellUpdate, ClipboardBuffer, SelectionDescriptor
from grid_selection.keymaps import KeyDispatcher, KeyInput, KeyStroke


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class GridUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets.

    ``render_selection`` receives the new descriptor plus only the cells
    whose highlight flipped, so a table can restyle just those.
    """

    render_selection: Callable[[SelectionDescriptor, frozenset[Cell]], None]
    apply_updates: Callable[[Sequence[CellUpdate]], None] = _noop
    clear_cells: Callable[[Sequence[Cell]], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualGridAdapter:
    """Bridges Textual key/mouse/focus events and the engine bus."""

    def __init__(
        self,
        engine: SelectionEngine,
        hooks: GridUIHooks,
        *,
        clipboard: Optional[ClipboardChain] = None,
        dispatcher: Optional[KeyDispatcher] = None,
    ) -> None:
        self.engine = engine
        self.hooks = hooks
        self.clipboard = clipboard if clipboard is not None else default_chain(engine)
        if self.clipboard.engine is None:
            self.clipboard.engine = engine
        self.dispatcher = dispatcher or KeyDispatcher(
            engine,
            read_clipboard=self.clipboard.read,
            write_clipboard=self.clipboard.write,
        )
        self._highlighted: frozenset[Cell] = frozenset()
        self._subscribe_events()

    # -- keyboard -------------------------------------------------------

    def handle_textual_key(
        self,
        key: str,
        *,
        modifiers: Iterable[str] = (),
    ) -> ActionResult:
        """Translate a Textual key name (``"shift+up"``, ``"ctrl+c"``) and dispatch it."""

        parsed = KeyStroke.parse(key)
        combined = tuple(parsed.modifiers) + tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, mods=combined)
        result = self.dispatcher.handle_key(KeyInput(key=parsed.key, modifiers=combined))
        if result.consumed:
            self.hooks.update_status(result.message or result.status)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    # -- pointer --------------------------------------------------------

    def handle_mouse_down(self, cell: Cell, *, shift: bool = False, ctrl: bool = False) -> bool:
        self._log_state("mouse down ->", cell=cell, shift=shift, ctrl=ctrl)
        return self.engine.press(cell, shift=shift, ctrl=ctrl)

    def handle_mouse_move(self, cell: Cell) -> bool:
        if not self.engine.is_dragging:
            return False
        return self.engine.drag_to(cell)

    def handle_mouse_up(self) -> bool:
        self._log_state("mouse up ->")
        return self.engine.release()

    def handle_blur(self) -> bool:
        """Focus or mouse capture lost; never leave the engine dragging."""

        if not self.engine.is_dragging:
            return False
        self._log_state("blur ->")
        return self.engine.cancel_drag()

    # -- structure ------------------------------------------------------

    def handle_structure_changed(self) -> bool:
        accessor = self.engine.accessor
        return self.engine.notify_structure_changed(
            accessor.row_count(), accessor.column_count()
        )

    # -- engine events --------------------------------------------------

    def _subscribe_events(self) -> None:
        self.engine.subscribe(SELECTION_CHANGED, self._on_selection_changed)
        self.engine.subscribe(CELLS_PASTED, self._on_cells_pasted)
        self.engine.subscribe(CELLS_CLEARED, self._on_cells_cleared)
        self.engine.subscribe(CLIPBOARD_COPIED, self._on_clipboard_copied)

    def _on_selection_changed(self, payload: object) -> None:
        if not isinstance(payload, SelectionDescriptor):
            return
        current = frozenset(payload.cells)
        flipped = self._highlighted.symmetric_difference(current)
        self._highlighted = current
        self._log_state("event ->", event=SELECTION_CHANGED, flipped=len(flipped))
        self.hooks.render_selection(payload, flipped)

    def _on_cells_pasted(self, payload: object) -> None:
        if not isinstance(payload, PastePayload):
            return
        self._log_state("event ->", event=CELLS_PASTED, updates=len(payload.updates))
        self.hooks.apply_updates(payload.updates)
        message = f"pasted {len(payload.updates)} cell(s)"
        if payload.dropped:
            message += f", {payload.dropped} outside the grid"
        self.hooks.update_status(message)

    def _on_cells_cleared(self, payload: object) -> None:
        if not isinstance(payload, ClearPayload):
            return
        self._log_state("event ->", event=CELLS_CLEARED, cells=len(payload.cells))
        self.hooks.clear_cells(payload.cells)
        self.hooks.update_status(f"cleared {len(payload.cells)} cell(s)")

    def _on_clipboard_copied(self, payload: object) -> None:
        if not isinstance(payload, ClipboardBuffer):
            return
        rows, cols = payload.shape
        self._log_state("event ->", event=CLIPBOARD_COPIED, shape=(rows, cols))
        self.hooks.update_status(f"copied {rows}x{cols}")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        engine = self.engine
        if not engine.configured:
            return {"configured": False}
        state = engine.state
        return {
            "mode": state.mode.value,
            "anchor": state.anchor,
            "focus": state.focus,
            "selected": len(state),
            "dragging": engine.is_dragging,
        }


__all__ = ["TextualGridAdapter", "GridUIHooks"]

"""Base classes and shared value objects for selection strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from grid_selection.grid import Cell, GridAccessor, SelectionMode, SelectionState
from grid_selection.grid.state import CellFilter
from grid_selection.runtime import telemetry


@dataclass(slots=True)
class Gesture:
    """Normalized selection intent (pointer, keyboard or direct API call)."""

    cell: Cell
    toggle: bool = False
    extend: bool = False


@dataclass(slots=True)
class GestureResult:
    """Outcome returned from ``SelectionStrategy.handle_gesture``."""

    changed: bool
    status: str = "ok"
    message: Optional[str] = None


class SelectionBus:
    """Minimal event bus the engine uses to notify the host.

    A subscriber that raises is logged and skipped; the remaining
    subscribers still run and the emitting operation is not aborted.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> bool:
        callbacks = self._subscribers.get(event, [])
        if callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            try:
                callback(payload)
            except Exception as exc:
                telemetry.record_event(
                    "bus.subscriber_error",
                    level="error",
                    data={"bus_event": event, "error": repr(exc)},
                )


@dataclass(slots=True)
class StrategyContext:
    """Services every strategy can access."""

    state: SelectionState
    accessor: GridAccessor
    skip_unselectable: bool = False


class SelectionStrategy:
    """Base class translating gestures into ``SelectionState`` mutations."""

    mode: SelectionMode = SelectionMode.CELL

    def __init__(self, context: StrategyContext) -> None:
        self.context = context

    @property
    def state(self) -> SelectionState:
        return self.context.state

    @property
    def accessor(self) -> GridAccessor:
        return self.context.accessor

    def handle_gesture(self, gesture: Gesture) -> GestureResult:
        if gesture.extend:
            return self.extend_to(gesture.cell, additive=gesture.toggle)
        return self.press(gesture.cell, toggle=gesture.toggle)

    def press(
        self, cell: Cell, *, toggle: bool = False
    ) -> GestureResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def extend_to(
        self, target: Cell, *, additive: bool = False
    ) -> GestureResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def select_all(self) -> GestureResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def cell_filter(self) -> Optional[CellFilter]:
        return None

    def _result(self, before: int, status: str) -> GestureResult:
        changed = self.state.version != before
        return GestureResult(changed=changed, status=status if changed else "noop")


__all__ = [
    "Gesture",
    "GestureResult",
    "SelectionBus",
    "StrategyContext",
    "SelectionStrategy",
]

"""Keyboard focus movement built on the active selection strategy."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from grid_selection.grid import Cell, clamp_cell
from grid_selection.modes import GestureResult, SelectionStrategy


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @classmethod
    def coerce(cls, value: "Direction | str") -> "Direction":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key.startswith("arrow"):
            key = key[len("arrow"):]
        return cls(key)


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class NavigationController:
    """Moves the focus one cell at a time, clamped to the grid (no wrap)."""

    def __init__(self, strategy: SelectionStrategy) -> None:
        self.strategy = strategy

    def next_cell(self, direction: Direction | str) -> Optional[Cell]:
        focus = self.strategy.state.focus
        if focus is None:
            return None
        accessor = self.strategy.accessor
        rows, cols = accessor.row_count(), accessor.column_count()
        if rows <= 0 or cols <= 0:
            return None
        d_row, d_col = Direction.coerce(direction).delta
        return clamp_cell(focus.offset(d_row, d_col), rows, cols)

    def move_focus(self, direction: Direction | str, *, extend: bool = False) -> GestureResult:
        target = self.next_cell(direction)
        if target is None:
            return GestureResult(changed=False, status="no_focus")
        if extend:
            return self.strategy.extend_to(target)
        return self.strategy.press(target)

    def select_all(self) -> GestureResult:
        return self.strategy.select_all()


__all__ = ["Direction", "NavigationController"]

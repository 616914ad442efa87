"""Cell and Multiple strategies: rectangular ranges of individual cells."""

from __future__ import annotations

from typing import Optional

from grid_selection.grid import Cell, SelectionMode, full_rect, rectangle
from grid_selection.grid.state import CellFilter

from .base_mode import GestureResult, SelectionStrategy


class CellStrategy(SelectionStrategy):
    mode = SelectionMode.CELL

    def press(self, cell: Cell, *, toggle: bool = False) -> GestureResult:
        before = self.state.version
        self.state.select_cell(cell, toggle=toggle, exclusive=not toggle)
        return self._result(before, "toggle" if toggle else "select")

    def extend_to(self, target: Cell, *, additive: bool = False) -> GestureResult:
        del additive
        return self._extend(target, exclusive=True)

    def select_all(self) -> GestureResult:
        before = self.state.version
        rect = full_rect(self.accessor)
        if rect is None:
            return GestureResult(changed=False, status="empty_grid")
        self.state.select_rect(
            rect,
            anchor=rect.top_left,
            focus=rect.bottom_right,
            keep=self.cell_filter(),
        )
        return self._result(before, "select_all")

    def cell_filter(self) -> Optional[CellFilter]:
        if self.context.skip_unselectable:
            return self.accessor.is_selectable
        return None

    def _extend(self, target: Cell, *, exclusive: bool) -> GestureResult:
        state = self.state
        if state.anchor is None:
            return self.press(target)
        before = state.version
        state.apply_extent(
            rectangle(state.anchor, target),
            exclusive=exclusive,
            keep=self.cell_filter(),
        )
        state.set_focus(target)
        return self._result(before, "extend")


class MultipleStrategy(CellStrategy):
    """Like Cell, but a toggle gesture starts a new range next to the others.

    Ctrl-press re-anchors on the added cell and a ctrl-held extension keeps
    every cell selected before that range began.
    """

    mode = SelectionMode.MULTIPLE

    def press(self, cell: Cell, *, toggle: bool = False) -> GestureResult:
        before = self.state.version
        self.state.select_cell(cell, toggle=toggle, exclusive=not toggle)
        if toggle and cell in self.state:
            self.state.set_anchor(cell)
            self.state.set_focus(cell)
        return self._result(before, "toggle" if toggle else "select")

    def extend_to(self, target: Cell, *, additive: bool = False) -> GestureResult:
        return self._extend(target, exclusive=not additive)


__all__ = ["CellStrategy", "MultipleStrategy"]

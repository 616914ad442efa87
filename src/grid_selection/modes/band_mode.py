"""Row and Column strategies: every gesture covers whole bands."""

from __future__ import annotations

from grid_selection.grid import Cell, Rect, SelectionMode, column_band, full_rect, row_band

from .base_mode import GestureResult, SelectionStrategy


class _BandStrategy(SelectionStrategy):
    def select_all(self) -> GestureResult:
        before = self.state.version
        rect = full_rect(self.accessor)
        if rect is None:
            return GestureResult(changed=False, status="empty_grid")
        self.state.select_rect(rect, anchor=rect.top_left, focus=rect.bottom_right)
        return self._result(before, "select_all")

    def extend_to(self, target: Cell, *, additive: bool = False) -> GestureResult:
        del additive
        state = self.state
        if state.anchor is None:
            return self.press(target)
        before = state.version
        state.apply_extent(self._band(state.anchor, target), exclusive=True)
        state.set_focus(target)
        return self._result(before, "extend")

    def _band(
        self, anchor: Cell, target: Cell
    ) -> Rect:  # pragma: no cover - abstract override
        raise NotImplementedError


class RowStrategy(_BandStrategy):
    mode = SelectionMode.ROW

    def press(self, cell: Cell, *, toggle: bool = False) -> GestureResult:
        before = self.state.version
        self.state.select_row(
            cell.row,
            self.accessor.column_count(),
            toggle=toggle,
            exclusive=not toggle,
            origin=cell,
        )
        return self._result(before, "toggle_row" if toggle else "select_row")

    def _band(self, anchor: Cell, target: Cell) -> Rect:
        return row_band(anchor.row, target.row, self.accessor.column_count())


class ColumnStrategy(_BandStrategy):
    mode = SelectionMode.COLUMN

    def press(self, cell: Cell, *, toggle: bool = False) -> GestureResult:
        before = self.state.version
        self.state.select_column(
            cell.col,
            self.accessor.row_count(),
            toggle=toggle,
            exclusive=not toggle,
            origin=cell,
        )
        return self._result(before, "toggle_column" if toggle else "select_column")

    def _band(self, anchor: Cell, target: Cell) -> Rect:
        return column_band(anchor.col, target.col, self.accessor.row_count())


__all__ = ["RowStrategy", "ColumnStrategy"]

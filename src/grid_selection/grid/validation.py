"""Bounds helpers shared across grid services."""

from __future__ import annotations

from .accessor import GridAccessor
from .cells import Cell, Rect


def in_bounds(cell: Cell, row_count: int, column_count: int) -> bool:
    return 0 <= cell.row < row_count and 0 <= cell.col < column_count


def accessor_contains(accessor: GridAccessor, cell: Cell) -> bool:
    return in_bounds(cell, accessor.row_count(), accessor.column_count())


def full_rect(accessor: GridAccessor) -> Rect | None:
    rows, cols = accessor.row_count(), accessor.column_count()
    if rows <= 0 or cols <= 0:
        return None
    return Rect(0, rows - 1, 0, cols - 1)


def clamp_cell(cell: Cell, row_count: int, column_count: int) -> Cell:
    row = max(0, min(cell.row, row_count - 1))
    col = max(0, min(cell.col, column_count - 1))
    return Cell(row, col)

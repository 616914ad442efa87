"""Rectangle geometry between anchor and focus, and incremental diffs.

Dragging produces a stream of extension steps. Re-selecting the whole
rectangle on every step costs O(area); ``diff`` only walks the strips that
enter or leave the rectangle, so each step touches O(height + delta) cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .cells import Cell, Rect


@dataclass(frozen=True, slots=True)
class RectDiff:
    """Cells entering and leaving the selection, both in row-major order."""

    to_add: tuple[Cell, ...] = ()
    to_remove: tuple[Cell, ...] = ()

    @property
    def empty(self) -> bool:
        return not self.to_add and not self.to_remove


def rectangle(anchor: Cell, focus: Cell) -> Rect:
    """Inclusive bounds spanned by two opposite corners, in either order."""

    return Rect(
        min_row=min(anchor.row, focus.row),
        max_row=max(anchor.row, focus.row),
        min_col=min(anchor.col, focus.col),
        max_col=max(anchor.col, focus.col),
    )


def row_band(first_row: int, last_row: int, column_count: int) -> Rect:
    """Whole rows ``first_row..last_row`` (either order)."""

    return Rect(
        min(first_row, last_row), max(first_row, last_row), 0, column_count - 1
    )


def column_band(first_col: int, last_col: int, row_count: int) -> Rect:
    """Whole columns ``first_col..last_col`` (either order)."""

    return Rect(
        0, row_count - 1, min(first_col, last_col), max(first_col, last_col)
    )


def subtract(outer: Rect, inner: Optional[Rect]) -> List[Cell]:
    """Cells of ``outer`` that are not in ``inner``, without scanning the overlap."""

    if inner is None:
        return list(outer.cells())

    cells: List[Cell] = []
    for row in outer.rows():
        if not inner.min_row <= row <= inner.max_row:
            cells.extend(Cell(row, col) for col in outer.columns())
            continue
        left_end = min(outer.max_col, inner.min_col - 1)
        for col in range(outer.min_col, left_end + 1):
            cells.append(Cell(row, col))
        right_start = max(outer.min_col, inner.max_col + 1)
        for col in range(right_start, outer.max_col + 1):
            cells.append(Cell(row, col))
    return cells


def diff(old: Optional[Rect], new: Rect) -> RectDiff:
    """Minimal add/remove sets turning rectangle ``old`` into ``new``."""

    if old == new:
        return RectDiff()
    return RectDiff(
        to_add=tuple(subtract(new, old)),
        to_remove=tuple(subtract(old, new)) if old is not None else (),
    )


__all__ = [
    "RectDiff",
    "column_band",
    "diff",
    "rectangle",
    "row_band",
    "subtract",
]

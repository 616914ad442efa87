"""Logical cell coordinates and inclusive rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True, order=True)
class Cell:
    """Zero-based ``(row, col)`` coordinate; never a widget reference."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> "Cell":
        return Cell(self.row + d_row, self.col + d_col)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.col})"


@dataclass(frozen=True, slots=True)
class Rect:
    """Inclusive bounds ``[min_row, max_row] x [min_col, max_col]``."""

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    def __post_init__(self) -> None:
        if self.min_row > self.max_row or self.min_col > self.max_col:
            raise ValueError(f"Degenerate rectangle {self!r}")

    @classmethod
    def single(cls, cell: Cell) -> "Rect":
        return cls(cell.row, cell.row, cell.col, cell.col)

    @property
    def height(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1

    @property
    def area(self) -> int:
        return self.height * self.width

    @property
    def top_left(self) -> Cell:
        return Cell(self.min_row, self.min_col)

    @property
    def bottom_right(self) -> Cell:
        return Cell(self.max_row, self.max_col)

    def rows(self) -> range:
        return range(self.min_row, self.max_row + 1)

    def columns(self) -> range:
        return range(self.min_col, self.max_col + 1)

    def __contains__(self, cell: object) -> bool:
        if not isinstance(cell, Cell):
            return False
        return (
            self.min_row <= cell.row <= self.max_row
            and self.min_col <= cell.col <= self.max_col
        )

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""

        for row in self.rows():
            for col in self.columns():
                yield Cell(row, col)

    def clip(self, row_count: int, column_count: int) -> "Rect | None":
        """Return the part of the rectangle inside the grid, if any."""

        max_row = min(self.max_row, row_count - 1)
        max_col = min(self.max_col, column_count - 1)
        min_row = max(self.min_row, 0)
        min_col = max(self.min_col, 0)
        if min_row > max_row or min_col > max_col:
            return None
        return Rect(min_row, max_row, min_col, max_col)


__all__ = ["Cell", "Rect"]

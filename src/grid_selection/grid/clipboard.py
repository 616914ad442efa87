"""Tab-delimited clipboard format and paste mapping.

Rows are joined by ``line_separator`` and fields by ``field_separator``.
Nothing is escaped: values containing either separator will not survive a
round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .accessor import GridAccessor
from .cells import Cell
from .ranges import rectangle

CellGrid = List[List[Optional[Cell]]]


@dataclass(frozen=True, slots=True)
class CellUpdate:
    """Instruction for the host: write ``new_value`` into ``(row, col)``."""

    row: int
    col: int
    new_value: str

    @property
    def cell(self) -> Cell:
        return Cell(self.row, self.col)


@dataclass(frozen=True, slots=True)
class ClipboardBuffer:
    """Values captured at copy time; never mutated afterwards."""

    values: tuple[tuple[str, ...], ...]
    text: str

    @property
    def shape(self) -> tuple[int, int]:
        width = max((len(row) for row in self.values), default=0)
        return len(self.values), width


class ClipboardCodec:
    def __init__(self, *, field_separator: str = "\t", line_separator: str = "\n") -> None:
        if not field_separator or not line_separator:
            raise ValueError("separators cannot be empty")
        if field_separator == line_separator:
            raise ValueError("field and line separators must differ")
        self.field_separator = field_separator
        self.line_separator = line_separator

    def organize(self, cells: Iterable[Cell]) -> CellGrid:
        """Lay ``cells`` out over their bounding rectangle.

        Positions inside the rectangle that are not selected come back as
        ``None`` so disjoint selections keep their shape.
        """

        selected = set(cells)
        if not selected:
            return []
        rows = [cell.row for cell in selected]
        cols = [cell.col for cell in selected]
        bounds = rectangle(Cell(min(rows), min(cols)), Cell(max(rows), max(cols)))
        return [
            [
                Cell(row, col) if Cell(row, col) in selected else None
                for col in bounds.columns()
            ]
            for row in bounds.rows()
        ]

    def values(self, grid: CellGrid, accessor: GridAccessor) -> List[List[str]]:
        return [
            [accessor.cell_value(cell) if cell is not None else "" for cell in row]
            for row in grid
        ]

    def serialize(self, grid: CellGrid, accessor: GridAccessor) -> str:
        return self.format(self.values(grid, accessor))

    def format(self, values: Sequence[Sequence[str]]) -> str:
        return self.line_separator.join(
            self.field_separator.join(row) for row in values
        )

    def capture(self, cells: Iterable[Cell], accessor: GridAccessor) -> ClipboardBuffer:
        values = self.values(self.organize(cells), accessor)
        return ClipboardBuffer(
            values=tuple(tuple(row) for row in values),
            text=self.format(values),
        )

    def parse(self, text: str) -> List[List[str]]:
        """Split into rows then fields; ragged rows are kept as-is."""

        return [
            line.split(self.field_separator)
            for line in text.split(self.line_separator)
        ]

    def apply_paste(
        self,
        parsed: Sequence[Sequence[str]],
        start: Cell,
        accessor: GridAccessor,
    ) -> List[CellUpdate]:
        """Map ``parsed`` onto the grid at ``start``, dropping overflow.

        Cells that already hold the pasted value get no update.
        """

        return [
            CellUpdate(row=cell.row, col=cell.col, new_value=value)
            for cell, value in self._targets(parsed, start, accessor)
            if accessor.cell_value(cell) != value
        ]

    def overflow(
        self,
        parsed: Sequence[Sequence[str]],
        start: Cell,
        accessor: GridAccessor,
    ) -> int:
        """Number of pasted fields that land outside the grid."""

        fields = sum(len(row) for row in parsed)
        return fields - sum(1 for _ in self._targets(parsed, start, accessor))

    def _targets(
        self,
        parsed: Sequence[Sequence[str]],
        start: Cell,
        accessor: GridAccessor,
    ) -> Iterator[Tuple[Cell, str]]:
        row_count = accessor.row_count()
        column_count = accessor.column_count()
        for r_offset, fields in enumerate(parsed):
            row = start.row + r_offset
            if row < 0 or row >= row_count:
                continue
            for c_offset, value in enumerate(fields):
                col = start.col + c_offset
                if 0 <= col < column_count:
                    yield Cell(row, col), value


__all__ = ["CellGrid", "CellUpdate", "ClipboardBuffer", "ClipboardCodec"]

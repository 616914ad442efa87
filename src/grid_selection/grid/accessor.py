"""Host boundary types: the read-only grid accessor and an in-memory table."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Iterable,
    List,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

from .cells import Cell

if TYPE_CHECKING:
    from .clipboard import CellUpdate


@runtime_checkable
class GridAccessor(Protocol):
    """Read-only view of the host grid consumed by the engine."""

    def row_count(self) -> int:
        """Number of data rows currently in the grid."""
        ...

    def column_count(self) -> int:
        """Number of columns currently in the grid."""
        ...

    def cell_value(self, cell: Cell) -> str:
        """Display value used when copying ``cell``."""
        ...

    def is_selectable(self, cell: Cell) -> bool:
        """False for frozen/disabled cells the user may not pick."""
        ...


class TableGrid:
    """List-of-rows grid implementing ``GridAccessor``.

    Hosts without their own model (tests, the Textual demo) keep data here
    and apply the engine's paste/clear instructions with ``apply_updates``
    and ``clear_cells``.
    """

    def __init__(
        self,
        rows: Optional[Iterable[Sequence[str]]] = None,
        *,
        disabled: Iterable[Cell] = (),
    ) -> None:
        self._rows: List[List[str]] = [list(row) for row in rows or ()]
        self._disabled = set(disabled)

    @classmethod
    def generate(cls, row_count: int, column_count: int) -> "TableGrid":
        """Grid whose values spell their coordinates, e.g. ``v12``."""

        return cls(
            [f"v{row}{col}" for col in range(column_count)]
            for row in range(row_count)
        )

    def row_count(self) -> int:
        return len(self._rows)

    def column_count(self) -> int:
        if not self._rows:
            return 0
        return max(len(row) for row in self._rows)

    def cell_value(self, cell: Cell) -> str:
        try:
            return self._rows[cell.row][cell.col]
        except IndexError:
            return ""

    def is_selectable(self, cell: Cell) -> bool:
        return cell not in self._disabled

    def disable(self, cell: Cell) -> None:
        self._disabled.add(cell)

    def set_value(self, cell: Cell, value: str) -> None:
        row = self._rows[cell.row]
        if cell.col >= len(row):
            # ragged rows are padded on write
            row.extend([""] * (cell.col + 1 - len(row)))
        row[cell.col] = value

    def apply_updates(self, updates: Iterable["CellUpdate"]) -> int:
        """Apply paste instructions, returning how many were written."""

        applied = 0
        for update in updates:
            self.set_value(update.cell, update.new_value)
            applied += 1
        return applied

    def clear_cells(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            self.set_value(cell, "")

    def insert_row(self, index: int, values: Optional[Sequence[str]] = None) -> None:
        width = self.column_count()
        row = list(values) if values is not None else [""] * width
        self._rows.insert(index, row)

    def remove_row(self, index: int) -> None:
        del self._rows[index]

    def remove_column(self, index: int) -> None:
        for row in self._rows:
            if index < len(row):
                del row[index]

    def snapshot(self) -> tuple[tuple[str, ...], ...]:
        return tuple(tuple(row) for row in self._rows)


__all__ = ["GridAccessor", "TableGrid"]

"""Selected cells, rows and columns plus the anchor/focus pair."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from .cells import Cell, Rect
from .ranges import diff
from .validation import in_bounds

CellFilter = Callable[[Cell], bool]


class SelectionMode(str, Enum):
    CELL = "cell"
    ROW = "row"
    COLUMN = "column"
    MULTIPLE = "multiple"

    @classmethod
    def coerce(cls, value: "SelectionMode | str") -> "SelectionMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"Unknown selection mode '{value}'; expected one of "
                f"{[mode.value for mode in cls]}"
            ) from exc


@dataclass(frozen=True, slots=True)
class SelectionDescriptor:
    """Snapshot handed to the host; coordinates sorted row-major."""

    cells: tuple[Cell, ...] = ()
    rows: tuple[int, ...] = ()
    columns: tuple[int, ...] = ()
    anchor: Optional[Cell] = None
    focus: Optional[Cell] = None

    @property
    def empty(self) -> bool:
        return not self.cells and not self.rows and not self.columns


class SelectionState:
    """Mutable selection model.

    Every mutation goes through the ``_add``/``_remove``/``_set_*`` helpers,
    which bump ``version`` only when something actually changed. Callers
    compare versions to decide whether a change notification is due.

    ``extent`` is the rectangle last produced by an extension step. While it
    is set, the next extension is applied as a diff against it instead of a
    full reconcile.
    """

    def __init__(self, mode: SelectionMode | str = SelectionMode.CELL) -> None:
        self.mode = SelectionMode.coerce(mode)
        self._cells: set[Cell] = set()
        self._rows: set[int] = set()
        self._columns: set[int] = set()
        self.anchor: Optional[Cell] = None
        self.focus: Optional[Cell] = None
        self.extent: Optional[Rect] = None
        self._baseline: frozenset[Cell] = frozenset()
        self.version = 0

    @property
    def cells(self) -> frozenset[Cell]:
        return frozenset(self._cells)

    @property
    def rows(self) -> frozenset[int]:
        return frozenset(self._rows)

    @property
    def columns(self) -> frozenset[int]:
        return frozenset(self._columns)

    def contains(self, cell: Cell) -> bool:
        return cell in self._cells

    __contains__ = contains

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def is_empty(self) -> bool:
        return not self._cells and not self._rows and not self._columns

    def descriptor(self) -> SelectionDescriptor:
        return SelectionDescriptor(
            cells=tuple(sorted(self._cells)),
            rows=tuple(sorted(self._rows)),
            columns=tuple(sorted(self._columns)),
            anchor=self.anchor,
            focus=self.focus,
        )

    # -- single targets -------------------------------------------------

    def select_cell(
        self, cell: Cell, *, toggle: bool = False, exclusive: bool = False
    ) -> None:
        if exclusive:
            self._clear_sets(keep=(cell,))

        if toggle and cell in self._cells:
            self._remove((cell,))
            if self.mode is SelectionMode.ROW:
                self._discard_row(cell.row)
            elif self.mode is SelectionMode.COLUMN:
                self._discard_column(cell.col)
            self._settle_after_removal()
            return

        self._add((cell,))
        if not toggle or self.anchor is None:
            self._set_anchor(cell)
            self._set_focus(cell)
        self._reset_extent(Rect.single(cell))

    def select_row(
        self,
        index: int,
        column_count: int,
        *,
        toggle: bool = False,
        exclusive: bool = False,
        origin: Optional[Cell] = None,
    ) -> None:
        band = [Cell(index, col) for col in range(column_count)]
        if exclusive:
            self._clear_sets(keep=band, keep_rows=(index,))

        if toggle and index in self._rows:
            self._discard_row(index)
            self._remove(band)
            self._settle_after_removal()
            return

        if index not in self._rows:
            self._rows.add(index)
            self.version += 1
        self._add(band)
        target = origin or Cell(index, 0)
        if not toggle or self.anchor is None:
            self._set_anchor(target)
            self._set_focus(target)
        if column_count > 0:
            self._reset_extent(Rect(index, index, 0, column_count - 1))

    def select_column(
        self,
        index: int,
        row_count: int,
        *,
        toggle: bool = False,
        exclusive: bool = False,
        origin: Optional[Cell] = None,
    ) -> None:
        band = [Cell(row, index) for row in range(row_count)]
        if exclusive:
            self._clear_sets(keep=band, keep_columns=(index,))

        if toggle and index in self._columns:
            self._discard_column(index)
            self._remove(band)
            self._settle_after_removal()
            return

        if index not in self._columns:
            self._columns.add(index)
            self.version += 1
        self._add(band)
        target = origin or Cell(0, index)
        if not toggle or self.anchor is None:
            self._set_anchor(target)
            self._set_focus(target)
        if row_count > 0:
            self._reset_extent(Rect(0, row_count - 1, index, index))

    # -- rectangles -----------------------------------------------------

    def apply_extent(
        self,
        rect: Rect,
        *,
        exclusive: bool = True,
        keep: Optional[CellFilter] = None,
    ) -> None:
        """Make ``rect`` the extension rectangle.

        With ``exclusive`` every selected cell outside ``rect`` is dropped;
        otherwise cells selected before the extension began are kept.
        """

        if self.extent is None:
            # cells selected before a non-exclusive range began survive it
            self._baseline = frozenset() if exclusive else frozenset(self._cells)
            if exclusive:
                self._remove([cell for cell in self._cells if cell not in rect])
            additions: Iterable[Cell] = rect.cells()
        else:
            step = diff(self.extent, rect)
            removals: Iterable[Cell] = step.to_remove
            if not exclusive:
                removals = [cell for cell in removals if cell not in self._baseline]
            self._remove(removals)
            additions = step.to_add

        if keep is not None:
            additions = [cell for cell in additions if keep(cell)]
        self._add(additions)
        self.extent = rect

        if self.mode is SelectionMode.ROW:
            self._replace_index_set(self._rows, set(rect.rows()), exclusive)
        elif self.mode is SelectionMode.COLUMN:
            self._replace_index_set(self._columns, set(rect.columns()), exclusive)
        elif exclusive:
            self._replace_index_set(self._rows, set(), True)
            self._replace_index_set(self._columns, set(), True)

    def select_rect(
        self,
        rect: Rect,
        *,
        anchor: Cell,
        focus: Cell,
        keep: Optional[CellFilter] = None,
    ) -> None:
        """Replace the whole selection with ``rect``."""

        self.extent = None
        self.apply_extent(rect, exclusive=True, keep=keep)
        self._set_anchor(anchor)
        self._set_focus(focus)

    def set_focus(self, cell: Optional[Cell]) -> None:
        self._set_focus(cell)

    def set_anchor(self, cell: Optional[Cell]) -> None:
        self._set_anchor(cell)

    # -- lifecycle ------------------------------------------------------

    def clear(self) -> bool:
        """Empty everything; returns False when there was nothing to clear."""

        if self.is_empty and self.anchor is None and self.focus is None:
            return False
        self._clear_sets()
        self._set_anchor(None)
        self._set_focus(None)
        return True

    def discard_extent(self) -> None:
        self.extent = None

    def prune(self, row_count: int, column_count: int) -> bool:
        """Drop coordinates outside the new grid shape.

        Row/Column mode sets are re-derived for surviving indices so that a
        selected row still covers every column after columns were added.
        Returns True when the selection changed.
        """

        before = self.version
        self.extent = None
        self._remove(
            [cell for cell in self._cells if not in_bounds(cell, row_count, column_count)]
        )
        self._replace_index_set(
            self._rows, {row for row in self._rows if row < row_count}, True
        )
        self._replace_index_set(
            self._columns, {col for col in self._columns if col < column_count}, True
        )
        if self.mode is SelectionMode.ROW:
            for row in self._rows:
                self._add(Cell(row, col) for col in range(column_count))
        elif self.mode is SelectionMode.COLUMN:
            for col in self._columns:
                self._add(Cell(row, col) for row in range(row_count))

        if self.anchor is not None and not in_bounds(self.anchor, row_count, column_count):
            self._set_anchor(None)
        if self.focus is not None and not in_bounds(self.focus, row_count, column_count):
            self._set_focus(None)
        self._settle_after_removal()
        return self.version != before

    # -- internals ------------------------------------------------------

    def _add(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            if cell not in self._cells:
                self._cells.add(cell)
                self.version += 1

    def _remove(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            if cell in self._cells:
                self._cells.discard(cell)
                self.version += 1

    def _discard_row(self, index: int) -> None:
        if index in self._rows:
            self._rows.discard(index)
            self.version += 1

    def _discard_column(self, index: int) -> None:
        if index in self._columns:
            self._columns.discard(index)
            self.version += 1

    def _replace_index_set(self, target: set[int], values: set[int], exclusive: bool) -> None:
        updated = values if exclusive else target | values
        if updated != target:
            target.clear()
            target.update(updated)
            self.version += 1

    def _set_anchor(self, cell: Optional[Cell]) -> None:
        if self.anchor != cell:
            self.anchor = cell
            self.version += 1

    def _set_focus(self, cell: Optional[Cell]) -> None:
        if self.focus != cell:
            self.focus = cell
            self.version += 1

    def _clear_sets(
        self,
        *,
        keep: Iterable[Cell] = (),
        keep_rows: Iterable[int] = (),
        keep_columns: Iterable[int] = (),
    ) -> None:
        kept = set(keep)
        self._remove([cell for cell in self._cells if cell not in kept])
        self._replace_index_set(self._rows, self._rows & set(keep_rows), True)
        self._replace_index_set(self._columns, self._columns & set(keep_columns), True)
        self.extent = None

    def _reset_extent(self, rect: Rect) -> None:
        self._baseline = frozenset()
        if rect.area != len(self._cells):
            self.extent = None
            return
        self.extent = rect if all(cell in self._cells for cell in rect.cells()) else None

    def _settle_after_removal(self) -> None:
        self.extent = None
        if not self._cells:
            self._set_anchor(None)
            self._set_focus(None)
            return
        survivor = max(self._cells)
        if self.focus is None:
            self._set_focus(self.anchor or survivor)
        if self.anchor is None:
            self._set_anchor(self.focus)


__all__ = ["CellFilter", "SelectionDescriptor", "SelectionMode", "SelectionState"]

"""Event names emitted on the engine bus and their payloads."""

from __future__ import annotations

from dataclasses import dataclass, field

from grid_selection.grid import Cell, CellUpdate

SELECTION_CHANGED = "selection.changed"
CELLS_PASTED = "cells.pasted"
CELLS_CLEARED = "cells.cleared"
CLIPBOARD_COPIED = "clipboard.copied"

ALL_EVENTS = (SELECTION_CHANGED, CELLS_PASTED, CELLS_CLEARED, CLIPBOARD_COPIED)


@dataclass(frozen=True, slots=True)
class PastePayload:
    start: Cell
    updates: tuple[CellUpdate, ...]
    rows: int
    dropped: int


@dataclass(frozen=True, slots=True)
class ClearPayload:
    cells: tuple[Cell, ...]


@dataclass(frozen=True, slots=True)
class CellValue:
    row: int
    col: int
    value: str


@dataclass(frozen=True, slots=True)
class SelectionData:
    """Values behind a selection, read through the accessor on demand.

    ``rows`` and ``columns`` map each selected row or column index to its
    values; they are empty outside Row and Column mode.
    """

    cells: tuple[CellValue, ...] = ()
    rows: dict[int, tuple[str, ...]] = field(default_factory=dict)
    columns: dict[int, tuple[str, ...]] = field(default_factory=dict)


__all__ = [
    "SELECTION_CHANGED",
    "CELLS_PASTED",
    "CELLS_CLEARED",
    "CLIPBOARD_COPIED",
    "ALL_EVENTS",
    "PastePayload",
    "ClearPayload",
    "CellValue",
    "SelectionData",
]

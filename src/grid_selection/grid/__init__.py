"""Grid coordinates, selection state, range geometry and clipboard codec."""

from .accessor import GridAccessor, TableGrid
from .cells import Cell, Rect
from .clipboard import CellGrid, CellUpdate, ClipboardBuffer, ClipboardCodec
from .ranges import RectDiff, column_band, diff, rectangle, row_band, subtract
from .state import SelectionDescriptor, SelectionMode, SelectionState
from .validation import accessor_contains, clamp_cell, full_rect, in_bounds

__all__ = [
    "Cell",
    "Rect",
    "GridAccessor",
    "TableGrid",
    "SelectionMode",
    "SelectionState",
    "SelectionDescriptor",
    "RectDiff",
    "rectangle",
    "diff",
    "subtract",
    "row_band",
    "column_band",
    "CellGrid",
    "CellUpdate",
    "ClipboardBuffer",
    "ClipboardCodec",
    "in_bounds",
    "accessor_contains",
    "clamp_cell",
    "full_rect",
]

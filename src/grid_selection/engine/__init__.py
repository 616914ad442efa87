"""Engine façade plus its options, events, drag and navigation helpers."""

from .drag import DragPhase, DragTracker
from .engine import ACTIONS, EngineNotConfiguredError, SelectionEngine
from .events import (
    ALL_EVENTS,
    CELLS_CLEARED,
    CELLS_PASTED,
    CLIPBOARD_COPIED,
    SELECTION_CHANGED,
    CellValue,
    ClearPayload,
    PastePayload,
    SelectionData,
)
from .navigation import Direction, NavigationController
from .options import EngineOptions, InvalidOptionError

__all__ = [
    "ACTIONS",
    "SelectionEngine",
    "EngineNotConfiguredError",
    "EngineOptions",
    "InvalidOptionError",
    "DragPhase",
    "DragTracker",
    "Direction",
    "NavigationController",
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

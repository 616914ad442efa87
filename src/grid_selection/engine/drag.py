"""Pointer drag state machine: Idle -> Dragging -> Idle."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from grid_selection.grid import Cell


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragTracker:
    """Tracks one in-flight drag.

    ``should_move`` filters repeated move inputs over the same cell so they
    never reach the strategy. ``pending_change`` records a selection change
    whose notification was deferred until the drag finishes.
    """

    def __init__(self) -> None:
        self.phase = DragPhase.IDLE
        self.origin: Optional[Cell] = None
        self.last_target: Optional[Cell] = None
        self.additive = False
        self.pending_change = False
        self.moves = 0

    @property
    def active(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    def begin(self, cell: Cell, *, additive: bool = False) -> None:
        self.phase = DragPhase.DRAGGING
        self.origin = cell
        self.last_target = cell
        self.additive = additive
        self.pending_change = False
        self.moves = 0

    def should_move(self, cell: Cell) -> bool:
        return self.active and cell != self.last_target

    def moved(self, cell: Cell) -> None:
        self.last_target = cell
        self.moves += 1

    def finish(self) -> bool:
        """Return to Idle; True when a drag was actually in progress."""

        was_active = self.active
        self.reset()
        return was_active

    def reset(self) -> None:
        self.phase = DragPhase.IDLE
        self.origin = None
        self.last_target = None
        self.additive = False
        self.pending_change = False
        self.moves = 0

    def __repr__(self) -> str:
        return f"DragTracker({self.phase.value}, last={self.last_target}, moves={self.moves})"


__all__ = ["DragPhase", "DragTracker"]

"""Selection strategies, one per ``SelectionMode``."""

from typing import Dict, Type

from grid_selection.grid import SelectionMode

from .base_mode import (
    Gesture,
    GestureResult,
    SelectionBus,
    SelectionStrategy,
    StrategyContext,
)
from .band_mode import ColumnStrategy, RowStrategy
from .cell_mode import CellStrategy, MultipleStrategy

STRATEGIES: Dict[SelectionMode, Type[SelectionStrategy]] = {
    SelectionMode.CELL: CellStrategy,
    SelectionMode.MULTIPLE: MultipleStrategy,
    SelectionMode.ROW: RowStrategy,
    SelectionMode.COLUMN: ColumnStrategy,
}


def strategy_for(mode: SelectionMode | str) -> Type[SelectionStrategy]:
    return STRATEGIES[SelectionMode.coerce(mode)]


__all__ = [
    "Gesture",
    "GestureResult",
    "SelectionBus",
    "SelectionStrategy",
    "StrategyContext",
    "CellStrategy",
    "MultipleStrategy",
    "RowStrategy",
    "ColumnStrategy",
    "STRATEGIES",
    "strategy_for",
]

from __future__ import annotations

from dataclasses import fields

from grid_selection.actions import ActionContext
from grid_selection.grid import Cell, Rect, SelectionMode, SelectionState, TableGrid
from grid_selection.modes import (
    CellStrategy,
    ColumnStrategy,
    Gesture,
    MultipleStrategy,
    RowStrategy,
    SelectionStrategy,
    StrategyContext,
    strategy_for,
)


def make_strategy(
    mode: SelectionMode,
    *,
    rows: int = 5,
    cols: int = 5,
    skip_unselectable: bool = False,
    grid: TableGrid | None = None,
) -> SelectionStrategy:
    context = StrategyContext(
        state=SelectionState(mode),
        accessor=grid or TableGrid.generate(rows, cols),
        skip_unselectable=skip_unselectable,
    )
    return strategy_for(mode)(context)


def test_strategy_for_each_mode() -> None:
    assert strategy_for("cell") is CellStrategy
    assert strategy_for(SelectionMode.MULTIPLE) is MultipleStrategy
    assert strategy_for("row") is RowStrategy
    assert strategy_for("column") is ColumnStrategy


def test_cell_click_then_shift_click_selects_rectangle() -> None:
    strategy = make_strategy(SelectionMode.CELL)

    strategy.handle_gesture(Gesture(Cell(1, 1)))
    result = strategy.handle_gesture(Gesture(Cell(3, 3), extend=True))

    assert result.changed and result.status == "extend"
    assert strategy.state.cells == set(Rect(1, 3, 1, 3).cells())
    assert strategy.state.anchor == Cell(1, 1)
    assert strategy.state.focus == Cell(3, 3)


def test_cell_extend_without_anchor_acts_as_press() -> None:
    strategy = make_strategy(SelectionMode.CELL)

    strategy.extend_to(Cell(2, 2))

    assert strategy.state.cells == {Cell(2, 2)}
    assert strategy.state.anchor == Cell(2, 2)


def test_cell_extend_drops_toggled_cells_outside_range() -> None:
    strategy = make_strategy(SelectionMode.CELL)
    strategy.press(Cell(0, 0))
    strategy.press(Cell(4, 4), toggle=True)

    strategy.extend_to(Cell(1, 1))

    assert Cell(4, 4) not in strategy.state
    assert strategy.state.cells == set(Rect(0, 1, 0, 1).cells())


def test_multiple_ctrl_press_starts_new_range() -> None:
    strategy = make_strategy(SelectionMode.MULTIPLE)
    strategy.press(Cell(0, 0))
    strategy.extend_to(Cell(1, 1))

    strategy.press(Cell(3, 3), toggle=True)
    strategy.extend_to(Cell(4, 4), additive=True)

    expected = set(Rect(0, 1, 0, 1).cells()) | set(Rect(3, 4, 3, 4).cells())
    assert strategy.state.cells == expected
    assert strategy.state.anchor == Cell(3, 3)


def test_noop_gesture_reports_noop() -> None:
    strategy = make_strategy(SelectionMode.CELL)
    strategy.press(Cell(2, 2))

    result = strategy.press(Cell(2, 2))

    assert not result.changed
    assert result.status == "noop"


def test_row_press_and_extend_cover_whole_rows() -> None:
    strategy = make_strategy(SelectionMode.ROW, rows=6, cols=3)

    strategy.press(Cell(1, 2))
    strategy.extend_to(Cell(3, 0))

    assert strategy.state.rows == {1, 2, 3}
    assert strategy.state.cells == set(Rect(1, 3, 0, 2).cells())
    assert strategy.state.anchor == Cell(1, 2)


def test_row_extend_back_shrinks_rows() -> None:
    strategy = make_strategy(SelectionMode.ROW, rows=6, cols=3)
    strategy.press(Cell(2, 0))
    strategy.extend_to(Cell(5, 0))

    strategy.extend_to(Cell(1, 0))

    assert strategy.state.rows == {1, 2}
    assert len(strategy.state) == 6


def test_column_toggle_press() -> None:
    strategy = make_strategy(SelectionMode.COLUMN, rows=3, cols=4)
    strategy.press(Cell(0, 1))
    strategy.press(Cell(2, 3), toggle=True)

    assert strategy.state.columns == {1, 3}

    strategy.press(Cell(1, 1), toggle=True)

    assert strategy.state.columns == {3}
    assert strategy.state.cells == {Cell(row, 3) for row in range(3)}


def test_select_all_respects_mode() -> None:
    cells = make_strategy(SelectionMode.CELL, rows=2, cols=3)
    rows = make_strategy(SelectionMode.ROW, rows=2, cols=3)
    columns = make_strategy(SelectionMode.COLUMN, rows=2, cols=3)

    for strategy in (cells, rows, columns):
        strategy.select_all()
        assert len(strategy.state) == 6
        assert strategy.state.anchor == Cell(0, 0)
        assert strategy.state.focus == Cell(1, 2)

    assert cells.state.rows == frozenset()
    assert rows.state.rows == {0, 1}
    assert columns.state.columns == {0, 1, 2}


def test_select_all_on_empty_grid() -> None:
    strategy = make_strategy(SelectionMode.CELL, grid=TableGrid())

    result = strategy.select_all()

    assert result.status == "empty_grid"
    assert strategy.state.is_empty


def test_skip_unselectable_filters_ranges() -> None:
    grid = TableGrid.generate(3, 3)
    grid.disable(Cell(1, 1))
    strategy = make_strategy(SelectionMode.CELL, grid=grid, skip_unselectable=True)

    strategy.press(Cell(0, 0))
    strategy.extend_to(Cell(2, 2))

    assert Cell(1, 1) not in strategy.state
    assert len(strategy.state) == 8


def test_geometric_ranges_include_unselectable_by_default() -> None:
    grid = TableGrid.generate(3, 3)
    grid.disable(Cell(1, 1))
    strategy = make_strategy(SelectionMode.CELL, grid=grid)

    strategy.press(Cell(0, 0))
    strategy.extend_to(Cell(2, 2))

    assert Cell(1, 1) in strategy.state


def test_gesture_and_context_carry_only_what_strategies_read() -> None:
    assert [f.name for f in fields(Gesture)] == ["cell", "toggle", "extend"]
    assert [f.name for f in fields(StrategyContext)] == [
        "state",
        "accessor",
        "skip_unselectable",
    ]
    assert [f.name for f in fields(ActionContext)] == [
        "engine",
        "read_clipboard",
        "write_clipboard",
    ]

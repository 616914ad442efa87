from __future__ import annotations

import pytest

from grid_selection.engine import Direction, DragPhase, DragTracker, NavigationController
from grid_selection.grid import Cell, Rect, SelectionMode, SelectionState, TableGrid
from grid_selection.modes import StrategyContext, strategy_for


def make_navigation(
    mode: SelectionMode = SelectionMode.CELL, rows: int = 4, cols: int = 4
) -> NavigationController:
    context = StrategyContext(
        state=SelectionState(mode), accessor=TableGrid.generate(rows, cols)
    )
    return NavigationController(strategy_for(mode)(context))


def test_direction_coerce_accepts_arrow_names() -> None:
    assert Direction.coerce("ArrowUp") is Direction.UP
    assert Direction.coerce("left") is Direction.LEFT
    assert Direction.RIGHT.delta == (0, 1)
    with pytest.raises(ValueError):
        Direction.coerce("sideways")


def test_move_without_focus_reports_no_focus() -> None:
    navigation = make_navigation()

    result = navigation.move_focus(Direction.DOWN)

    assert result.status == "no_focus"
    assert navigation.strategy.state.is_empty


def test_move_focus_is_exclusive_and_clamped() -> None:
    navigation = make_navigation()
    navigation.strategy.press(Cell(0, 3))

    navigation.move_focus(Direction.RIGHT)
    assert navigation.strategy.state.cells == {Cell(0, 3)}

    navigation.move_focus(Direction.DOWN)
    state = navigation.strategy.state
    assert state.cells == {Cell(1, 3)}
    assert state.anchor == state.focus == Cell(1, 3)


def test_extend_keeps_anchor_and_grows_rectangle() -> None:
    navigation = make_navigation()
    navigation.strategy.press(Cell(1, 1))

    for direction in (Direction.DOWN, Direction.RIGHT, Direction.DOWN, Direction.RIGHT):
        navigation.move_focus(direction, extend=True)

    state = navigation.strategy.state
    assert state.anchor == Cell(1, 1)
    assert state.focus == Cell(3, 3)
    assert state.cells == set(Rect(1, 3, 1, 3).cells())


def test_extend_back_past_anchor_flips_rectangle() -> None:
    navigation = make_navigation()
    navigation.strategy.press(Cell(1, 1))
    navigation.move_focus(Direction.RIGHT, extend=True)

    navigation.move_focus(Direction.LEFT, extend=True)
    navigation.move_focus(Direction.LEFT, extend=True)

    assert navigation.strategy.state.cells == {Cell(1, 0), Cell(1, 1)}


def test_select_all_spans_grid() -> None:
    navigation = make_navigation(rows=3, cols=2)

    navigation.select_all()

    state = navigation.strategy.state
    assert state.anchor == Cell(0, 0)
    assert state.focus == Cell(2, 1)
    assert len(state) == 6


def test_row_mode_keyboard_extension_moves_by_rows() -> None:
    navigation = make_navigation(SelectionMode.ROW, rows=5, cols=3)
    navigation.strategy.press(Cell(2, 1))

    navigation.move_focus(Direction.UP, extend=True)

    assert navigation.strategy.state.rows == {1, 2}


def test_drag_tracker_lifecycle() -> None:
    tracker = DragTracker()
    assert tracker.phase is DragPhase.IDLE
    assert not tracker.should_move(Cell(0, 0))

    tracker.begin(Cell(1, 1), additive=True)
    assert tracker.active and tracker.additive
    assert not tracker.should_move(Cell(1, 1))
    assert tracker.should_move(Cell(1, 2))

    tracker.moved(Cell(1, 2))
    assert not tracker.should_move(Cell(1, 2))
    assert tracker.moves == 1

    assert tracker.finish() is True
    assert tracker.phase is DragPhase.IDLE
    assert tracker.finish() is False

from __future__ import annotations

from typing import List, Optional

from grid_selection.engine import SelectionEngine
from grid_selection.grid import Cell, Rect, SelectionMode, TableGrid
from grid_selection.keymaps import KeyDispatcher, KeyInput


def make_dispatcher(
    *,
    rows: int = 4,
    cols: int = 4,
    mode: SelectionMode = SelectionMode.CELL,
    clipboard: Optional[List[str]] = None,
    **options: object,
) -> KeyDispatcher:
    engine = SelectionEngine(TableGrid.generate(rows, cols), mode, options or None)
    written = clipboard if clipboard is not None else []
    return KeyDispatcher(
        engine,
        read_clipboard=lambda: written[-1] if written else None,
        write_clipboard=written.append,
    )


def press(dispatcher: KeyDispatcher, key: str, *modifiers: str):
    return dispatcher.handle_key(KeyInput(key=key, modifiers=modifiers))


def test_arrow_keys_move_focus() -> None:
    dispatcher = make_dispatcher()
    dispatcher.engine.select_cell(Cell(1, 1))

    result = press(dispatcher, "down")

    assert result.consumed and result.status == "move"
    assert dispatcher.engine.state.cells == {Cell(2, 1)}


def test_arrows_without_focus_are_not_consumed() -> None:
    dispatcher = make_dispatcher()

    result = press(dispatcher, "up")

    assert not result.consumed
    assert result.status == "no_focus"


def test_shift_arrows_extend() -> None:
    dispatcher = make_dispatcher()
    dispatcher.engine.select_cell(Cell(0, 0))

    press(dispatcher, "right", "shift")
    press(dispatcher, "down", "shift")

    assert dispatcher.engine.state.cells == set(Rect(0, 1, 0, 1).cells())


def test_copy_writes_host_clipboard_and_paste_reads_it() -> None:
    clipboard: List[str] = []
    dispatcher = make_dispatcher(clipboard=clipboard)
    engine = dispatcher.engine
    engine.select_cell(Cell(0, 0))
    engine.extend_to(Cell(0, 1))

    copy = press(dispatcher, "c", "ctrl")
    assert copy.text == "v00\tv01"
    assert clipboard == ["v00\tv01"]

    clipboard.append("x\ty")
    engine.select_cell(Cell(3, 2))
    paste = press(dispatcher, "v", "ctrl")

    assert paste.changed
    assert paste.text == "x\ty"


def test_copy_needs_a_selection() -> None:
    dispatcher = make_dispatcher()

    result = press(dispatcher, "c", "ctrl")

    assert not result.consumed
    assert result.status == "blocked"


def test_meta_chords_mirror_ctrl() -> None:
    dispatcher = make_dispatcher()

    result = press(dispatcher, "a", "meta")

    assert result.status == "select_all"
    assert len(dispatcher.engine.state) == 16


def test_delete_and_backspace_clear_contents() -> None:
    dispatcher = make_dispatcher()
    cleared: List[object] = []
    dispatcher.engine.subscribe("cells.cleared", cleared.append)
    dispatcher.engine.select_cell(Cell(1, 1))

    assert press(dispatcher, "delete").message == "1 cell(s)"
    assert press(dispatcher, "backspace").consumed
    assert len(cleared) == 2


def test_escape_clears_selection() -> None:
    dispatcher = make_dispatcher()
    dispatcher.engine.select_cell(Cell(1, 1))

    result = press(dispatcher, "escape")

    assert result.changed
    assert dispatcher.engine.state.is_empty


def test_disabled_features_block_bindings() -> None:
    dispatcher = make_dispatcher(
        enable_keyboard=False, enable_copy_paste=False, enable_delete=False
    )
    dispatcher.engine.select_cell(Cell(1, 1))

    for key, modifiers in (("down", ()), ("c", ("ctrl",)), ("v", ("ctrl",)), ("delete", ())):
        result = press(dispatcher, key, *modifiers)
        assert result.status == "blocked"

    assert dispatcher.engine.state.cells == {Cell(1, 1)}


def test_keyboard_off_blocks_every_chord() -> None:
    clipboard: List[str] = []
    dispatcher = make_dispatcher(clipboard=clipboard, enable_keyboard=False)
    cleared: List[object] = []
    dispatcher.engine.subscribe("cells.cleared", cleared.append)
    dispatcher.engine.select_cell(Cell(1, 1))
    clipboard.append("x")

    chords = [("delete",), ("backspace",), ("escape",), ("a", "ctrl")]
    for modifier in ("ctrl", "meta"):
        chords.extend([("c", modifier), ("x", modifier), ("v", modifier)])
    for key, *modifiers in chords:
        assert press(dispatcher, key, *modifiers).status == "blocked"

    assert cleared == []
    assert clipboard == ["x"]
    assert dispatcher.engine.state.cells == {Cell(1, 1)}


def test_unbound_and_invalid_keys() -> None:
    dispatcher = make_dispatcher()

    assert press(dispatcher, "q").status == "miss"
    assert press(dispatcher, "c", "hyper").status == "invalid_key"


def test_cut_in_row_mode_reports_text() -> None:
    dispatcher = make_dispatcher(mode=SelectionMode.ROW, rows=2, cols=2)
    dispatcher.engine.select_row(1)

    result = press(dispatcher, "x", "ctrl")

    assert result.text == "v10\tv11"


def test_flags_reflect_engine_state() -> None:
    dispatcher = make_dispatcher(enable_delete=False)

    assert dispatcher.flags() == {
        "has_selection": False,
        "keyboard_enabled": True,
        "copy_paste_enabled": True,
        "delete_enabled": False,
    }

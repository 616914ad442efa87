from __future__ import annotations

from typing import List, Sequence

from grid_selection.adapters import CallableProvider, ClipboardChain
from grid_selection.adapters.textual import GridUIHooks, TextualGridAdapter
from grid_selection.engine import SelectionEngine
from grid_selection.grid import Cell, CellUpdate, SelectionDescriptor, TableGrid


def make_adapter(
    hooks: GridUIHooks, *, clipboard: List[str] | None = None
) -> TextualGridAdapter:
    grid = TableGrid.generate(4, 4)
    engine = SelectionEngine(grid)
    store = clipboard if clipboard is not None else []
    chain = ClipboardChain(
        [
            CallableProvider(
                "memory",
                reader=lambda: store[-1] if store else None,
                writer=store.append,
            )
        ]
    )
    return TextualGridAdapter(engine, hooks, clipboard=chain)


def test_adapter_renders_only_flipped_cells() -> None:
    renders: List[tuple[SelectionDescriptor, frozenset[Cell]]] = []
    adapter = make_adapter(
        GridUIHooks(render_selection=lambda descriptor, flipped: renders.append((descriptor, flipped)))
    )

    adapter.handle_mouse_down(Cell(0, 0))
    adapter.handle_mouse_move(Cell(0, 1))
    adapter.handle_mouse_up()

    assert [flipped for _, flipped in renders] == [
        frozenset({Cell(0, 0)}),
        frozenset({Cell(0, 1)}),
    ]
    assert renders[-1][0].cells == (Cell(0, 0), Cell(0, 1))


def test_adapter_keyboard_copy_paste_round_trip() -> None:
    applied: List[Sequence[CellUpdate]] = []
    statuses: List[str] = []
    clipboard: List[str] = []
    adapter = make_adapter(
        GridUIHooks(
            render_selection=lambda descriptor, flipped: None,
            apply_updates=applied.append,
            update_status=statuses.append,
        ),
        clipboard=clipboard,
    )
    adapter.engine.select_cell(Cell(0, 0))

    adapter.handle_textual_key("shift+right")
    adapter.handle_textual_key("ctrl+c")
    adapter.handle_textual_key("down")
    adapter.handle_textual_key("down")
    adapter.handle_textual_key("ctrl+v")

    assert clipboard == ["v00\tv01"]
    assert "copied 1x2" in statuses
    assert list(applied[-1]) == [CellUpdate(2, 1, "v00"), CellUpdate(2, 2, "v01")]


def test_adapter_relays_cleared_cells() -> None:
    cleared: List[Sequence[Cell]] = []
    adapter = make_adapter(
        GridUIHooks(render_selection=lambda descriptor, flipped: None, clear_cells=cleared.append)
    )
    adapter.engine.select_cell(Cell(3, 3))

    result = adapter.handle_textual_key("delete")

    assert result.consumed
    assert list(cleared[-1]) == [Cell(3, 3)]


def test_blur_cancels_drag() -> None:
    adapter = make_adapter(GridUIHooks(render_selection=lambda descriptor, flipped: None))

    adapter.handle_mouse_down(Cell(1, 1))
    adapter.handle_mouse_move(Cell(2, 2))
    assert adapter.engine.is_dragging

    adapter.handle_blur()

    assert not adapter.engine.is_dragging
    assert adapter.handle_blur() is False
    assert adapter.handle_mouse_move(Cell(3, 3)) is False


def test_structure_change_prunes_selection() -> None:
    adapter = make_adapter(GridUIHooks(render_selection=lambda descriptor, flipped: None))
    adapter.engine.select_cell(Cell(3, 0))
    grid = adapter.engine.accessor
    assert isinstance(grid, TableGrid)

    grid.remove_row(3)
    adapter.handle_structure_changed()

    assert adapter.engine.state.is_empty


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(
        GridUIHooks(render_selection=lambda descriptor, flipped: None, log=logs.append)
    )

    adapter.handle_textual_key("up")

    assert any(line.startswith("key ->") for line in logs)
    assert any("consumed=False" in line for line in logs)

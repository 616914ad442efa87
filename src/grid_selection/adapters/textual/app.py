"""Executable Textual app hosting the selection engine over a DataTable."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import DataTable, Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use grid_selection.adapters.textual.app"
    ) from exc

from grid_selection.engine import EngineOptions, SelectionEngine
from grid_selection.grid import Cell, CellUpdate, SelectionDescriptor, SelectionMode, TableGrid
from grid_selection.keymaps import binding_hints
from grid_selection.runtime import telemetry

from .controller import GridUIHooks, TextualGridAdapter

SELECTED_STYLE = "on rgb(60,80,120)"


def _cell_from_meta(event: events.MouseEvent) -> Optional[Cell]:
    # DataTable tags every rendered cell with its coordinates
    meta = event.style.meta
    row, column = meta.get("row"), meta.get("column")
    if row is None or column is None or row < 0 or column < 0:
        return None
    return Cell(int(row), int(column))


class SelectableTable(DataTable):
    """DataTable that forwards pointer and focus events to the adapter."""

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="none", **kwargs)
        self.adapter: TextualGridAdapter | None = None

    def on_mouse_down(self, event: events.MouseDown) -> None:
        cell = _cell_from_meta(event)
        if self.adapter is None or cell is None:
            return
        self.capture_mouse()
        self.adapter.handle_mouse_down(cell, shift=event.shift, ctrl=event.ctrl or event.meta)
        event.stop()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        cell = _cell_from_meta(event)
        if self.adapter is None or cell is None:
            return
        self.adapter.handle_mouse_move(cell)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.adapter is None:
            return
        self.release_mouse()
        self.adapter.handle_mouse_up()
        event.stop()

    def on_blur(self, event: events.Blur) -> None:
        del event
        if self.adapter is not None:
            self.adapter.handle_blur()

    def on_key(self, event: events.Key) -> None:
        if self.adapter is None:
            return
        result = self.adapter.handle_textual_key(event.key)
        if result.consumed:
            event.prevent_default()
            event.stop()


@dataclass
class UIState:
    status_text: str = ""
    selected: int = 0


class GridSelectionApp(App[None]):
    """Minimal Textual UI embedding the selection engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#grid {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        grid: TableGrid,
        *,
        mode: SelectionMode | str = SelectionMode.CELL,
        options: EngineOptions | None = None,
    ) -> None:
        super().__init__()
        self.grid = grid
        self.engine = SelectionEngine(grid, mode, options)
        self.adapter: TextualGridAdapter | None = None
        self._state = UIState()
        self._table: SelectableTable | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._table = SelectableTable(id="grid")
        yield self._table
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        table = self._table
        assert table is not None
        columns = self.grid.column_count()
        table.add_columns(*(f"c{index}" for index in range(columns)))
        for row in range(self.grid.row_count()):
            table.add_row(*(self._render(Cell(row, col), False) for col in range(columns)))

        hooks = GridUIHooks(
            render_selection=self._render_selection,
            apply_updates=self._apply_updates,
            clear_cells=self._clear_cells,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualGridAdapter(self.engine, hooks)
        table.adapter = self.adapter
        table.focus()
        registry = self.adapter.dispatcher.registry
        chords = [hint for hint in binding_hints(registry) if hint.startswith("ctrl+")]
        self._update_status(f"{self.engine.mode.value} mode | " + "  ".join(chords))

    def _render(self, cell: Cell, selected: bool) -> Text:
        text = Text(self.grid.cell_value(cell))
        if selected:
            text.stylize(SELECTED_STYLE)
        return text

    def _restyle(self, cells: Sequence[Cell] | frozenset[Cell]) -> None:
        if self._table is None:
            return
        for cell in cells:
            if cell.row >= self._table.row_count:
                continue
            self._table.update_cell_at(
                (cell.row, cell.col),
                self._render(cell, self.engine.contains(cell)),
                update_width=False,
            )

    def _render_selection(
        self, descriptor: SelectionDescriptor, flipped: frozenset[Cell]
    ) -> None:
        self._state.selected = len(descriptor.cells)
        self._restyle(flipped)
        focus = descriptor.focus.as_tuple() if descriptor.focus else "-"
        self._update_status(f"{self._state.selected} selected, focus {focus}")

    def _apply_updates(self, updates: Sequence[CellUpdate]) -> None:
        self.grid.apply_updates(updates)
        self._restyle([update.cell for update in updates])

    def _clear_cells(self, cells: Sequence[Cell]) -> None:
        self.grid.clear_cells(cells)
        self._restyle(cells)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the grid selection Textual demo.")
    parser.add_argument("--rows", type=int, default=12, help="Number of rows (default: 12)")
    parser.add_argument("--cols", type=int, default=8, help="Number of columns (default: 8)")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SelectionMode],
        default=os.environ.get("GRID_SELECTION_MODE", SelectionMode.CELL.value),
        help="Selection mode (default: cell)",
    )
    parser.add_argument(
        "--emit-on-release",
        action="store_true",
        help="Notify selection changes once per drag instead of on every step",
    )
    parser.add_argument(
        "--skip-unselectable",
        action="store_true",
        help="Leave disabled cells out of rectangular ranges",
    )
    parser.add_argument(
        "--telemetry-preset",
        choices=["development", "production", "performance"],
        default=None,
        help="telelog preset to activate before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.telemetry_preset:
        telemetry.configure(preset=args.telemetry_preset)
    options = EngineOptions(
        emit_during_drag=not args.emit_on_release,
        skip_unselectable=args.skip_unselectable,
    )
    grid = TableGrid.generate(max(args.rows, 1), max(args.cols, 1))
    app = GridSelectionApp(grid, mode=args.mode, options=options)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()

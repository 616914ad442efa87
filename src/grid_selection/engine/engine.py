"""Selection engine façade composing state, strategy, navigation and codec."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Mapping, Optional

from grid_selection.grid import (
    Cell,
    CellUpdate,
    ClipboardBuffer,
    ClipboardCodec,
    GridAccessor,
    SelectionDescriptor,
    SelectionMode,
    SelectionState,
    accessor_contains,
)
from grid_selection.modes import (
    Gesture,
    GestureResult,
    SelectionBus,
    SelectionStrategy,
    StrategyContext,
    strategy_for,
)
from grid_selection.runtime import telemetry

from .drag import DragTracker
from .events import (
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
from .options import EngineOptions

ACTIONS = ("copy", "cut", "paste", "delete", "clear", "selectall")


class EngineNotConfiguredError(RuntimeError):
    """Raised when an operation runs before ``SelectionEngine.configure``."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"SelectionEngine.{operation}() called before configure(); "
            "provide a GridAccessor first"
        )
        self.operation = operation


class SelectionEngine:
    """Host-agnostic selection and clipboard engine for one grid.

    The engine owns logical coordinates only. Rendering, applying cell
    values and talking to the system clipboard belong to the host, which
    reacts to the bus events:

    ``selection.changed``  -> ``SelectionDescriptor``
    ``cells.pasted``       -> ``PastePayload``
    ``cells.cleared``      -> ``ClearPayload``
    ``clipboard.copied``   -> ``ClipboardBuffer``
    """

    def __init__(
        self,
        accessor: Optional[GridAccessor] = None,
        mode: SelectionMode | str = SelectionMode.CELL,
        options: EngineOptions | Mapping[str, Any] | None = None,
        *,
        bus: Optional[SelectionBus] = None,
        logger_name: str | None = None,
    ) -> None:
        self.bus = bus or SelectionBus()
        self.logger_name = logger_name
        self.options = EngineOptions()
        self.drag = DragTracker()
        self._accessor: Optional[GridAccessor] = None
        self._state: Optional[SelectionState] = None
        self._strategy: Optional[SelectionStrategy] = None
        self._navigation: Optional[NavigationController] = None
        self._codec = ClipboardCodec()
        self._clipboard: Optional[ClipboardBuffer] = None
        self._published_version = 0
        self._published = SelectionDescriptor()
        if accessor is not None:
            self.configure(accessor, mode, options)

    # -- configuration --------------------------------------------------

    def configure(
        self,
        accessor: GridAccessor,
        mode: SelectionMode | str = SelectionMode.CELL,
        options: EngineOptions | Mapping[str, Any] | None = None,
    ) -> None:
        if not isinstance(accessor, GridAccessor):
            raise TypeError(
                f"accessor must implement GridAccessor, got {type(accessor).__name__}"
            )
        selection_mode = SelectionMode.coerce(mode)
        engine_options = EngineOptions.coerce(options)
        had_selection = self._state is not None and not self._state.is_empty

        with telemetry.span(
            "engine::configure",
            logger_name=self.logger_name,
            component="engine",
            metadata={"mode": selection_mode.value},
        ):
            state = SelectionState(selection_mode)
            strategy = strategy_for(selection_mode)(
                StrategyContext(
                    state=state,
                    accessor=accessor,
                    skip_unselectable=engine_options.skip_unselectable,
                )
            )
            self._accessor = accessor
            self._state = state
            self._strategy = strategy
            self._navigation = NavigationController(strategy)
            self._codec = ClipboardCodec(
                field_separator=engine_options.field_separator,
                line_separator=engine_options.line_separator,
            )
            self.options = engine_options
            self.drag.reset()
            self._published_version = state.version
            self._published = state.descriptor()

        telemetry.record_event(
            "engine.configured",
            level="debug",
            logger_name=self.logger_name,
            data={"mode": selection_mode.value, **engine_options.as_dict()},
        )
        if had_selection:
            self.bus.emit(SELECTION_CHANGED, state.descriptor())

    @property
    def configured(self) -> bool:
        return self._state is not None

    @property
    def mode(self) -> SelectionMode:
        return self._require("mode").mode

    @property
    def state(self) -> SelectionState:
        return self._require("state")

    @property
    def accessor(self) -> GridAccessor:
        self._require("accessor")
        assert self._accessor is not None
        return self._accessor

    @property
    def clipboard(self) -> Optional[ClipboardBuffer]:
        return self._clipboard

    @property
    def is_dragging(self) -> bool:
        return self.drag.active

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self.bus.subscribe(event, callback)

    # -- selection ------------------------------------------------------

    def contains(self, cell: Cell) -> bool:
        return self._require("contains").contains(cell)

    def select_cell(
        self, cell: Cell, *, exclusive: bool = True, toggle: bool = False
    ) -> bool:
        with self._operation("select_cell", cell=cell) as state:
            if not self._accepts(cell, "select_cell"):
                return False
            exclusive = exclusive and not toggle
            if state.mode is SelectionMode.ROW:
                state.select_row(
                    cell.row,
                    self.accessor.column_count(),
                    toggle=toggle,
                    exclusive=exclusive,
                    origin=cell,
                )
            elif state.mode is SelectionMode.COLUMN:
                state.select_column(
                    cell.col,
                    self.accessor.row_count(),
                    toggle=toggle,
                    exclusive=exclusive,
                    origin=cell,
                )
            else:
                state.select_cell(cell, toggle=toggle, exclusive=exclusive)
        return self._publish()

    def select_row(self, index: int, toggle: bool = False) -> bool:
        with self._operation("select_row", row=index) as state:
            if not 0 <= index < self.accessor.row_count():
                self._ignored("select_row", row=index)
                return False
            state.select_row(
                index,
                self.accessor.column_count(),
                toggle=toggle,
                exclusive=not toggle,
            )
        return self._publish()

    def select_column(self, index: int, toggle: bool = False) -> bool:
        with self._operation("select_column", column=index) as state:
            if not 0 <= index < self.accessor.column_count():
                self._ignored("select_column", column=index)
                return False
            state.select_column(
                index,
                self.accessor.row_count(),
                toggle=toggle,
                exclusive=not toggle,
            )
        return self._publish()

    def select_all(self) -> bool:
        with self._operation("select_all"):
            assert self._navigation is not None
            self._navigation.select_all()
        return self._publish()

    def clear(self) -> bool:
        with self._operation("clear") as state:
            self.drag.reset()
            state.clear()
        return self._publish()

    def extend_to(self, cell: Cell) -> bool:
        with self._operation("extend_to", cell=cell):
            if not self._in_bounds(cell, "extend_to"):
                return False
            self._gesture(Gesture(cell=cell, extend=True))
        return self._publish()

    def move_focus(self, direction: Direction | str, extend: bool = False) -> bool:
        resolved = Direction.coerce(direction)
        with self._operation("move_focus", direction=resolved.value, extend=extend):
            assert self._navigation is not None
            result = self._navigation.move_focus(resolved, extend=extend)
            if result.status == "no_focus":
                self._ignored("move_focus", reason="no_focus")
        return self._publish()

    def get_selection_descriptor(self) -> SelectionDescriptor:
        return self._require("get_selection_descriptor").descriptor()

    # -- data -----------------------------------------------------------

    def cell_data(self, cell: Cell) -> Optional[str]:
        """Current value of ``cell``; None outside the grid."""

        self._require("cell_data")
        if not accessor_contains(self.accessor, cell):
            return None
        return self.accessor.cell_value(cell)

    def row_data(self, index: int) -> tuple[str, ...]:
        self._require("row_data")
        if not 0 <= index < self.accessor.row_count():
            return ()
        return tuple(
            self.accessor.cell_value(Cell(index, col))
            for col in range(self.accessor.column_count())
        )

    def column_data(self, index: int) -> tuple[str, ...]:
        self._require("column_data")
        if not 0 <= index < self.accessor.column_count():
            return ()
        return tuple(
            self.accessor.cell_value(Cell(row, index))
            for row in range(self.accessor.row_count())
        )

    def selected_data(self) -> SelectionData:
        """Values of the current selection in row-major order."""

        with self._operation("selected_data") as state:
            descriptor = state.descriptor()
            return SelectionData(
                cells=tuple(
                    CellValue(cell.row, cell.col, self.accessor.cell_value(cell))
                    for cell in descriptor.cells
                ),
                rows={row: self.row_data(row) for row in descriptor.rows},
                columns={col: self.column_data(col) for col in descriptor.columns},
            )

    # -- pointer gestures -----------------------------------------------

    def press(self, cell: Cell, *, shift: bool = False, ctrl: bool = False) -> bool:
        """Pointer-down on ``cell``; begins a drag when dragging is enabled."""

        with self._operation("press", cell=cell, shift=shift, ctrl=ctrl) as state:
            if not self._accepts(cell, "press"):
                return False
            toggle = ctrl and self.options.ctrl_select
            extend = shift and self.options.shift_select and state.anchor is not None
            self._gesture(Gesture(cell=cell, toggle=toggle, extend=extend))
        changed = self._publish()
        if self.options.enable_mouse_drag:
            self.drag.begin(cell, additive=toggle)
        return changed

    def drag_to(self, cell: Cell) -> bool:
        with self._operation("drag_to", cell=cell):
            if not self.drag.should_move(cell):
                return False
            if not self._in_bounds(cell, "drag_to"):
                return False
            self._gesture(Gesture(cell=cell, toggle=self.drag.additive, extend=True))
            self.drag.moved(cell)
        return self._publish()

    def release(self) -> bool:
        """Pointer-up: finish the drag and flush a deferred notification."""

        with self._operation("release"):
            pending = self.drag.pending_change
            if not self.drag.finish():
                return False
        return self._publish() if pending else False

    def cancel_drag(self) -> bool:
        """Input capture lost; the selection built so far is kept."""

        with self._operation("cancel_drag"):
            pending = self.drag.pending_change
            if not self.drag.finish():
                return False
            telemetry.record_event(
                "engine.drag_cancelled", level="debug", logger_name=self.logger_name
            )
        return self._publish() if pending else False

    # -- clipboard ------------------------------------------------------

    def copy(self) -> str:
        with self._operation("copy") as state:
            if state.is_empty:
                self._ignored("copy", reason="empty_selection")
                return ""
            buffer = self._codec.capture(state.cells, self.accessor)
            self._clipboard = buffer
        self.bus.emit(CLIPBOARD_COPIED, buffer)
        return buffer.text

    def paste(self, text: Optional[str] = None, at_cell: Optional[Cell] = None) -> List[CellUpdate]:
        """Return update instructions for ``text`` pasted at ``at_cell``.

        ``text`` defaults to the internal clipboard buffer and ``at_cell`` to
        the current focus. Out-of-grid targets are silently dropped.
        """

        with self._operation("paste") as state:
            if text is None:
                text = self._clipboard.text if self._clipboard else None
            if text is None:
                self._ignored("paste", reason="empty_clipboard")
                return []
            start = at_cell or state.focus
            if start is None:
                self._ignored("paste", reason="no_target")
                return []
            if not self._in_bounds(start, "paste"):
                return []
            parsed = self._codec.parse(text)
            updates = self._codec.apply_paste(parsed, start, self.accessor)
            dropped = self._codec.overflow(parsed, start, self.accessor)

        if updates:
            self.bus.emit(
                CELLS_PASTED,
                PastePayload(
                    start=start,
                    updates=tuple(updates),
                    rows=len(parsed),
                    dropped=dropped,
                ),
            )
        return updates

    def delete_contents(self) -> List[Cell]:
        """Cells whose content the host should clear (row-major)."""

        with self._operation("delete_contents") as state:
            cells = sorted(state.cells)
        if cells:
            self.bus.emit(CELLS_CLEARED, ClearPayload(cells=tuple(cells)))
        return cells

    def cut(self) -> str:
        text = self.copy()
        self.delete_contents()
        return text

    # -- context actions ------------------------------------------------

    def menu_actions(self) -> tuple[str, ...]:
        state = self._require("menu_actions")
        actions: list[str] = []
        if not state.is_empty:
            actions.extend(("copy", "cut"))
        if self._clipboard is not None:
            actions.append("paste")
        if not state.is_empty:
            actions.extend(("delete", "clear"))
        actions.append("selectall")
        return tuple(actions)

    def do_action(self, action: str, *, text: Optional[str] = None) -> bool:
        name = action.strip().lower().replace("_", "")
        state = self._require("do_action")
        if name not in ACTIONS:
            self._ignored("do_action", action=action, reason="unknown_action")
            return False
        if state.is_empty and name not in {"paste", "selectall", "clear"}:
            return False
        if name == "copy":
            self.copy()
        elif name == "cut":
            self.cut()
        elif name == "paste":
            self.paste(text)
        elif name == "delete":
            self.delete_contents()
        elif name == "clear":
            self.clear()
        else:
            self.select_all()
        return True

    # -- structure ------------------------------------------------------

    def notify_structure_changed(self, row_count: int, column_count: int) -> bool:
        with self._operation(
            "notify_structure_changed", rows=row_count, columns=column_count
        ) as state:
            if self.drag.finish():
                state.discard_extent()
                telemetry.record_event(
                    "engine.drag_aborted", level="debug", logger_name=self.logger_name
                )
            state.prune(max(row_count, 0), max(column_count, 0))
        return self._publish()

    # -- internals ------------------------------------------------------

    def _require(self, operation: str) -> SelectionState:
        if self._state is None:
            raise EngineNotConfiguredError(operation)
        return self._state

    @contextmanager
    def _operation(self, name: str, **metadata: object) -> Iterator[SelectionState]:
        state = self._require(name)
        telemetry.increment(f"engine.{name}")
        with telemetry.span(
            f"engine::{name}",
            logger_name=self.logger_name,
            component="engine",
            metadata={key: value for key, value in metadata.items() if value is not None},
        ):
            yield state

    def _gesture(self, gesture: Gesture) -> GestureResult:
        assert self._strategy is not None
        return self._strategy.handle_gesture(gesture)

    def _in_bounds(self, cell: Cell, operation: str) -> bool:
        if accessor_contains(self.accessor, cell):
            return True
        self._ignored(operation, cell=cell, reason="out_of_bounds")
        return False

    def _accepts(self, cell: Cell, operation: str) -> bool:
        if not self._in_bounds(cell, operation):
            return False
        if not self.accessor.is_selectable(cell):
            self._ignored(operation, cell=cell, reason="unselectable")
            return False
        return True

    def _ignored(self, operation: str, **data: object) -> None:
        telemetry.record_event(
            "engine.ignored",
            level="debug",
            data={"operation": operation, **data},
            logger_name=self.logger_name,
        )

    def _publish(self) -> bool:
        state = self._require("publish")
        if state.version == self._published_version:
            return False
        if self.drag.active and not self.options.emit_during_drag:
            self.drag.pending_change = True
            return True
        self._published_version = state.version
        descriptor = state.descriptor()
        if descriptor == self._published:
            return False
        self._published = descriptor
        self.bus.emit(SELECTION_CHANGED, descriptor)
        return True


__all__ = ["ACTIONS", "EngineNotConfiguredError", "SelectionEngine"]

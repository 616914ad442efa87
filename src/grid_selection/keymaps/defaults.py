"""Built-in grid keymap: arrows, shift+arrows and the clipboard chords."""

from __future__ import annotations

from typing import Iterable, Sequence

from grid_selection.actions import clipboard as clipboard_actions
from grid_selection.actions import navigation as navigation_actions
from grid_selection.actions import selection as selection_actions

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapRegistry

GRID_SCOPE = "grid"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="nav.move_up", handler=navigation_actions.move_up, description="Move focus up"),
    ActionRef(id="nav.move_down", handler=navigation_actions.move_down, description="Move focus down"),
    ActionRef(id="nav.move_left", handler=navigation_actions.move_left, description="Move focus left"),
    ActionRef(id="nav.move_right", handler=navigation_actions.move_right, description="Move focus right"),
    ActionRef(id="nav.extend_up", handler=navigation_actions.extend_up, description="Extend selection up"),
    ActionRef(id="nav.extend_down", handler=navigation_actions.extend_down, description="Extend selection down"),
    ActionRef(id="nav.extend_left", handler=navigation_actions.extend_left, description="Extend selection left"),
    ActionRef(id="nav.extend_right", handler=navigation_actions.extend_right, description="Extend selection right"),
    ActionRef(
        id="selection.select_all",
        handler=selection_actions.select_all,
        description="Select every cell",
    ),
    ActionRef(
        id="selection.clear",
        handler=selection_actions.clear_selection,
        description="Clear the selection",
    ),
    ActionRef(
        id="clipboard.copy",
        handler=clipboard_actions.copy_selection,
        description="Copy the selection as tab-separated text",
    ),
    ActionRef(
        id="clipboard.cut",
        handler=clipboard_actions.cut_selection,
        description="Copy the selection, then clear its cells",
    ),
    ActionRef(
        id="clipboard.paste",
        handler=clipboard_actions.paste_clipboard,
        description="Paste clipboard text at the focus",
    ),
    ActionRef(
        id="clipboard.delete",
        handler=clipboard_actions.delete_contents,
        description="Clear the contents of the selected cells",
    ),
)

_KEYBOARD = "keyboard_enabled"
# every key is gated on keyboard handling being on
_COPY = "keyboard_enabled && copy_paste_enabled && has_selection"
_PASTE = "keyboard_enabled && copy_paste_enabled"
_DELETE = "keyboard_enabled && delete_enabled && has_selection"


def _binding(
    binding_id: str,
    chord: str,
    action_id: str,
    when: str,
    description: str = "",
    tags: Sequence[str] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        scope=GRID_SCOPE,
        stroke=KeyStroke.parse(chord),
        action_id=action_id,
        description=description,
        when=WhenClause.parse_all(when),
        tags=tuple(tags),
        source="defaults",
    )


def _arrow_bindings() -> Iterable[Binding]:
    for direction in ("up", "down", "left", "right"):
        yield _binding(
            f"grid.move_{direction}",
            direction,
            f"nav.move_{direction}",
            _KEYBOARD,
            f"Move focus {direction}",
        )
        yield _binding(
            f"grid.extend_{direction}",
            f"shift+{direction}",
            f"nav.extend_{direction}",
            _KEYBOARD,
            f"Extend selection {direction}",
        )


def _command_bindings() -> Iterable[Binding]:
    # ctrl on most platforms, cmd (meta) on macOS
    for modifier, tags in (("ctrl", ()), ("meta", ("mac",))):
        yield _binding(
            f"grid.{modifier}.select_all",
            f"{modifier}+a",
            "selection.select_all",
            _KEYBOARD,
            "Select all",
            tags,
        )
        yield _binding(f"grid.{modifier}.copy", f"{modifier}+c", "clipboard.copy", _COPY, "Copy", tags)
        yield _binding(f"grid.{modifier}.cut", f"{modifier}+x", "clipboard.cut", _COPY, "Cut", tags)
        yield _binding(f"grid.{modifier}.paste", f"{modifier}+v", "clipboard.paste", _PASTE, "Paste", tags)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *_arrow_bindings(),
    *_command_bindings(),
    _binding("grid.delete", "delete", "clipboard.delete", _DELETE, "Clear cell contents"),
    _binding("grid.backspace", "backspace", "clipboard.delete", _DELETE, "Clear cell contents"),
    _binding("grid.escape", "escape", "selection.clear", _KEYBOARD, "Clear the selection"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and grid bindings."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def binding_hints(
    registry: KeymapRegistry,
    scope: str = GRID_SCOPE,
    *,
    skip_tags: Sequence[str] = ("mac",),
) -> list[str]:
    """One hint per bound action, e.g. ``["ctrl+c copy", ...]``."""

    seen: set[str] = set()
    hints: list[str] = []
    for binding in registry.iter_bindings(scope):
        if binding.action_id in seen or set(binding.tags) & set(skip_tags):
            continue
        seen.add(binding.action_id)
        hints.append(binding.hint)
    return hints


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "GRID_SCOPE",
    "binding_hints",
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
]

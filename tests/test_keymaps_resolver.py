from __future__ import annotations

from grid_selection.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    scope: str = "grid",
    chord: str = "ctrl+c",
    action_id: str = "grid.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        scope=scope,
        stroke=KeyStroke.parse(chord),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_chord() -> None:
    binding = make_binding("grid.copy")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("grid", KeyStroke("c", ("ctrl",)))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.token == "ctrl+c"


def test_resolver_accepts_chord_strings() -> None:
    registry = build_registry([make_binding("grid.copy")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("grid", "Ctrl+C").status == "match"
    assert resolver.resolve("grid", "c").status == "miss"
    assert resolver.resolve("other", "ctrl+c").status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "grid.copy",
        when=(WhenClause("has_selection"),),
        action_id="clipboard.copy",
    )
    registry = build_registry([gating])
    resolver = KeymapResolver(registry)

    blocked = resolver.resolve("grid", "ctrl+c", context={})
    assert blocked.status == "blocked"
    assert blocked.match is None

    hit = resolver.resolve("grid", "ctrl+c", context={"has_selection": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding(
        "grid.low", action_id="grid.low", when=(WhenClause("has_selection"),)
    )
    high = make_binding(
        "grid.high",
        action_id="grid.high",
        when=(WhenClause("keyboard_enabled"),),
        priority=5,
    )
    registry = build_registry([low, high])
    resolver = KeymapResolver(registry)

    result = resolver.resolve(
        "grid", "ctrl+c", context={"has_selection": True, "keyboard_enabled": True}
    )

    assert result.match is not None
    assert result.match.action.id == "grid.high"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("grid", "x")
    assert miss.status == "miss"

    new_binding = make_binding("grid.x", chord="x", action_id="grid.x")
    registry.register_action(make_action("grid.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("grid", "x")
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id


def test_resolver_prefers_more_specific_binding() -> None:
    plain = make_binding("grid.plain", action_id="grid.plain")
    gated = make_binding(
        "grid.gated", action_id="grid.gated", when=(WhenClause("has_selection"),)
    )
    resolver = KeymapResolver(build_registry([plain, gated]))

    with_selection = resolver.resolve("grid", "ctrl+c", context={"has_selection": True})
    without = resolver.resolve("grid", "ctrl+c", context={})

    assert with_selection.match is not None
    assert with_selection.match.action.id == "grid.gated"
    assert without.match is not None
    assert without.match.action.id == "grid.plain"

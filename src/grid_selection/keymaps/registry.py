"""Action and binding store with per-scope chord indexing."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, Optional, Sequence

from grid_selection.runtime.telemetry import SpanHandle, span

from .models import ActionRef, Binding

ChordKey = tuple[str, str]  # (scope, chord token)


@dataclass(slots=True)
class RegistryStats:
    """Counts plus the scopes that currently hold bindings."""

    action_count: int
    binding_count: int
    scopes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding would be ambiguous with existing ones."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        names = ", ".join(existing.id for existing in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' on '{binding.key_signature}' in scope "
            f"'{binding.scope}' is ambiguous with: {names}"
        )


def is_ambiguous(left: Binding, right: Binding) -> bool:
    """True when both bindings could fire for the same key and context.

    Bindings are told apart by priority, by how many when clauses they
    carry (the more specific one wins), or by a flag they require with
    opposite values.
    """

    if (left.scope, left.key_signature) != (right.scope, right.key_signature):
        return False
    if left.priority != right.priority or left.specificity != right.specificity:
        return False
    right_map = right.when_map
    return not any(
        flag in right_map and right_map[flag] != expected
        for flag, expected in left.when_map.items()
    )


class KeymapRegistry:
    """Owns action references and the bindings that point at them.

    Every binding mutation bumps ``revision()`` so resolvers can rebuild
    their lookup tables lazily.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_chord: Dict[ChordKey, set[str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    # -- actions --------------------------------------------------------

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
        return action

    # -- bindings -------------------------------------------------------

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts the same id and any
        ambiguous bindings instead of raising."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "scope": binding.scope},
        ) as handle:
            self._check_action(binding, handle)
            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if not replace:
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                if conflicts:
                    handle.add_metadata("conflicts", [item.id for item in conflicts])
                    raise KeymapConflictError(binding, conflicts)
            else:
                for evicted in conflicts:
                    self._drop(evicted.id)
                self._drop(binding.id)

            self._store(binding)
        return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with span(
            "keymaps::unregister_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            removed = self._drop(binding_id)
            if removed is not None:
                self._revision += 1
        return removed

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        """Swap fields of an existing binding, keeping it on conflict."""

        with span(
            "keymaps::update_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ) as handle:
            current = self.get_binding(binding_id)
            updated = replace(current, **changes)
            self._check_action(updated, handle)
            conflicts = self.detect_conflicts(updated, ignore=(binding_id,))
            if conflicts:
                handle.add_metadata("conflicts", [item.id for item in conflicts])
                raise KeymapConflictError(updated, conflicts)
            self._drop(binding_id)
            self._store(updated)
        return updated

    def iter_bindings(self, scope: Optional[str] = None) -> Iterator[Binding]:
        if scope is None:
            yield from self._bindings.values()
            return
        for (bound_scope, _token), ids in sorted(self._by_chord.items()):
            if bound_scope != scope:
                continue
            for binding_id in sorted(ids):
                yield self._bindings[binding_id]

    def bindings_for(self, scope: str, token: str) -> tuple[Binding, ...]:
        ids = self._by_chord.get((scope, token), ())
        return tuple(self._bindings[binding_id] for binding_id in sorted(ids))

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        skipped = set(ignore or ())
        return [
            existing
            for existing in self.bindings_for(binding.scope, binding.key_signature)
            if existing.id not in skipped and is_ambiguous(binding, existing)
        ]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            scopes=tuple(sorted({scope for scope, _token in self._by_chord})),
        )

    # -- internals ------------------------------------------------------

    def _check_action(self, binding: Binding, handle: SpanHandle) -> None:
        if binding.action_id in self._actions:
            return
        handle.add_metadata("missing_action", binding.action_id)
        raise KeyError(
            f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
        )

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._by_chord.setdefault((binding.scope, binding.key_signature), set()).add(
            binding.id
        )
        self._revision += 1

    def _drop(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        chord = (binding.scope, binding.key_signature)
        ids = self._by_chord.get(chord)
        if ids is not None:
            ids.discard(binding_id)
            if not ids:
                del self._by_chord[chord]
        return binding


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "is_ambiguous",
]

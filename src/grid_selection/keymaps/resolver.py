"""Chord-to-action resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Optional

from grid_selection.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver.

    ``blocked`` means the chord is bound in the scope but every binding was
    gated off by its when clauses.
    """

    status: Literal["match", "blocked", "miss"]
    match: Optional[ResolutionMatch] = None
    token: str = ""


class KeymapResolver:
    """Indexes bindings per scope and resolves single chords."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, Dict[str, tuple[Binding, ...]]]] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        scope: str,
        stroke: KeyStroke | str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        token = stroke.token if isinstance(stroke, KeyStroke) else KeyStroke.parse(stroke).token
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"scope": scope, "token": token},
        ) as handle:
            candidates = self._ensure_index(scope).get(token, ())
            if not candidates:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", token=token)

            match = self._select_match(candidates, ctx)
            if match is None:
                handle.add_metadata("status", "blocked")
                return ResolutionResult(status="blocked", token=token)

            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", match.binding.id)
            return ResolutionResult(status="match", match=match, token=token)

    def reset(self, scope: Optional[str] = None) -> None:
        if scope is None:
            self._cache.clear()
        else:
            self._cache.pop(scope, None)

    def _ensure_index(self, scope: str) -> Dict[str, tuple[Binding, ...]]:
        revision = self._registry.revision()
        cached = self._cache.get(scope)
        if cached and cached[0] == revision:
            return cached[1]

        index: Dict[str, list[Binding]] = {}
        for binding in self._registry.iter_bindings(scope):
            index.setdefault(binding.key_signature, []).append(binding)
        frozen = {token: tuple(bindings) for token, bindings in index.items()}
        self._cache[scope] = (revision, frozen)
        return frozen

    def _select_match(
        self, candidates: tuple[Binding, ...], context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        matches: list[ResolutionMatch] = []
        for binding in candidates:
            if not binding.allows(context):
                continue
            action = self._registry.get_action(binding.action_id)
            matches.append(ResolutionMatch(binding=binding, action=action))

        if not matches:
            return None

        # priority first, then the binding with more when clauses
        matches.sort(
            key=lambda m: (-m.binding.priority, -m.binding.specificity, m.binding.id)
        )
        return matches[0]


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]

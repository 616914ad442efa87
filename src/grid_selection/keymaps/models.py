"""Key chords, when-clauses, actions and the bindings tying them together."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIERS = ("alt", "ctrl", "meta", "shift")

_KEY_ALIASES = {
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
    "esc": "escape",
    "del": "delete",
    "control": "ctrl",
    "cmd": "meta",
}


def _normalize_key(key: str) -> str:
    cleaned = key.strip().lower()
    return _KEY_ALIASES.get(cleaned, cleaned)


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(_normalize_key(m) for m in modifiers if m.strip())
    unknown = [value for value in values if value not in MODIFIERS]
    if unknown:
        raise ValueError(f"Unknown modifier(s): {unknown}")
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key chord such as ``ctrl+c`` or ``shift+up``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", _normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        """Parse ``"ctrl+shift+Up"`` style chords; the last part is the key."""

        parts = [part for part in chord.split("+") if part.strip()]
        if not parts:
            raise ValueError("chord cannot be empty")
        # "ctrl++" binds the plus key itself
        if chord.endswith("++"):
            return cls("+", tuple(parts))
        return cls(parts[-1], tuple(parts[:-1]))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """One context flag a binding requires, optionally negated (``!flag``)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag or not self.flag.strip():
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        negated = expr.startswith("!")
        return cls(expr[1:].strip() if negated else expr, not negated)

    @classmethod
    def parse_all(cls, expression: str) -> tuple["WhenClause", ...]:
        """Split ``"copy_paste_enabled && !has_selection"`` into clauses."""

        return tuple(cls.parse(part) for part in expression.split("&&") if part.strip())

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected

    def __str__(self) -> str:
        return self.flag if self.expected else f"!{self.flag}"


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler invoked as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    telemetry_name: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key chord with an action inside a scope.

    ``stroke`` may be given as a chord string and ``when`` as an
    ``&&``-joined expression; both are normalized on construction.
    """

    id: str
    scope: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    tags: tuple[str, ...] = ()
    source: str | None = None
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "scope", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        when: Iterable[WhenClause | str]
        when = WhenClause.parse_all(self.when) if isinstance(self.when, str) else self.when
        object.__setattr__(
            self,
            "when",
            tuple(
                clause if isinstance(clause, WhenClause) else WhenClause.parse(clause)
                for clause in when
            ),
        )
        object.__setattr__(
            self, "tags", tuple(dict.fromkeys(t.strip() for t in self.tags if t.strip()))
        )

    @property
    def key_signature(self) -> str:
        return self.stroke.token

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    @property
    def specificity(self) -> int:
        return len(self.when)

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def hint(self) -> str:
        """Short ``"ctrl+c copy"`` label for status lines and help."""

        label = self.description or self.action_id
        return f"{self.key_signature} {label.lower()}"


__all__ = [
    "MODIFIERS",
    "KeyStroke",
    "WhenClause",
    "ActionRef",
    "Binding",
]

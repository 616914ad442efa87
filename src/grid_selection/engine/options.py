"""Engine configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping, Optional


class InvalidOptionError(ValueError):
    """Raised for unknown option keys or values the engine cannot honor."""

    def __init__(self, message: str, *, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """Behavior switches fixed at ``configure`` time.

    ``emit_during_drag`` decides whether ``selection.changed`` fires on every
    net change while dragging or once on release. ``skip_unselectable``
    filters cells rejected by ``GridAccessor.is_selectable`` out of
    rectangular ranges in Cell/Multiple mode.
    """

    shift_select: bool = True
    ctrl_select: bool = True
    enable_mouse_drag: bool = True
    enable_keyboard: bool = True
    enable_copy_paste: bool = True
    enable_delete: bool = True
    field_separator: str = "\t"
    line_separator: str = "\n"
    emit_during_drag: bool = True
    skip_unselectable: bool = False

    def __post_init__(self) -> None:
        if not self.field_separator:
            raise InvalidOptionError(
                "field_separator cannot be empty", option="field_separator"
            )
        if not self.line_separator:
            raise InvalidOptionError(
                "line_separator cannot be empty", option="line_separator"
            )
        if self.field_separator == self.line_separator:
            raise InvalidOptionError(
                "field_separator and line_separator must differ",
                option="field_separator",
            )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "EngineOptions":
        known = {item.name for item in fields(cls)}
        payload = dict(data or {})
        unknown = sorted(set(payload) - known)
        if unknown:
            raise InvalidOptionError(
                f"Unknown engine option(s): {', '.join(unknown)}", option=unknown[0]
            )
        return cls(**payload)

    @classmethod
    def coerce(
        cls, value: "EngineOptions | Mapping[str, Any] | None"
    ) -> "EngineOptions":
        if isinstance(value, cls):
            return value
        return cls.from_mapping(value)

    def merged(self, **changes: Any) -> "EngineOptions":
        known = {item.name for item in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidOptionError(
                f"Unknown engine option(s): {', '.join(unknown)}", option=unknown[0]
            )
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = ["EngineOptions", "InvalidOptionError"]

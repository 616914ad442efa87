"""Host-side clipboard access: ordered providers with an engine fallback.

The engine only ever sees plain strings. Hosts build a ``ClipboardChain``
that tries each provider in order (the OS clipboard through ``pyperclip``
by default) and falls back to the engine's internal buffer whenever the
system clipboard is unavailable or denies access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Protocol

import pyperclip

from grid_selection.runtime import telemetry

if TYPE_CHECKING:
    from grid_selection.engine import SelectionEngine


class ClipboardProvider(Protocol):
    name: str

    def read(self) -> Optional[str]:
        ...

    def write(self, text: str) -> None:
        ...


class PyperclipProvider:
    """System clipboard through pyperclip."""

    name = "system"

    def read(self) -> Optional[str]:
        return pyperclip.paste()

    def write(self, text: str) -> None:
        pyperclip.copy(text)


@dataclass(slots=True)
class CallableProvider:
    """Wraps host callables, e.g. a terminal app's own clipboard hooks."""

    name: str
    reader: Optional[Callable[[], Optional[str]]] = None
    writer: Optional[Callable[[str], object]] = None

    def read(self) -> Optional[str]:
        if self.reader is None:
            return None
        return self.reader()

    def write(self, text: str) -> None:
        if self.writer is None:
            raise RuntimeError(f"provider '{self.name}' is read-only")
        self.writer(text)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


class ClipboardChain:
    """Tries providers in order; failures are logged and skipped."""

    def __init__(
        self,
        providers: Iterable[ClipboardProvider] = (),
        *,
        engine: Optional["SelectionEngine"] = None,
    ) -> None:
        self.providers: List[ClipboardProvider] = list(providers)
        self.engine = engine
        self.last_source: Optional[str] = None

    def write(self, text: str) -> Optional[str]:
        """Offer ``text`` to every provider; returns the first that took it."""

        accepted: Optional[str] = None
        for provider in self.providers:
            try:
                provider.write(text)
            except Exception as exc:
                self._failed(provider, "write", exc)
                continue
            if accepted is None:
                accepted = provider.name
        self.last_source = accepted
        return accepted

    def read(self) -> Optional[str]:
        for provider in self.providers:
            try:
                text = provider.read()
            except Exception as exc:
                self._failed(provider, "read", exc)
                continue
            if text:
                self.last_source = provider.name
                return normalize_newlines(text)

        buffer = self.engine.clipboard if self.engine is not None else None
        if buffer is None:
            self.last_source = None
            return None
        self.last_source = "engine"
        return buffer.text

    def _failed(self, provider: ClipboardProvider, operation: str, exc: Exception) -> None:
        telemetry.increment(f"clipboard.{operation}_failed")
        telemetry.record_event(
            "clipboard.provider_failed",
            level="warning",
            data={"provider": provider.name, "operation": operation, "error": repr(exc)},
        )


def default_chain(engine: Optional["SelectionEngine"] = None) -> ClipboardChain:
    return ClipboardChain([PyperclipProvider()], engine=engine)


__all__ = [
    "ClipboardProvider",
    "PyperclipProvider",
    "CallableProvider",
    "ClipboardChain",
    "default_chain",
    "normalize_newlines",
]

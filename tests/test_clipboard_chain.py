from __future__ import annotations

from typing import List, Optional

from grid_selection.adapters import CallableProvider, ClipboardChain, normalize_newlines
from grid_selection.engine import SelectionEngine
from grid_selection.grid import Cell, TableGrid


class FailingProvider:
    name = "denied"

    def read(self) -> Optional[str]:
        raise PermissionError("clipboard access denied")

    def write(self, text: str) -> None:
        raise PermissionError("clipboard access denied")


def make_engine() -> SelectionEngine:
    return SelectionEngine(TableGrid.generate(3, 3))


def test_read_normalizes_crlf() -> None:
    chain = ClipboardChain([CallableProvider("host", reader=lambda: "a\tb\r\nc\td\r\n")])

    assert chain.read() == "a\tb\nc\td\n"
    assert chain.last_source == "host"
    assert normalize_newlines("x\ry") == "x\ny"


def test_failing_provider_is_skipped() -> None:
    written: List[str] = []
    chain = ClipboardChain(
        [FailingProvider(), CallableProvider("memory", reader=lambda: "v", writer=written.append)]
    )

    assert chain.write("payload") == "memory"
    assert written == ["payload"]
    assert chain.read() == "v"


def test_read_falls_back_to_engine_buffer() -> None:
    engine = make_engine()
    engine.select_cell(Cell(1, 2))
    engine.copy()
    chain = ClipboardChain([FailingProvider()], engine=engine)

    assert chain.read() == "v12"
    assert chain.last_source == "engine"


def test_empty_provider_result_falls_through() -> None:
    chain = ClipboardChain([CallableProvider("empty", reader=lambda: "")], engine=make_engine())

    assert chain.read() is None
    assert chain.last_source is None


def test_write_with_no_working_provider_returns_none() -> None:
    chain = ClipboardChain([FailingProvider(), CallableProvider("read-only", reader=lambda: None)])

    assert chain.write("text") is None

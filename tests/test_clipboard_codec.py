from __future__ import annotations

import pytest

from grid_selection.grid import Cell, CellUpdate, ClipboardCodec, Rect, TableGrid


def make_grid(rows: int = 5, cols: int = 5) -> TableGrid:
    return TableGrid.generate(rows, cols)


def test_serialize_rectangular_block() -> None:
    codec = ClipboardCodec()
    grid = make_grid()

    text = codec.serialize(codec.organize(Rect(0, 2, 0, 2).cells()), grid)

    assert text == "v00\tv01\tv02\nv10\tv11\tv12\nv20\tv21\tv22"


def test_disjoint_selection_keeps_bounding_shape_with_gaps() -> None:
    codec = ClipboardCodec()
    grid = make_grid()

    buffer = codec.capture([Cell(0, 0), Cell(1, 2)], grid)

    assert buffer.values == (("v00", "", ""), ("", "", "v12"))
    assert buffer.text == "v00\t\t\n\t\tv12"
    assert buffer.shape == (2, 3)


def test_organize_empty_selection() -> None:
    assert ClipboardCodec().organize([]) == []
    assert ClipboardCodec().capture([], make_grid()).text == ""


def test_round_trip_reproduces_values() -> None:
    codec = ClipboardCodec()
    grid = TableGrid([["a", "b", ""], ["c", "d d", "e"]])
    region = Rect(0, 1, 0, 2)

    buffer = codec.capture(region.cells(), grid)

    assert codec.parse(buffer.text) == [list(row) for row in grid.snapshot()]


def test_parse_keeps_ragged_rows() -> None:
    parsed = ClipboardCodec().parse("a\tb\tc\nd\ne\tf")

    assert parsed == [["a", "b", "c"], ["d"], ["e", "f"]]


def test_apply_paste_drops_overflow_silently() -> None:
    codec = ClipboardCodec()
    grid = make_grid(3, 3)
    parsed = codec.parse("1\t2\t3\n4\t5\t6\n7\t8\t9")

    updates = codec.apply_paste(parsed, Cell(1, 1), grid)

    assert updates == [
        CellUpdate(1, 1, "1"),
        CellUpdate(1, 2, "2"),
        CellUpdate(2, 1, "4"),
        CellUpdate(2, 2, "5"),
    ]


def test_apply_paste_short_rows_leave_cells_untouched() -> None:
    codec = ClipboardCodec()
    grid = make_grid(3, 3)

    updates = codec.apply_paste([["x", "y"], ["z"]], Cell(0, 0), grid)

    targets = {update.cell for update in updates}
    assert targets == {Cell(0, 0), Cell(0, 1), Cell(1, 0)}
    assert Cell(1, 1) not in targets


def test_custom_separators() -> None:
    codec = ClipboardCodec(field_separator=";", line_separator="|")
    grid = make_grid(2, 2)

    text = codec.capture(Rect(0, 1, 0, 1).cells(), grid).text

    assert text == "v00;v01|v10;v11"
    assert codec.parse(text) == [["v00", "v01"], ["v10", "v11"]]


def test_separators_must_be_distinct_and_non_empty() -> None:
    with pytest.raises(ValueError):
        ClipboardCodec(field_separator="")
    with pytest.raises(ValueError):
        ClipboardCodec(field_separator="\n", line_separator="\n")


def test_table_grid_applies_updates_and_clears() -> None:
    grid = make_grid(2, 2)

    written = grid.apply_updates([CellUpdate(0, 0, "new"), CellUpdate(1, 1, "x")])
    grid.clear_cells([Cell(0, 1)])

    assert written == 2
    assert grid.snapshot() == (("new", ""), ("v10", "x"))


def test_apply_paste_skips_cells_that_already_hold_the_value() -> None:
    codec = ClipboardCodec()
    grid = make_grid(3, 3)

    updates = codec.apply_paste([["v00", "new"], ["v10"]], Cell(0, 0), grid)

    assert updates == [CellUpdate(0, 1, "new")]


def test_overflow_counts_only_fields_outside_the_grid() -> None:
    codec = ClipboardCodec()
    grid = make_grid(3, 3)
    parsed = codec.parse("v22\tx\ny\tz")

    assert codec.overflow(parsed, Cell(2, 2), grid) == 3
    assert codec.apply_paste(parsed, Cell(2, 2), grid) == []

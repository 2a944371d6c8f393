"""Tests for the sub-block state machine and header helpers, in isolation."""

import pytest

from vdsl.dsl.blocks import BlockState, SubBlockReader, SubBlockSpec, numeric_groups, split_header
from vdsl.dsl.context import LineCursor, ModeState
from vdsl.errors import HeaderError
from vdsl.models.commands import ItemBounds


def _reader(lines, fixed_rows=2):
    rows: list[tuple[str, int, str, int]] = []

    def recorder(name):
        return lambda idx, line, line_no: rows.append((name, idx, line, line_no))

    state = ModeState("default")
    cursor = LineCursor(lines)
    specs = [
        SubBlockSpec("FIXED", recorder("FIXED"), rows=fixed_rows),
        SubBlockSpec("COUNTED", recorder("COUNTED")),
    ]
    return SubBlockReader(cursor, state, specs), cursor, state, rows


def test_reads_fixed_and_counted_blocks():
    lines = ["FIXED", "x", "y", "COUNTED", "2", "p", "q", "", "FIXED", "z", "w", "$v COMMIT"]
    reader, cursor, state, rows = _reader(lines)

    assert reader.run() == ["FIXED", "COUNTED", "FIXED"]
    assert cursor.index == 11
    assert state.pending_errors == []
    assert len(state.pending_raw_text) == 11
    assert rows == [
        ("FIXED", 0, "x", 2),
        ("FIXED", 1, "y", 3),
        ("COUNTED", 0, "p", 6),
        ("COUNTED", 1, "q", 7),
        ("FIXED", 0, "z", 10),
        ("FIXED", 1, "w", 11),
    ]


def test_state_transitions():
    reader, _, _, _ = _reader(["COUNTED", "1", "row"])
    assert reader.block_state is BlockState.AWAITING_HEADER
    reader.step()
    assert reader.block_state is BlockState.AWAITING_COUNT
    reader.step()
    assert reader.block_state is BlockState.CONSUMING_ROWS
    reader.step()
    assert reader.block_state is BlockState.AWAITING_HEADER
    reader.step()
    assert reader.block_state is BlockState.DONE


def test_unrecognised_first_line_consumes_nothing():
    reader, cursor, state, rows = _reader(["OTHER", "FIXED"])
    assert reader.run() == []
    assert cursor.index == 0
    assert state.pending_raw_text == []


def test_dsl_line_truncates_counted_block():
    reader, cursor, state, rows = _reader(["COUNTED", "3", "p", "$v SCORE 1"])
    reader.run()
    assert cursor.index == 3
    assert [r[2] for r in rows] == ["p"]
    assert state.pending_errors == ["Line 1: COUNTED expected 3 line(s) but found 1"]


def test_blank_rows_count_as_data():
    reader, cursor, _, rows = _reader(["FIXED", "", "b"])
    reader.run()
    assert [r[2] for r in rows] == ["", "b"]
    assert cursor.exhausted


def test_negative_count_reads_no_rows():
    reader, cursor, state, rows = _reader(["COUNTED", "-2", "OTHER"])
    assert reader.run() == ["COUNTED"]
    assert rows == []
    assert cursor.index == 2
    assert state.pending_errors == []


def test_invalid_count_line():
    reader, cursor, state, _ = _reader(["COUNTED", "two", "FIXED", "a", "b"])
    assert reader.run() == ["COUNTED", "FIXED"]
    assert state.pending_errors == ["Line 2: Invalid COUNTED count 'two'"]


def test_missing_count_line():
    reader, _, state, _ = _reader(["COUNTED"])
    reader.run()
    assert state.pending_errors == ["Line 1: COUNTED is missing its count line"]


def test_trailing_blank_lines_are_consumed():
    reader, cursor, state, _ = _reader(["FIXED", "a", "b", "", ""])
    reader.run()
    assert cursor.exhausted
    assert state.pending_raw_text == ["FIXED\n", "a\n", "b\n", "\n", "\n"]


def test_split_header_with_bounds():
    bounds, params = split_header("GRID(1, 2, 3, 4) 5 5 a b c", "GRID")
    assert bounds == ItemBounds(left=1, top=2, right=3, bottom=4)
    assert params == ["5", "5", "a", "b", "c"]


def test_split_header_without_bounds():
    assert split_header("2D_PLANE 10 20", "2D_PLANE") == (None, ["10", "20"])


@pytest.mark.parametrize(
    "remainder",
    ["GRID(1,2 5 5 a b c", "GRID(a,b,c,d) 5 5 a b c", "GRID(1,2,3) 5 5 a b c"],
)
def test_split_header_rejects_bad_bounds(remainder):
    with pytest.raises(HeaderError):
        split_header(remainder, "GRID")


def test_numeric_groups():
    assert numeric_groups(["1", "2", "x", "4", "5", "6"], 0, 3, 2) == [(1, 2), (5, 6)]
    assert numeric_groups(["c", "1", "2", "3"], 1, 2, 2) == [(1, 2)]
    assert numeric_groups(["1", "2"], 0, -1, 2) == []

"""Tests for the top-level parse loop: routing, modes, frames and raw text."""

from vdsl.dsl.parser import parse
from vdsl.models.commands import (
    BarGraphCommand,
    CanvasCommand,
    DebugCommand,
    GridCommand,
    ScoreCommand,
    TextAreaCommand,
)
from tests.conftest import MAZE_GRID, MIXED_OUTPUT, SIMPLE_GRID


def test_empty_input_has_only_default_mode():
    assert parse("") == {"default": []}


def test_non_dsl_input_has_only_default_mode():
    assert parse("hello\nworld\n\n") == {"default": []}


def test_simple_grid_example():
    result = parse(SIMPLE_GRID)
    assert list(result) == ["default"]
    assert len(result["default"]) == 1

    frame = result["default"][0]
    assert frame.errors == []
    assert frame.show_debug is False
    (grid,) = frame.commands
    assert isinstance(grid, GridCommand)
    assert grid.grid_colors == [["red", "blue"], ["green", "yellow"]]
    assert grid.wall_vertical == ["YYY", "YYY"]
    assert grid.wall_horizontal == ["YY", "YY", "YY"]
    assert grid.grid_texts == [["", ""], ["", ""]]
    assert grid.bounds is None


def test_bare_commit_line_still_yields_one_frame():
    text = "$v GRID 2 2 black black white\nCELL_COLORS\nred blue\ngreen yellow\nCOMMIT"
    result = parse(text)
    assert len(result["default"]) == 1
    assert result["default"][0].commands[0].grid_colors == [["red", "blue"], ["green", "yellow"]]


def test_parse_is_idempotent():
    for text in (SIMPLE_GRID, MAZE_GRID, MIXED_OUTPUT):
        assert parse(text) == parse(text)


def test_unknown_command_is_recorded():
    result = parse("$v FOO 1 2\n$v SCORE 3\n$v COMMIT")
    frame = result["default"][0]
    assert frame.errors == ["Line 1: Unknown command 'FOO'"]
    assert [c.type for c in frame.commands] == ["SCORE"]


def test_empty_remainder_is_ignored():
    result = parse("$v\n$v(m)\n$v SCORE 1")
    assert result["default"][0].errors == []
    assert result["m"] == []


def test_commit_without_commands_is_noop():
    result = parse("$v COMMIT\n$v COMMIT\n$v SCORE 1\n$v COMMIT\n$v COMMIT")
    assert len(result["default"]) == 1


def test_modes_are_independent(mixed_output):
    result = parse(mixed_output)
    assert set(result) == {"default", "other"}

    first, second = result["default"]
    assert [type(c) for c in first.commands] == [TextAreaCommand, ScoreCommand, DebugCommand]
    assert first.commands[0].text == "hello   world"
    assert first.commands[1].score == "1234567"
    assert first.show_debug is True

    # Flushed at end of input
    assert [type(c) for c in second.commands] == [BarGraphCommand]
    assert second.show_debug is False

    (other,) = result["other"]
    assert other.commands == [TextAreaCommand(text="second mode")]


def test_raw_text_holds_only_the_frames_own_lines(mixed_output):
    result = parse(mixed_output)
    first, second = result["default"]
    assert first.raw_text == (
        "$v TEXTAREA hello   world\n$v SCORE 1234567\n$v DEBUG\n$v COMMIT\n"
    )
    assert second.raw_text == "$v BAR_GRAPH red 0 10\n3 a 1 b 2 c 3\n"
    assert result["other"][0].raw_text == "$v(other) TEXTAREA second mode\n"


def test_raw_text_includes_sub_block_lines(maze_grid):
    frame = parse(maze_grid)["maze"][0]
    assert frame.raw_text == maze_grid + "\n"


def test_named_mode_grid(maze_grid):
    result = parse(maze_grid)
    assert result["default"] == []
    (frame,) = result["maze"]
    assert frame.errors == []
    canvas, grid, score = frame.commands
    assert canvas == CanvasCommand(h=400, w=400)
    assert score.score == "42"

    assert grid.h == 3 and grid.w == 3
    assert grid.grid_colors == [
        ["#FF0000", "#FFFFFF", "#FFFFFF"],
        ["#FFFFFF", "#00FF00", "#FFFFFF"],
        ["#FFFFFF", "#FFFFFF", "#FF0000"],
    ]
    assert grid.grid_texts == [["S", "", "12"], ["", "a b", ""], ["", "", "G"]]
    assert grid.wall_vertical == ["YNYY", "YYNY", "YYYY"]
    assert grid.wall_horizontal == ["YYY", "YNY", "YYY", "YYY"]
    (line,) = grid.grid_lines
    assert line.color == "#0000FF"
    assert [(p.x, p.y) for p in line.points] == [(0, 0), (1, 1), (2, 2)]


def test_errors_stay_with_their_mode():
    result = parse("$v(a) NOPE\n$v(a) SCORE 1\n$v SCORE 2")
    assert result["a"][0].errors == ["Line 1: Unknown command 'NOPE'"]
    assert result["default"][0].errors == []


def test_frames_commit_in_order():
    text = "\n".join(f"$v SCORE {i}\n$v COMMIT" for i in range(5))
    frames = parse(text)["default"]
    assert [f.commands[0].score for f in frames] == ["0", "1", "2", "3", "4"]


def test_windows_line_endings():
    result = parse("$v SCORE 5\r\n$v COMMIT\r\n")
    (frame,) = result["default"]
    assert frame.commands == [ScoreCommand(score="5")]


def test_canvas_requires_two_positive_numbers():
    result = parse("$v CANVAS 100\n$v CANVAS 0 5\n$v CANVAS 300 200")
    frame = result["default"][0]
    assert frame.errors == [
        "Line 1: CANVAS expects 2 parameters (H W), got 1",
        "Line 2: CANVAS size must be positive numbers, got '0 5'",
    ]
    assert frame.commands == [CanvasCommand(h=300, w=200)]


def test_errors_without_commands_survive_end_of_input():
    result = parse("$v FOO 1\n$v GRID x 2 a b c\n$v COMMIT")
    (frame,) = result["default"]
    assert frame.commands == []
    assert frame.show_debug is False
    assert frame.errors == [
        "Line 1: Unknown command 'FOO'",
        "Line 2: GRID size must be integers, got H='x' W='2'",
    ]
    assert frame.raw_text == "$v FOO 1\n$v GRID x 2 a b c\n$v COMMIT\n"


def test_error_only_named_mode_keeps_its_frame():
    result = parse("$v SCORE 1\n$v(m) CANVAS 0 0")
    (frame,) = result["m"]
    assert frame.commands == []
    assert frame.errors == ["Line 2: CANVAS size must be positive numbers, got '0 0'"]
    assert len(result["default"]) == 1


def test_errors_before_commit_join_the_next_frame():
    result = parse("$v FOO\n$v COMMIT\n$v SCORE 1\n$v COMMIT")
    (frame,) = result["default"]
    assert frame.commands == [ScoreCommand(score="1")]
    assert frame.errors == ["Line 1: Unknown command 'FOO'"]

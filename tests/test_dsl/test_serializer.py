"""Tests for writing commands back out as DSL text."""

import pytest

from vdsl.dsl.parser import parse
from vdsl.dsl.serializer import line_prefix, serialize_command, serialize_frame, serialize_modes
from vdsl.models.commands import (
    BarGraphCommand,
    BarGraphItem,
    CanvasCommand,
    GridCommand,
    ItemBounds,
    LineGroup,
    Segment,
    TextAreaCommand,
    TwoDPlaneCommand,
)
from tests.conftest import MAZE_GRID, MIXED_OUTPUT, PLANE, SIMPLE_GRID


def _commands_by_mode(parsed):
    return {mode: [f.commands for f in frames] for mode, frames in parsed.items()}


def test_line_prefix():
    assert line_prefix("default") == "$v"
    assert line_prefix("maze") == "$v(maze)"


def test_simple_commands():
    assert serialize_command(CanvasCommand(h=600, w=800)) == "$v CANVAS 600 800\n"
    assert serialize_command(TextAreaCommand(text="a  b"), "log") == "$v(log) TEXTAREA a  b\n"
    assert serialize_command(TextAreaCommand(text="")) == "$v TEXTAREA\n"


def test_grid_writes_only_non_default_data():
    grid = GridCommand(
        h=1,
        w=2,
        border_color="k",
        text_color="k",
        default_cell_color="w",
        grid_colors=[["w", "red"]],
        grid_texts=[["", ""]],
        wall_vertical=["YYY"],
        wall_horizontal=["YY", "YY"],
        bounds=ItemBounds(left=0, top=0, right=10.5, bottom=20),
    )
    assert serialize_command(grid) == (
        "$v GRID(0, 0, 10.5, 20) 1 2 k k w\n"
        "CELL_COLORS_POS\n"
        "1\n"
        "red 1 0 1\n"
    )


def test_plane_line_width_form():
    plane = TwoDPlaneCommand(
        h=10,
        w=10,
        line_groups=[LineGroup(color="blue", width=2.5, lines=[Segment(ax=0, ay=0, bx=1, by=1)])],
    )
    assert serialize_command(plane) == "$v 2D_PLANE 10 10\nLINES\n1\nblue 2.5 1 0 0 1 1\n"


def test_bar_graph():
    bar = BarGraphCommand(
        fill_color="red",
        y_min=0,
        y_max=10,
        items=[BarGraphItem(label="a", value=1), BarGraphItem(label="b", value=2.5)],
    )
    assert serialize_command(bar, "m") == "$v(m) BAR_GRAPH red 0 10\n2 a 1 b 2.5\n"


def test_unserializable_object_raises():
    with pytest.raises(TypeError):
        serialize_command(object())


@pytest.mark.parametrize(
    "text, mode",
    [(SIMPLE_GRID, "default"), (MAZE_GRID, "maze"), (PLANE, "plane")],
)
def test_frame_reparses_to_same_commands(text, mode):
    (frame,) = parse(text)[mode]
    out = serialize_frame(frame, mode)
    assert out.endswith(f"{line_prefix(mode)} COMMIT\n")
    (again,) = parse(out)[mode]
    assert again.commands == frame.commands
    assert again.errors == []


def test_modes_reparse_to_same_commands():
    parsed = parse(MIXED_OUTPUT)
    assert _commands_by_mode(parse(serialize_modes(parsed))) == _commands_by_mode(parsed)

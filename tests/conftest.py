"""Shared test fixtures."""

from __future__ import annotations

import pytest

from vdsl.layout.config import LayoutConfig


# Sample solver outputs

SIMPLE_GRID = """$v GRID 2 2 black black white
CELL_COLORS
red blue
green yellow
$v COMMIT"""

MAZE_GRID = """$v(maze) CANVAS 400 400
$v(maze) GRID 3 3 #000000 #000000 #FFFFFF
CELL_COLORS_POS
2
#FF0000 2 0 0 2 2
#00FF00 1 1 1
CELL_TEXT
S "" 12
"" "a b" ""
"" "" G
LINES
1
#0000FF 3 0 0 1 1 2 2
WALL_VERTICAL
YNYY
YYNY
YYYY
WALL_HORIZONTAL
YYY
YNY
YYY
YYY
$v(maze) SCORE 42
$v(maze) COMMIT"""

PLANE = """$v(plane) 2D_PLANE 100 200
CIRCLES
1
red blue 2 10 20 5 50 50 10
LINES
1
green 1 0 0 200 100
POLYGONS
1
black yellow 3 0 0 10 0 10 10
$v(plane) COMMIT"""

MIXED_OUTPUT = """solver log line that is not DSL
$v TEXTAREA hello   world
$v SCORE 1234567
iteration 2
$v DEBUG
$v COMMIT
$v(other) TEXTAREA second mode
$v BAR_GRAPH red 0 10
3 a 1 b 2 c 3
"""


@pytest.fixture
def simple_grid() -> str:
    return SIMPLE_GRID


@pytest.fixture
def maze_grid() -> str:
    return MAZE_GRID


@pytest.fixture
def plane_text() -> str:
    return PLANE


@pytest.fixture
def mixed_output() -> str:
    return MIXED_OUTPUT


@pytest.fixture
def layout_config() -> LayoutConfig:
    return LayoutConfig()

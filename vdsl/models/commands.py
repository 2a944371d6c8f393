"""Draw command models — the typed output of the DSL parser.

Attribute names are snake_case; the JSON form uses the camelCase names the
presentation layer reads (``gridColors``, ``wallVertical``, ``H``, ``W``...).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DslModel(BaseModel):
    """Base for every model that crosses the parser/renderer boundary."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Point(DslModel):
    x: float
    y: float


class ItemBounds(DslModel):
    """Pixel rectangle: (left, top) inclusive corner, (right, bottom) far corner."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


# --- GRID ---


class GridLine(DslModel):
    """Polyline in grid-cell units; (x, y) = (column, row) of a cell centre."""

    color: str
    points: list[Point] = Field(default_factory=list)


class GridCommand(DslModel):
    type: Literal["GRID"] = "GRID"
    h: int = Field(alias="H")
    w: int = Field(alias="W")
    border_color: str
    text_color: str
    default_cell_color: str
    grid_colors: list[list[str]] = Field(default_factory=list)
    grid_texts: list[list[str]] = Field(default_factory=list)
    grid_lines: list[GridLine] = Field(default_factory=list)
    # H rows of W+1 flags: wall_vertical[i][j] is the wall left of column j
    wall_vertical: list[str] = Field(default_factory=list)
    # H+1 rows of W flags: wall_horizontal[i][j] is the wall above row i
    wall_horizontal: list[str] = Field(default_factory=list)
    bounds: ItemBounds | None = None


# --- 2D_PLANE ---


class Circle(DslModel):
    x: float
    y: float
    r: float


class CircleGroup(DslModel):
    line_color: str
    fill_color: str
    circles: list[Circle] = Field(default_factory=list)


class Segment(DslModel):
    ax: float
    ay: float
    bx: float
    by: float


class LineGroup(DslModel):
    color: str
    width: float = 1.0
    lines: list[Segment] = Field(default_factory=list)


class Polygon(DslModel):
    points: list[Point] = Field(default_factory=list)


class PolygonGroup(DslModel):
    line_color: str
    fill_color: str
    polygon: Polygon = Field(default_factory=Polygon)


class TwoDPlaneCommand(DslModel):
    type: Literal["2D_PLANE"] = "2D_PLANE"
    h: float = Field(alias="H")
    w: float = Field(alias="W")
    circle_groups: list[CircleGroup] = Field(default_factory=list)
    line_groups: list[LineGroup] = Field(default_factory=list)
    polygon_groups: list[PolygonGroup] = Field(default_factory=list)
    bounds: ItemBounds | None = None


# --- BAR_GRAPH ---


class BarGraphItem(DslModel):
    label: str
    value: float


class BarGraphCommand(DslModel):
    type: Literal["BAR_GRAPH"] = "BAR_GRAPH"
    fill_color: str
    y_min: float
    y_max: float
    items: list[BarGraphItem] = Field(default_factory=list)


# --- Directives ---


class CanvasCommand(DslModel):
    type: Literal["CANVAS"] = "CANVAS"
    h: float = Field(alias="H")
    w: float = Field(alias="W")


class TextAreaCommand(DslModel):
    type: Literal["TEXTAREA"] = "TEXTAREA"
    text: str = ""


class ScoreCommand(DslModel):
    type: Literal["SCORE"] = "SCORE"
    score: str = ""


class DebugCommand(DslModel):
    type: Literal["DEBUG"] = "DEBUG"


Command = Annotated[
    Union[
        CanvasCommand,
        GridCommand,
        TwoDPlaneCommand,
        BarGraphCommand,
        TextAreaCommand,
        ScoreCommand,
        DebugCommand,
    ],
    Field(discriminator="type"),
]

# Commands that occupy a rectangle of the shared canvas
SpatialCommand = Union[GridCommand, TwoDPlaneCommand]
SPATIAL_TYPES = ("GRID", "2D_PLANE")

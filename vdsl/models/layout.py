"""Pixel-space geometry handed to a renderer."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from vdsl.models.commands import DslModel, ItemBounds


class LineSegment(DslModel):
    x1: float
    y1: float
    x2: float
    y2: float


class CellLayout(DslModel):
    row: int
    col: int
    rect: ItemBounds
    fill: str
    text: str = ""  # display text, already truncated
    tooltip: str = ""


class PolylineLayout(DslModel):
    color: str
    points: list[tuple[float, float]] = Field(default_factory=list)
    stroke_width: float = 3.0
    vertex_radius: float = 0.0


class GridLayout(DslModel):
    kind: Literal["GRID"] = "GRID"
    bounds: ItemBounds
    cell_width: float
    cell_height: float
    font_size: float
    border_color: str
    text_color: str
    wall_width: float = 2.0
    cells: list[CellLayout] = Field(default_factory=list)
    walls: list[LineSegment] = Field(default_factory=list)
    polylines: list[PolylineLayout] = Field(default_factory=list)


class CircleLayout(DslModel):
    cx: float
    cy: float
    r: float
    stroke: str
    fill: str


class SegmentLayout(DslModel):
    segment: LineSegment
    color: str
    stroke_width: float = 1.0


class PolygonLayout(DslModel):
    points: list[tuple[float, float]] = Field(default_factory=list)
    stroke: str
    fill: str


class PlaneLayout(DslModel):
    kind: Literal["2D_PLANE"] = "2D_PLANE"
    bounds: ItemBounds
    circles: list[CircleLayout] = Field(default_factory=list)
    lines: list[SegmentLayout] = Field(default_factory=list)
    polygons: list[PolygonLayout] = Field(default_factory=list)


class BarLayout(DslModel):
    label: str
    value: float
    rect: ItemBounds
    fill: str


class BarGraphLayout(DslModel):
    bounds: ItemBounds
    y_min: float
    y_max: float
    bars: list[BarLayout] = Field(default_factory=list)


class FrameLayout(DslModel):
    """Everything a renderer needs to draw one frame."""

    canvas_width: float
    canvas_height: float
    items: list[GridLayout | PlaneLayout] = Field(default_factory=list)
    bar_graphs: list[BarGraphLayout] = Field(default_factory=list)
    texts: list[str] = Field(default_factory=list)
    score: str | None = None
    debug_text: str | None = None
    errors: list[str] = Field(default_factory=list)

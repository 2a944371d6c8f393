"""Pydantic models shared by the parser, layout engine and serializer."""

from vdsl.models.commands import (
    SPATIAL_TYPES,
    BarGraphCommand,
    BarGraphItem,
    CanvasCommand,
    Circle,
    CircleGroup,
    Command,
    DebugCommand,
    GridCommand,
    GridLine,
    ItemBounds,
    LineGroup,
    Point,
    Polygon,
    PolygonGroup,
    ScoreCommand,
    Segment,
    SpatialCommand,
    TextAreaCommand,
    TwoDPlaneCommand,
)
from vdsl.models.frame import DEFAULT_MODE, Frame, ParsedModes, dump_parsed_modes, ordered_modes

__all__ = [
    "SPATIAL_TYPES",
    "BarGraphCommand",
    "BarGraphItem",
    "CanvasCommand",
    "Circle",
    "CircleGroup",
    "Command",
    "DebugCommand",
    "GridCommand",
    "GridLine",
    "ItemBounds",
    "LineGroup",
    "Point",
    "Polygon",
    "PolygonGroup",
    "ScoreCommand",
    "Segment",
    "SpatialCommand",
    "TextAreaCommand",
    "TwoDPlaneCommand",
    "DEFAULT_MODE",
    "Frame",
    "ParsedModes",
    "dump_parsed_modes",
    "ordered_modes",
]

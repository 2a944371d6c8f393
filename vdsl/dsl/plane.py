"""2D_PLANE block parser.

Header: ``2D_PLANE[(l, t, r, b)] H W`` with H, W positive numbers.
Sub-blocks, each ``N`` followed by N group rows:
    CIRCLES    ``lineColor fillColor count x1 y1 r1 ...``
    LINES      ``color count ax1 ay1 bx1 by1 ...`` or ``color width count ...``
    POLYGONS   ``lineColor fillColor vertexCount x1 y1 ...``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from vdsl.dsl.blocks import SubBlockReader, SubBlockSpec, numeric_groups, split_header
from vdsl.dsl.context import ModeState, ParseContext
from vdsl.dsl.registry import CommandLine, command
from vdsl.dsl.tokenizer import parse_float, parse_int, split_tokens
from vdsl.errors import HeaderError
from vdsl.models.commands import (
    Circle,
    CircleGroup,
    ItemBounds,
    LineGroup,
    Point,
    Polygon,
    PolygonGroup,
    Segment,
    TwoDPlaneCommand,
)

logger = logging.getLogger(__name__)


def _line_group_layout(parts: list[str]) -> tuple[float, int, int] | None:
    """(width, count, first data index) of a LINES row, or None if it has no count.

    The short form ``color count ...`` wins when its token count matches; the
    emitter's ``color width count ...`` form is recognised by its own token count.
    """
    count = parse_int(parts[1]) if len(parts) >= 2 else None
    if count is not None and len(parts) == 2 + 4 * count:
        return (1.0, count, 2)
    if len(parts) >= 3:
        width, wide_count = parse_float(parts[1]), parse_int(parts[2])
        if width is not None and wide_count is not None and len(parts) == 3 + 4 * wide_count:
            return (width, wide_count, 3)
    if count is not None:
        return (1.0, count, 2)
    return None


@dataclass
class PlaneBuilder:
    """Accumulates one 2D_PLANE command while its sub-blocks are read."""

    state: ModeState
    h: float
    w: float
    bounds: ItemBounds | None = None
    circle_groups: list[CircleGroup] = field(default_factory=list)
    line_groups: list[LineGroup] = field(default_factory=list)
    polygon_groups: list[PolygonGroup] = field(default_factory=list)

    @classmethod
    def from_header(cls, state: ModeState, line: CommandLine) -> PlaneBuilder:
        bounds, params = split_header(line.remainder, "2D_PLANE")
        if len(params) != 2:
            raise HeaderError(f"2D_PLANE expects 2 parameters (H W), got {len(params)}")
        h, w = parse_float(params[0]), parse_float(params[1])
        if h is None or w is None or h <= 0 or w <= 0:
            raise HeaderError(
                f"2D_PLANE size must be positive numbers, got H='{params[0]}' W='{params[1]}'"
            )
        return cls(state, h, w, bounds)

    def sub_blocks(self) -> list[SubBlockSpec]:
        return [
            SubBlockSpec("CIRCLES", self.circles_row),
            SubBlockSpec("LINES", self.lines_row),
            SubBlockSpec("POLYGONS", self.polygons_row),
        ]

    def _count(self, name: str, parts: list[str], index: int, line: str, line_no: int) -> int | None:
        count = parse_int(parts[index]) if len(parts) > index else None
        if count is None:
            self.state.error(line_no, f"{name} entry is missing its count, got '{line.strip()}'")
        return count

    # --- Row handlers ---

    def circles_row(self, row: int, line: str, line_no: int) -> None:
        parts = split_tokens(line)
        count = self._count("CIRCLES", parts, 2, line, line_no)
        if count is None:
            return
        circles = [Circle(x=x, y=y, r=r) for x, y, r in numeric_groups(parts, 3, count, 3)]
        if not circles:
            logger.debug("Line %d: dropping circle group without circles", line_no)
            return
        self.circle_groups.append(
            CircleGroup(line_color=parts[0], fill_color=parts[1], circles=circles)
        )

    def lines_row(self, row: int, line: str, line_no: int) -> None:
        parts = split_tokens(line)
        layout = _line_group_layout(parts)
        if layout is None:
            self.state.error(line_no, f"LINES entry is missing its count, got '{line.strip()}'")
            return
        width, count, start = layout
        segments = [
            Segment(ax=ax, ay=ay, bx=bx, by=by)
            for ax, ay, bx, by in numeric_groups(parts, start, count, 4)
        ]
        if not segments:
            logger.debug("Line %d: dropping line group without segments", line_no)
            return
        self.line_groups.append(LineGroup(color=parts[0], width=width, lines=segments))

    def polygons_row(self, row: int, line: str, line_no: int) -> None:
        parts = split_tokens(line)
        count = self._count("POLYGONS", parts, 2, line, line_no)
        if count is None:
            return
        points = [Point(x=x, y=y) for x, y in numeric_groups(parts, 3, count, 2)]
        if not points:
            logger.debug("Line %d: dropping polygon without vertices", line_no)
            return
        self.polygon_groups.append(
            PolygonGroup(line_color=parts[0], fill_color=parts[1], polygon=Polygon(points=points))
        )

    def build(self) -> TwoDPlaneCommand:
        return TwoDPlaneCommand(
            h=self.h,
            w=self.w,
            circle_groups=self.circle_groups,
            line_groups=self.line_groups,
            polygon_groups=self.polygon_groups,
            bounds=self.bounds,
        )


@command("2D_PLANE", description="Continuous plane with circles, segments and polygons")
def plane(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    try:
        builder = PlaneBuilder.from_header(state, line)
    except HeaderError as e:
        state.error(line.line_no, str(e))
        return
    SubBlockReader(ctx.cursor, state, builder.sub_blocks()).run()
    state.add_command(builder.build())

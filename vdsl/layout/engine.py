"""Geometry/layout engine — maps parsed commands into pixel space.

Pure functions, no I/O. A renderer takes one Frame, calls ``layout_frame`` (or
the per-command functions) and draws the resulting rectangles, segments and
text without further arithmetic.
"""

from __future__ import annotations

import logging

import numpy as np

from vdsl.layout.config import LayoutConfig
from vdsl.models.commands import (
    BarGraphCommand,
    CanvasCommand,
    GridCommand,
    ItemBounds,
    ScoreCommand,
    SpatialCommand,
    TextAreaCommand,
    TwoDPlaneCommand,
)
from vdsl.models.frame import Frame
from vdsl.models.layout import (
    BarGraphLayout,
    BarLayout,
    CellLayout,
    CircleLayout,
    FrameLayout,
    GridLayout,
    LineSegment,
    PlaneLayout,
    PolygonLayout,
    PolylineLayout,
    SegmentLayout,
)
from vdsl.utils import geometry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------


def find_canvas(commands: list) -> CanvasCommand | None:
    """First CANVAS command of a frame, if any."""
    for cmd in commands:
        if isinstance(cmd, CanvasCommand):
            return cmd
    return None


def canvas_size(canvas: CanvasCommand | None, config: LayoutConfig | None = None) -> tuple[float, float]:
    """(width, height) of the frame canvas."""
    config = config or LayoutConfig.from_env()
    if canvas is not None:
        return (canvas.w, canvas.h)
    return (config.default_canvas_width, config.default_canvas_height)


def resolve_bounds(
    command: SpatialCommand,
    canvas: CanvasCommand | None = None,
    config: LayoutConfig | None = None,
) -> ItemBounds:
    """Explicit bounds, else the full CANVAS, else the configured default canvas."""
    if command.bounds is not None:
        return command.bounds
    width, height = canvas_size(canvas, config)
    return ItemBounds(left=0.0, top=0.0, right=width, bottom=height)


def rects_overlap(a: ItemBounds, b: ItemBounds) -> bool:
    """True when the interiors intersect; edge-touching rectangles do not overlap."""
    return geometry.rects_overlap(a.as_tuple(), b.as_tuple())


# ---------------------------------------------------------------------------
# GRID
# ---------------------------------------------------------------------------


def grid_cell_rect(bounds: ItemBounds, h: int, w: int, row: int, col: int) -> ItemBounds:
    """Pixel rectangle of cell (row, col) of an H×W grid laid over ``bounds``."""
    cell_w = bounds.width / w
    cell_h = bounds.height / h
    left = bounds.left + col * cell_w
    top = bounds.top + row * cell_h
    return ItemBounds(left=left, top=top, right=left + cell_w, bottom=top + cell_h)


def display_text(text: str, config: LayoutConfig | None = None) -> str:
    """Cell text as drawn: long texts keep their first characters plus an ellipsis."""
    config = config or LayoutConfig.from_env()
    if len(text) > config.text_truncate_length:
        return text[: config.text_truncate_length] + config.text_ellipsis
    return text


def unified_font_size(
    grid_texts: list[list[str]],
    cell_w: float,
    cell_h: float,
    config: LayoutConfig | None = None,
) -> float:
    """One font size for every cell of a grid, sized for its longest display text."""
    config = config or LayoutConfig.from_env()
    max_len = max(
        (len(display_text(text, config)) for row in grid_texts for text in row),
        default=0,
    )
    if max_len <= 4:
        size = min(cell_h * 0.7, cell_w / max(max_len, 1) * 1.2)
    else:
        size = min(cell_h * 0.6, cell_w / 5.5)
    return min(size, config.max_font_size)


def _wall_rows(rows: list[str], count: int, length: int) -> list[str]:
    # A grid built without wall data has every wall
    if not rows:
        return ["Y" * length] * count
    return [rows[i] if i < len(rows) else "" for i in range(count)]


def grid_walls(cmd: GridCommand, bounds: ItemBounds) -> list[LineSegment]:
    """Wall segments in pixel space. Missing flag characters mean no wall."""
    xs = geometry.cell_edges(bounds.left, bounds.right, cmd.w)
    ys = geometry.cell_edges(bounds.top, bounds.bottom, cmd.h)
    walls: list[LineSegment] = []

    for i, flags in enumerate(_wall_rows(cmd.wall_vertical, cmd.h, cmd.w + 1)):
        for j, flag in enumerate(flags[: cmd.w + 1]):
            if flag == "Y":
                walls.append(LineSegment(x1=xs[j], y1=ys[i], x2=xs[j], y2=ys[i + 1]))

    for i, flags in enumerate(_wall_rows(cmd.wall_horizontal, cmd.h + 1, cmd.w)):
        for j, flag in enumerate(flags[: cmd.w]):
            if flag == "Y":
                walls.append(LineSegment(x1=xs[j], y1=ys[i], x2=xs[j + 1], y2=ys[i]))

    return walls


def layout_grid(
    cmd: GridCommand,
    bounds: ItemBounds | None = None,
    config: LayoutConfig | None = None,
) -> GridLayout:
    config = config or LayoutConfig.from_env()
    bounds = bounds or resolve_bounds(cmd, None, config)
    cell_w = bounds.width / cmd.w
    cell_h = bounds.height / cmd.h

    cells: list[CellLayout] = []
    for row in range(cmd.h):
        colors = cmd.grid_colors[row] if row < len(cmd.grid_colors) else []
        texts = cmd.grid_texts[row] if row < len(cmd.grid_texts) else []
        for col in range(cmd.w):
            raw = texts[col] if col < len(texts) else ""
            tooltip = f"({row}, {col})"
            if raw:
                tooltip += f": {raw}"
            cells.append(
                CellLayout(
                    row=row,
                    col=col,
                    rect=grid_cell_rect(bounds, cmd.h, cmd.w, row, col),
                    fill=colors[col] if col < len(colors) else cmd.default_cell_color,
                    text=display_text(raw, config),
                    tooltip=tooltip,
                )
            )

    rect = bounds.as_tuple()
    vertex_radius = min(cell_w, cell_h) * config.vertex_radius_ratio
    polylines: list[PolylineLayout] = []
    for line in cmd.grid_lines:
        if len(line.points) < 2:
            continue
        pts = geometry.as_point_array([(p.x, p.y) for p in line.points])
        polylines.append(
            PolylineLayout(
                color=line.color,
                points=geometry.to_pairs(geometry.cell_centers(pts, rect, cmd.h, cmd.w)),
                stroke_width=config.polyline_width,
                vertex_radius=vertex_radius,
            )
        )

    return GridLayout(
        bounds=bounds,
        cell_width=cell_w,
        cell_height=cell_h,
        font_size=unified_font_size(cmd.grid_texts, cell_w, cell_h, config),
        border_color=cmd.border_color,
        text_color=cmd.text_color,
        wall_width=config.wall_width,
        cells=cells,
        walls=grid_walls(cmd, bounds),
        polylines=polylines,
    )


# ---------------------------------------------------------------------------
# 2D_PLANE
# ---------------------------------------------------------------------------


def plane_scale(bounds: ItemBounds, h: float, w: float, x: float, y: float) -> tuple[float, float]:
    """Logical plane point (x, y) of a W×H plane -> pixel point inside ``bounds``."""
    px, py = geometry.scale_points(np.array([[x, y]]), bounds.as_tuple(), w, h)[0]
    return (float(px), float(py))


def plane_radius(bounds: ItemBounds, w: float, r: float) -> float:
    """Radii scale with the width ratio only."""
    return r * bounds.width / w


def layout_plane(
    cmd: TwoDPlaneCommand,
    bounds: ItemBounds | None = None,
    config: LayoutConfig | None = None,
) -> PlaneLayout:
    bounds = bounds or resolve_bounds(cmd, None, config)
    rect = bounds.as_tuple()

    circles: list[CircleLayout] = []
    for group in cmd.circle_groups:
        if not group.circles:
            continue
        centers = geometry.scale_points(
            geometry.as_point_array([(c.x, c.y) for c in group.circles]), rect, cmd.w, cmd.h
        )
        for circle, (cx, cy) in zip(group.circles, centers):
            circles.append(
                CircleLayout(
                    cx=float(cx),
                    cy=float(cy),
                    r=plane_radius(bounds, cmd.w, circle.r),
                    stroke=group.line_color,
                    fill=group.fill_color,
                )
            )

    lines: list[SegmentLayout] = []
    for group in cmd.line_groups:
        for seg in group.lines:
            (x1, y1), (x2, y2) = geometry.scale_points(
                np.array([[seg.ax, seg.ay], [seg.bx, seg.by]]), rect, cmd.w, cmd.h
            )
            lines.append(
                SegmentLayout(
                    segment=LineSegment(x1=x1, y1=y1, x2=x2, y2=y2),
                    color=group.color,
                    stroke_width=group.width,
                )
            )

    polygons: list[PolygonLayout] = []
    for group in cmd.polygon_groups:
        if len(group.polygon.points) < 3:
            logger.debug("Skipping polygon with %d point(s)", len(group.polygon.points))
            continue
        pts = geometry.as_point_array([(p.x, p.y) for p in group.polygon.points])
        polygons.append(
            PolygonLayout(
                points=geometry.to_pairs(geometry.scale_points(pts, rect, cmd.w, cmd.h)),
                stroke=group.line_color,
                fill=group.fill_color,
            )
        )

    return PlaneLayout(bounds=bounds, circles=circles, lines=lines, polygons=polygons)


# ---------------------------------------------------------------------------
# BAR_GRAPH
# ---------------------------------------------------------------------------


def layout_bar_graph(cmd: BarGraphCommand, bounds: ItemBounds) -> BarGraphLayout:
    """Equal-width bars anchored at the bottom edge; values clamp to [y_min, y_max]."""
    bars: list[BarLayout] = []
    span = cmd.y_max - cmd.y_min
    if cmd.items:
        xs = geometry.cell_edges(bounds.left, bounds.right, len(cmd.items))
        for k, item in enumerate(cmd.items):
            clamped = min(max(item.value, cmd.y_min), cmd.y_max)
            frac = (clamped - cmd.y_min) / span if span > 0 else 0.0
            top = bounds.bottom - frac * bounds.height
            bars.append(
                BarLayout(
                    label=item.label,
                    value=item.value,
                    rect=ItemBounds(left=xs[k], top=top, right=xs[k + 1], bottom=bounds.bottom),
                    fill=cmd.fill_color,
                )
            )
    return BarGraphLayout(bounds=bounds, y_min=cmd.y_min, y_max=cmd.y_max, bars=bars)


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------


def layout_frame(frame: Frame, config: LayoutConfig | None = None) -> FrameLayout:
    """Lay out every drawable command of a frame in command order."""
    config = config or LayoutConfig.from_env()
    canvas = find_canvas(frame.commands)
    canvas_w, canvas_h = canvas_size(canvas, config)
    layout = FrameLayout(
        canvas_width=canvas_w,
        canvas_height=canvas_h,
        errors=list(frame.errors),
        debug_text=frame.raw_text if frame.show_debug else None,
    )

    for cmd in frame.commands:
        if isinstance(cmd, GridCommand):
            layout.items.append(layout_grid(cmd, resolve_bounds(cmd, canvas, config), config))
        elif isinstance(cmd, TwoDPlaneCommand):
            layout.items.append(layout_plane(cmd, resolve_bounds(cmd, canvas, config), config))
        elif isinstance(cmd, BarGraphCommand):
            top = len(layout.bar_graphs) * (config.bar_graph_height + config.bar_graph_gap)
            panel = ItemBounds(
                left=0.0,
                top=top,
                right=config.bar_graph_width,
                bottom=top + config.bar_graph_height,
            )
            layout.bar_graphs.append(layout_bar_graph(cmd, panel))
        elif isinstance(cmd, TextAreaCommand):
            layout.texts.append(cmd.text)
        elif isinstance(cmd, ScoreCommand):
            layout.score = cmd.score

    return layout

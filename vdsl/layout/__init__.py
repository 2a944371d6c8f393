"""Geometry/layout engine: commands -> pixel-space geometry."""

from vdsl.layout.config import LayoutConfig
from vdsl.layout.engine import (
    canvas_size,
    display_text,
    find_canvas,
    grid_cell_rect,
    grid_walls,
    layout_bar_graph,
    layout_frame,
    layout_grid,
    layout_plane,
    plane_radius,
    plane_scale,
    rects_overlap,
    resolve_bounds,
    unified_font_size,
)

__all__ = [
    "LayoutConfig",
    "canvas_size",
    "display_text",
    "find_canvas",
    "grid_cell_rect",
    "grid_walls",
    "layout_bar_graph",
    "layout_frame",
    "layout_grid",
    "layout_plane",
    "plane_radius",
    "plane_scale",
    "rects_overlap",
    "resolve_bounds",
    "unified_font_size",
]

"""Canvas defaults and drawing constants for the layout engine."""

from __future__ import annotations

from dataclasses import dataclass

from vdsl import config as app_config
from vdsl.config import Settings


@dataclass(frozen=True)
class LayoutConfig:
    """Constants shared by the parser, the frame validator and the layout engine."""

    # Canvas used when a frame has no CANVAS command
    default_canvas_width: float = 800.0
    default_canvas_height: float = 800.0

    # GRID headers asking for more cells than this are rejected
    max_grid_cells: int = 1_000_000

    # Cell text: longer texts show the first N characters plus the ellipsis
    text_truncate_length: int = 5
    text_ellipsis: str = "..."
    max_font_size: float = 30.0

    # Strokes
    wall_width: float = 2.0
    polyline_width: float = 3.0
    vertex_radius_ratio: float = 0.05  # of min(cell width, cell height)

    # Bar graph panel (drawn beside the canvas)
    bar_graph_width: float = 350.0
    bar_graph_height: float = 200.0
    bar_graph_gap: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> LayoutConfig:
        return cls(
            default_canvas_width=settings.vdsl_default_canvas_width,
            default_canvas_height=settings.vdsl_default_canvas_height,
            max_grid_cells=settings.vdsl_max_grid_cells,
        )

    @classmethod
    def from_env(cls) -> LayoutConfig:
        """Config built from the process-wide ``vdsl.config.settings``."""
        return cls.from_settings(app_config.settings)

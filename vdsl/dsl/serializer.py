"""Write commands and frames back out as DSL text.

The output is what a solver-side emitter prints: top-level lines carry the
``$v`` prefix, sub-block lines are bare. ``parse(serialize_frame(f))`` yields
the same commands as ``f``.
"""

from __future__ import annotations

from vdsl.dsl.tokenizer import format_number
from vdsl.models.commands import (
    BarGraphCommand,
    CanvasCommand,
    Command,
    DebugCommand,
    GridCommand,
    ItemBounds,
    ScoreCommand,
    TextAreaCommand,
    TwoDPlaneCommand,
)
from vdsl.models.frame import DEFAULT_MODE, Frame, ParsedModes


def line_prefix(mode: str) -> str:
    return "$v" if mode == DEFAULT_MODE else f"$v({mode})"


def _nums(*values: float) -> str:
    return " ".join(format_number(v) for v in values)


def _bounds(bounds: ItemBounds | None) -> str:
    if bounds is None:
        return ""
    return "(" + ", ".join(format_number(v) for v in bounds.as_tuple()) + ")"


def _cell_text_token(text: str) -> str:
    if not text or any(ch.isspace() for ch in text):
        return f'"{text}"'
    return text


def _grid_lines(cmd: GridCommand, prefix: str) -> list[str]:
    out = [
        f"{prefix} GRID{_bounds(cmd.bounds)} {cmd.h} {cmd.w} "
        f"{cmd.border_color} {cmd.text_color} {cmd.default_cell_color}"
    ]

    positions: dict[str, list[tuple[int, int]]] = {}
    for r, row in enumerate(cmd.grid_colors):
        for c, color in enumerate(row):
            if color != cmd.default_cell_color:
                positions.setdefault(color, []).append((r, c))
    if positions:
        out.append("CELL_COLORS_POS")
        out.append(str(len(positions)))
        for color, cells in positions.items():
            coords = " ".join(f"{r} {c}" for r, c in cells)
            out.append(f"{color} {len(cells)} {coords}")

    if any(text for row in cmd.grid_texts for text in row):
        out.append("CELL_TEXT")
        for r in range(cmd.h):
            row = cmd.grid_texts[r] if r < len(cmd.grid_texts) else []
            # Trailing empty cells are omitted; inner ones are written as ""
            last = max((c for c, text in enumerate(row) if text), default=-1)
            out.append(" ".join(_cell_text_token(text) for text in row[: last + 1]))

    if cmd.grid_lines:
        out.append("LINES")
        out.append(str(len(cmd.grid_lines)))
        for line in cmd.grid_lines:
            coords = " ".join(_nums(p.x, p.y) for p in line.points)
            out.append(f"{line.color} {len(line.points)} {coords}")

    full_h = ["Y" * cmd.w] * (cmd.h + 1)
    if cmd.wall_horizontal and cmd.wall_horizontal != full_h:
        out.append("WALL_HORIZONTAL")
        out.extend(cmd.wall_horizontal)
    full_v = ["Y" * (cmd.w + 1)] * cmd.h
    if cmd.wall_vertical and cmd.wall_vertical != full_v:
        out.append("WALL_VERTICAL")
        out.extend(cmd.wall_vertical)
    return out


def _plane_lines(cmd: TwoDPlaneCommand, prefix: str) -> list[str]:
    out = [f"{prefix} 2D_PLANE{_bounds(cmd.bounds)} {_nums(cmd.h, cmd.w)}"]

    if cmd.circle_groups:
        out.append("CIRCLES")
        out.append(str(len(cmd.circle_groups)))
        for group in cmd.circle_groups:
            data = " ".join(_nums(c.x, c.y, c.r) for c in group.circles)
            out.append(f"{group.line_color} {group.fill_color} {len(group.circles)} {data}")

    if cmd.line_groups:
        out.append("LINES")
        out.append(str(len(cmd.line_groups)))
        for group in cmd.line_groups:
            data = " ".join(_nums(s.ax, s.ay, s.bx, s.by) for s in group.lines)
            width = "" if group.width == 1.0 else f" {format_number(group.width)}"
            out.append(f"{group.color}{width} {len(group.lines)} {data}")

    if cmd.polygon_groups:
        out.append("POLYGONS")
        out.append(str(len(cmd.polygon_groups)))
        for group in cmd.polygon_groups:
            points = group.polygon.points
            data = " ".join(_nums(p.x, p.y) for p in points)
            out.append(f"{group.line_color} {group.fill_color} {len(points)} {data}")
    return out


def serialize_command(cmd: Command, mode: str = DEFAULT_MODE) -> str:
    """DSL text for one command, newline-terminated."""
    prefix = line_prefix(mode)
    if isinstance(cmd, GridCommand):
        lines = _grid_lines(cmd, prefix)
    elif isinstance(cmd, TwoDPlaneCommand):
        lines = _plane_lines(cmd, prefix)
    elif isinstance(cmd, BarGraphCommand):
        data = " ".join(f"{item.label} {format_number(item.value)}" for item in cmd.items)
        lines = [
            f"{prefix} BAR_GRAPH {cmd.fill_color} {_nums(cmd.y_min, cmd.y_max)}",
            f"{len(cmd.items)} {data}".rstrip(),
        ]
    elif isinstance(cmd, CanvasCommand):
        lines = [f"{prefix} CANVAS {_nums(cmd.h, cmd.w)}"]
    elif isinstance(cmd, TextAreaCommand):
        lines = [f"{prefix} TEXTAREA {cmd.text}"]
    elif isinstance(cmd, ScoreCommand):
        lines = [f"{prefix} SCORE {cmd.score}"]
    elif isinstance(cmd, DebugCommand):
        lines = [f"{prefix} DEBUG"]
    else:
        raise TypeError(f"Cannot serialize {type(cmd).__name__}")
    return "\n".join(line.rstrip() for line in lines) + "\n"


def serialize_frame(frame: Frame, mode: str = DEFAULT_MODE) -> str:
    """All commands of a frame followed by COMMIT."""
    body = "".join(serialize_command(cmd, mode) for cmd in frame.commands)
    return body + f"{line_prefix(mode)} COMMIT\n"


def serialize_modes(parsed: ParsedModes) -> str:
    return "".join(
        serialize_frame(frame, mode) for mode, frames in parsed.items() for frame in frames
    )

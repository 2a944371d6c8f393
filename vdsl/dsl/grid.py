"""GRID block parser.

Header: ``GRID[(l, t, r, b)] H W borderColor textColor defaultCellColor``
Sub-blocks (any order, each optional):
    CELL_COLORS       H rows of up to W colour tokens
    CELL_COLORS_POS   N, then N rows ``color count r1 c1 ... r_count c_count``
    CELL_TEXT         H rows of up to W quoted-or-bare tokens
    LINES             N, then N rows ``color count x1 y1 ...`` (cell units)
    WALL_VERTICAL     H rows of W+1 flags ('Y' = wall)
    WALL_HORIZONTAL   H+1 rows of W flags
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from vdsl.dsl.blocks import SubBlockReader, SubBlockSpec, numeric_groups, split_header
from vdsl.dsl.context import ModeState, ParseContext
from vdsl.dsl.registry import CommandLine, command
from vdsl.dsl.tokenizer import parse_int, scan_cell_texts, split_tokens
from vdsl.errors import HeaderError
from vdsl.models.commands import GridCommand, GridLine, ItemBounds, Point

logger = logging.getLogger(__name__)

WALL_PRESENT = "Y"


@dataclass
class GridBuilder:
    """Accumulates one GRID command while its sub-blocks are read."""

    state: ModeState
    h: int
    w: int
    border_color: str
    text_color: str
    default_cell_color: str
    bounds: ItemBounds | None = None
    grid_colors: list[list[str]] = field(default_factory=list)
    grid_texts: list[list[str]] = field(default_factory=list)
    grid_lines: list[GridLine] = field(default_factory=list)
    wall_vertical: list[str] = field(default_factory=list)
    wall_horizontal: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.grid_colors = [[self.default_cell_color] * self.w for _ in range(self.h)]
        self.grid_texts = [[""] * self.w for _ in range(self.h)]
        self.wall_vertical = [WALL_PRESENT * (self.w + 1) for _ in range(self.h)]
        self.wall_horizontal = [WALL_PRESENT * self.w for _ in range(self.h + 1)]

    @classmethod
    def from_header(cls, state: ModeState, line: CommandLine, max_cells: int) -> GridBuilder:
        bounds, params = split_header(line.remainder, "GRID")
        if len(params) != 5:
            raise HeaderError(
                "GRID expects 5 parameters (H W borderColor textColor defaultCellColor), "
                f"got {len(params)}"
            )
        h, w = parse_int(params[0]), parse_int(params[1])
        if h is None or w is None:
            raise HeaderError(f"GRID size must be integers, got H='{params[0]}' W='{params[1]}'")
        if h <= 0 or w <= 0:
            raise HeaderError(f"GRID size must be positive, got {h}x{w}")
        if h * w > max_cells:
            raise HeaderError(f"GRID size {h}x{w} exceeds the limit of {max_cells} cells")
        return cls(state, h, w, params[2], params[3], params[4], bounds)

    def sub_blocks(self) -> list[SubBlockSpec]:
        return [
            SubBlockSpec("CELL_COLORS", self.cell_colors_row, rows=self.h),
            SubBlockSpec("CELL_COLORS_POS", self.cell_colors_pos_row),
            SubBlockSpec("CELL_TEXT", self.cell_text_row, rows=self.h),
            SubBlockSpec("LINES", self.lines_row),
            SubBlockSpec("WALL_VERTICAL", self.wall_vertical_row, rows=self.h),
            SubBlockSpec("WALL_HORIZONTAL", self.wall_horizontal_row, rows=self.h + 1),
        ]

    # --- Row handlers ---

    def cell_colors_row(self, row: int, line: str, line_no: int) -> None:
        for col, color in enumerate(split_tokens(line)[: self.w]):
            self.grid_colors[row][col] = color

    def cell_colors_pos_row(self, row: int, line: str, line_no: int) -> None:
        parts = split_tokens(line)
        count = parse_int(parts[1]) if len(parts) >= 2 else None
        if count is None:
            self.state.error(line_no, f"CELL_COLORS_POS entry must be 'color count r c ...', got '{line.strip()}'")
            return
        color = parts[0]
        for k in range(count):
            pair = parts[2 + 2 * k : 4 + 2 * k]
            if len(pair) < 2:
                break
            r, c = parse_int(pair[0]), parse_int(pair[1])
            if r is None or c is None:
                continue
            if 0 <= r < self.h and 0 <= c < self.w:
                self.grid_colors[r][c] = color

    def cell_text_row(self, row: int, line: str, line_no: int) -> None:
        for col, text in enumerate(scan_cell_texts(line, self.w)):
            self.grid_texts[row][col] = text

    def lines_row(self, row: int, line: str, line_no: int) -> None:
        parts = split_tokens(line)
        count = parse_int(parts[1]) if len(parts) >= 2 else None
        if count is None:
            self.state.error(line_no, f"LINES entry must be 'color count x y ...', got '{line.strip()}'")
            return
        points = [Point(x=x, y=y) for x, y in numeric_groups(parts, 2, count, 2)]
        if not points:
            logger.debug("Line %d: dropping grid line without points", line_no)
            return
        self.grid_lines.append(GridLine(color=parts[0], points=points))

    def wall_vertical_row(self, row: int, line: str, line_no: int) -> None:
        self.wall_vertical[row] = self._wall_flags("WALL_VERTICAL", line, self.w + 1, line_no)

    def wall_horizontal_row(self, row: int, line: str, line_no: int) -> None:
        self.wall_horizontal[row] = self._wall_flags("WALL_HORIZONTAL", line, self.w, line_no)

    def _wall_flags(self, name: str, line: str, expected: int, line_no: int) -> str:
        flags = line.strip()
        if len(flags) < expected:
            self.state.error(line_no, f"{name} row has {len(flags)} flags, expected {expected}")
            return flags
        return flags[:expected]

    def build(self) -> GridCommand:
        return GridCommand(
            h=self.h,
            w=self.w,
            border_color=self.border_color,
            text_color=self.text_color,
            default_cell_color=self.default_cell_color,
            grid_colors=self.grid_colors,
            grid_texts=self.grid_texts,
            grid_lines=self.grid_lines,
            wall_vertical=self.wall_vertical,
            wall_horizontal=self.wall_horizontal,
            bounds=self.bounds,
        )


@command("GRID", description="Rectangular cell grid with colours, texts, walls and polylines")
def grid(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    try:
        builder = GridBuilder.from_header(state, line, ctx.config.max_grid_cells)
    except HeaderError as e:
        state.error(line.line_no, str(e))
        return
    SubBlockReader(ctx.cursor, state, builder.sub_blocks()).run()
    state.add_command(builder.build())

"""Sub-block reader — the state machine shared by the GRID and 2D_PLANE parsers.

A block command header is followed by any number of labelled sub-blocks:

    CELL_COLORS          <- header, fixed row count (H lines follow)
    red blue
    green yellow
    LINES                <- header, counted (a count line follows)
    1
    red 2 0 0 1 1

States: AWAITING_HEADER -> (AWAITING_COUNT) -> CONSUMING_ROWS -> AWAITING_HEADER ...
A line whose first token is not a known sub-block name ends the block (DONE)
without being consumed.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Callable

from vdsl.dsl.context import LineCursor, ModeState
from vdsl.dsl.tokenizer import is_dsl_line, parse_float, parse_int, split_tokens
from vdsl.errors import HeaderError
from vdsl.models.commands import ItemBounds

logger = logging.getLogger(__name__)

# (row index within the sub-block, raw line, 1-based line number)
RowHandler = Callable[[int, str, int], None]


class BlockState(enum.Enum):
    AWAITING_HEADER = "awaiting_header"
    AWAITING_COUNT = "awaiting_count"
    CONSUMING_ROWS = "consuming_rows"
    DONE = "done"


@dataclass(frozen=True)
class SubBlockSpec:
    name: str
    on_row: RowHandler
    rows: int | None = None  # None: the row count is read from a count line


class SubBlockReader:
    """Consumes the sub-blocks following a block command header."""

    def __init__(self, cursor: LineCursor, state: ModeState, specs: list[SubBlockSpec]) -> None:
        self.cursor = cursor
        self.state = state
        self.specs = {spec.name: spec for spec in specs}
        self.block_state = BlockState.AWAITING_HEADER
        self.active: SubBlockSpec | None = None
        self.header_line_no = 0
        self.expected = 0
        self.consumed = 0
        self.seen: list[str] = []

    def run(self) -> list[str]:
        """Drive the machine to DONE; returns the sub-block names consumed, in order."""
        while self.block_state is not BlockState.DONE:
            self.step()
        return self.seen

    def step(self) -> None:
        if self.block_state is BlockState.AWAITING_HEADER:
            self._await_header()
        elif self.block_state is BlockState.AWAITING_COUNT:
            self._read_count()
        elif self.block_state is BlockState.CONSUMING_ROWS:
            self._consume_row()

    # --- States ---

    def _await_header(self) -> None:
        line = self.cursor.peek()
        while line is not None and not line.strip():
            self.cursor.take(self.state)
            line = self.cursor.peek()
        if line is None:
            self.block_state = BlockState.DONE
            return

        tokens = split_tokens(line)
        spec = self.specs.get(tokens[0])
        if spec is None:
            self.block_state = BlockState.DONE
            return

        self.header_line_no = self.cursor.line_no
        self.cursor.take(self.state)
        self.active = spec
        self.seen.append(spec.name)
        self.consumed = 0
        if spec.rows is None:
            self.block_state = BlockState.AWAITING_COUNT
        else:
            self._begin_rows(spec.rows)

    def _read_count(self) -> None:
        assert self.active is not None
        line = self.cursor.peek()
        if line is None or is_dsl_line(line):
            self.state.error(self.header_line_no, f"{self.active.name} is missing its count line")
            self.block_state = BlockState.AWAITING_HEADER
            return

        line_no = self.cursor.line_no
        self.cursor.take(self.state)
        tokens = split_tokens(line)
        count = parse_int(tokens[0]) if tokens else None
        if count is None:
            self.state.error(line_no, f"Invalid {self.active.name} count '{line.strip()}'")
            self.block_state = BlockState.AWAITING_HEADER
            return
        self._begin_rows(max(count, 0))

    def _consume_row(self) -> None:
        assert self.active is not None
        line = self.cursor.peek()
        if line is None or is_dsl_line(line):
            self.state.error(
                self.header_line_no,
                f"{self.active.name} expected {self.expected} line(s) but found {self.consumed}",
            )
            self.block_state = BlockState.AWAITING_HEADER
            return

        line_no = self.cursor.line_no
        self.cursor.take(self.state)
        self.active.on_row(self.consumed, line, line_no)
        self.consumed += 1
        if self.consumed >= self.expected:
            self.block_state = BlockState.AWAITING_HEADER

    def _begin_rows(self, expected: int) -> None:
        self.expected = expected
        if expected == 0:
            self.block_state = BlockState.AWAITING_HEADER
        else:
            self.block_state = BlockState.CONSUMING_ROWS


# --- Header helpers ---

_BOUNDS_RE = re.compile(r"^\(([^)]*)\)")


def split_header(remainder: str, keyword: str) -> tuple[ItemBounds | None, list[str]]:
    """Split ``KEYWORD[(l, t, r, b)] p1 p2 ...`` into bounds and parameters.

    Raises HeaderError for an unterminated or non-numeric bounds tuple.
    """
    rest = remainder[len(keyword) :] if remainder.startswith(keyword) else remainder
    bounds = None
    if rest.startswith("("):
        match = _BOUNDS_RE.match(rest)
        if match is None:
            raise HeaderError(f"{keyword} bounds are missing a closing ')'")
        values = [parse_float(v.strip()) for v in match.group(1).split(",")]
        if len(values) != 4 or any(v is None for v in values):
            raise HeaderError(
                f"{keyword} bounds must be four numbers (left, top, right, bottom), "
                f"got '({match.group(1)})'"
            )
        left, top, right, bottom = values
        bounds = ItemBounds(left=left, top=top, right=right, bottom=bottom)
        rest = rest[match.end() :]
    return bounds, split_tokens(rest)


def numeric_groups(
    tokens: list[str],
    start: int,
    count: int,
    size: int,
) -> list[tuple[float, ...]]:
    """Read up to ``count`` runs of ``size`` numbers starting at ``tokens[start]``.

    Runs with a non-numeric member are dropped; reading stops when tokens run out.
    """
    groups: list[tuple[float, ...]] = []
    for k in range(max(count, 0)):
        chunk = tokens[start + k * size : start + (k + 1) * size]
        if len(chunk) < size:
            break
        values = [parse_float(t) for t in chunk]
        if any(v is None for v in values):
            logger.debug("Dropping non-numeric group %s", chunk)
            continue
        groups.append(tuple(values))  # type: ignore[arg-type]
    return groups

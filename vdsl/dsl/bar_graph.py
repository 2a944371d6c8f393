"""BAR_GRAPH parser.

Header ``BAR_GRAPH fillColor yMin yMax`` followed by exactly one data line
``N label1 value1 ... labelN valueN``.
"""

from __future__ import annotations

from vdsl.dsl.context import ModeState, ParseContext
from vdsl.dsl.registry import CommandLine, command
from vdsl.dsl.tokenizer import is_dsl_line, parse_float, parse_int, split_tokens
from vdsl.models.commands import BarGraphCommand, BarGraphItem


def parse_bar_items(state: ModeState, line: str, line_no: int) -> list[BarGraphItem]:
    """Read the data line. Bad values are skipped; missing data keeps what was read."""
    parts = split_tokens(line)
    count = parse_int(parts[0]) if parts else None
    if count is None:
        state.error(line_no, f"BAR_GRAPH data must start with an item count, got '{line.strip()}'")
        return []

    items: list[BarGraphItem] = []
    for k in range(count):
        label_idx = 1 + 2 * k
        if label_idx + 1 >= len(parts):
            state.error(line_no, f"BAR_GRAPH data ended after {k} of {count} items")
            break
        label, raw = parts[label_idx], parts[label_idx + 1]
        value = parse_float(raw)
        if value is None:
            state.error(line_no, f"BAR_GRAPH value '{raw}' for '{label}' is not a number")
            continue
        items.append(BarGraphItem(label=label, value=value))
    return items


@command("BAR_GRAPH", description="Bar chart: BAR_GRAPH fillColor yMin yMax + one data line")
def bar_graph(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    params = line.params
    if len(params) != 3:
        state.error(line.line_no, f"BAR_GRAPH expects 3 parameters (fillColor yMin yMax), got {len(params)}")
        return
    fill_color = params[0]
    y_min, y_max = parse_float(params[1]), parse_float(params[2])
    if y_min is None or y_max is None:
        state.error(line.line_no, f"BAR_GRAPH range must be numbers, got '{params[1]}' '{params[2]}'")
        return
    if y_min >= y_max:
        state.error(line.line_no, f"BAR_GRAPH yMin must be less than yMax, got {params[1]} >= {params[2]}")
        return

    cursor = ctx.cursor
    data = cursor.peek()
    items: list[BarGraphItem] = []
    if data is None or is_dsl_line(data):
        state.error(line.line_no, "BAR_GRAPH is missing its data line")
    else:
        data_line_no = cursor.line_no
        cursor.take(state)
        items = parse_bar_items(state, data, data_line_no)

    state.add_command(BarGraphCommand(fill_color=fill_color, y_min=y_min, y_max=y_max, items=items))

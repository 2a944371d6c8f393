"""DSL parser: raw solver output -> ``{mode: [Frame, ...]}``.

Lines are routed by their ``$v`` / ``$v(mode)`` prefix, dispatched on their
first token through the command registry, and accumulated per mode until
COMMIT (or end of input) turns the pending commands into a Frame.
"""

from __future__ import annotations

import logging

# Import handler modules so @command decorators fire
from vdsl.dsl import bar_graph, directives, grid, plane  # noqa: F401
from vdsl.dsl.context import ModeState, ParseContext
from vdsl.dsl.registry import CommandLine, CommandRegistry, get_registry
from vdsl.dsl.tokenizer import RoutedLine, command_keyword, route_line, split_tokens
from vdsl.dsl.validation import finalize_frame
from vdsl.layout.config import LayoutConfig
from vdsl.models.frame import ParsedModes

logger = logging.getLogger(__name__)


def dispatch(
    ctx: ParseContext,
    state: ModeState,
    routed: RoutedLine,
    line_no: int,
    registry: CommandRegistry | None = None,
) -> None:
    """Run the handler for one routed line whose header has already been consumed."""
    registry = registry or get_registry()
    tokens = split_tokens(routed.remainder)
    keyword = command_keyword(routed.remainder)
    if not keyword:
        return

    spec = registry.get(keyword)
    if spec is None:
        state.error(line_no, f"Unknown command '{tokens[0]}'")
        return

    spec.fn(ctx, state, CommandLine(keyword=keyword, remainder=routed.remainder, line_no=line_no, tokens=tokens))


def parse(text: str, config: LayoutConfig | None = None) -> ParsedModes:
    """Parse DSL text into frames per mode. Never raises on malformed DSL.

    The result always has a ``"default"`` entry. Problems are reported in the
    ``errors`` of the frame they belong to.
    """
    ctx = ParseContext(lines=text.split("\n") if text else [], config=config or LayoutConfig.from_env())
    cursor = ctx.cursor

    while not cursor.exhausted:
        routed = route_line(cursor.peek() or "")
        if routed is None:
            cursor.skip()
            continue
        state = ctx.mode(routed.mode)
        line_no = cursor.line_no
        cursor.take(state)
        dispatch(ctx, state, routed, line_no)

    # End of input commits whatever is still pending, errors included
    for state in ctx.modes.values():
        finalize_frame(state, ctx.config, keep_errors=True)

    result = ctx.result()
    logger.info(
        "Parsed %d line(s): %s",
        len(ctx.lines),
        ", ".join(f"{mode}={len(frames)}" for mode, frames in result.items()),
    )
    return result

"""Single-line commands: COMMIT, DEBUG, TEXTAREA, SCORE, CANVAS."""

from __future__ import annotations

from vdsl.dsl.context import ModeState, ParseContext
from vdsl.dsl.registry import CommandLine, command
from vdsl.dsl.tokenizer import parse_float, text_after_keyword
from vdsl.dsl.validation import finalize_frame
from vdsl.models.commands import CanvasCommand, DebugCommand, ScoreCommand, TextAreaCommand


@command("COMMIT", description="Finalize the pending frame of the mode")
def commit(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    finalize_frame(state, ctx.config)


@command("DEBUG", description="Show the frame's raw text next to the drawing")
def debug(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    state.add_command(DebugCommand())


@command("TEXTAREA", description="Free text panel")
def textarea(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    state.add_command(TextAreaCommand(text=text_after_keyword(line.remainder, "TEXTAREA")))


@command("SCORE", description="Opaque score string")
def score(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    state.add_command(ScoreCommand(score=text_after_keyword(line.remainder, "SCORE")))


@command("CANVAS", description="Nominal canvas size: CANVAS H W")
def canvas(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
    params = line.params
    if len(params) != 2:
        state.error(line.line_no, f"CANVAS expects 2 parameters (H W), got {len(params)}")
        return
    h, w = (parse_float(p) for p in params)
    if h is None or w is None or h <= 0 or w <= 0:
        state.error(line.line_no, f"CANVAS size must be positive numbers, got '{' '.join(params)}'")
        return
    state.add_command(CanvasCommand(h=h, w=w))

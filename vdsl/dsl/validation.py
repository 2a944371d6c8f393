"""Frame finalization: cross-command checks run on COMMIT and at end of input."""

from __future__ import annotations

import logging
from itertools import combinations

from vdsl.dsl.context import ModeState
from vdsl.dsl.tokenizer import format_number
from vdsl.layout.config import LayoutConfig
from vdsl.layout.engine import find_canvas, rects_overlap, resolve_bounds
from vdsl.models.commands import SPATIAL_TYPES, Command, DebugCommand, ItemBounds
from vdsl.models.frame import Frame

logger = logging.getLogger(__name__)


def resolve_exclusivity(commands: list[Command]) -> tuple[list[Command], str | None]:
    """Keep only the spatial type that appears first when GRID and 2D_PLANE are mixed.

    Returns the surviving commands and the conflict message (None when no conflict).
    """
    spatial = [c for c in commands if c.type in SPATIAL_TYPES]
    if {c.type for c in spatial} != set(SPATIAL_TYPES):
        return commands, None

    kept = spatial[0].type
    dropped = next(t for t in SPATIAL_TYPES if t != kept)
    survivors = [c for c in commands if c.type != dropped]
    n = len(commands) - len(survivors)
    plural = "" if n == 1 else "s"
    return survivors, (
        f"Frame contains both GRID and 2D_PLANE; keeping {kept} "
        f"(dropped {n} {dropped} command{plural})"
    )


def _fmt_rect(rect: ItemBounds) -> str:
    return "(" + ", ".join(format_number(v) for v in rect.as_tuple()) + ")"


def overlap_errors(commands: list[Command], config: LayoutConfig) -> list[str]:
    """One advisory message per overlapping pair of spatial commands."""
    canvas = find_canvas(commands)
    spatial = [c for c in commands if c.type in SPATIAL_TYPES]
    placed = [(i + 1, c, resolve_bounds(c, canvas, config)) for i, c in enumerate(spatial)]

    errors: list[str] = []
    for (ia, a, ra), (ib, b, rb) in combinations(placed, 2):
        if rects_overlap(ra, rb):
            errors.append(
                f"Overlap between {a.type} #{ia} at {_fmt_rect(ra)} "
                f"and {b.type} #{ib} at {_fmt_rect(rb)}"
            )
    return errors


def finalize_frame(state: ModeState, config: LayoutConfig, keep_errors: bool = False) -> Frame | None:
    """Turn a mode's pending state into a Frame and reset it.

    No-op when no command is pending. With ``keep_errors`` a mode holding only
    errors still yields a Frame with empty ``commands``, so its diagnostics
    survive the end of input.
    """
    if not state.has_pending and not (keep_errors and state.pending_errors):
        return None

    commands, conflict = resolve_exclusivity(list(state.pending_commands))
    errors = list(state.pending_errors)
    if conflict is not None:
        errors.append(conflict)
    errors.extend(overlap_errors(commands, config))

    frame = Frame(
        commands=commands,
        raw_text="".join(state.pending_raw_text),
        show_debug=any(isinstance(c, DebugCommand) for c in commands),
        errors=errors,
    )
    state.frames.append(frame)
    state.reset_pending()
    logger.debug(
        "Committed frame %d of mode '%s' (%d commands, %d errors)",
        len(state.frames) - 1,
        state.name,
        len(commands),
        len(errors),
    )
    return frame

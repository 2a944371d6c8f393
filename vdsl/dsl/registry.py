"""Command registry. Every top-level keyword is a standalone handler registered via decorator.

Usage:
    @command("SCORE", description="Opaque score string")
    def score(ctx: ParseContext, state: ModeState, line: CommandLine) -> None:
        state.add_command(ScoreCommand(score=text_after_keyword(line.remainder, "SCORE")))

The dispatcher has already consumed the header line when a handler runs; block
handlers keep reading sub-block lines from ``ctx.cursor``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from vdsl.dsl.context import ModeState, ParseContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandLine:
    """One routed DSL line, already split for the handler."""

    keyword: str
    remainder: str
    line_no: int
    tokens: list[str] = field(default_factory=list)

    @property
    def params(self) -> list[str]:
        return self.tokens[1:]


Handler = Callable[["ParseContext", "ModeState", CommandLine], None]


@dataclass
class CommandSpec:
    keyword: str
    fn: Handler
    description: str = ""


class CommandRegistry:
    """Keyword → handler table."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(self, spec: CommandSpec) -> None:
        if spec.keyword in self._commands:
            raise ValueError(f"Duplicate command keyword: {spec.keyword}")
        self._commands[spec.keyword] = spec
        logger.debug("Registered command %s", spec.keyword)

    def get(self, keyword: str) -> CommandSpec | None:
        return self._commands.get(keyword)

    def keywords(self) -> list[str]:
        return sorted(self._commands)

    @property
    def count(self) -> int:
        return len(self._commands)


# Module-level singleton
_registry = CommandRegistry()


def get_registry() -> CommandRegistry:
    return _registry


def command(keyword: str, *, description: str = ""):
    """Decorator to register a top-level command handler."""

    def decorator(fn: Handler) -> Handler:
        _registry.register(CommandSpec(keyword=keyword, fn=fn, description=description))
        return fn

    return decorator

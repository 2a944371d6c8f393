"""ParseContext: the mutable state of one ``parse()`` call.

Per-mode pending commands, raw text and errors → ModeState
Line position and raw-text capture → LineCursor
Nothing here outlives the call that created it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vdsl.layout.config import LayoutConfig
from vdsl.models.commands import CanvasCommand, Command
from vdsl.models.frame import DEFAULT_MODE, Frame


@dataclass
class ModeState:
    """Pending (uncommitted) state of one mode plus its committed frames."""

    name: str
    frames: list[Frame] = field(default_factory=list)
    pending_commands: list[Command] = field(default_factory=list)
    pending_raw_text: list[str] = field(default_factory=list)
    pending_errors: list[str] = field(default_factory=list)

    def add_command(self, command: Command) -> None:
        self.pending_commands.append(command)

    def add_raw(self, line: str) -> None:
        self.pending_raw_text.append(line + "\n")

    def error(self, line_no: int, message: str) -> None:
        """Record a soft error against a 1-based line number."""
        self.pending_errors.append(f"Line {line_no}: {message}")

    @property
    def has_pending(self) -> bool:
        return bool(self.pending_commands)

    @property
    def pending_canvas(self) -> CanvasCommand | None:
        for cmd in self.pending_commands:
            if isinstance(cmd, CanvasCommand):
                return cmd
        return None

    def reset_pending(self) -> None:
        self.pending_commands = []
        self.pending_raw_text = []
        self.pending_errors = []


class LineCursor:
    """Position in the input lines. Consumed lines are copied to a mode's raw text."""

    def __init__(self, lines: list[str], index: int = 0) -> None:
        self.lines = lines
        self.index = index

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self.lines)

    @property
    def line_no(self) -> int:
        """1-based number of the current line."""
        return self.index + 1

    def peek(self) -> str | None:
        if self.exhausted:
            return None
        return self.lines[self.index]

    def take(self, state: ModeState) -> str:
        """Consume the current line into ``state``'s raw text and return it."""
        line = self.lines[self.index]
        state.add_raw(line)
        self.index += 1
        return line

    def skip(self) -> None:
        self.index += 1


@dataclass
class ParseContext:
    """Shared state flowing through the dispatcher and every block parser."""

    lines: list[str]
    config: LayoutConfig = field(default_factory=LayoutConfig.from_env)
    modes: dict[str, ModeState] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.cursor = LineCursor(self.lines)
        self.mode(DEFAULT_MODE)

    def mode(self, name: str) -> ModeState:
        if name not in self.modes:
            self.modes[name] = ModeState(name)
        return self.modes[name]

    def result(self) -> dict[str, list[Frame]]:
        return {name: state.frames for name, state in self.modes.items()}

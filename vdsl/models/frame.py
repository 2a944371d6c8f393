"""Frame and parse-result models."""

from __future__ import annotations

from pydantic import Field, TypeAdapter

from vdsl.models.commands import Command, DslModel

DEFAULT_MODE = "default"


class Frame(DslModel):
    """One committed snapshot of draw commands plus its diagnostics."""

    commands: list[Command] = Field(default_factory=list)
    raw_text: str = ""
    show_debug: bool = False
    errors: list[str] = Field(default_factory=list)


# mode name -> frames in commit order
ParsedModes = dict[str, list[Frame]]

parsed_modes_adapter: TypeAdapter[ParsedModes] = TypeAdapter(ParsedModes)


def ordered_modes(parsed: ParsedModes) -> list[str]:
    """Mode names that have frames, sorted, with the default mode first."""
    modes = sorted(m for m, frames in parsed.items() if frames)
    if not modes:
        return [DEFAULT_MODE]
    if DEFAULT_MODE in modes:
        modes.remove(DEFAULT_MODE)
        modes.insert(0, DEFAULT_MODE)
    return modes


def dump_parsed_modes(parsed: ParsedModes, indent: int | None = None) -> str:
    """Serialize a parse result as camelCase JSON."""
    return parsed_modes_adapter.dump_json(parsed, by_alias=True, indent=indent).decode("utf-8")

"""$v DSL: tokenizer, command registry, block parsers, validation and serializer."""

from vdsl.dsl.parser import dispatch, parse
from vdsl.dsl.registry import CommandLine, CommandRegistry, command, get_registry
from vdsl.dsl.serializer import serialize_command, serialize_frame, serialize_modes

__all__ = [
    "dispatch",
    "parse",
    "CommandLine",
    "CommandRegistry",
    "command",
    "get_registry",
    "serialize_command",
    "serialize_frame",
    "serialize_modes",
]

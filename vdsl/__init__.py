"""vdsl: parser and layout engine for the $v visualization DSL."""

from pathlib import Path

from vdsl.dsl import parse, serialize_command, serialize_frame, serialize_modes
from vdsl.errors import HeaderError, SourceReadError, VdslError
from vdsl.layout import LayoutConfig, layout_frame
from vdsl.models import DEFAULT_MODE, Frame, ParsedModes, dump_parsed_modes, ordered_modes

__version__ = "0.1.0"


def load_source(path: str | Path) -> str:
    """Read DSL text from a file. The one failure ``parse`` cannot recover from."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise SourceReadError(f"Cannot read {path}: {e}") from e


__all__ = [
    "parse",
    "serialize_command",
    "serialize_frame",
    "serialize_modes",
    "HeaderError",
    "SourceReadError",
    "VdslError",
    "LayoutConfig",
    "layout_frame",
    "DEFAULT_MODE",
    "Frame",
    "ParsedModes",
    "dump_parsed_modes",
    "ordered_modes",
    "load_source",
]

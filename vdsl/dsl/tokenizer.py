"""Line routing and token helpers for the $v DSL.

A DSL line is ``$v<remainder>`` (default mode) or ``$v(<mode>)<remainder>``.
Everything else in the input is inert solver output.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from vdsl.models.frame import DEFAULT_MODE

PREFIX = "$v"
MODE_PREFIX = "$v("

_CELL_TEXT_RE = re.compile(r'"([^"]*)"|(\S+)')


@dataclass(frozen=True)
class RoutedLine:
    mode: str
    remainder: str


def route_line(line: str) -> RoutedLine | None:
    """Return the mode and command text of a DSL line, or None for other lines.

    ``$v(`` lines without a closing paren after the mode are malformed and
    treated as non-DSL lines.
    """
    stripped = line.strip()
    if stripped.startswith(MODE_PREFIX):
        close = stripped.find(")")
        if close <= len(MODE_PREFIX):
            return None
        return RoutedLine(stripped[len(MODE_PREFIX):close], stripped[close + 1 :].strip())
    if stripped.startswith(PREFIX):
        return RoutedLine(DEFAULT_MODE, stripped[len(PREFIX) :].strip())
    return None


def is_dsl_line(line: str) -> bool:
    return route_line(line) is not None


def split_tokens(text: str) -> list[str]:
    """Whitespace tokenization; empty input gives an empty list."""
    return text.split()


def command_keyword(remainder: str) -> str:
    """First token of a command, cut before an inline bounds tuple.

    ``GRID(0, 0, 400, 400) 5 5 ...`` -> ``GRID``.
    """
    tokens = split_tokens(remainder)
    if not tokens:
        return ""
    return tokens[0].split("(", 1)[0]


def text_after_keyword(remainder: str, keyword: str) -> str:
    """Free text following the keyword, inner whitespace preserved."""
    return remainder[remainder.find(keyword) + len(keyword) :].strip()


def scan_cell_texts(line: str, limit: int) -> list[str]:
    """Read up to ``limit`` quoted-or-bareword tokens (``"a b"`` keeps its space)."""
    texts: list[str] = []
    for match in _CELL_TEXT_RE.finditer(line.strip()):
        if len(texts) >= limit:
            break
        quoted, bare = match.groups()
        texts.append(quoted if quoted is not None else bare)
    return texts


# --- Number parsing ---


def parse_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def parse_float(token: str) -> float | None:
    """Finite float or None; ``nan`` and infinities are rejected."""
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_number(value: float) -> str:
    """Shortest text for a number: integral values drop the trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))

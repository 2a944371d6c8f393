"""Package exceptions.

DSL content problems never surface as exceptions from ``parse()``; they are
collected as frame error strings. These types cover the remaining cases.
"""

from __future__ import annotations


class VdslError(Exception):
    """Base class for vdsl exceptions."""


class HeaderError(VdslError, ValueError):
    """A command header line is structurally invalid; the command is skipped."""


class SourceReadError(VdslError):
    """The DSL source text could not be read."""

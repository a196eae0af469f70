"""Layout compiler and renderer."""

from __future__ import annotations

from .compiler import CompileError, ParseState, Scanner, compile_layout, finish, step
from .renderer import Renderer, render
from .timefmt import (
    DATE_STYLES,
    TimestampFormatter,
    format_reference,
    format_strftime,
    get_timestamp_formatter,
)

__all__ = [
    "DATE_STYLES",
    "CompileError",
    "ParseState",
    "Renderer",
    "Scanner",
    "TimestampFormatter",
    "compile_layout",
    "finish",
    "format_reference",
    "format_strftime",
    "get_timestamp_formatter",
    "render",
    "step",
]

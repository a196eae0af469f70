"""Core data models for log layouts."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any


class Level(IntEnum):
    """Default severity ordinals; the value indexes the level-name table."""

    FATAL = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5
    ALL = 6


def default_level_names() -> tuple[str, ...]:
    """Display names for the default levels, in ordinal order."""
    return tuple(level.name for level in sorted(Level))


class PieceKind(str, Enum):
    """What a compiled piece substitutes when rendered."""

    TEXT = "text"
    LOGGER_NAME = "logger_name"
    TIMESTAMP = "timestamp"
    LEVEL = "level"
    MESSAGE = "message"


@dataclass(frozen=True, slots=True)
class Piece:
    """One compiled fragment (literal text or a placeholder)."""

    kind: PieceKind
    payload: str = ""  # literal text, or the date pattern for TIMESTAMP


@dataclass(frozen=True, slots=True)
class Template:
    """Ordered, immutable compiled form of a layout string."""

    pieces: tuple[Piece, ...] = ()
    layout: str = ""  # source layout, kept for diagnostics

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)

    def __len__(self) -> int:
        return len(self.pieces)


@dataclass(frozen=True, slots=True)
class LogEvent:
    """A single log event as consumed by the renderer."""

    logger_name: str
    timestamp: datetime
    level: int
    payload: Any

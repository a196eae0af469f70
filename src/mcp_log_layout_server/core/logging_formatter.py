"""``logging.Formatter`` that renders stdlib records through a compiled layout."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from .config import RendererConfig
from .layout import Renderer, compile_layout
from .models import Level, LogEvent

DEFAULT_LAYOUT = "%d{%Y-%m-%d %H:%M:%S} %p %c: %m"


def level_for_levelno(levelno: int) -> Level:
    """Map a stdlib numeric level onto the nearest layout Level."""
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE


def event_from_record(record: logging.LogRecord) -> LogEvent:
    """Build a LogEvent from a LogRecord (timestamp as aware UTC)."""
    return LogEvent(
        logger_name=record.name,
        timestamp=datetime.fromtimestamp(record.created, tz=UTC),
        level=int(level_for_levelno(record.levelno)),
        payload=record.getMessage(),
    )


class LayoutFormatter(logging.Formatter):
    """Format records with a layout string such as ``"%d{%H:%M:%S} [%p] %c: %m"``.

    The layout is compiled once at construction, so a bad layout fails at
    configuration time with CompileError.
    """

    def __init__(self, layout: str = DEFAULT_LAYOUT, config: RendererConfig | None = None) -> None:
        super().__init__()
        self.template = compile_layout(layout)
        self.renderer = Renderer(config)

    def format(self, record: logging.LogRecord) -> str:
        s = self.renderer.render(event_from_record(record), self.template)
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            if s[-1:] != "\n":
                s = s + "\n"
            s = s + record.exc_text
        if record.stack_info:
            if s[-1:] != "\n":
                s = s + "\n"
            s = s + self.formatStack(record.stack_info)
        return s

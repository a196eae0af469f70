"""Layout renderer: Template + LogEvent -> formatted line."""

from __future__ import annotations

from ..config import RendererConfig
from ..models import LogEvent, PieceKind, Template
from .timefmt import TimestampFormatter, get_timestamp_formatter


class Renderer:
    """Render compiled templates with an injected level table and date style.

    A Renderer holds no per-call state; one instance can serve any number of
    templates and threads.
    """

    __slots__ = ("_config", "_format_ts")

    def __init__(self, config: RendererConfig | None = None) -> None:
        self._config = config or RendererConfig()
        self._format_ts: TimestampFormatter = get_timestamp_formatter(self._config.date_style)

    @property
    def config(self) -> RendererConfig:
        return self._config

    def level_name(self, level: int) -> str:
        """Return the display name for a level ordinal."""
        names = self._config.level_names
        if 0 <= level < len(names):
            return names[level]
        if self._config.strict_levels:
            raise IndexError(
                f"Level ordinal {level} is outside the level-name table (0..{len(names) - 1})"
            )
        return self._config.unknown_level_name

    def render(self, event: LogEvent, template: Template) -> str:
        """Render one event; output is exactly the template's pieces in order."""
        buf: list[str] = []
        for piece in template:
            kind = piece.kind
            if kind is PieceKind.TEXT:
                buf.append(piece.payload)
            elif kind is PieceKind.LOGGER_NAME:
                buf.append(event.logger_name)
            elif kind is PieceKind.TIMESTAMP:
                buf.append(self._format_ts(event.timestamp, piece.payload))
            elif kind is PieceKind.LEVEL:
                buf.append(self.level_name(event.level))
            elif kind is PieceKind.MESSAGE:
                buf.append(str(event.payload))
            else:
                raise ValueError(f"Unsupported piece kind: {kind!r}")
        return "".join(buf)


def render(event: LogEvent, template: Template, config: RendererConfig | None = None) -> str:
    """Render an event with a one-off Renderer."""
    return Renderer(config).render(event, template)

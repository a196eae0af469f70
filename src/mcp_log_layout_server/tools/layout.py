"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from mcp_log_layout_server.core.config import DATE_STYLES, RendererConfig, resolve_renderer_config
from mcp_log_layout_server.core.layout import CompileError, Renderer, compile_layout
from mcp_log_layout_server.core.models import LogEvent, Piece, Template

logger = logging.getLogger(__name__)


class EventInput(BaseModel):
    logger_name: str = Field(description="Logger name substituted for %c.")
    level: str | int = Field(description="Level name (case-insensitive) or ordinal, for %p.")
    message: str = Field(description="Message text substituted for %m.")
    timestamp: datetime | None = Field(
        default=None,
        description="ISO-8601 timestamp for %d{...}. UTC is assumed if tz is missing; now if omitted.",
    )


def _parse_level(level: str | int, cfg: RendererConfig) -> int:
    """Resolve a level name or ordinal into an ordinal."""
    if isinstance(level, int):
        return level
    name = level.strip()
    digits = name.removeprefix("-")
    if digits.isascii() and digits.isdecimal():
        return int(name)
    upper = name.upper()
    for ordinal, known in enumerate(cfg.level_names):
        if known.upper() == upper:
            return ordinal
    valid = ", ".join(cfg.level_names)
    raise ValueError(
        f"Unknown log level '{level}'. Valid values: {valid}. "
        "Tip: levels are case-insensitive (e.g., 'info', 'ERROR')."
    )


def _normalize_ts(ts: datetime | None) -> datetime:
    if ts is None:
        return datetime.now(UTC)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _piece_to_dict(piece: Piece) -> dict[str, Any]:
    return {"kind": piece.kind.value, "payload": piece.payload}


def _compile(layout: str) -> Template:
    try:
        return compile_layout(layout)
    except CompileError as e:
        logger.debug("Layout rejected at position %s: %s", e.position, e)
        raise


def compile_layout_impl(*, layout: str) -> dict[str, Any]:
    """Implementation for the `compile_layout` MCP tool."""
    template = _compile(layout)
    return {
        "layout": layout,
        "count": len(template),
        "pieces": [_piece_to_dict(p) for p in template],
    }


def render_layout_impl(
    *,
    layout: str,
    logger_name: str,
    level: str | int,
    message: str,
    timestamp: str | None = None,
    date_style: str | None = None,
    config: RendererConfig | None = None,
) -> dict[str, Any]:
    """Implementation for the `render_layout` MCP tool.

    Notes
    -----
    - date_style overrides the configured style (LOG_LAYOUT_DATE_STYLE).
    - level accepts names from the level table or a raw ordinal.
    """
    cfg = resolve_renderer_config(config)
    if date_style:
        style = date_style.strip().lower()
        if style not in DATE_STYLES:
            valid = ", ".join(DATE_STYLES)
            raise ValueError(f"Unknown date style '{date_style}'. Valid values: {valid}.")
        cfg = replace(cfg, date_style=style)

    event_in = EventInput(
        logger_name=logger_name,
        level=level,
        message=message,
        timestamp=timestamp,
    )
    template = _compile(layout)
    event = LogEvent(
        logger_name=event_in.logger_name,
        timestamp=_normalize_ts(event_in.timestamp),
        level=_parse_level(event_in.level, cfg),
        payload=event_in.message,
    )
    return {"line": Renderer(cfg).render(event, template)}

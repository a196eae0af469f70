"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: compile a layout, render an event through a layout
- Resources: grammar, level table, event schema
- Prompts: derive a layout from an example line

Run locally (stdio):
    python -m mcp_log_layout_server.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_layout_server.core.config import resolve_renderer_config
from mcp_log_layout_server.core.logging_formatter import DEFAULT_LAYOUT, LayoutFormatter
from mcp_log_layout_server.prompts.registry import register_prompts
from mcp_log_layout_server.resources.registry import register_resources
from mcp_log_layout_server.tools.layout import compile_layout_impl, render_layout_impl

LOGGER = logging.getLogger(__name__)

LOG_LEVEL_ENV = "LOG_LAYOUT_LOG_LEVEL"
SERVER_LAYOUT_ENV = "LOG_LAYOUT_SERVER_LAYOUT"


def _build_handler() -> logging.Handler:
    """Return a stderr handler whose formatter honours the renderer env overrides."""
    layout = os.getenv(SERVER_LAYOUT_ENV) or DEFAULT_LAYOUT
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LayoutFormatter(layout, config=resolve_renderer_config()))
    return handler


def _configure_logging() -> None:
    """Configure stderr logging, formatted through our own layout.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, handlers=[_build_handler()])


mcp = FastMCP("log-layout", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def compile_layout(layout: str) -> dict[str, Any]:
    """Compile a layout string and return its pieces.

    Parameters
    ----------
    layout:
        Layout such as "%d{%Y-%m-%d %H:%M:%S} [%p] %c: %m".

    Returns
    -------
    dict:
        {"layout": str, "count": int, "pieces": [{"kind": str, "payload": str}]}
    """
    return compile_layout_impl(layout=layout)


@mcp.tool()
def render_layout(
    layout: str,
    logger_name: str,
    level: str | int,
    message: str,
    timestamp: str | None = None,
    date_style: str | None = None,
) -> dict[str, Any]:
    """Render one log event through a layout string.

    Parameters
    ----------
    layout:
        Layout string (see app://log-layout/grammar).
    logger_name/level/message:
        Event fields for %c, %p and %m. level is a name (case-insensitive) or ordinal.
    timestamp:
        ISO-8601 datetime for %d{...}. If timezone is omitted, UTC is assumed; defaults to now.
    date_style:
        "strftime" or "reference"; defaults to LOG_LAYOUT_DATE_STYLE or strftime.

    Returns
    -------
    dict:
        {"line": str}
    """
    return render_layout_impl(
        layout=layout,
        logger_name=logger_name,
        level=level,
        message=message,
        timestamp=timestamp,
        date_style=date_style,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()

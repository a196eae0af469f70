"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_layout_server.core.config import DATE_STYLES, resolve_renderer_config
from mcp_log_layout_server.tools.layout import EventInput

GRAMMAR = (
    "Layout placeholders:\n"
    "- %c            logger name\n"
    "- %d{FORMAT}    timestamp; FORMAT is passed verbatim to the date formatter\n"
    "- %p            level name\n"
    "- %m            message\n"
    "- %%            a literal '%'\n"
    "\n"
    "Any other character after '%' is an error, as is %d without '{' or a\n"
    "layout that ends inside a placeholder.\n"
    "\n"
    "Date styles:\n"
    "- strftime   %Y-%m-%d %H:%M:%S\n"
    "- reference  2006-01-02 15:04:05 (written as Mon Jan 2 15:04:05 MST 2006 would look)\n"
)


def level_table() -> dict[str, Any]:
    """Return the effective level-name table."""
    cfg = resolve_renderer_config()
    return {
        "levels": [
            {"ordinal": ordinal, "name": name} for ordinal, name in enumerate(cfg.level_names)
        ],
        "unknown_level_name": cfg.unknown_level_name,
        "strict_levels": cfg.strict_levels,
    }


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-layout/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        styles = ", ".join(DATE_STYLES)
        return (
            "Resources:\n"
            "- app://log-layout/help\n"
            "- app://log-layout/grammar\n"
            "- app://log-layout/levels\n"
            "- app://log-layout/schemas/event\n"
            f"\nDate styles: {styles}\n"
        )

    @mcp.resource("app://log-layout/grammar")
    def grammar() -> str:
        """Return the layout placeholder grammar."""
        return GRAMMAR

    @mcp.resource("app://log-layout/levels")
    def levels() -> dict[str, Any]:
        """Return the level ordinals and display names."""
        return level_table()

    @mcp.resource("app://log-layout/schemas/event")
    def event_schema() -> dict[str, Any]:
        """Return the JSON schema for render_layout events."""
        return EventInput.model_json_schema()

"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_layout_server.resources.registry import GRAMMAR


def design_layout_messages(example_line: str, date_style: str = "strftime") -> list[dict[str, Any]]:
    """Build the messages for the design_layout prompt."""
    return [
        {
            "role": "system",
            "content": (
                "You write log layout strings. Reply with a single layout that reproduces "
                "the example line's structure, then verify it with the compile_layout and "
                "render_layout tools.\n\n" + GRAMMAR
            ),
        },
        {
            "role": "user",
            "content": (
                f"Date style: {date_style}\n"
                "Write a layout for lines that look like this:\n"
                f"{example_line}"
            ),
        },
    ]


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def design_layout(example_line: str, date_style: str = "strftime") -> list[dict[str, Any]]:
        """Build a prompt that derives a layout string from an example log line."""
        return design_layout_messages(example_line, date_style)

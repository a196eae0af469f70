"""Module entrypoint.

Allows:
    python -m mcp_log_layout_server
"""

from __future__ import annotations

from mcp_log_layout_server.cli import main

if __name__ == "__main__":
    main()

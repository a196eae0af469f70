from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from mcp_log_layout_server.core.config import DATE_STYLES
from mcp_log_layout_server.tools.layout import compile_layout_impl, render_layout_impl


def _check(args: argparse.Namespace) -> None:
    out = compile_layout_impl(layout=args.layout)
    for i, piece in enumerate(out["pieces"]):
        print(f"{i} {piece['kind']} {piece['payload']!r}")
    print(f"\nCompiled {out['count']} pieces.")


def _render(args: argparse.Namespace) -> None:
    out = render_layout_impl(
        layout=args.layout,
        logger_name=args.logger,
        level=args.level,
        message=args.message,
        timestamp=args.timestamp,
        date_style=args.date_style,
    )
    print(out["line"])


def _serve(args: argparse.Namespace) -> None:
    from mcp_log_layout_server.server.log_server import main as serve_main

    serve_main([])


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mcp-log-layout",
        description="Compile log layout strings and render events through them.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Compile a layout and list its pieces")
    check.add_argument("layout")
    check.set_defaults(func=_check)

    render = sub.add_parser("render", help="Render one event through a layout")
    render.add_argument("layout")
    render.add_argument("--logger", default="root", help="Logger name for %%c (default: root)")
    render.add_argument("--level", default="INFO", help="Level name or ordinal for %%p (default: INFO)")
    render.add_argument("--message", default="", help="Message for %%m")
    render.add_argument("--timestamp", default=None, help="ISO8601 time for %%d (assumes UTC if tz missing)")
    render.add_argument("--date-style", choices=list(DATE_STYLES), default=None)
    render.set_defaults(func=_render)

    serve = sub.add_parser("serve", help="Run the MCP server over stdio")
    serve.set_defaults(func=_serve)
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (ValueError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()

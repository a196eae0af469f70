"""Layout compiler.

Parses a layout string such as ``"%d{%Y-%m-%d %H:%M:%S} [%p] %c: %m"`` into a
Template. Placeholders:

    %c            logger name
    %d{FORMAT}    timestamp, FORMAT is handed verbatim to the timestamp formatter
    %p            level name
    %m            message
    %%            a literal '%'

The scan is a four-state machine. Each character advances an immutable
``Scanner`` through ``step``; ``finish`` handles end of input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..models import Piece, PieceKind, Template

_PLACEHOLDERS: dict[str, PieceKind] = {
    "c": PieceKind.LOGGER_NAME,
    "p": PieceKind.LEVEL,
    "m": PieceKind.MESSAGE,
}


class CompileError(ValueError):
    """Layout string does not follow the placeholder grammar."""

    def __init__(
        self,
        message: str,
        *,
        layout: str,
        position: int,
        identifier: str | None = None,
    ) -> None:
        super().__init__(message)
        self.layout = layout
        self.position = position
        self.identifier = identifier


class ParseState(Enum):
    TEXT = "text"
    AFTER_PERCENT = "after_percent"
    DATE_EXPECT_OPEN_BRACE = "date_expect_open_brace"
    INSIDE_DATE_FORMAT = "inside_date_format"


@dataclass(frozen=True, slots=True)
class Scanner:
    """Scan position: current state, start of the pending run, pieces so far."""

    state: ParseState = ParseState.TEXT
    start: int = 0
    pieces: tuple[Piece, ...] = ()


def _add_piece(pieces: tuple[Piece, ...], kind: PieceKind, payload: str) -> tuple[Piece, ...]:
    """Append a piece; empty literal runs are dropped, adjacent ones merged.

    Rebuilds the tuple on every call, which is quadratic in the piece count;
    layouts are compiled once at configuration time and stay short.
    """
    if kind is PieceKind.TEXT:
        if not payload:
            return pieces
        if pieces and pieces[-1].kind is PieceKind.TEXT:
            return pieces[:-1] + (Piece(PieceKind.TEXT, pieces[-1].payload + payload),)
    return pieces + (Piece(kind, payload),)


def step(scanner: Scanner, layout: str, i: int) -> Scanner:
    """Advance the scanner over ``layout[i]``."""
    ch = layout[i]
    state = scanner.state

    if state is ParseState.TEXT:
        if ch != "%":
            return scanner
        pieces = _add_piece(scanner.pieces, PieceKind.TEXT, layout[scanner.start : i])
        return Scanner(ParseState.AFTER_PERCENT, scanner.start, pieces)

    if state is ParseState.AFTER_PERCENT:
        if ch == "%":
            # the second '%' opens the next literal run
            return Scanner(ParseState.TEXT, i, scanner.pieces)
        if ch == "d":
            return Scanner(ParseState.DATE_EXPECT_OPEN_BRACE, i + 1, scanner.pieces)
        kind = _PLACEHOLDERS.get(ch)
        if kind is None:
            raise CompileError(
                f"Unknown layout identifier {ch!r} at position {i}. "
                "Valid placeholders: %c, %d{...}, %p, %m, %%",
                layout=layout,
                position=i,
                identifier=ch,
            )
        return Scanner(ParseState.TEXT, i + 1, _add_piece(scanner.pieces, kind, ""))

    if state is ParseState.DATE_EXPECT_OPEN_BRACE:
        if ch != "{":
            raise CompileError(
                "%d should be followed by a date format in braces like %d{...}, "
                f"but found {ch!r} at position {i}",
                layout=layout,
                position=i,
                identifier=ch,
            )
        return Scanner(ParseState.INSIDE_DATE_FORMAT, i + 1, scanner.pieces)

    # INSIDE_DATE_FORMAT
    if ch != "}":
        return scanner
    pieces = _add_piece(scanner.pieces, PieceKind.TIMESTAMP, layout[scanner.start : i])
    return Scanner(ParseState.TEXT, i + 1, pieces)


def finish(scanner: Scanner, layout: str) -> Template:
    """Flush the trailing literal run, or fail if a placeholder is still open."""
    end = len(layout)
    if scanner.state is ParseState.AFTER_PERCENT:
        detail = "layout ends right after '%' (use %% for a literal percent)"
    elif scanner.state is ParseState.DATE_EXPECT_OPEN_BRACE:
        detail = "%d should be followed by a date format in braces like %d{...}"
    elif scanner.state is ParseState.INSIDE_DATE_FORMAT:
        detail = f"date format opened at position {scanner.start - 1} is missing '}}'"
    else:
        pieces = _add_piece(scanner.pieces, PieceKind.TEXT, layout[scanner.start : end])
        return Template(pieces=pieces, layout=layout)

    raise CompileError(
        f"Unterminated placeholder: {detail}",
        layout=layout,
        position=end,
    )


def compile_layout(layout: str) -> Template:
    """Compile a layout string into a Template.

    Raises
    ------
    CompileError
        On an unknown placeholder, a ``%d`` without ``{``, or end of input
        inside a placeholder. No partial template is produced.
    """
    scanner = Scanner()
    for i in range(len(layout)):
        scanner = step(scanner, layout, i)
    return finish(scanner, layout)

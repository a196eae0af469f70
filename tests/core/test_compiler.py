from __future__ import annotations

import pytest

from mcp_log_layout_server.core.layout import (
    CompileError,
    ParseState,
    Scanner,
    compile_layout,
    step,
)
from mcp_log_layout_server.core.models import Piece, PieceKind


def test_compile_all_placeholders() -> None:
    template = compile_layout("%c: %p - %m")
    assert template.pieces == (
        Piece(PieceKind.LOGGER_NAME),
        Piece(PieceKind.TEXT, ": "),
        Piece(PieceKind.LEVEL),
        Piece(PieceKind.TEXT, " - "),
        Piece(PieceKind.MESSAGE),
    )
    assert template.layout == "%c: %p - %m"


def test_compile_date_payload_is_verbatim() -> None:
    template = compile_layout("[%d{%Y-%m-%d %H:%M:%S}] %m")
    assert template.pieces == (
        Piece(PieceKind.TEXT, "["),
        Piece(PieceKind.TIMESTAMP, "%Y-%m-%d %H:%M:%S"),
        Piece(PieceKind.TEXT, "] "),
        Piece(PieceKind.MESSAGE),
    )


def test_escaped_percent_folds_into_literal() -> None:
    template = compile_layout("%%d is not a date")
    assert template.pieces == (Piece(PieceKind.TEXT, "%d is not a date"),)


def test_escaped_percent_merges_surrounding_text() -> None:
    template = compile_layout("100%% done %m")
    assert template.pieces == (
        Piece(PieceKind.TEXT, "100% done "),
        Piece(PieceKind.MESSAGE),
    )


def test_double_escape() -> None:
    template = compile_layout("%%%%")
    assert template.pieces == (Piece(PieceKind.TEXT, "%%"),)


def test_empty_layout_compiles_to_empty_template() -> None:
    template = compile_layout("")
    assert len(template) == 0
    assert list(template) == []


def test_no_empty_literal_pieces() -> None:
    template = compile_layout("%c%m%p%d{}")
    assert [p.kind for p in template] == [
        PieceKind.LOGGER_NAME,
        PieceKind.MESSAGE,
        PieceKind.LEVEL,
        PieceKind.TIMESTAMP,
    ]
    assert all(p.payload for p in template if p.kind is PieceKind.TEXT)


def test_empty_date_format_is_kept() -> None:
    template = compile_layout("%d{}")
    assert template.pieces == (Piece(PieceKind.TIMESTAMP, ""),)


def test_repeated_placeholders() -> None:
    template = compile_layout("%m%m")
    assert template.pieces == (Piece(PieceKind.MESSAGE), Piece(PieceKind.MESSAGE))


def test_first_closing_brace_ends_date_format() -> None:
    template = compile_layout("%d{a{b}c}")
    assert template.pieces == (
        Piece(PieceKind.TIMESTAMP, "a{b"),
        Piece(PieceKind.TEXT, "c}"),
    )


def test_braces_outside_placeholders_are_literal() -> None:
    template = compile_layout("{%m}")
    assert template.pieces == (
        Piece(PieceKind.TEXT, "{"),
        Piece(PieceKind.MESSAGE),
        Piece(PieceKind.TEXT, "}"),
    )


def test_unknown_identifier() -> None:
    with pytest.raises(CompileError) as exc:
        compile_layout("%x")
    assert exc.value.identifier == "x"
    assert exc.value.position == 1
    assert "'x'" in str(exc.value)


def test_unknown_identifier_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        compile_layout("level=%P")


def test_date_without_brace_at_end() -> None:
    with pytest.raises(CompileError) as exc:
        compile_layout("%d")
    assert "Unterminated placeholder" in str(exc.value)
    assert exc.value.position == 2
    assert exc.value.identifier is None


def test_date_followed_by_other_character() -> None:
    with pytest.raises(CompileError) as exc:
        compile_layout("%d %m")
    assert exc.value.identifier == " "
    assert "%d{...}" in str(exc.value)


def test_unterminated_date_format() -> None:
    with pytest.raises(CompileError) as exc:
        compile_layout("%d{2006")
    assert "missing '}'" in str(exc.value)
    assert exc.value.layout == "%d{2006"


def test_trailing_percent() -> None:
    with pytest.raises(CompileError) as exc:
        compile_layout("progress 100%")
    assert "Unterminated placeholder" in str(exc.value)


def test_step_transitions() -> None:
    layout = "a%d{x}"
    s = Scanner()
    s = step(s, layout, 0)
    assert s.state is ParseState.TEXT
    s = step(s, layout, 1)
    assert s.state is ParseState.AFTER_PERCENT
    assert s.pieces == (Piece(PieceKind.TEXT, "a"),)
    s = step(s, layout, 2)
    assert s.state is ParseState.DATE_EXPECT_OPEN_BRACE
    s = step(s, layout, 3)
    assert s.state is ParseState.INSIDE_DATE_FORMAT
    assert s.start == 4
    s = step(s, layout, 4)
    s = step(s, layout, 5)
    assert s.state is ParseState.TEXT
    assert s.pieces[-1] == Piece(PieceKind.TIMESTAMP, "x")


def test_step_does_not_mutate_scanner() -> None:
    before = Scanner()
    after = step(before, "%", 0)
    assert before == Scanner()
    assert after.state is ParseState.AFTER_PERCENT


def test_long_layout_compiles_every_piece() -> None:
    template = compile_layout("%c|" * 500)
    assert len(template) == 1000
    assert template.pieces[-2:] == (Piece(PieceKind.LOGGER_NAME), Piece(PieceKind.TEXT, "|"))

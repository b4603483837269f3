# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the signature lexer."""

import pytest

from methsig.parser.cursor import Cursor
from methsig.parser.errors import (
    LexerError,
    ParseError,
    UnbalancedDelimiterError,
    UnexpectedEndOfInputError,
    UnsupportedSyntaxError,
)
from methsig.parser.lexer import Lexer, Token, TokenKind, tokenize

# ###############
# Test Helpers
# ###############


def _tokens_no_eof(source: str) -> list[Token]:
    """Return all tokens except the terminal EOF token."""
    result = tokenize(source)
    assert result[-1].kind == TokenKind.EOF
    return result[:-1]


def _kinds(source: str) -> list[TokenKind]:
    """Return the token kinds for all tokens except EOF."""
    return [tok.kind for tok in _tokens_no_eof(source)]


def _literals(source: str) -> list[str]:
    """Return the token literals for all tokens except EOF."""
    return [tok.literal for tok in _tokens_no_eof(source)]


# ###############
# End of Input
# ###############


class TestEof:
    def test_empty_string_produces_eof(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].literal == ""

    def test_trailing_spaces_belong_to_eof(self) -> None:
        tokens = tokenize("   ")
        assert len(tokens) == 1
        assert tokens[0].orig == "   "

    def test_trailing_comment_belongs_to_eof(self) -> None:
        assert _kinds("$x # the x") == [TokenKind.VARIABLE]

    def test_consuming_eof_raises(self) -> None:
        lexer = Lexer(Cursor(""))
        with pytest.raises(UnexpectedEndOfInputError):
            lexer.consume_token()


# ###############
# Symbols and Keywords
# ###############


class TestSymbols:
    @pytest.mark.parametrize(
        ("source", "expected_kind"),
        [
            ("(", TokenKind.OPEN_PAREN),
            (")", TokenKind.CLOSE_PAREN),
            (",", TokenKind.COMMA),
            (":", TokenKind.COLON),
            ("=", TokenKind.EQUALS),
            ("|", TokenKind.PIPE),
            ("!", TokenKind.BANG),
            ("?", TokenKind.QUESTION),
        ],
    )
    def test_single_char_symbol(self, source: str, expected_kind: TokenKind) -> None:
        tokens = _tokens_no_eof(source)
        assert len(tokens) == 1
        assert tokens[0].kind == expected_kind
        assert tokens[0].literal == source

    def test_symbols_without_spaces(self) -> None:
        assert _kinds("(:?!)") == [
            TokenKind.OPEN_PAREN,
            TokenKind.COLON,
            TokenKind.QUESTION,
            TokenKind.BANG,
            TokenKind.CLOSE_PAREN,
        ]


class TestKeywords:
    def test_where_is_keyword(self) -> None:
        assert _kinds("where") == [TokenKind.WHERE]

    def test_where_prefix_is_type_name(self) -> None:
        assert _kinds("wherever") == [TokenKind.TYPE_NAME]

    def test_keyword_is_case_sensitive(self) -> None:
        assert _kinds("Where") == [TokenKind.TYPE_NAME]


# ###############
# Names
# ###############


class TestTypeNames:
    @pytest.mark.parametrize("name", ["Str", "Int", "My::Class::Name", "Foo-Bar", "x1_y"])
    def test_identifier_is_type_name(self, name: str) -> None:
        tokens = _tokens_no_eof(name)
        assert [t.kind for t in tokens] == [TokenKind.TYPE_NAME]
        assert tokens[0].literal == name

    def test_parameterized_type_is_one_token(self) -> None:
        assert _literals("Foo[Bar|Baz[Moo]]|Kooh") == ["Foo[Bar|Baz[Moo]]|Kooh"]

    def test_spaced_alternation_is_three_tokens(self) -> None:
        assert _kinds("Animal | Human") == [TokenKind.TYPE_NAME, TokenKind.PIPE, TokenKind.TYPE_NAME]

    def test_unspaced_alternation_is_one_token(self) -> None:
        assert _literals("Animal|Human $affe") == ["Animal|Human", "$affe"]

    def test_label_is_split_from_paren(self) -> None:
        assert _kinds("apan($affe)") == [
            TokenKind.TYPE_NAME,
            TokenKind.OPEN_PAREN,
            TokenKind.VARIABLE,
            TokenKind.CLOSE_PAREN,
        ]

    def test_malformed_type_constraint_raises(self) -> None:
        with pytest.raises(ParseError):
            tokenize("Foo[Bar]]")

    def test_unbalanced_type_constraint_raises(self) -> None:
        with pytest.raises(UnbalancedDelimiterError):
            tokenize("Foo[Bar $x")


class TestVariables:
    @pytest.mark.parametrize("name", ["$x", "@list", "%hash", "$_private", "$CamelCase9"])
    def test_sigil_variable(self, name: str) -> None:
        tokens = _tokens_no_eof(name)
        assert [t.kind for t in tokens] == [TokenKind.VARIABLE]
        assert tokens[0].literal == name

    def test_sigil_without_name_raises(self) -> None:
        with pytest.raises(LexerError):
            tokenize("$ x")


# ###############
# Whitespace, Newlines, Comments
# ###############


class TestLayout:
    def test_spaces_do_not_change_literals(self) -> None:
        assert _literals("  Str   $x  ") == ["Str", "$x"]

    def test_orig_reassembles_source(self) -> None:
        source = "( Str  $x ,\n  Int :$y! )  "
        assert "".join(tok.orig for tok in tokenize(source)) == source

    def test_offsets_point_at_orig_start(self) -> None:
        assert [tok.offset for tok in tokenize("(Str $x)")] == [0, 1, 5, 7, 8]

    def test_newline_is_a_token(self) -> None:
        assert _kinds("$x\n$y") == [TokenKind.VARIABLE, TokenKind.NEWLINE, TokenKind.VARIABLE]

    def test_crlf_is_one_newline(self) -> None:
        assert _kinds("$x\r\n$y") == [TokenKind.VARIABLE, TokenKind.NEWLINE, TokenKind.VARIABLE]

    def test_blank_and_comment_lines_fold_into_one_newline(self) -> None:
        tokens = _tokens_no_eof("$x # the x\n\n   # more\n  $y")
        assert [t.kind for t in tokens] == [TokenKind.VARIABLE, TokenKind.NEWLINE, TokenKind.VARIABLE]
        assert tokens[1].orig == "# the x\n\n   # more\n  "


# ###############
# Errors
# ###############


class TestErrors:
    def test_unrecognized_input_reports_preview(self) -> None:
        with pytest.raises(LexerError, match="'123456789A'"):
            tokenize("123456789ABCDEF")

    def test_error_offset_skips_leading_spaces(self) -> None:
        with pytest.raises(LexerError) as exc_info:
            tokenize("$x   ;")
        assert exc_info.value.offset == 5

    def test_array_destructuring_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedSyntaxError, match="Destructuring"):
            tokenize("[$a, $b]")

    def test_hash_destructuring_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedSyntaxError):
            tokenize("{ $a }")

    def test_quotes_are_not_tokens(self) -> None:
        with pytest.raises(LexerError):
            tokenize("'foo'")


# ###############
# Lookahead Queue
# ###############


class TestLookahead:
    def test_token_lookahead_buffers_without_consuming(self) -> None:
        lexer = Lexer(Cursor("($x)"))
        assert lexer.token(2).kind == TokenKind.CLOSE_PAREN
        assert lexer.token(0).kind == TokenKind.OPEN_PAREN
        assert lexer.token(1).kind == TokenKind.VARIABLE

    def test_lookahead_past_end_returns_eof(self) -> None:
        lexer = Lexer(Cursor("$x"))
        assert lexer.token(5).kind == TokenKind.EOF

    def test_consume_pops_front(self) -> None:
        lexer = Lexer(Cursor("($x)"))
        assert lexer.consume_token().kind == TokenKind.OPEN_PAREN
        assert lexer.consume_token().literal == "$x"
        assert lexer.token().kind == TokenKind.CLOSE_PAREN

    def test_remaining_input_includes_buffered_tokens(self) -> None:
        lexer = Lexer(Cursor("( $x ) tail"))
        lexer.token(1)
        lexer.consume_token()
        assert lexer.remaining_input() == "$x ) tail"

    def test_raw_cursor_requires_empty_queue(self) -> None:
        lexer = Lexer(Cursor("= 5"))
        lexer.token()
        with pytest.raises(RuntimeError):
            lexer.raw_cursor()
        lexer.consume_token()
        assert lexer.raw_cursor().remaining == "5"

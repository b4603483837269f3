# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for method signatures.

Produces tokens on demand from a :class:`Cursor`. Tokens remember the exact
source slice they were read from so that unconsumed input can be handed
back to the caller unchanged.
"""

import enum
import re
from collections import deque
from dataclasses import dataclass
from typing import NoReturn

from methsig.parser.cursor import Cursor
from methsig.parser.errors import LexerError, UnexpectedEndOfInputError, UnsupportedSyntaxError
from methsig.parser.extractors import TYPE_NAME_PATTERN, extract_type_constraint

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """All token kinds produced by the signature lexer."""

    # Symbols
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    COMMA = ","
    COLON = ":"
    EQUALS = "="
    PIPE = "|"
    BANG = "!"
    QUESTION = "?"

    # Layout
    NEWLINE = "NEWLINE"

    # Keywords
    WHERE = "where"

    # Names
    TYPE_NAME = "TYPE_NAME"
    VARIABLE = "VARIABLE"

    # End of input
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with the source text it was read from.

    Attributes:
        kind: The kind of token.
        literal: The significant text: the symbol, keyword, variable name,
            or the full type constraint for TYPE_NAME tokens.
        orig: The exact consumed source slice, surrounding whitespace and
            comments included.
        offset: 0-based offset of the first character of ``orig``.
    """

    kind: TokenKind
    literal: str
    orig: str
    offset: int


class Lexer:
    """Pull-based tokenizer with a queue of pending lookahead tokens."""

    def __init__(self, cursor: Cursor) -> None:
        self._cursor = cursor
        self._pending: deque[Token] = deque()

    def token(self, lookahead: int = 0) -> Token:
        """Return the ``lookahead``-th unconsumed token (0 is the current one).

        Looking past the end of input keeps returning the EOF token.
        """
        while len(self._pending) <= lookahead:
            if self._pending and self._pending[-1].kind is TokenKind.EOF:
                return self._pending[-1]
            self._pending.append(self._next_token())
        return self._pending[lookahead]

    def consume_token(self) -> Token:
        """Remove and return the current token.

        Raises:
            UnexpectedEndOfInputError: If the input is exhausted.
        """
        tok = self.token()
        if tok.kind is TokenKind.EOF:
            raise UnexpectedEndOfInputError("Unexpected end of input", tok.offset)
        return self._pending.popleft()

    def raw_cursor(self) -> Cursor:
        """Return the cursor for scanning text that is not tokenized.

        Raises:
            RuntimeError: If lookahead tokens are buffered, since they have
                already consumed the text a raw scan would need.
        """
        if self._pending:
            raise RuntimeError(f"Raw scan requested with {len(self._pending)} token(s) buffered")
        return self._cursor

    def remaining_input(self) -> str:
        """Return all input not yet consumed by the parser, buffered tokens included."""
        return "".join(tok.orig for tok in self._pending) + self._cursor.remaining

    # ------------------------------------------------------------------
    # Token scanning
    # ------------------------------------------------------------------

    def _next_token(self) -> Token:
        """Scan one token from the cursor."""
        cursor = self._cursor
        start = cursor.offset

        m = cursor.match(_NEWLINE_RE)
        if m is not None:
            text = cursor.consume(m.end() - start)
            return Token(TokenKind.NEWLINE, text, text, start)

        m = cursor.match(_END_RE)
        if m is not None:
            text = cursor.consume(m.end() - start)
            return Token(TokenKind.EOF, "", text, start)

        m = cursor.match(_TOKEN_RE)
        if m is None:
            self._raise_unrecognized()
        cursor.consume(m.end() - start)

        symbol, name, variable = m.group("symbol", "name", "variable")
        if symbol is not None:
            kind, literal = _SYMBOLS[symbol], symbol
        elif name is not None:
            if name in _KEYWORDS:
                kind, literal = _KEYWORDS[name], name
            else:
                kind, literal = TokenKind.TYPE_NAME, extract_type_constraint(cursor, name)
        else:
            kind, literal = TokenKind.VARIABLE, variable

        trailing = cursor.match(_SPACE_RE)
        if trailing is not None:
            cursor.consume(trailing.end() - cursor.offset)
        return Token(kind, literal, cursor.source[start : cursor.offset], start)

    def _raise_unrecognized(self) -> NoReturn:
        cursor = self._cursor
        space = cursor.match(_SPACE_RE)
        skip = space.end() - cursor.offset if space is not None else 0
        offset = cursor.offset + skip
        preview = cursor.source[offset : offset + 10]
        if preview[:1] == "[":
            raise UnsupportedSyntaxError(f"Destructuring patterns are not supported: {preview!r}", offset)
        if preview[:1] == "{":
            raise UnsupportedSyntaxError(
                f"Hash destructuring and bare code blocks are not supported: {preview!r}", offset
            )
        raise LexerError(f"Error parsing signature at {preview!r}", offset)


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole string, ending with a single EOF token.

    Quote-like literals, numbers and code blocks are only recognized by the
    parser in value positions, so they are lexer errors here.

    Raises:
        LexerError: On text that starts no token.
        ParseError: On a malformed type constraint.
    """
    lexer = Lexer(Cursor(source))
    tokens: list[Token] = []
    while True:
        tok = lexer.token()
        tokens.append(tok)
        if tok.kind is TokenKind.EOF:
            return tokens
        lexer.consume_token()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenKind] = {
    "where": TokenKind.WHERE,
}

_SYMBOLS: dict[str, TokenKind] = {
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "=": TokenKind.EQUALS,
    "|": TokenKind.PIPE,
    "!": TokenKind.BANG,
    "?": TokenKind.QUESTION,
}

# Horizontal whitespace only; line breaks are NEWLINE tokens.
_SPACE_RE = re.compile(r"[^\S\r\n]*")

# One or more line breaks, each optionally preceded by a '#' comment.
_NEWLINE_RE = re.compile(r"(?:[^\S\r\n]*(?:#[^\r\n]*)?(?:\r\n|\r|\n))+[^\S\r\n]*")

_END_RE = re.compile(r"[^\S\r\n]*(?:#[^\r\n]*)?\Z")

_TOKEN_RE = re.compile(
    r"[^\S\r\n]*"
    r"(?:"
    r"(?P<symbol>[(),:=|!?])"
    rf"|(?P<name>{TYPE_NAME_PATTERN})"
    r"|(?P<variable>[$@%][A-Za-z_][A-Za-z0-9_]*)"
    r")"
)

# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for method signatures.

Grammar (LL(1) over the token stream, one extra decision for the invocant):

    signature : '(' [ param ':' ] [ param ( (',' | NEWLINE) param )* ] ')'
    param     : [ type ( '|' type )* ]
                [ ':' [ label '(' ] ] variable [ ')' ]
                [ '?' | '!' ]
                [ '=' value ]
                ( 'where' block )*
    value     : number | quote-like | variable
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, NoReturn

from methsig.parser.cursor import Cursor
from methsig.parser.errors import ParseError, SemanticError, UnexpectedEndOfInputError
from methsig.parser.extractors import extract_codeblock, extract_number, extract_quotelike
from methsig.parser.lexer import Lexer, Token, TokenKind
from methsig.parser.options import ParseOptions, coerce_options

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def parse_signature(source: str | ParseOptions) -> tuple[Any, str]:
    """Parse a parenthesized method signature.

    Args:
        source: Signature text starting with ``(``, or ParseOptions for a
            custom start offset or result factories.

    Returns:
        The signature value (a Signature unless a custom factory is set) and
        the input left after the closing ``)``.

    Raises:
        SignatureError: A subclass describing the first problem found.
    """
    options = coerce_options(source)
    logger.debug(f"Parsing signature at offset {options.offset}: {options.input[options.offset :]!r}")
    parser = _Parser(options)
    signature = parser.parse_signature()
    remaining = parser.remaining_input()
    logger.debug(f"Parsed signature, {len(remaining)} character(s) remaining")
    return signature, remaining


def parse_parameter(source: str | ParseOptions) -> tuple[Any, str]:
    """Parse a single bare parameter such as ``Str :$name! where { length $_ }``.

    Args:
        source: Parameter text, or ParseOptions.

    Returns:
        The parameter value and the input left after it.

    Raises:
        SignatureError: A subclass describing the first problem found.
    """
    options = coerce_options(source)
    logger.debug(f"Parsing parameter at offset {options.offset}: {options.input[options.offset :]!r}")
    parser = _Parser(options)
    param = parser.parse_parameter()
    remaining = parser.remaining_input()
    logger.debug(f"Parsed parameter, {len(remaining)} character(s) remaining")
    return param, remaining


# ################
# Implementation
# ################

_LABEL_RE = re.compile(r"[A-Za-z0-9_]+")

_RAW_SPACE_RE = re.compile(r"\s*")

_TOKEN_DESCRIPTIONS: dict[TokenKind, str] = {
    TokenKind.NEWLINE: "newline",
    TokenKind.WHERE: "'where'",
    TokenKind.TYPE_NAME: "type constraint",
    TokenKind.VARIABLE: "variable",
    TokenKind.EOF: "end of input",
}


@dataclass
class _ParamFields:
    """Everything collected for one parameter before the result factory runs."""

    offset: int
    named: bool
    variable_name: str
    required: bool
    type_constraint: str | None = None
    label: str | None = None
    default_value: str | None = None
    constraints: list[str] = field(default_factory=list)

    @property
    def call_label(self) -> str:
        return self.label if self.label is not None else self.variable_name[1:]


class _Parser:
    """Recursive-descent parser pulling tokens from a Lexer."""

    def __init__(self, options: ParseOptions) -> None:
        self._options = options
        self._lexer = Lexer(Cursor(options.input, options.offset))

    def remaining_input(self) -> str:
        return self._lexer.remaining_input()

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._lexer.token()

    def _check(self, *kinds: TokenKind) -> bool:
        """Return True if the current token is one of ``kinds`` (without consuming)."""
        return self._current().kind in kinds

    def _advance(self) -> Token:
        return self._lexer.consume_token()

    def _expect(self, *kinds: TokenKind) -> Token:
        """Consume the current token if it is one of ``kinds``.

        Raises UnexpectedEndOfInputError at end of input and ParseError for
        any other mismatch.
        """
        if self._check(*kinds):
            return self._advance()
        self._fail(" or ".join(_describe(kind) for kind in kinds))

    def _fail(self, expected: str) -> NoReturn:
        """Report that ``expected`` was not found at the current token."""
        tok = self._current()
        if tok.kind is TokenKind.EOF:
            raise UnexpectedEndOfInputError(f"Unexpected end of input, expected {expected}", tok.offset)
        raise ParseError(f"Expected {expected}, found {tok.literal!r}", tok.offset)

    def _skip_newlines(self) -> None:
        while self._check(TokenKind.NEWLINE):
            self._advance()

    def _raw_cursor(self) -> Cursor:
        """Cursor for a raw scan, with leading whitespace already skipped."""
        cursor = self._lexer.raw_cursor()
        space = cursor.match(_RAW_SPACE_RE)
        if space is not None:
            cursor.consume(space.end() - cursor.offset)
        return cursor

    # ------------------------------------------------------------------
    # Signatures
    # ------------------------------------------------------------------

    def parse_signature(self) -> Any:
        """Parse: '(' [invocant ':'] [param ((',' | NEWLINE) param)*] ')'"""
        self._expect(TokenKind.OPEN_PAREN)
        self._skip_newlines()

        invocant: _ParamFields | None = None
        params: list[_ParamFields] = []

        param = self._parse_param()
        if param is not None and self._check(TokenKind.COLON):
            self._check_invocant(param)
            self._advance()  # consume ':'
            invocant = param
            self._skip_newlines()
            param = self._parse_param()

        if param is not None:
            optional_positional_seen = False
            while True:
                if not param.named:
                    if param.required and optional_positional_seen:
                        raise SemanticError(
                            f"Invalid: Required positional param {param.variable_name!r} found after optional one",
                            param.offset,
                        )
                    optional_positional_seen = optional_positional_seen or not param.required
                params.append(param)

                if not self._check(TokenKind.COMMA, TokenKind.NEWLINE):
                    break
                explicit = self._parse_separator()
                param = self._parse_param()
                if param is None:
                    # A line break before ')' is layout, not a separator.
                    if not explicit and self._check(TokenKind.CLOSE_PAREN):
                        break
                    self._fail("parameter after separator")

        self._expect(TokenKind.CLOSE_PAREN)
        return self._build_signature(invocant, params)

    def _parse_separator(self) -> bool:
        """Consume ',' or line breaks between parameters.

        Returns True if a comma was part of the separator.
        """
        self._skip_newlines()
        if not self._check(TokenKind.COMMA):
            return False
        self._advance()
        self._skip_newlines()
        return True

    def _check_invocant(self, param: _ParamFields) -> None:
        if param.named:
            raise SemanticError(f"Invocant {param.variable_name!r} cannot be named", param.offset)
        if not param.required or param.default_value is not None:
            raise SemanticError(f"Invocant {param.variable_name!r} cannot be optional", param.offset)

    def _build_signature(self, invocant: _ParamFields | None, params: list[_ParamFields]) -> Any:
        required_positional_count = sum(1 for p in params if p.required and not p.named)
        required_named_labels = tuple(p.call_label for p in params if p.required and p.named)
        return self._options.signature_factory(
            invocant=self._build_param(invocant) if invocant is not None else None,
            params=tuple(self._build_param(p) for p in params),
            required_positional_count=required_positional_count,
            required_named_labels=required_named_labels,
        )

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def parse_parameter(self) -> Any:
        """Parse exactly one parameter; an empty production is an error."""
        param = self._parse_param()
        if param is None:
            self._fail("parameter")
        return self._build_param(param)

    def _parse_param(self) -> _ParamFields | None:
        """Parse one parameter, or return None if none starts here."""
        offset = self._current().offset
        consumed = False

        type_constraint: str | None = None
        if self._check(TokenKind.TYPE_NAME):
            type_constraint = self._advance().literal
            while self._check(TokenKind.PIPE):
                self._advance()  # consume '|'
                type_constraint += "|" + self._expect(TokenKind.TYPE_NAME).literal
            consumed = True

        named = False
        label: str | None = None
        if self._check(TokenKind.COLON):
            self._advance()  # consume ':'
            named = True
            consumed = True
            if self._check(TokenKind.TYPE_NAME):
                label_tok = self._advance()
                if not _LABEL_RE.fullmatch(label_tok.literal):
                    raise ParseError(
                        f"Label required, type constraint found: {label_tok.literal!r}",
                        label_tok.offset,
                    )
                label = label_tok.literal
                self._expect(TokenKind.OPEN_PAREN)

        if not consumed and not self._check(TokenKind.VARIABLE):
            return None

        variable_name = self._expect(TokenKind.VARIABLE).literal
        if label is not None:
            self._expect(TokenKind.CLOSE_PAREN)

        # Positionals are required by default, named parameters are not.
        required = not named
        if self._check(TokenKind.QUESTION):
            self._advance()
            required = False
        elif self._check(TokenKind.BANG):
            self._advance()
            required = True

        param = _ParamFields(
            offset=offset,
            named=named,
            variable_name=variable_name,
            required=required,
            type_constraint=type_constraint,
            label=label,
        )

        if self._check(TokenKind.EQUALS):
            self._advance()  # consume '='
            param.default_value = self._parse_value_ish()

        while self._check(TokenKind.WHERE):
            self._advance()  # consume 'where'
            cursor = self._raw_cursor()
            if cursor.at_end:
                raise UnexpectedEndOfInputError(
                    "Unexpected end of input, expected code block after 'where'", cursor.offset
                )
            block = extract_codeblock(cursor)
            if block is None:
                raise ParseError(f"Code block expected after 'where', found {cursor.preview()!r}", cursor.offset)
            param.constraints.append(block)

        return param

    def _parse_value_ish(self) -> str:
        """Parse a default value: number, quote-like literal, or variable."""
        cursor = self._raw_cursor()
        value = extract_number(cursor)
        if value is None:
            value = extract_quotelike(cursor)
        if value is None and self._check(TokenKind.VARIABLE):
            value = self._advance().literal
        if value is None:
            self._fail("default value after '='")
        return value

    def _build_param(self, param: _ParamFields) -> Any:
        fields: dict[str, Any] = {
            "type_constraint": param.type_constraint,
            "variable_name": param.variable_name,
            "required": param.required,
            "default_value": param.default_value,
            "constraints": tuple(param.constraints),
        }
        if param.named:
            return self._options.named_factory(label=param.label, **fields)
        return self._options.positional_factory(**fields)


def _describe(kind: TokenKind) -> str:
    return _TOKEN_DESCRIPTIONS.get(kind, repr(kind.value))

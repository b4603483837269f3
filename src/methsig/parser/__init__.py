# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for method signatures."""

from methsig.parser.errors import (
    LexerError,
    ParseError,
    RejectedQuoteOperatorError,
    SemanticError,
    SignatureError,
    UnbalancedDelimiterError,
    UnexpectedEndOfInputError,
    UnsupportedSyntaxError,
)
from methsig.parser.options import ParseOptions, ParseOptionsError
from methsig.parser.parser import parse_parameter, parse_signature

__all__ = [
    "parse_signature",
    "parse_parameter",
    "ParseOptions",
    "ParseOptionsError",
    "SignatureError",
    "LexerError",
    "UnsupportedSyntaxError",
    "UnexpectedEndOfInputError",
    "UnbalancedDelimiterError",
    "RejectedQuoteOperatorError",
    "ParseError",
    "SemanticError",
]

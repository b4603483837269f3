# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for Perl6-style method signatures such as ``(Str $name, Int :$age = 0)``."""

from methsig.model import NamedParameter, Parameter, PositionalParameter, Signature
from methsig.parser import (
    LexerError,
    ParseError,
    ParseOptions,
    ParseOptionsError,
    RejectedQuoteOperatorError,
    SemanticError,
    SignatureError,
    UnbalancedDelimiterError,
    UnexpectedEndOfInputError,
    UnsupportedSyntaxError,
    parse_parameter,
    parse_signature,
)

__all__ = [
    # Entry points
    "parse_signature",
    "parse_parameter",
    "ParseOptions",
    "ParseOptionsError",
    # Model
    "Signature",
    "Parameter",
    "PositionalParameter",
    "NamedParameter",
    # Errors
    "SignatureError",
    "LexerError",
    "UnsupportedSyntaxError",
    "UnexpectedEndOfInputError",
    "UnbalancedDelimiterError",
    "RejectedQuoteOperatorError",
    "ParseError",
    "SemanticError",
]

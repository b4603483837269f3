# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised while scanning and parsing method signatures."""

# ###############
# Public Interface
# ###############


class SignatureError(Exception):
    """Base class for every error raised by the signature parser.

    Attributes:
        offset: 0-based character offset into the original input where the
            problem was detected.
        reason: The message without the location prefix.
    """

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"Offset {offset}: {message}")
        self.offset = offset
        self.reason = message


class LexerError(SignatureError):
    """Raised when no token pattern matches at the current position."""


class UnsupportedSyntaxError(LexerError):
    """Raised for destructuring patterns and bare code blocks."""


class UnexpectedEndOfInputError(SignatureError):
    """Raised when a token is demanded but the input is exhausted."""


class UnbalancedDelimiterError(SignatureError):
    """Raised when a quote, code block, or type bracket never closes.

    Attributes:
        depth: Nesting depth still open when the input ran out (0 when the
            construct does not nest).
    """

    def __init__(self, message: str, offset: int, depth: int = 0) -> None:
        super().__init__(message, offset)
        self.depth = depth


class RejectedQuoteOperatorError(SignatureError):
    """Raised for a quote-like literal whose operator is not whitelisted.

    Attributes:
        operator: The rejected operator, e.g. '`' or 'qx'.
    """

    def __init__(self, operator: str, offset: int) -> None:
        super().__init__(f"Rejected quote-like operator: {operator!r}", offset)
        self.operator = operator


class ParseError(SignatureError):
    """Raised when the token stream does not match the signature grammar."""


class SemanticError(ParseError):
    """Raised for well-formed input that breaks parameter ordering or invocant rules."""

# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Self-delimiting scanners for numbers, quote-like literals, code blocks and
parameterized type constraints.

Each ``extract_*`` function works directly on a :class:`Cursor`. Returning
``None`` means the construct does not start here and the caller should try
another alternative; a construct that starts but is malformed raises.
"""

import re

from methsig.parser.cursor import Cursor
from methsig.parser.errors import ParseError, RejectedQuoteOperatorError, UnbalancedDelimiterError

# ###############
# Public Interface
# ###############

QUOTE_OPERATOR_WHITELIST: frozenset[str] = frozenset({"q", "qq", "qw", "qr", '"', "'"})

TYPE_NAME_PATTERN = r"[A-Za-z][A-Za-z0-9_-]*(?:::[A-Za-z][A-Za-z0-9_-]*)*"


def extract_number(cursor: Cursor) -> str | None:
    """Consume a numeric literal and return its text unchanged.

    Accepts an optional sign followed by a hexadecimal (``0x1F``), binary
    (``0b101``) or decimal literal (``12``, ``1.5``, ``.5``, ``1e-3``).
    The value is never converted, so ``007`` stays ``007``.
    """
    m = cursor.match(_NUMBER_RE)
    if m is None:
        return None
    return cursor.consume(m.end() - cursor.offset)


def extract_quotelike(cursor: Cursor) -> str | None:
    """Consume a quote-like literal such as ``'a'``, ``"b"``, ``q(c)`` or ``qw/d e/``.

    Returns:
        The literal exactly as written, or None if no quote-like literal
        starts at the cursor.

    Raises:
        RejectedQuoteOperatorError: If the literal uses an operator outside
            QUOTE_OPERATOR_WHITELIST (backticks, ``qx``, ``m``, ``s``, ...).
        UnbalancedDelimiterError: If the closing delimiter is missing.
    """
    start = cursor.offset
    first = cursor.peek()
    if first in _BARE_QUOTES:
        operator = first
        delimiter_at = start
    elif cursor.match(_HEREDOC_RE):
        raise RejectedQuoteOperatorError("<<", start)
    else:
        m = cursor.match(_QUOTE_OPERATOR_RE)
        if m is None:
            return None
        operator = m.group("op")
        delimiter_at = m.end()

    if operator not in QUOTE_OPERATOR_WHITELIST:
        raise RejectedQuoteOperatorError(operator, start)

    end = _scan_delimited(cursor, delimiter_at)
    if operator == "qr":
        modifiers = _REGEX_MODIFIERS_RE.match(cursor.source, end)
        if modifiers is not None:
            end = modifiers.end()
    return cursor.consume(end - start)


def extract_codeblock(cursor: Cursor) -> str | None:
    """Consume a brace-balanced block, braces included.

    Backslash-escaped braces and braces inside closed literals (quoted
    strings, ``/.../`` patterns and ``q``, ``qq``, ``qw``, ``qr``, ``m``,
    ``s``, ``tr``, ``y`` forms) do not count towards the nesting depth. A
    quote character that never closes is treated as ordinary text.

    Returns:
        The block text, or None if the cursor is not at ``{``.

    Raises:
        UnbalancedDelimiterError: If the outermost brace never closes.
    """
    if cursor.peek() != "{":
        return None
    text = cursor.source
    depth = 0
    i = cursor.offset
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        literal_end = _skip_literal_in_code(text, i, cursor.offset)
        if literal_end is not None:
            i = literal_end
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return cursor.consume(i + 1 - cursor.offset)
        i += 1
    raise UnbalancedDelimiterError(
        f"Unbalanced code block {cursor.preview(20)!r} ({depth} unclosed)",
        cursor.offset,
        depth,
    )


def extract_type_constraint(cursor: Cursor, leading: str) -> str:
    """Extend an already consumed type name with alternation and parameters.

    Repeatedly consumes ``|``, ``[``, ``,`` or ``]`` and, except after
    ``]``, the type name that must follow immediately. Whitespace ends the
    constraint.

    Args:
        cursor: Cursor positioned right after ``leading``.
        leading: The type name that has already been consumed.

    Returns:
        The full constraint, e.g. ``Foo[Bar|Baz[Moo]]|Kooh``.

    Raises:
        ParseError: On ``,`` or ``]`` outside brackets, or a missing type name.
        UnbalancedDelimiterError: If a ``[`` is left open.
    """
    constraint = leading
    depth = 0
    while cursor.peek() in _CONSTRAINT_SYMBOLS:
        symbol_offset = cursor.offset
        symbol = cursor.consume(1)
        if symbol in ",]" and depth == 0:
            raise ParseError(
                f"Unexpected {symbol!r} in type constraint after {constraint!r}",
                symbol_offset,
            )
        constraint += symbol
        if symbol == "[":
            depth += 1
        elif symbol == "]":
            depth -= 1
            continue

        m = cursor.match(_TYPE_NAME_RE)
        if m is None:
            raise ParseError(
                f"Type name expected after {constraint!r} in type constraint, found {cursor.preview()!r}",
                cursor.offset,
            )
        constraint += cursor.consume(m.end() - cursor.offset)

    if depth:
        raise UnbalancedDelimiterError(
            f"Unbalanced brackets in type constraint {constraint!r}",
            cursor.offset,
            depth,
        )
    return constraint


# ################
# Implementation
# ################

_NUMBER_RE = re.compile(
    r"""
    [+-]?
    (?:
        0[xX][0-9a-fA-F]+
      | 0[bB][01]+
      | (?: \d+ (?:\.\d*)? | \.\d+ ) (?: [eE][+-]?\d+ )?
    )
    """,
    re.VERBOSE,
)

_BARE_QUOTES = frozenset({"'", '"', "`", "/"})

# Longer operators first so 'qq' is not read as 'q' with a 'q' delimiter.
# A '#' delimiter is only valid when it directly follows the operator.
_QUOTE_OPERATOR_RE = re.compile(
    r"(?P<op>qq|qw|qr|qx|tr|q|m|s|y)(?![A-Za-z0-9_])"
    r"(?:[^\S\r\n]+(?=[^\w\s#])|(?=[^\w\s]))"
)

_HEREDOC_RE = re.compile(r"<<(?=[\"'~A-Za-z_])")

_REGEX_MODIFIERS_RE = re.compile(r"[msixpodualn]*")

_BRACKET_PAIRS: dict[str, str] = {"(": ")", "[": "]", "{": "}", "<": ">"}

_CONSTRAINT_SYMBOLS = frozenset({"|", "[", ",", "]"})

_TYPE_NAME_RE = re.compile(TYPE_NAME_PATTERN)


# Quote-like operators as they appear inside code blocks. Sigils, '->' and
# '::' before the letter mean a variable, method or package name instead.
_CODE_QUOTE_OPERATOR_RE = re.compile(
    r"(?<![\w$@%&>:-])(?P<op>qq|qw|qr|qx|tr|q|m|s|y)(?![A-Za-z0-9_])"
    r"(?:[^\S\r\n]+(?=[^\w\s#=,;)\]}>])|(?=[^\w\s=,;)\]}>]))"
)

_TWO_PART_OPERATORS = frozenset({"s", "tr", "y"})

_OPERATOR_MODIFIERS_RE = re.compile(r"[msixpodualngcer]*")

# A '/' after one of these starts a pattern; anywhere else it divides.
_PATTERN_PRECEDERS = frozenset("(,=~!{;|&?:")

_REPLACEMENT_DELIMITER_RE = re.compile(r"\s*[^\w\s=,;)\]}>]")


def _scan_delimited(cursor: Cursor, delimiter_at: int) -> int:
    """Return the index just past the delimiter closing the one at ``delimiter_at``."""
    end, depth = _find_closing(cursor.source, delimiter_at)
    if end is None:
        closer = _BRACKET_PAIRS.get(cursor.source[delimiter_at], cursor.source[delimiter_at])
        raise UnbalancedDelimiterError(
            f"Unbalanced quoting in {cursor.preview(20)!r}: missing closing {closer!r}",
            cursor.offset,
            depth,
        )
    return end


def _find_closing(text: str, delimiter_at: int) -> tuple[int | None, int]:
    """Find the delimiter closing the one at ``delimiter_at``.

    Returns the index just past it, or None with the depth still open
    (0 for non-nesting delimiters) when the text runs out first.
    """
    opener = text[delimiter_at]
    closer = _BRACKET_PAIRS.get(opener, opener)
    nests = closer != opener
    depth = 1
    i = delimiter_at + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if nests and ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i + 1, 0
        i += 1
    return None, depth if nests else 0


def _skip_literal_in_code(text: str, i: int, block_start: int) -> int | None:
    """Return the index past a closed literal starting at ``i``, or None."""
    ch = text[i]
    if ch in "'\"":
        return _find_closing(text, i)[0]

    if ch == "/":
        if not _is_pattern_position(text, i, block_start):
            return None
        end = _find_closing(text, i)[0]
        return None if end is None else _skip_modifiers(text, end)

    m = _CODE_QUOTE_OPERATOR_RE.match(text, i)
    if m is None:
        return None
    delimiter_at = m.end()
    end = _find_closing(text, delimiter_at)[0]
    if end is not None and m.group("op") in _TWO_PART_OPERATORS:
        end = _skip_replacement(text, delimiter_at, end)
    return None if end is None else _skip_modifiers(text, end)


def _skip_replacement(text: str, delimiter_at: int, pattern_end: int) -> int | None:
    """Skip the second part of ``s``, ``tr`` and ``y``."""
    if text[delimiter_at] not in _BRACKET_PAIRS:
        # s/a/b/: the pattern's closing delimiter also opens the replacement.
        return _find_closing(text, pattern_end - 1)[0]
    # s{a}{b}: the replacement has its own, possibly different, delimiters.
    m = _REPLACEMENT_DELIMITER_RE.match(text, pattern_end)
    if m is None:
        return None
    return _find_closing(text, m.end() - 1)[0]


def _skip_modifiers(text: str, end: int) -> int:
    m = _OPERATOR_MODIFIERS_RE.match(text, end)
    return m.end() if m is not None else end


def _is_pattern_position(text: str, i: int, block_start: int) -> bool:
    j = i - 1
    while j > block_start and text[j].isspace():
        j -= 1
    return text[j] in _PATTERN_PRECEDERS

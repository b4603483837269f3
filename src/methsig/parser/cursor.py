# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Input cursor shared by the lexer and the balanced extractors.

The cursor owns the source text and the offset of the first unconsumed
character. Scanners inspect the text ahead of the offset, compute how much
they want, and then consume that prefix in one step.
"""

import re

# ###############
# Public Interface
# ###############


class Cursor:
    """A forward-only position within a source string.

    Attributes:
        source: The complete original input.
        offset: 0-based index of the first unconsumed character.
    """

    def __init__(self, source: str, offset: int = 0) -> None:
        if not 0 <= offset <= len(source):
            raise ValueError(f"Offset {offset} is outside the input (length {len(source)})")
        self._source = source
        self._offset = offset

    @property
    def source(self) -> str:
        return self._source

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> str:
        """The unconsumed suffix of the input."""
        return self._source[self._offset :]

    @property
    def at_end(self) -> bool:
        return self._offset >= len(self._source)

    def match(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        """Match a compiled pattern anchored at the current offset.

        Match positions are absolute indices into ``source``; use
        ``match.end() - cursor.offset`` as the length to consume.
        """
        return pattern.match(self._source, self._offset)

    def peek(self, length: int = 1) -> str:
        """Return up to ``length`` characters ahead without consuming them."""
        return self._source[self._offset : self._offset + length]

    def char_at(self, index: int) -> str:
        """Return the character ``index`` positions ahead, or '' past the end."""
        pos = self._offset + index
        if pos < len(self._source):
            return self._source[pos]
        return ""

    def consume(self, length: int) -> str:
        """Remove and return the next ``length`` characters.

        Raises:
            ValueError: If ``length`` is negative or runs past the end of input.
        """
        if length < 0 or self._offset + length > len(self._source):
            raise ValueError(
                f"Cannot consume {length} characters at offset {self._offset} "
                f"(only {len(self._source) - self._offset} remain)"
            )
        text = self._source[self._offset : self._offset + length]
        self._offset += length
        return text

    def preview(self, length: int = 10) -> str:
        """A bounded slice of the upcoming input for error messages."""
        return self.peek(length)

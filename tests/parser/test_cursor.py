# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the input cursor."""

import re

import pytest

from methsig.parser.cursor import Cursor


class TestConstruction:
    def test_starts_at_offset_zero(self) -> None:
        cursor = Cursor("abc")
        assert cursor.offset == 0
        assert cursor.remaining == "abc"
        assert not cursor.at_end

    def test_starts_at_given_offset(self) -> None:
        cursor = Cursor("abcdef", 3)
        assert cursor.offset == 3
        assert cursor.remaining == "def"

    def test_offset_at_end_is_allowed(self) -> None:
        cursor = Cursor("abc", 3)
        assert cursor.at_end
        assert cursor.remaining == ""

    @pytest.mark.parametrize("offset", [-1, 4])
    def test_offset_outside_input_raises(self, offset: int) -> None:
        with pytest.raises(ValueError):
            Cursor("abc", offset)


class TestConsume:
    def test_consume_returns_prefix_and_advances(self) -> None:
        cursor = Cursor("abc")
        assert cursor.consume(2) == "ab"
        assert cursor.offset == 2
        assert cursor.remaining == "c"

    def test_consume_zero_is_a_no_op(self) -> None:
        cursor = Cursor("abc")
        assert cursor.consume(0) == ""
        assert cursor.offset == 0

    def test_consume_past_end_raises_and_keeps_position(self) -> None:
        cursor = Cursor("abc")
        cursor.consume(1)
        with pytest.raises(ValueError):
            cursor.consume(3)
        assert cursor.offset == 1

    def test_source_is_unchanged_by_consumption(self) -> None:
        cursor = Cursor("abc")
        cursor.consume(3)
        assert cursor.source == "abc"
        assert cursor.at_end


class TestLookahead:
    def test_match_is_anchored_at_offset(self) -> None:
        cursor = Cursor("ab")
        pattern = re.compile("b")
        assert cursor.match(pattern) is None
        cursor.consume(1)
        m = cursor.match(pattern)
        assert m is not None
        assert m.end() - cursor.offset == 1

    def test_peek_does_not_consume(self) -> None:
        cursor = Cursor("abc")
        assert cursor.peek() == "a"
        assert cursor.peek(2) == "ab"
        assert cursor.offset == 0

    def test_peek_at_end_is_empty(self) -> None:
        assert Cursor("").peek() == ""

    def test_char_at(self) -> None:
        cursor = Cursor("abc", 1)
        assert cursor.char_at(0) == "b"
        assert cursor.char_at(1) == "c"
        assert cursor.char_at(2) == ""

    def test_preview_is_bounded(self) -> None:
        cursor = Cursor("x" * 50)
        assert cursor.preview() == "x" * 10
        assert cursor.preview(3) == "xxx"

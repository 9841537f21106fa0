"""Tests for cursor infrastructure.

Validates the immutable cursor pattern shared by the lexer and the
message resource parser.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from mabel.syntax.cursor import Cursor, LineOffsetCache, ParseError, ParseResult

# ============================================================================
# CURSOR BASICS
# ============================================================================


class TestCursorBasic:
    """Construction, EOF and navigation."""

    def test_cursor_immutability(self) -> None:
        cursor = Cursor("hello", 0)
        with pytest.raises(AttributeError):
            cursor.pos = 5  # type: ignore[misc]

    def test_current_at_eof_raises(self) -> None:
        with pytest.raises(EOFError, match="Unexpected EOF"):
            _ = Cursor("hi", 2).current

    def test_peek_beyond_eof(self) -> None:
        cursor = Cursor("ab", 0)
        assert cursor.peek() == "a"
        assert cursor.peek(1) == "b"
        assert cursor.peek(2) is None

    def test_advance_clamps_at_eof(self) -> None:
        assert Cursor("ab", 1).advance(10).pos == 2

    def test_expect(self) -> None:
        assert Cursor("=x", 0).expect("=") == Cursor("=x", 1)
        assert Cursor("=x", 0).expect("x") is None
        assert Cursor("", 0).expect("x") is None

    def test_slice_ahead(self) -> None:
        assert Cursor("->x", 0).slice_ahead(2) == "->"


# ============================================================================
# SKIPPING
# ============================================================================


class TestCursorSkipping:
    """skip_* helpers."""

    def test_skip_spaces_only_spaces(self) -> None:
        assert Cursor("  \tx", 0).skip_spaces().pos == 2

    def test_skip_whitespace(self) -> None:
        assert Cursor(" \n\r x", 0).skip_whitespace().current == "x"

    def test_skip_while(self) -> None:
        assert Cursor("0x1Fg", 2).skip_while("0123456789abcdefABCDEF").current == "g"

    def test_skip_line_end_variants(self) -> None:
        assert Cursor("\r\nx", 0).skip_line_end().pos == 2
        assert Cursor("\nx", 0).skip_line_end().pos == 1
        assert Cursor("\rx", 0).skip_line_end().pos == 1
        assert Cursor("x", 0).skip_line_end().pos == 0

    def test_skip_to_line_end(self) -> None:
        cursor = Cursor("// note\nnext", 0).skip_to_line_end()
        assert cursor.pos == 7
        assert cursor.current == "\n"

    def test_skip_to_line_end_at_eof(self) -> None:
        assert Cursor("abc", 0).skip_to_line_end().is_eof

    def test_compute_line_col(self) -> None:
        assert Cursor("line1\nline2", 8).compute_line_col() == (2, 3)
        assert Cursor("abc", 0).compute_line_col() == (1, 1)


# ============================================================================
# LINE OFFSET CACHE
# ============================================================================


class TestLineOffsetCache:
    """Binary-search line:column lookup."""

    def test_line_col(self) -> None:
        cache = LineOffsetCache("ab\ncd\n\nef")
        assert cache.get_line_col(0) == (1, 1)
        assert cache.get_line_col(2) == (1, 3)
        assert cache.get_line_col(3) == (2, 1)
        assert cache.get_line_col(6) == (3, 1)
        assert cache.get_line_col(8) == (4, 2)

    def test_positions_are_clamped(self) -> None:
        cache = LineOffsetCache("abc")
        assert cache.get_line_col(-5) == (1, 1)
        assert cache.get_line_col(99) == (1, 4)

    def test_line_text(self) -> None:
        cache = LineOffsetCache("first\r\nsecond\nthird")
        assert cache.line_count == 3
        assert cache.line_text(1) == "first"
        assert cache.line_text(2) == "second"
        assert cache.line_text(3) == "third"

    def test_line_text_out_of_range(self) -> None:
        with pytest.raises(IndexError, match="out of range"):
            LineOffsetCache("x").line_text(2)

    @given(source=st.text(max_size=100), pos=st.integers(min_value=0, max_value=120))
    @settings(max_examples=200)
    def test_cache_agrees_with_cursor(self, source: str, pos: int) -> None:
        """PROPERTY: Cached lookup equals the O(n) computation."""
        pos = min(pos, len(source))
        assert LineOffsetCache(source).get_line_col(pos) == Cursor(source, pos).compute_line_col()


# ============================================================================
# PARSE RESULT / PARSE ERROR
# ============================================================================


class TestParseResultAndError:
    """ParseResult container and ParseError formatting."""

    def test_parse_result(self) -> None:
        cursor = Cursor("abc", 3)
        result = ParseResult("abc", cursor)
        assert result.value == "abc"
        assert result.cursor.is_eof

    def test_format_error(self) -> None:
        error = ParseError("Expected '}'", Cursor("hello", 2), expected=("}", "]"))
        assert error.format_error() == "1:3: Expected '}' (expected: '}', ']')"

    def test_format_error_without_expected(self) -> None:
        assert ParseError("Bad", Cursor("a\nb", 2)).format_error() == "2:1: Bad"

    def test_format_with_context(self) -> None:
        source = "hello = Hi\nworld = { $name\nfoo = Bar"
        formatted = ParseError("Expected '}'", Cursor(source, 26)).format_with_context()
        lines = formatted.split("\n")
        assert lines[0] == "2:16: Expected '}'"
        assert "   2 | world = { $name" in lines
        assert lines[lines.index("   2 | world = { $name") + 1].endswith("^")

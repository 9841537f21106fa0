"""Tests for numeric literal scanning and suffix width validation."""

from __future__ import annotations

import math

import pytest

from mabel.compiler.data_type import (
    DEFAULT_REGISTRY,
    DOUBLE,
    FLOAT32,
    INT,
    INT8,
    INT64,
    UINT,
    UINT8,
    UINT16,
)
from mabel.diagnostics.codes import SourceSpan
from mabel.diagnostics.errors import (
    InvalidNumberLiteralWidthError,
    NoWidthForDoubleError,
    UnexpectedCharacterError,
)
from mabel.enums import DataTypeCategory, NumberBase, TokenKind
from mabel.lexer import tokenize
from mabel.lexer.numbers import (
    LiteralSuffix,
    NumberBody,
    classify_literal,
    scan_number_body,
    scan_suffix,
)
from mabel.lexer.tokens import LiteralPayload
from mabel.syntax.cursor import Cursor


def _classify(text: str) -> tuple[TokenKind, LiteralPayload]:
    body = scan_number_body(Cursor(text, 0))
    suffix = scan_suffix(body.cursor)
    return classify_literal(
        body.value, suffix.value if suffix is not None else None, DEFAULT_REGISTRY
    )


# ============================================================================
# BODY SCANNING
# ============================================================================


class TestScanNumberBody:
    """scan_number_body: prefixes, fractions and exponents."""

    def test_decimal_integer(self) -> None:
        result = scan_number_body(Cursor("123 rest", 0))
        assert result.value == NumberBody("123", "123", NumberBase.DECIMAL, False)
        assert result.cursor.pos == 3

    def test_fraction(self) -> None:
        result = scan_number_body(Cursor("3.14f32", 0))
        assert result.value.text == "3.14"
        assert result.value.is_float
        assert result.cursor.current == "f"

    def test_dot_without_digit_is_not_a_fraction(self) -> None:
        """'1.x' leaves the dot for the next token."""
        result = scan_number_body(Cursor("1.x", 0))
        assert result.value.text == "1"
        assert not result.value.is_float

    @pytest.mark.parametrize("text", ["1e10", "1E10", "2.5e-3", "7e+2"])
    def test_exponent(self, text: str) -> None:
        result = scan_number_body(Cursor(text, 0))
        assert result.value.text == text
        assert result.value.is_float
        assert result.value.value == float(text)

    def test_exponent_without_digits_not_consumed(self) -> None:
        result = scan_number_body(Cursor("1e", 0))
        assert result.value.text == "1"
        assert result.cursor.pos == 1

    def test_signed_exponent_without_digits_not_consumed(self) -> None:
        result = scan_number_body(Cursor("1e+x", 0))
        assert result.value.text == "1"

    @pytest.mark.parametrize(
        ("text", "base", "value"),
        [
            ("0x1F", NumberBase.HEXADECIMAL, 31),
            ("0b101", NumberBase.BINARY, 5),
            ("0o17", NumberBase.OCTAL, 15),
        ],
    )
    def test_prefixed_bodies(self, text: str, base: NumberBase, value: int) -> None:
        result = scan_number_body(Cursor(text, 0))
        assert result.value.base is base
        assert result.value.value == value
        assert result.cursor.is_eof

    def test_prefix_without_digits_is_zero(self) -> None:
        result = scan_number_body(Cursor("0x", 0))
        assert result.value.digits == ""
        assert result.value.value == 0

    def test_binary_body_stops_at_non_binary_digit(self) -> None:
        result = scan_number_body(Cursor("0b1012", 0))
        assert result.value.text == "0b101"
        assert result.cursor.current == "2"


# ============================================================================
# SUFFIX SCANNING
# ============================================================================


class TestScanSuffix:
    """scan_suffix: letter plus optional width."""

    def test_no_suffix(self) -> None:
        assert scan_suffix(Cursor("x", 0)) is None
        assert scan_suffix(Cursor("", 0)) is None

    def test_bare_letter(self) -> None:
        result = scan_suffix(Cursor("u;", 0))
        assert result is not None
        assert result.value == LiteralSuffix("u", None, 0, 1)
        assert result.value.category is DataTypeCategory.UNSIGNED_INT

    def test_letter_with_width(self) -> None:
        result = scan_suffix(Cursor("12i64", 2))
        assert result is not None
        assert result.value == LiteralSuffix("i", 64, 2, 5)

    def test_leading_zero_width_parses_as_int(self) -> None:
        result = scan_suffix(Cursor("i08", 0))
        assert result is not None
        assert result.value.width == 8

    def test_overlong_width_kept_as_text(self) -> None:
        result = scan_suffix(Cursor("i" + "8" * 5000, 0))
        assert result is not None
        assert result.value.width == "8" * 5000
        assert result.value.end == 5001

    def test_leading_zeros_do_not_make_width_overlong(self) -> None:
        result = scan_suffix(Cursor("u" + "0" * 5000 + "16", 0))
        assert result is not None
        assert result.value.width == 16

    def test_double_letter_category_is_float(self) -> None:
        result = scan_suffix(Cursor("d", 0))
        assert result is not None
        assert result.value.category is DataTypeCategory.FLOAT


# ============================================================================
# CLASSIFICATION
# ============================================================================


class TestClassifyLiteral:
    """classify_literal: token kind, value and data type."""

    @pytest.mark.parametrize(
        ("text", "kind", "value", "data_type"),
        [
            ("42", TokenKind.INT_LITERAL, 42, None),
            ("1.5", TokenKind.FLOAT_LITERAL, 1.5, None),
            ("42i", TokenKind.INT_LITERAL, 42, INT),
            ("42i8", TokenKind.INT_LITERAL, 42, INT8),
            ("42i64", TokenKind.INT_LITERAL, 42, INT64),
            ("7u", TokenKind.INT_LITERAL, 7, UINT),
            ("255u8", TokenKind.INT_LITERAL, 255, UINT8),
            ("0xFFu16", TokenKind.INT_LITERAL, 255, UINT16),
            ("2f", TokenKind.FLOAT_LITERAL, 2.0, FLOAT32),
            ("3.14f32", TokenKind.FLOAT_LITERAL, 3.14, FLOAT32),
            ("1.5d", TokenKind.FLOAT_LITERAL, 1.5, DOUBLE),
            ("2d", TokenKind.FLOAT_LITERAL, 2.0, DOUBLE),
        ],
    )
    def test_valid_literals(
        self, text: str, kind: TokenKind, value: float, data_type: object
    ) -> None:
        result_kind, payload = _classify(text)
        assert result_kind is kind
        assert payload.value == value
        assert payload.data_type == data_type

    def test_float_payload_value_is_float(self) -> None:
        _, payload = _classify("2f")
        assert isinstance(payload.value, float)

    def test_hex_payload_keeps_base(self) -> None:
        _, payload = _classify("0x10")
        assert payload.base is NumberBase.HEXADECIMAL
        assert payload.value == 16

    @pytest.mark.parametrize("text", ["1i7", "1i24", "1u0", "1u128", "1i08000"])
    def test_invalid_integer_width(self, text: str) -> None:
        with pytest.raises(InvalidNumberLiteralWidthError) as exc_info:
            _classify(text)
        error = exc_info.value
        assert not isinstance(error, NoWidthForDoubleError)
        assert error.valid_widths == (8, 16, 32, 64)
        assert error.literal_kind in (
            DataTypeCategory.SIGNED_INT,
            DataTypeCategory.UNSIGNED_INT,
        )

    def test_invalid_float_width(self) -> None:
        with pytest.raises(InvalidNumberLiteralWidthError) as exc_info:
            _classify("1.5f64")
        assert exc_info.value.width == 64
        assert exc_info.value.literal_kind is DataTypeCategory.FLOAT
        assert exc_info.value.valid_widths == (32,)

    @pytest.mark.parametrize("text", ["1d8", "1d32", "1d64", "1d128", "1.5d32", "1d0"])
    def test_double_never_takes_width(self, text: str) -> None:
        with pytest.raises(NoWidthForDoubleError):
            _classify(text)

    def test_no_width_for_double_is_invalid_width(self) -> None:
        """NoWidthForDoubleError refines InvalidNumberLiteralWidthError."""
        with pytest.raises(InvalidNumberLiteralWidthError):
            _classify("1d64")

    @pytest.mark.parametrize(("text", "letter"), [("1.5i8", "i"), ("1e3u", "u")])
    def test_integer_suffix_on_float_body(self, text: str, letter: str) -> None:
        with pytest.raises(UnexpectedCharacterError) as exc_info:
            _classify(text)
        assert exc_info.value.character == letter

    def test_error_span_covers_suffix(self) -> None:
        body = scan_number_body(Cursor("10i7", 0))
        suffix = scan_suffix(body.cursor)
        assert suffix is not None

        def span_for(start: int, end: int) -> SourceSpan:
            return SourceSpan(start=start, end=end, line=1, column=start + 1)

        with pytest.raises(InvalidNumberLiteralWidthError) as exc_info:
            classify_literal(
                body.value, suffix.value, DEFAULT_REGISTRY, span_for=span_for, source_id="t"
            )
        assert exc_info.value.span == SourceSpan(start=2, end=4, line=1, column=3)
        assert exc_info.value.source_id == "t"


# ============================================================================
# VERY LONG LITERALS
# ============================================================================


class TestLongLiterals:
    """Digit runs past the int/str conversion limit lex like any other."""

    def test_long_decimal_body(self) -> None:
        result = tokenize("1" * 5000)
        assert result.errors == ()
        token = result.tokens[0]
        assert token.kind is TokenKind.INT_LITERAL
        assert token.literal is not None
        assert token.literal.value == (10**5000 - 1) // 9

    def test_long_decimal_body_with_suffix(self) -> None:
        result = tokenize("7" * 5000 + "i64")
        assert result.errors == ()
        assert result.tokens[0].literal is not None
        assert result.tokens[0].literal.data_type == INT64

    def test_long_hex_body(self) -> None:
        _, payload = _classify("0x" + "F" * 5000)
        assert payload.value == 16**5000 - 1

    @pytest.mark.parametrize("text", ["1" * 400 + "d", "1" * 400 + "f", "0x" + "F" * 400 + "f"])
    def test_float_overflow_is_infinite(self, text: str) -> None:
        kind, payload = _classify(text)
        assert kind is TokenKind.FLOAT_LITERAL
        assert payload.value == math.inf

    def test_long_integer_width(self) -> None:
        result = tokenize("1i" + "8" * 5000)
        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, InvalidNumberLiteralWidthError)
        assert not isinstance(error, NoWidthForDoubleError)
        assert error.width == "8" * 5000
        assert error.valid_widths == (8, 16, 32, 64)
        assert result.tokens[-1].kind is TokenKind.END_OF_INPUT

    def test_long_double_width(self) -> None:
        result = tokenize("1d" + "8" * 5000)
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], NoWidthForDoubleError)
        assert result.errors[0].width == "8" * 5000

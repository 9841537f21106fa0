"""Numeric literal recognition and suffix width validation.

Grammar:
    literal   ::= body suffix?
    body      ::= "0x" hex* | "0b" bin* | "0o" oct*
                | digits ("." digits)? exponent?
    exponent  ::= [eE] [+-]? digits
    suffix    ::= [iufd] digits?

A fraction is only taken when a digit follows the dot, and an exponent only
when digits follow the (optionally signed) ``e``; otherwise those characters
start the next token. Prefixed bodies never take a fraction or exponent.

Suffix rules:
    i, i8..i64 / u, u8..u64   signed / unsigned integer, width from the registry
    f, f32                    float32
    d                         double (never takes a width)

Python 3.13+. Zero external dependencies.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from mabel.compiler.data_type import DOUBLE, DataTypeRegistry
from mabel.constants import STDIN_SOURCE_ID
from mabel.diagnostics.codes import SourceSpan
from mabel.diagnostics.errors import (
    InvalidNumberLiteralWidthError,
    NoWidthForDoubleError,
    UnexpectedCharacterError,
)
from mabel.enums import DataTypeCategory, NumberBase, TokenKind
from mabel.lexer.tokens import LiteralPayload
from mabel.syntax.cursor import Cursor, ParseResult

__all__ = [
    "LiteralSuffix",
    "NumberBody",
    "classify_literal",
    "scan_number_body",
    "scan_suffix",
]

_DIGITS: dict[NumberBase, str] = {
    NumberBase.BINARY: "01",
    NumberBase.OCTAL: "01234567",
    NumberBase.DECIMAL: "0123456789",
    NumberBase.HEXADECIMAL: "0123456789abcdefABCDEF",
}

_BASE_PREFIXES: dict[str, NumberBase] = {
    "x": NumberBase.HEXADECIMAL,
    "b": NumberBase.BINARY,
    "o": NumberBase.OCTAL,
}

_SUFFIX_CATEGORIES: dict[str, DataTypeCategory] = {
    "i": DataTypeCategory.SIGNED_INT,
    "u": DataTypeCategory.UNSIGNED_INT,
    "f": DataTypeCategory.FLOAT,
    "d": DataTypeCategory.FLOAT,
}

_DECIMAL = _DIGITS[NumberBase.DECIMAL]

# Wider digit runs can never name a registry width
_MAX_WIDTH_DIGITS = 3


@dataclass(frozen=True, slots=True)
class NumberBody:
    """Literal text before any suffix.

    Attributes:
        text: Body text including any base prefix
        digits: Digits after the base prefix (may be empty for "0x")
        base: Radix selected by the prefix
        is_float: Body has a fraction or an exponent
    """

    text: str
    digits: str
    base: NumberBase
    is_float: bool

    @property
    def value(self) -> int | float:
        if self.is_float:
            return float(self.text)
        if not self.digits:
            return 0
        # int(str) caps decimal conversions at sys.get_int_max_str_digits()
        if self.base is NumberBase.DECIMAL:
            return int(Decimal(self.digits))
        return int(self.digits, self.base)

    @property
    def float_value(self) -> float:
        """Value as a float; bodies beyond the float range give ``inf``."""
        if self.base is NumberBase.DECIMAL:
            return float(self.text)
        try:
            return float(self.value)
        except OverflowError:
            return math.inf


@dataclass(frozen=True, slots=True)
class LiteralSuffix:
    """Type suffix of a literal.

    Attributes:
        letter: One of i, u, f, d
        width: Requested width, None for a bare letter. Digit runs longer
            than any legal width stay as their source text.
        start: Offset of the suffix letter
        end: Offset after the last width digit
    """

    letter: str
    width: int | str | None
    start: int
    end: int

    @property
    def category(self) -> DataTypeCategory:
        return _SUFFIX_CATEGORIES[self.letter]


def scan_number_body(cursor: Cursor) -> ParseResult[NumberBody]:
    """Scan a literal body; cursor must be at an ASCII digit.

    Example:
        >>> scan_number_body(Cursor("3.14f32", 0)).value.text
        '3.14'
        >>> scan_number_body(Cursor("0x1F", 0)).value.value
        31
    """
    start = cursor
    prefix = cursor.peek(1)
    if cursor.current == "0" and prefix is not None and prefix in _BASE_PREFIXES:
        base = _BASE_PREFIXES[prefix]
        digits_start = cursor.advance(2)
        cursor = digits_start.skip_while(_DIGITS[base])
        body = NumberBody(
            text=start.slice_to(cursor.pos),
            digits=digits_start.slice_to(cursor.pos),
            base=base,
            is_float=False,
        )
        return ParseResult(body, cursor)

    cursor = cursor.skip_while(_DECIMAL)
    is_float = False

    fraction = cursor.peek(1)
    if cursor.peek() == "." and fraction is not None and fraction in _DECIMAL:
        cursor = cursor.advance().skip_while(_DECIMAL)
        is_float = True

    if cursor.peek() in ("e", "E"):
        exponent = cursor.advance()
        if exponent.peek() in ("+", "-"):
            exponent = exponent.advance()
        first_digit = exponent.peek()
        if first_digit is not None and first_digit in _DECIMAL:
            cursor = exponent.skip_while(_DECIMAL)
            is_float = True

    text = start.slice_to(cursor.pos)
    return ParseResult(NumberBody(text, text, NumberBase.DECIMAL, is_float), cursor)


def scan_suffix(cursor: Cursor) -> ParseResult[LiteralSuffix] | None:
    """Scan a type suffix (letter plus optional decimal width) if one follows."""
    letter = cursor.peek()
    if letter is None or letter not in _SUFFIX_CATEGORIES:
        return None

    width_start = cursor.advance()
    end = width_start.skip_while(_DECIMAL)
    width_text = width_start.slice_to(end.pos)
    width: int | str | None = None
    if width_text:
        too_long = len(width_text.lstrip("0")) > _MAX_WIDTH_DIGITS
        width = width_text if too_long else int(width_text)
    suffix = LiteralSuffix(
        letter=letter,
        width=width,
        start=cursor.pos,
        end=end.pos,
    )
    return ParseResult(suffix, end)


def classify_literal(
    body: NumberBody,
    suffix: LiteralSuffix | None,
    registry: DataTypeRegistry,
    *,
    span_for: Callable[[int, int], SourceSpan] | None = None,
    source_id: str = STDIN_SOURCE_ID,
) -> tuple[TokenKind, LiteralPayload]:
    """Decide token kind and value of a scanned literal.

    Args:
        body: Scanned literal body
        suffix: Scanned suffix, None for an unsuffixed literal
        registry: Data type registry consulted for legal widths
        span_for: Builds the error span for a (start, end) offset range
        source_id: Source identifier stamped on raised errors

    Returns:
        (IntLiteral or FloatLiteral, payload with the value and resolved type)

    Raises:
        UnexpectedCharacterError: Integer suffix on a float body
        NoWidthForDoubleError: ``d`` suffix with a width
        InvalidNumberLiteralWidthError: Width not legal for the suffix category
    """
    if suffix is None:
        kind = TokenKind.FLOAT_LITERAL if body.is_float else TokenKind.INT_LITERAL
        return kind, LiteralPayload(body.value, None, body.base)

    span = span_for(suffix.start, suffix.end) if span_for is not None else None
    category = suffix.category

    if suffix.letter == "d":
        if suffix.width is not None:
            raise NoWidthForDoubleError(suffix.width, span=span, source_id=source_id)
        return TokenKind.FLOAT_LITERAL, LiteralPayload(body.float_value, DOUBLE, body.base)

    if category is not DataTypeCategory.FLOAT and body.is_float:
        letter_span = span_for(suffix.start, suffix.start + 1) if span_for is not None else None
        raise UnexpectedCharacterError(suffix.letter, span=letter_span, source_id=source_id)

    if category is DataTypeCategory.FLOAT:
        width = suffix.width if suffix.width is not None else 32
    else:
        width = suffix.width

    data_type = None
    if not isinstance(width, str) and registry.validate_width(category, width):
        data_type = registry.lookup(category, width)
    if data_type is None:
        raise InvalidNumberLiteralWidthError(
            suffix.width if suffix.width is not None else 0,
            category,
            registry.valid_widths(category),
            span=span,
            source_id=source_id,
        )

    if category is DataTypeCategory.FLOAT:
        return TokenKind.FLOAT_LITERAL, LiteralPayload(body.float_value, data_type, body.base)
    return TokenKind.INT_LITERAL, LiteralPayload(body.value, data_type, body.base)

"""Primitive parsing utilities for the message resource parser.

Low-level parsers for identifiers, number literals and string literals.
Each returns a ParseResult on success and None when the input does not
start with the requested construct.
"""

from decimal import Decimal

from mabel.syntax.ast import NumberLiteral
from mabel.syntax.cursor import Cursor, ParseResult

__all__ = [
    "is_identifier_char",
    "is_identifier_start",
    "parse_identifier",
    "parse_number",
    "parse_string_literal",
]

# ASCII digits only: str.isdigit() accepts superscripts that int() rejects.
_ASCII_DIGITS: str = "0123456789"

_HEX_DIGITS: str = "0123456789abcdefABCDEF"

_SIMPLE_ESCAPES: dict[str, str] = {"\\": "\\", '"': '"'}

# \uXXXX and \UXXXXXX escape lengths.
_UNICODE_ESCAPE_LENGTHS: dict[str, int] = {"u": 4, "U": 6}

_MAX_UNICODE_CODE_POINT: int = 0x10FFFF


def is_identifier_start(ch: str) -> bool:
    """ASCII letter (identifiers are ASCII-only in message resources)."""
    return ch.isascii() and ch.isalpha()


def is_identifier_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in ("-", "_"))


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    """Parse identifier: [a-zA-Z][a-zA-Z0-9_-]*

    Examples:
        hello → "hello"
        show_count → "show_count"
        no-width-for-double → "no-width-for-double"
    """
    if cursor.is_eof or not is_identifier_start(cursor.current):
        return None

    start = cursor
    cursor = cursor.advance()
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()

    return ParseResult(start.slice_to(cursor.pos), cursor)


def parse_number(cursor: Cursor) -> ParseResult[NumberLiteral] | None:
    """Parse number literal: -?[0-9]+(.[0-9]+)?

    Integers keep an ``int`` value; decimals are parsed into Decimal so that
    variant keys compare exactly.
    """
    start = cursor
    if not cursor.is_eof and cursor.current == "-":
        cursor = cursor.advance()

    digits_start = cursor.pos
    cursor = cursor.skip_while(_ASCII_DIGITS)
    if cursor.pos == digits_start:
        return None

    is_decimal = False
    if cursor.peek() == "." and cursor.peek(1) is not None and cursor.peek(1) in _ASCII_DIGITS:
        is_decimal = True
        cursor = cursor.advance().skip_while(_ASCII_DIGITS)

    raw = start.slice_to(cursor.pos)
    value: int | Decimal = Decimal(raw) if is_decimal else int(raw)
    return ParseResult(NumberLiteral(value=value, raw=raw), cursor)


def _parse_escape(cursor: Cursor) -> tuple[str, Cursor] | None:
    """Decode one escape sequence; cursor is positioned after the backslash."""
    if cursor.is_eof:
        return None

    ch = cursor.current
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch], cursor.advance()

    length = _UNICODE_ESCAPE_LENGTHS.get(ch)
    if length is None:
        return None

    cursor = cursor.advance()
    hex_digits = cursor.slice_ahead(length)
    if len(hex_digits) != length or any(c not in _HEX_DIGITS for c in hex_digits):
        return None

    code_point = int(hex_digits, 16)
    if code_point > _MAX_UNICODE_CODE_POINT or 0xD800 <= code_point <= 0xDFFF:
        return None
    return chr(code_point), cursor.advance(length)


def parse_string_literal(cursor: Cursor) -> ParseResult[str] | None:
    """Parse quoted string literal with ``\\\\``, ``\\"``, ``\\uXXXX`` and ``\\UXXXXXX`` escapes.

    String literals are single-line: a newline before the closing quote
    is a parse error.
    """
    if cursor.is_eof or cursor.current != '"':
        return None

    cursor = cursor.advance()
    parts: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current
        if ch == '"':
            return ParseResult("".join(parts), cursor.advance())
        if ch == "\n":
            return None
        if ch == "\\":
            escape = _parse_escape(cursor.advance())
            if escape is None:
                return None
            decoded, cursor = escape
            parts.append(decoded)
            continue
        parts.append(ch)
        cursor = cursor.advance()

    return None  # Unterminated string literal

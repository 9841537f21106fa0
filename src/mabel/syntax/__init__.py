"""Syntax package: immutable cursor, message template AST and resource parser.

The cursor is shared by the source lexer and the resource parser.

Python 3.13+.
"""

from .ast import (
    Annotation,
    Attribute,
    Comment,
    Entry,
    Expression,
    Identifier,
    InlineExpression,
    Junk,
    Message,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    Resource,
    SelectExpression,
    Span,
    StringLiteral,
    TextElement,
    VariableReference,
    Variant,
    VariantKey,
)
from .cursor import Cursor, LineOffsetCache, ParseError, ParseResult
from .parser import CatalogParser, ParseContext

__all__ = [
    "Annotation",
    "Attribute",
    "CatalogParser",
    "Comment",
    "Cursor",
    "Entry",
    "Expression",
    "Identifier",
    "InlineExpression",
    "Junk",
    "LineOffsetCache",
    "Message",
    "NumberLiteral",
    "ParseContext",
    "ParseError",
    "ParseResult",
    "Pattern",
    "PatternElement",
    "Placeable",
    "Resource",
    "SelectExpression",
    "Span",
    "StringLiteral",
    "TextElement",
    "VariableReference",
    "Variant",
    "VariantKey",
]

"""Message template AST node definitions.

Covers the Fluent subset used by message catalogs: messages, attributes,
comments, text, variable references, literals and select expressions.
Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TypeIs

from mabel.enums import CommentType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "Annotation",
    "Identifier",
    # Resource structure
    "Resource",
    "Message",
    "Attribute",
    "Comment",
    "Junk",
    # Pattern elements
    "Pattern",
    "TextElement",
    "Placeable",
    # Expressions
    "SelectExpression",
    "Variant",
    "StringLiteral",
    "NumberLiteral",
    "VariableReference",
    # Type aliases
    "Entry",
    "PatternElement",
    "Expression",
    "InlineExpression",
    "VariantKey",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span (character offsets, end exclusive)."""

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Annotation:
    """Parse error annotation attached to Junk.

    Attributes:
        code: Error code name (e.g. "PARSE_JUNK")
        message: Human-readable error message with line:column
        span: Location of the error (optional)
    """

    code: str
    message: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier: [a-zA-Z][a-zA-Z0-9_-]*"""

    name: str

    @staticmethod
    def guard(key: object) -> TypeIs["Identifier"]:
        return isinstance(key, Identifier)


# ============================================================================
# RESOURCE STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Comment:
    """Comment line(s) of a single level (#, ## or ###)."""

    content: str
    type: CommentType
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Junk:
    """Unparseable content, kept with annotations describing the failure."""

    content: str
    annotations: tuple[Annotation, ...] = ()
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Attribute:
    """Message attribute: ``.name = pattern``"""

    id: Identifier
    value: "Pattern"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Message:
    """Message with an optional value and any number of attributes.

    A message needs a value, at least one attribute, or both.
    """

    id: Identifier
    value: "Pattern | None"
    attributes: tuple[Attribute, ...] = ()
    comment: Comment | None = None
    span: Span | None = None

    def __post_init__(self) -> None:
        if self.value is None and not self.attributes:
            msg = f"Message '{self.id.name}' must have a value or at least one attribute"
            raise ValueError(msg)

    @staticmethod
    def guard(entry: object) -> TypeIs["Message"]:
        return isinstance(entry, Message)

    def get_attribute(self, name: str) -> Attribute | None:
        """Return the last attribute named ``name`` (later definitions win)."""
        for attribute in reversed(self.attributes):
            if attribute.id.name == name:
                return attribute
        return None


@dataclass(frozen=True, slots=True)
class Resource:
    """Parsed message resource: an ordered tuple of entries."""

    entries: tuple["Entry", ...]

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(e for e in self.entries if isinstance(e, Message))

    @property
    def junk(self) -> tuple[Junk, ...]:
        return tuple(e for e in self.entries if isinstance(e, Junk))


# ============================================================================
# PATTERN ELEMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text, emitted verbatim."""

    value: str


@dataclass(frozen=True, slots=True)
class Placeable:
    """``{ expression }`` inside a pattern."""

    expression: "Expression"


@dataclass(frozen=True, slots=True)
class Pattern:
    """Sequence of text and placeables."""

    elements: tuple["PatternElement", ...]


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """Quoted string literal with escapes already decoded."""

    value: str


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Number literal.

    Attributes:
        value: Parsed numeric value (int for integers, Decimal otherwise)
        raw: Source text of the literal
    """

    value: int | Decimal
    raw: str

    @staticmethod
    def guard(key: object) -> TypeIs["NumberLiteral"]:
        return isinstance(key, NumberLiteral)


@dataclass(frozen=True, slots=True)
class VariableReference:
    """``$name`` reference into the render context."""

    id: Identifier


@dataclass(frozen=True, slots=True)
class Variant:
    """Select expression case: ``[key] pattern`` or ``*[key] pattern``."""

    key: "VariantKey"
    value: Pattern
    default: bool = False


@dataclass(frozen=True, slots=True)
class SelectExpression:
    """``{ selector -> variants }`` with exactly one default variant."""

    selector: "InlineExpression"
    variants: tuple[Variant, ...]

    def __post_init__(self) -> None:
        defaults = sum(1 for v in self.variants if v.default)
        if defaults != 1:
            msg = f"Select expression must have exactly one default variant, found {defaults}"
            raise ValueError(msg)

    @property
    def default_variant(self) -> Variant:
        return next(v for v in self.variants if v.default)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Entry = Message | Comment | Junk
type PatternElement = TextElement | Placeable
type InlineExpression = StringLiteral | NumberLiteral | VariableReference | Placeable
type Expression = InlineExpression | SelectExpression
type VariantKey = Identifier | NumberLiteral

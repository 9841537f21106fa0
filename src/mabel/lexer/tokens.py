"""Token types produced by the lexer.

Tokens are immutable values: the lexer keeps no reference to a token once
it has been returned, so callers may hold on to them freely.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from mabel.compiler.data_type import DataType
from mabel.diagnostics.codes import SourceSpan
from mabel.enums import NumberBase, TokenKind

__all__ = [
    "KEYWORDS",
    "LiteralPayload",
    "Position",
    "Token",
    "TokenSpan",
]

KEYWORDS: frozenset[str] = frozenset({"echo", "function"})


@dataclass(frozen=True, slots=True)
class Position:
    """Point in the source: 1-indexed line and column plus character offset."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        if self.line < 1 or self.column < 1:
            msg = f"Position line and column are 1-indexed, got {self.line}:{self.column}"
            raise ValueError(msg)
        if self.offset < 0:
            msg = f"Position offset must be >= 0, got {self.offset}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class TokenSpan:
    """Start and end (exclusive) positions of a token."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end.offset < self.start.offset:
            msg = f"TokenSpan end ({self.end.offset}) must be >= start ({self.start.offset})"
            raise ValueError(msg)

    def to_source_span(self) -> SourceSpan:
        """Convert to the diagnostic span form (offsets plus start line:column)."""
        return SourceSpan(
            start=self.start.offset,
            end=self.end.offset,
            line=self.start.line,
            column=self.start.column,
        )


@dataclass(frozen=True, slots=True)
class LiteralPayload:
    """Value of a numeric literal.

    Attributes:
        value: Parsed value (int for integer literals, float for float literals)
        data_type: Type selected by the suffix, None for unsuffixed literals
        base: Radix of the literal body
    """

    value: int | float
    data_type: DataType | None = None
    base: NumberBase = NumberBase.DECIMAL


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token.

    Attributes:
        kind: Token kind
        lexeme: Exact source text of the token
        span: Location of the token
        source_id: Identifier of the source the token came from
        literal: Numeric payload, only for IntLiteral and FloatLiteral tokens
    """

    kind: TokenKind
    lexeme: str
    span: TokenSpan
    source_id: str
    literal: LiteralPayload | None = None

    @property
    def is_trivia(self) -> bool:
        return self.kind.is_trivia

    @property
    def is_end_of_input(self) -> bool:
        return self.kind is TokenKind.END_OF_INPUT

    def __repr__(self) -> str:
        start = self.span.start
        return f"Token({self.kind.name}, {self.lexeme!r}, {start.line}:{start.column})"

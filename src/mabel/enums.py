"""Enumerations for mabel type-safe constants.

Uses StrEnum for automatic string conversion. StrEnum members are strings
themselves, so they can be passed straight into message contexts and
compared against select variant keys.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class CommentType(StrEnum):
    """Type of FTL comment in a message resource.

    StrEnum provides automatic string conversion: str(CommentType.COMMENT) == "comment"
    """

    COMMENT = "comment"
    """Standalone comment: # This is a comment"""

    GROUP = "group"
    """Group comment: ## Group Title"""

    RESOURCE = "resource"
    """Resource comment: ### Resource Description"""


class TokenKind(StrEnum):
    """Kind of token produced by the lexer."""

    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    COLON = "colon"
    SEMICOLON = "semicolon"
    LEFT_PAREN = "left-paren"
    RIGHT_PAREN = "right-paren"
    INT_LITERAL = "int"
    FLOAT_LITERAL = "float"
    SINGLE_LINE_COMMENT = "single-line-comment"
    WHITESPACE = "whitespace"
    TAB = "tab"
    NEWLINE = "newline"
    END_OF_INPUT = "eoi"

    @property
    def is_trivia(self) -> bool:
        """True for token kinds a parser can safely ignore."""
        return self in _TRIVIA_KINDS

    @property
    def description_id(self) -> str:
        """Message id of the human readable description of this kind."""
        return f"token-description-{self.value}"


_TRIVIA_KINDS = frozenset(
    {
        TokenKind.SINGLE_LINE_COMMENT,
        TokenKind.WHITESPACE,
        TokenKind.TAB,
        TokenKind.NEWLINE,
    }
)


class NumberBase(IntEnum):
    """Radix of an integer literal body."""

    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16


class DataTypeCategory(StrEnum):
    """Category of a primitive numeric data type.

    The value doubles as the attribute name of the
    ``common-data-type-desc`` message.
    """

    SIGNED_INT = "int"
    UNSIGNED_INT = "uint"
    FLOAT = "float"


class Capitalization(StrEnum):
    """Capitalization of the leading word of a rendered description."""

    UPPER = "uppercase"
    LOWER = "lowercase"


class LexerState(StrEnum):
    """States of the lexer state machine."""

    START = "start"
    SCANNING = "scanning"
    SUFFIX_SCAN = "suffix_scan"
    ERROR_RECOVERY = "error_recovery"
    AT_END = "at_end"


class SourceOrigin(StrEnum):
    """Where a piece of source code came from."""

    STRING = "string"
    STDIN = "stdin"
    REPL = "repl"
    FILE = "file"


class ExitCode(IntEnum):
    """Process exit codes used across the toolchain."""

    SUCCESS = 0
    ERROR = 1
    INVALID_INPUT_OR_USAGE = 2
    IO_ERROR = 3
    SYNTAX_ERROR = 11
    SEMANTIC_ERROR = 12


__all__ = [
    "Capitalization",
    "CommentType",
    "DataTypeCategory",
    "ExitCode",
    "LexerState",
    "NumberBase",
    "SourceOrigin",
    "TokenKind",
]

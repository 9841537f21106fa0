"""Diagnostic codes and data structures.

Defines error codes, source spans, and the renderable diagnostic record.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Literal

from mabel.constants import STDIN_SOURCE_ID
from mabel.enums import Capitalization

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lexical errors (scoped to one token)
        2000-2999: Source access errors (fatal to a source unit)
        3000-3999: Path conversion errors
        4000-4999: Catalog and rendering errors (programming errors)
    """

    # Lexical errors (1000-1999)
    UNEXPECTED_CHARACTER = 1001
    UNIMPLEMENTED_FEATURE = 1002
    INVALID_NUMBER_LITERAL_WIDTH = 1003
    NO_WIDTH_FOR_DOUBLE = 1004

    # Source access errors (2000-2999)
    SOURCE_NOT_FOUND = 2001
    SOURCE_PERMISSION_DENIED = 2002
    SOURCE_IS_DIRECTORY = 2003
    SOURCE_READ_FAILED = 2004

    # Path conversion errors (3000-3999)
    PATH_CONVERSION_FAILED = 3001

    # Catalog and rendering errors (4000-4999)
    MESSAGE_NOT_FOUND = 4001
    VARIABLE_NOT_PROVIDED = 4002
    MAX_DEPTH_EXCEEDED = 4003
    PARSE_JUNK = 4004


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                are less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured, renderable diagnostic.

    Created at the point of failure and consumed once by the renderer.
    The message text is never stored here; it is produced from
    ``message_id`` and the contextual flags by the message catalog.

    Attributes:
        message_id: Catalog message id (``id`` or ``id.attribute``)
        args: Message arguments (integers, text, lists of integers, enums)
        count: Plural discriminant, or None when the message has no count
        capitalization: Capitalization of the leading word
        show_count: Interpolate the count instead of a word form
        show_value: Append the example value after the noun phrase
        code: Diagnostic code, None for purely descriptive messages
        span: Source location, None for errors without a location
        source_id: Source identifier the span refers to
        severity: Error severity level
    """

    message_id: str
    args: Mapping[str, object] = field(default_factory=dict)
    count: int | None = None
    capitalization: Capitalization = Capitalization.UPPER
    show_count: bool = False
    show_value: bool = False
    code: DiagnosticCode | None = None
    span: SourceSpan | None = None
    source_id: str = STDIN_SOURCE_ID
    severity: Literal["error", "warning"] = "error"

    def __post_init__(self) -> None:
        """Freeze the argument mapping."""
        object.__setattr__(self, "args", MappingProxyType(dict(self.args)))

    def context(self) -> dict[str, object]:
        """Build the renderer context for this diagnostic.

        Returns:
            Arguments merged with the contextual flags. ``count`` is only
            present when the diagnostic carries one.
        """
        context: dict[str, object] = dict(self.args)
        context["capitalization"] = self.capitalization
        context["show_count"] = self.show_count
        context["show_value"] = self.show_value
        if self.count is not None:
            context["count"] = self.count
        return context

    def __str__(self) -> str:
        """Return the message id with the code, for logging."""
        if self.code is None:
            return self.message_id
        return f"{self.code.name} ({self.message_id})"

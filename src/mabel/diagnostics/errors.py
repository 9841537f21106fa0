"""mabel exception hierarchy with structured payloads.

Every exception carries the structured data needed to build a Diagnostic.
The exception text itself is a developer-facing fallback; user-visible text
is always produced by the renderer from the message catalog
(see :mod:`mabel.diagnostics.reporting`).

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from mabel.constants import STDIN_SOURCE_ID
from mabel.enums import DataTypeCategory, ExitCode

from .codes import Diagnostic, SourceSpan

__all__ = [
    "CannotConvertPathError",
    "CatalogError",
    "CatalogSyntaxError",
    "InvalidNumberLiteralWidthError",
    "LexicalError",
    "MabelError",
    "MessageNotFoundError",
    "MissingVariableError",
    "NoWidthForDoubleError",
    "PathConversionError",
    "RenderDepthError",
    "SourceAccessError",
    "SourceIsDirectoryError",
    "SourceNotFoundError",
    "SourcePermissionDeniedError",
    "SourceReadError",
    "UnexpectedCharacterError",
    "UnimplementedFeatureError",
]


class MabelError(Exception):
    """Base exception for all mabel errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
        exit_code: Process exit code for this class of error
    """

    exit_code: ExitCode = ExitCode.ERROR

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MabelError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(str(message))
        else:
            self.diagnostic = None
            super().__init__(message)


# ============================================================================
# LEXICAL ERRORS
# ============================================================================


class LexicalError(MabelError):
    """Error scoped to a single token.

    Lexical errors do not abort the token stream: the lexer enters its
    recovery state and the caller decides whether to resynchronize.

    Attributes:
        span: Location of the offending text (None when raised standalone)
        source_id: Identifier of the source the span refers to
        recoverable: Whether the lexer can resynchronize after this error
    """

    exit_code = ExitCode.SYNTAX_ERROR
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        span: SourceSpan | None = None,
        source_id: str = STDIN_SOURCE_ID,
    ) -> None:
        super().__init__(message)
        self.span = span
        self.source_id = source_id


class UnexpectedCharacterError(LexicalError):
    """A character that starts no valid token."""

    def __init__(
        self,
        character: str,
        *,
        span: SourceSpan | None = None,
        source_id: str = STDIN_SOURCE_ID,
    ) -> None:
        super().__init__(
            f"Unexpected character {character!r}", span=span, source_id=source_id
        )
        self.character = character


class UnimplementedFeatureError(LexicalError):
    """Syntax that is recognized but deliberately not supported yet.

    Not recoverable: the intended token shape is unknown, so the caller
    is expected to abort lexing of the unit.
    """

    recoverable = False

    def __init__(
        self,
        feature: str,
        *,
        span: SourceSpan | None = None,
        source_id: str = STDIN_SOURCE_ID,
    ) -> None:
        super().__init__(
            f"Unimplemented feature: {feature}", span=span, source_id=source_id
        )
        self.feature = feature


class InvalidNumberLiteralWidthError(LexicalError):
    """Literal suffix width outside the legal set for its kind.

    Attributes:
        width: Requested width, or the digit text when too long to be one
        literal_kind: Category selected by the suffix letter
        valid_widths: Ascending legal widths for that category
    """

    def __init__(
        self,
        width: int | str,
        literal_kind: DataTypeCategory,
        valid_widths: Sequence[int],
        *,
        span: SourceSpan | None = None,
        source_id: str = STDIN_SOURCE_ID,
        message: str | None = None,
    ) -> None:
        if message is None:
            widths = ", ".join(str(w) for w in valid_widths)
            message = (
                f"Invalid width {width} for {literal_kind.value} literal "
                f"(valid widths: {widths})"
            )
        super().__init__(message, span=span, source_id=source_id)
        self.width = width
        self.literal_kind = literal_kind
        self.valid_widths: tuple[int, ...] = tuple(valid_widths)


class NoWidthForDoubleError(InvalidNumberLiteralWidthError):
    """Width suffix attached to a double literal.

    Raised for every width value: ``double`` never varies in size.
    """

    def __init__(
        self,
        width: int | str,
        *,
        span: SourceSpan | None = None,
        source_id: str = STDIN_SOURCE_ID,
    ) -> None:
        super().__init__(
            width,
            DataTypeCategory.FLOAT,
            (),
            span=span,
            source_id=source_id,
            message=f"Double literals cannot carry a width suffix (got {width})",
        )


# ============================================================================
# SOURCE ACCESS ERRORS
# ============================================================================


class SourceAccessError(MabelError):
    """Source text could not be obtained. Fatal to that source unit.

    Attributes:
        path: Path that was being read
    """

    exit_code = ExitCode.IO_ERROR
    reason: str = "could not be read"

    def __init__(self, path: str) -> None:
        super().__init__(f"{path}: {self.reason}")
        self.path = path


class SourceNotFoundError(SourceAccessError):
    """Source path does not exist."""

    reason = "does not exist"


class SourcePermissionDeniedError(SourceAccessError):
    """Source path is not readable."""

    reason = "permission denied"


class SourceIsDirectoryError(SourceAccessError):
    """Source path is a directory."""

    reason = "is a directory"


class SourceReadError(SourceAccessError):
    """Any other failure while reading the source."""


# ============================================================================
# PATH CONVERSION ERRORS
# ============================================================================


class PathConversionError(MabelError):
    """A path could not be converted to its URL form."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot convert path to URL: {path}")
        self.path = path


class CannotConvertPathError(PathConversionError):
    """The path has no file URL representation."""


# ============================================================================
# CATALOG ERRORS
# ============================================================================


class CatalogError(MabelError):
    """Programming error in message lookup or rendering.

    These are never shown to end users: they indicate a catalog that does
    not match the code requesting messages from it.
    """


class MessageNotFoundError(CatalogError):
    """Unknown message id, unknown attribute, or message without a value."""

    def __init__(self, message_id: str, reason: str = "not found") -> None:
        super().__init__(f"Message '{message_id}' {reason}")
        self.message_id = message_id


class MissingVariableError(CatalogError):
    """A variable on the evaluated template path is absent from the context."""

    def __init__(self, message_id: str, variable: str) -> None:
        super().__init__(
            f"Variable '${variable}' not provided for message '{message_id}'"
        )
        self.message_id = message_id
        self.variable = variable


class RenderDepthError(CatalogError):
    """Template nesting exceeded the renderer depth limit."""

    def __init__(self, message_id: str, max_depth: int) -> None:
        super().__init__(
            f"Maximum nesting depth ({max_depth}) exceeded in message '{message_id}'"
        )
        self.message_id = message_id
        self.max_depth = max_depth


class CatalogSyntaxError(CatalogError):
    """FTL resource contains invalid entries (strict loading only)."""

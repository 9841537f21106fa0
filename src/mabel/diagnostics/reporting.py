"""Error to diagnostic mapping and error reporting.

Every lexical, source-access and path-conversion error maps onto exactly
one catalog message with a fixed argument shape:

    UnexpectedCharacterError        lexer-error-unexpected-character               character
    UnimplementedFeatureError       lexer-error-unimplemented-feature              feature
    InvalidNumberLiteralWidthError  lexer-error-invalid-number-literal-width       width, literal_kind, valid_widths
    NoWidthForDoubleError           lexer-error-invalid-number-literal-width.no-width-for-double   width
    SourceNotFoundError             utils-source-code-read-error.not-found         path
    SourcePermissionDeniedError     utils-source-code-read-error.permission-denied path
    SourceIsDirectoryError          utils-source-code-read-error.is-directory      path
    SourceReadError                 utils-source-code-read-error.generic           path
    CannotConvertPathError          utils-path-to-url-error.cannot-convert         path

Python 3.13+. Zero external dependencies.
"""

import json

from mabel.enums import DataTypeCategory
from mabel.runtime.renderer import DiagnosticRenderer

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CannotConvertPathError,
    InvalidNumberLiteralWidthError,
    MabelError,
    NoWidthForDoubleError,
    SourceIsDirectoryError,
    SourceNotFoundError,
    SourcePermissionDeniedError,
    SourceReadError,
    UnexpectedCharacterError,
    UnimplementedFeatureError,
)
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "DATA_TYPE_CATEGORY_MESSAGE",
    "ERROR_WRAPPER_MESSAGE",
    "ErrorReporter",
    "diagnostic_for",
]

# Message whose attributes name each data type category.
DATA_TYPE_CATEGORY_MESSAGE: str = "common-data-type-desc"

# Wrapper for errors reported without a source location.
ERROR_WRAPPER_MESSAGE: str = "utils-error.template"

_SOURCE_READ_ERROR = "utils-source-code-read-error"


def _quote(text: str) -> str:
    """JSON-quote a character or value for display ('@' -> '"@"')."""
    return json.dumps(text, ensure_ascii=False)


def diagnostic_for(error: MabelError) -> Diagnostic:
    """Build the Diagnostic for an error.

    An error constructed from a Diagnostic returns that Diagnostic unchanged.

    Raises:
        TypeError: If the error has no message mapping (catalog errors are
            programming errors and are never rendered for users)

    Example:
        >>> diagnostic_for(UnimplementedFeatureError("string literal")).message_id
        'lexer-error-unimplemented-feature'
    """
    if error.diagnostic is not None:
        return error.diagnostic

    match error:
        # NoWidthForDoubleError first: it is an InvalidNumberLiteralWidthError
        case NoWidthForDoubleError():
            return Diagnostic(
                message_id="lexer-error-invalid-number-literal-width.no-width-for-double",
                args={"width": error.width},
                code=DiagnosticCode.NO_WIDTH_FOR_DOUBLE,
                span=error.span,
                source_id=error.source_id,
            )
        case InvalidNumberLiteralWidthError():
            return Diagnostic(
                message_id="lexer-error-invalid-number-literal-width",
                args={
                    "width": error.width,
                    "literal_kind": error.literal_kind,
                    "valid_widths": list(error.valid_widths),
                },
                code=DiagnosticCode.INVALID_NUMBER_LITERAL_WIDTH,
                span=error.span,
                source_id=error.source_id,
            )
        case UnexpectedCharacterError():
            return Diagnostic(
                message_id="lexer-error-unexpected-character",
                args={"character": _quote(error.character)},
                code=DiagnosticCode.UNEXPECTED_CHARACTER,
                span=error.span,
                source_id=error.source_id,
            )
        case UnimplementedFeatureError():
            return Diagnostic(
                message_id="lexer-error-unimplemented-feature",
                args={"feature": error.feature},
                code=DiagnosticCode.UNIMPLEMENTED_FEATURE,
                span=error.span,
                source_id=error.source_id,
            )
        case SourceNotFoundError():
            return Diagnostic(
                message_id=f"{_SOURCE_READ_ERROR}.not-found",
                args={"path": error.path},
                code=DiagnosticCode.SOURCE_NOT_FOUND,
            )
        case SourcePermissionDeniedError():
            return Diagnostic(
                message_id=f"{_SOURCE_READ_ERROR}.permission-denied",
                args={"path": error.path},
                code=DiagnosticCode.SOURCE_PERMISSION_DENIED,
            )
        case SourceIsDirectoryError():
            return Diagnostic(
                message_id=f"{_SOURCE_READ_ERROR}.is-directory",
                args={"path": error.path},
                code=DiagnosticCode.SOURCE_IS_DIRECTORY,
            )
        case SourceReadError():
            return Diagnostic(
                message_id=f"{_SOURCE_READ_ERROR}.generic",
                args={"path": error.path},
                code=DiagnosticCode.SOURCE_READ_FAILED,
            )
        case CannotConvertPathError():
            return Diagnostic(
                message_id="utils-path-to-url-error.cannot-convert",
                args={"path": error.path},
                code=DiagnosticCode.PATH_CONVERSION_FAILED,
            )
        case _:
            msg = f"No diagnostic mapping for {type(error).__name__}"
            raise TypeError(msg)


class ErrorReporter:
    """Turns errors into localized, formatted reports.

    Example:
        >>> reporter = ErrorReporter(renderer)
        >>> reporter.render(SourceNotFoundError("main.mabel"))
        'The path main.mabel does not exist.'
    """

    __slots__ = ("_formatter", "_renderer")

    def __init__(
        self,
        renderer: DiagnosticRenderer,
        formatter: DiagnosticFormatter | None = None,
    ) -> None:
        self._renderer = renderer
        self._formatter = formatter or DiagnosticFormatter()

    @property
    def renderer(self) -> DiagnosticRenderer:
        return self._renderer

    def diagnostic_for(self, error: MabelError) -> Diagnostic:
        return diagnostic_for(error)

    def render(self, error: MabelError) -> str:
        """Render the localized message for an error.

        A DataTypeCategory argument is itself localized through
        ``common-data-type-desc.<category>`` before interpolation.
        """
        diagnostic = diagnostic_for(error)
        context = diagnostic.context()
        for name, value in diagnostic.args.items():
            if isinstance(value, DataTypeCategory):
                context[name] = self._renderer.render(f"{DATA_TYPE_CATEGORY_MESSAGE}.{value.value}")
        return self._renderer.render(diagnostic.message_id, context)

    def report(self, error: MabelError, source: str | None = None) -> str:
        """Render and lay out a complete error report.

        Errors without a location are wrapped in ``utils-error.template``
        ("error: ...") in the Rust output format; located errors get the
        code, the ``-->`` location line and, when ``source`` is given, the
        offending line with a caret underline.
        """
        diagnostic = diagnostic_for(error)
        message = self.render(error)
        if diagnostic.span is None and self._formatter.output_format is OutputFormat.RUST:
            return self._renderer.render(ERROR_WRAPPER_MESSAGE, {"error": message})
        return self._formatter.format(diagnostic, message, source)

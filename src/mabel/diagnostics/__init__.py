"""Diagnostic system: codes, the exception hierarchy and output formatting.

Errors carry structured payloads; :mod:`mabel.diagnostics.reporting` maps
them onto catalog messages and :mod:`mabel.diagnostics.descriptions`
renders token-kind and data-type descriptions. Those two modules depend on
the runtime and are imported from their own paths.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    CannotConvertPathError,
    CatalogError,
    CatalogSyntaxError,
    InvalidNumberLiteralWidthError,
    LexicalError,
    MabelError,
    MessageNotFoundError,
    MissingVariableError,
    NoWidthForDoubleError,
    PathConversionError,
    RenderDepthError,
    SourceAccessError,
    SourceIsDirectoryError,
    SourceNotFoundError,
    SourcePermissionDeniedError,
    SourceReadError,
    UnexpectedCharacterError,
    UnimplementedFeatureError,
)
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "CannotConvertPathError",
    "CatalogError",
    "CatalogSyntaxError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "InvalidNumberLiteralWidthError",
    "LexicalError",
    "MabelError",
    "MessageNotFoundError",
    "MissingVariableError",
    "NoWidthForDoubleError",
    "OutputFormat",
    "PathConversionError",
    "RenderDepthError",
    "SourceAccessError",
    "SourceIsDirectoryError",
    "SourceNotFoundError",
    "SourcePermissionDeniedError",
    "SourceReadError",
    "SourceSpan",
    "UnexpectedCharacterError",
    "UnimplementedFeatureError",
]

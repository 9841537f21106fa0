"""mabel - lexical front-end of the mabel compiler.

Turns source text into a token stream and reports problems through a
localized message catalog.

Public API:
    Lexer - Pull-based lexer with error recovery
    tokenize - Lex a whole source, collecting recoverable errors
    DataTypeRegistry - Primitive numeric types and legal literal widths
    MessageCatalog - Immutable id -> template map for one locale
    DiagnosticRenderer - Renders catalog messages with select discriminants
    ErrorReporter - Maps errors to localized, formatted reports
    load_catalog - Load the packaged catalog for a locale

Exceptions:
    MabelError - Base exception class
    LexicalError - Errors scoped to one token
    SourceAccessError - Source text could not be read
    CatalogError - Catalog lookup and rendering errors

Submodules:
    mabel.lexer - Tokens, numeric literal scanning and the lexer
    mabel.compiler - Data type registry
    mabel.syntax - FTL-subset parser and AST
    mabel.runtime - Message catalog and renderer
    mabel.diagnostics - Error types, codes, reporting and descriptions
    mabel.localization - Packaged catalog loading and locale selection
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .compiler import DEFAULT_REGISTRY, DataType, DataTypeRegistry
from .config import CatalogConfig, LexerConfig, RendererConfig
from .diagnostics import (
    CatalogError,
    LexicalError,
    MabelError,
    SourceAccessError,
)
from .diagnostics.reporting import ErrorReporter
from .lexer import Lexer, Token, tokenize
from .localization import load_catalog
from .runtime import DiagnosticRenderer, MessageCatalog
from .source import Source, read_source

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("mabel-frontend")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_REGISTRY",
    "CatalogConfig",
    "CatalogError",
    "DataType",
    "DataTypeRegistry",
    "DiagnosticRenderer",
    "ErrorReporter",
    "Lexer",
    "LexerConfig",
    "LexicalError",
    "MabelError",
    "MessageCatalog",
    "RendererConfig",
    "Source",
    "SourceAccessError",
    "Token",
    "__version__",
    "load_catalog",
    "read_source",
    "tokenize",
]

"""Shared constants for mabel.

Centralized limits and identifiers used across the lexer, the catalog
parser and the renderer. Placing them here avoids circular imports.

Constants are grouped by domain:
- Depth limits: recursion protection for catalog parsing and rendering
- Input limits: size constraints for source text and catalog resources
- Locale defaults: packaged fallback locale
- Source identifiers: pseudo-URLs for non-file sources

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_CATALOG_SIZE",
    # Locale defaults
    "DEFAULT_LOCALE",
    "MAX_LOCALE_CACHE_SIZE",
    # Source identifiers
    "STDIN_SOURCE_ID",
    "REPL_SOURCE_ID",
    # Bidi isolation
    "FSI",
    "PDI",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: catalog parser (placeable nesting) and renderer (select nesting).
# Real message templates nest four levels deep at most.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum source text accepted by the lexer, in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Maximum size of a single FTL resource loaded into a catalog (1 MB).
MAX_CATALOG_SIZE: int = 1024 * 1024

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# BCP-47 locale used when the system locale has no packaged catalog.
DEFAULT_LOCALE: str = "en-US"

# Maximum number of cached Babel Locale objects.
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# SOURCE IDENTIFIERS
# ============================================================================

STDIN_SOURCE_ID: str = "mabel://stdin"
REPL_SOURCE_ID: str = "mabel://REPL"

# ============================================================================
# BIDI ISOLATION
# ============================================================================

# Unicode FIRST STRONG ISOLATE / POP DIRECTIONAL ISOLATE, placed around
# interpolated values when isolation is enabled.
FSI: str = "\u2068"
PDI: str = "\u2069"

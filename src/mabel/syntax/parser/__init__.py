"""Message resource parser.

Module Organization:
- core.py: CatalogParser and the parse() entry point with junk recovery
- primitives.py: Identifiers, numbers and string literals
- rules.py: Grammar rules (patterns, placeables, select expressions, entries)

Public API:
    CatalogParser: Main parser class
    ParseContext: Parse context for depth tracking and failure recording
"""

from mabel.syntax.parser.core import CatalogParser
from mabel.syntax.parser.rules import ParseContext

__all__ = ["CatalogParser", "ParseContext"]

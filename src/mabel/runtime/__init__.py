"""Message runtime package.

Provides the immutable message catalog, the diagnostic renderer and the
plural bucket selector. Depends on the syntax package for parsing.

Python 3.13+.
"""

from .catalog import MessageCatalog
from .plural_rules import PluralSelector, three_bucket_category
from .renderer import DiagnosticRenderer, RenderContext, format_value

__all__ = [
    "DiagnosticRenderer",
    "MessageCatalog",
    "PluralSelector",
    "RenderContext",
    "format_value",
    "three_bucket_category",
]

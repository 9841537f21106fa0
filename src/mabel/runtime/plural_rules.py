"""Plural bucket selection for diagnostic templates.

Templates select grammatical number with three buckets: an explicit ``[0]``
variant (matched exactly before any bucket is consulted), ``one`` for the
value 1, and the default ``other`` for everything else.

Bucket selection sits behind the PluralSelector protocol so a CLDR-backed
selector can replace it without touching any template.

Python 3.13+. Zero external dependencies.
"""

from decimal import Decimal
from typing import Literal, Protocol

__all__ = ["PluralCategory", "PluralSelector", "three_bucket_category"]

type PluralCategory = Literal["one", "other"]


class PluralSelector(Protocol):
    """Callable mapping a numeric selector value to a plural category name."""

    def __call__(self, n: int | float | Decimal) -> str: ...


def three_bucket_category(n: int | float | Decimal) -> PluralCategory:
    """Select the plural bucket for a count.

    Zero has no bucket of its own: templates that distinguish it declare an
    exact ``[0]`` variant, and every other template renders zero through
    the ``other`` branch.

    Examples:
        >>> three_bucket_category(1)
        'one'
        >>> three_bucket_category(0)
        'other'
        >>> three_bucket_category(2)
        'other'
    """
    return "one" if n == 1 else "other"

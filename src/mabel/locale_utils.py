"""Locale utilities: BCP-47/POSIX conversion, system locale detection, negotiation.

Centralizes locale handling so catalog loading and caching agree on one
canonical form. Packaged catalogs are keyed by BCP-47 codes ("en-US");
Babel works with POSIX codes ("en_US").

Python 3.13+. Depends on Babel for locale parsing and negotiation.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Sequence
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError
from babel.core import negotiate_locale as babel_negotiate_locale

from mabel.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "negotiate_locale",
    "normalize_locale",
    "to_bcp47",
]

logger = logging.getLogger(__name__)

# Environment variables consulted for the user's locale, in order.
_LOCALE_ENV_VARS: tuple[str, ...] = ("LANG", "LC_ALL", "LC_MESSAGES")

_PSEUDO_LOCALES: frozenset[str] = frozenset({"C", "POSIX"})


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def to_bcp47(locale_code: str) -> str:
    """Convert a POSIX locale code (optionally with encoding) to BCP-47.

    Example:
        >>> to_bcp47("en_US.UTF-8")
        'en-US'
        >>> to_bcp47("my_MM")
        'my-MM'
    """
    return locale_code.split(".", 1)[0].split("@", 1)[0].replace("_", "-")


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("en-US")
        >>> locale.language
        'en'
        >>> locale.territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_system_locale() -> str | None:
    """Detect the user's locale from LANG, LC_ALL and LC_MESSAGES.

    The encoding suffix is stripped and the code is returned in BCP-47 form.
    "C" and "POSIX" pseudo-locales are ignored.

    Returns:
        BCP-47 locale code, or None when no variable names a locale

    Example:
        >>> import os
        >>> os.environ["LANG"] = "de_DE.UTF-8"
        >>> get_system_locale()
        'de-DE'
    """
    for var in _LOCALE_ENV_VARS:
        value = os.environ.get(var, "").strip()
        if not value:
            continue
        code = to_bcp47(value)
        if code and code not in _PSEUDO_LOCALES:
            return code
    return None


def _language_of(locale_code: str) -> str:
    try:
        return get_babel_locale(locale_code).language
    except (UnknownLocaleError, ValueError):
        return locale_code.replace("_", "-").split("-", 1)[0].lower()


def negotiate_locale(
    requested: str | None,
    available: Sequence[str],
    default: str = DEFAULT_LOCALE,
) -> str:
    """Pick the best available locale for a requested one.

    Resolution order:
    1. Exact (case-insensitive) match via Babel's negotiate_locale
    2. First available locale with the same language ("en-GB" -> "en-US")
    3. ``default``

    Args:
        requested: Requested locale (BCP-47 or POSIX), None for the default
        available: Locales with a packaged catalog, BCP-47 form
        default: Fallback locale

    Example:
        >>> negotiate_locale("en_GB.UTF-8", ["en-US", "my-MM"])
        'en-US'
        >>> negotiate_locale("my", ["en-US", "my-MM"])
        'my-MM'
        >>> negotiate_locale("fr-FR", ["en-US", "my-MM"])
        'en-US'
    """
    if not requested:
        return default

    code = to_bcp47(requested)
    match = babel_negotiate_locale([code], list(available), sep="-")
    if match is not None:
        # Babel echoes the requested spelling; return the packaged one.
        for candidate in available:
            if candidate.lower() == match.lower():
                return candidate

    language = _language_of(code)
    for candidate in available:
        if _language_of(candidate) == language:
            logger.debug("Locale %s negotiated to %s by language", requested, candidate)
            return candidate

    logger.debug("No catalog for locale %s, falling back to %s", requested, default)
    return default

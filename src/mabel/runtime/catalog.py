"""Immutable message catalog.

A MessageCatalog maps message ids to parsed templates for one locale.
Catalogs are plain values: they are built once from FTL sources, never
mutated afterwards, and can be shared between threads and renderers
without locking.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from mabel.config import CatalogConfig
from mabel.constants import DEFAULT_LOCALE
from mabel.diagnostics.errors import CatalogSyntaxError
from mabel.syntax.ast import Junk, Message
from mabel.syntax.parser import CatalogParser

__all__ = ["MessageCatalog"]

logger = logging.getLogger(__name__)

# Truncation limit for junk content in log messages.
_LOG_TRUNCATE: int = 80


class MessageCatalog:
    """Read-only mapping of message id to Message for a single locale.

    Construct through :meth:`from_source` or :meth:`from_sources`; the
    packaged catalogs are obtained with
    :func:`mabel.localization.load_catalog`.

    Example:
        >>> catalog = MessageCatalog.from_source("hello = Hello")
        >>> catalog.has_message("hello")
        True
        >>> len(catalog)
        1
    """

    __slots__ = ("_junk", "_locale", "_messages")

    def __init__(
        self,
        locale: str,
        messages: Mapping[str, Message],
        junk: Sequence[Junk] = (),
    ) -> None:
        if not locale:
            msg = "Catalog locale must be a non-empty string"
            raise ValueError(msg)
        self._locale = locale
        self._messages: Mapping[str, Message] = MappingProxyType(dict(messages))
        self._junk: tuple[Junk, ...] = tuple(junk)

    @classmethod
    def from_source(
        cls,
        source: str,
        *,
        locale: str = DEFAULT_LOCALE,
        config: CatalogConfig | None = None,
        source_path: str | None = None,
    ) -> "MessageCatalog":
        """Build a catalog from a single FTL resource."""
        return cls.from_sources([(source_path, source)], locale=locale, config=config)

    @classmethod
    def from_sources(
        cls,
        sources: Iterable[tuple[str | None, str]],
        *,
        locale: str = DEFAULT_LOCALE,
        config: CatalogConfig | None = None,
    ) -> "MessageCatalog":
        """Build a catalog from several FTL resources, in order.

        Later definitions of a message id replace earlier ones.

        Args:
            sources: Pairs of (path used in log messages or None, FTL text)
            locale: Locale the messages are written in
            config: Parser limits and strictness (defaults to CatalogConfig())

        Raises:
            CatalogSyntaxError: In strict mode, when any resource contains junk
            ValueError: If a resource exceeds the configured size limit
        """
        config = config or CatalogConfig()
        parser = CatalogParser(
            max_source_size=config.max_source_size,
            max_nesting_depth=config.max_nesting_depth,
        )
        messages: dict[str, Message] = {}
        junk: list[Junk] = []

        for source_path, source in sources:
            source_desc = source_path or "<string>"
            resource = parser.parse(source)

            for entry in resource.junk:
                annotation = entry.annotations[0].message if entry.annotations else "parse error"
                if config.strict:
                    msg = f"Syntax error in {source_desc}: {annotation}"
                    raise CatalogSyntaxError(msg)
                logger.warning(
                    "Syntax error in %s: %s %s",
                    source_desc,
                    annotation,
                    repr(entry.content[:_LOG_TRUNCATE]),
                )
                junk.append(entry)

            for message in resource.messages:
                if message.id.name in messages:
                    logger.warning(
                        "Duplicate message '%s' in %s replaces the earlier definition",
                        message.id.name,
                        source_desc,
                    )
                messages[message.id.name] = message

            logger.info(
                "Loaded resource %s: %d messages, %d junk entries",
                source_desc,
                len(resource.messages),
                len(resource.junk),
            )

        return cls(locale, messages, junk)

    @property
    def locale(self) -> str:
        """Locale of the messages (e.g. "en-US")."""
        return self._locale

    @property
    def junk(self) -> tuple[Junk, ...]:
        """Entries that failed to parse (empty for a clean catalog)."""
        return self._junk

    def has_message(self, message_id: str) -> bool:
        return message_id in self._messages

    def has_attribute(self, message_id: str, attribute: str) -> bool:
        """Check if message exists and has the given attribute."""
        message = self._messages.get(message_id)
        return message is not None and message.get_attribute(attribute) is not None

    def get_message(self, message_id: str) -> Message | None:
        return self._messages.get(message_id)

    def message_ids(self) -> list[str]:
        """Message ids in definition order."""
        return list(self._messages)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"MessageCatalog(locale={self._locale!r}, messages={len(self._messages)})"

"""Message resource loading.

Catalog text ships inside the package as ``mabel/locales/<locale>/*.ftl``.
Loaders enumerate locales and resources; :func:`build_catalog` negotiates a
locale and parses its resources into an immutable MessageCatalog.

Components:
    ResourceLoader - Protocol for locale resource sources (structural typing)
    PackageResourceLoader - Reads resources bundled in an installed package
    PathResourceLoader - Reads resources from a directory tree on disk
    build_catalog - Negotiate a locale and build its catalog from a loader
    load_catalog - Cached catalog for the packaged resources

Python 3.13+. Indirect dependency: Babel (via locale_utils).
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from mabel.config import CatalogConfig
from mabel.constants import DEFAULT_LOCALE
from mabel.locale_utils import get_system_locale, negotiate_locale
from mabel.runtime.catalog import MessageCatalog

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceLoader",
    # Concrete loaders
    "PackageResourceLoader",
    "PathResourceLoader",
    # Catalog construction
    "available_locales",
    "build_catalog",
    "load_catalog",
]

logger = logging.getLogger(__name__)

_RESOURCE_SUFFIX: str = ".ftl"


def _validate_segment(kind: str, value: str) -> None:
    """Reject locale codes and resource ids that could escape the resource root."""
    if not value or value in (".", "..") or "/" in value or "\\" in value or "\x00" in value:
        msg = f"Invalid {kind} for resource lookup: {value!r}"
        raise ValueError(msg)


class ResourceLoader(Protocol):
    """Protocol for sources of per-locale FTL resources.

    Example:
        >>> class DictLoader:
        ...     def locales(self) -> tuple[str, ...]:
        ...         return ("en-US",)
        ...     def resource_ids(self, locale: str) -> tuple[str, ...]:
        ...         return ("main.ftl",)
        ...     def load(self, locale: str, resource_id: str) -> str:
        ...         return "hello = Hello"
        ...     def describe_path(self, locale: str, resource_id: str) -> str:
        ...         return f"{locale}/{resource_id}"
    """

    def locales(self) -> tuple[str, ...]:
        """Locales with at least one resource, sorted."""
        ...

    def resource_ids(self, locale: str) -> tuple[str, ...]:
        """Resource ids for a locale, in load order."""
        ...

    def load(self, locale: str, resource_id: str) -> str:
        """Return the FTL text of one resource.

        Raises:
            FileNotFoundError: If the resource does not exist
            OSError: If it cannot be read
        """
        ...

    def describe_path(self, locale: str, resource_id: str) -> str:
        """Human-readable location of a resource for log messages."""
        ...


def _list_locales(root: Traversable) -> tuple[str, ...]:
    if not root.is_dir():
        return ()
    return tuple(
        sorted(
            entry.name
            for entry in root.iterdir()
            if entry.is_dir()
            and any(child.name.endswith(_RESOURCE_SUFFIX) for child in entry.iterdir())
        )
    )


def _list_resources(root: Traversable, locale: str) -> tuple[str, ...]:
    _validate_segment("locale", locale)
    locale_dir = root / locale
    if not locale_dir.is_dir():
        return ()
    return tuple(
        sorted(
            entry.name
            for entry in locale_dir.iterdir()
            if entry.is_file() and entry.name.endswith(_RESOURCE_SUFFIX)
        )
    )


def _read_resource(root: Traversable, locale: str, resource_id: str) -> str:
    _validate_segment("locale", locale)
    _validate_segment("resource id", resource_id)
    return (root / locale / resource_id).read_text(encoding="utf-8")


@dataclass(frozen=True, slots=True)
class PackageResourceLoader:
    """Loads resources bundled as package data.

    Attributes:
        package: Importable package holding the resources
        directory: Directory inside the package with one folder per locale
    """

    package: str = "mabel"
    directory: str = "locales"

    def _root(self) -> Traversable:
        return resources.files(self.package) / self.directory

    def locales(self) -> tuple[str, ...]:
        return _list_locales(self._root())

    def resource_ids(self, locale: str) -> tuple[str, ...]:
        return _list_resources(self._root(), locale)

    def load(self, locale: str, resource_id: str) -> str:
        return _read_resource(self._root(), locale, resource_id)

    def describe_path(self, locale: str, resource_id: str) -> str:
        return f"{self.package}/{self.directory}/{locale}/{resource_id}"


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """Loads resources from ``<root>/<locale>/*.ftl`` on disk.

    Security:
        Locale codes and resource ids containing path separators or ".."
        are rejected, so lookups never leave ``root``.

    Attributes:
        root: Directory containing one folder per locale
    """

    root: str

    def locales(self) -> tuple[str, ...]:
        return _list_locales(Path(self.root))

    def resource_ids(self, locale: str) -> tuple[str, ...]:
        return _list_resources(Path(self.root), locale)

    def load(self, locale: str, resource_id: str) -> str:
        return _read_resource(Path(self.root), locale, resource_id)

    def describe_path(self, locale: str, resource_id: str) -> str:
        return str(Path(self.root) / locale / resource_id)


def available_locales(loader: ResourceLoader | None = None) -> tuple[str, ...]:
    """Locales that have a catalog (packaged resources by default)."""
    return (loader or PackageResourceLoader()).locales()


def build_catalog(
    loader: ResourceLoader,
    locale: str | None = None,
    config: CatalogConfig | None = None,
) -> MessageCatalog:
    """Negotiate a locale and build its catalog from ``loader``.

    Locale precedence: ``locale`` argument, then ``config.locale``, then the
    system locale (LANG, LC_ALL, LC_MESSAGES). The result is negotiated
    against the loader's locales with DEFAULT_LOCALE as the fallback.

    Raises:
        CatalogSyntaxError: In strict mode, when a resource has invalid entries
        FileNotFoundError: If the negotiated locale has no resources
    """
    config = config or CatalogConfig()
    requested = locale or config.locale or get_system_locale()
    selected = negotiate_locale(requested, loader.locales(), DEFAULT_LOCALE)

    resource_ids = loader.resource_ids(selected)
    if not resource_ids:
        msg = f"No message resources found for locale '{selected}'"
        raise FileNotFoundError(msg)

    logger.debug("Loading %d resources for locale %s", len(resource_ids), selected)
    sources = [
        (loader.describe_path(selected, resource_id), loader.load(selected, resource_id))
        for resource_id in resource_ids
    ]
    return MessageCatalog.from_sources(sources, locale=selected, config=config)


@functools.lru_cache(maxsize=8)
def load_catalog(locale: str | None = None, *, strict: bool = False) -> MessageCatalog:
    """Load the packaged catalog for ``locale`` (the system locale when None).

    Catalogs are immutable, so cached instances are shared by every caller.

    Example:
        >>> catalog = load_catalog("en-US")
        >>> catalog.has_message("lexer-error-unexpected-character")
        True
    """
    return build_catalog(PackageResourceLoader(), locale, CatalogConfig(strict=strict))

"""Packaged message catalogs and resource loaders.

Python 3.13+.
"""

from .loading import (
    PackageResourceLoader,
    PathResourceLoader,
    ResourceLoader,
    available_locales,
    build_catalog,
    load_catalog,
)

__all__ = [
    "PackageResourceLoader",
    "PathResourceLoader",
    "ResourceLoader",
    "available_locales",
    "build_catalog",
    "load_catalog",
]

"""Source code acquisition.

Source text comes from a file, standard input, the REPL, or a string given
directly. Every source carries the identifier stamped on its tokens and
errors: a ``file://`` URL for files, ``mabel://stdin`` or ``mabel://REPL``
otherwise.

Python 3.13+. Zero external dependencies.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from mabel.constants import REPL_SOURCE_ID, STDIN_SOURCE_ID
from mabel.diagnostics.errors import (
    CannotConvertPathError,
    SourceIsDirectoryError,
    SourceNotFoundError,
    SourcePermissionDeniedError,
    SourceReadError,
)
from mabel.enums import SourceOrigin

__all__ = ["Source", "path_to_file_url", "read_source"]

logger = logging.getLogger(__name__)


def path_to_file_url(path: str | Path) -> str:
    """Convert a filesystem path to an absolute ``file://`` URL.

    Raises:
        CannotConvertPathError: If the path has no URL form

    Example:
        >>> path_to_file_url("/tmp/main.mabel")
        'file:///tmp/main.mabel'
    """
    try:
        return Path(path).absolute().as_uri()
    except ValueError as exc:
        raise CannotConvertPathError(str(path)) from exc


@dataclass(frozen=True, slots=True)
class Source:
    """A unit of source code.

    Attributes:
        code: Full source text
        origin: Where the text came from
        path: Filesystem path for file sources, None otherwise
    """

    code: str
    origin: SourceOrigin = SourceOrigin.STRING
    path: Path | None = None

    def __post_init__(self) -> None:
        if (self.origin is SourceOrigin.FILE) != (self.path is not None):
            msg = "Source.path must be set exactly when origin is 'file'"
            raise ValueError(msg)

    @classmethod
    def from_string(cls, code: str) -> "Source":
        return cls(code)

    @classmethod
    def from_repl(cls, code: str) -> "Source":
        return cls(code, SourceOrigin.REPL)

    @classmethod
    def from_stdin(cls, stream: TextIO | None = None) -> "Source":
        """Read all of standard input (or ``stream``)."""
        return cls((stream or sys.stdin).read(), SourceOrigin.STDIN)

    @classmethod
    def from_file(cls, path: str | Path) -> "Source":
        """Read a UTF-8 source file. See :func:`read_source`."""
        return read_source(path)

    @property
    def source_id(self) -> str:
        """Identifier stamped on tokens and errors from this source.

        Raises:
            CannotConvertPathError: If a file path has no URL form
        """
        # path is set exactly for file sources
        if self.path is not None:
            return path_to_file_url(self.path)
        return REPL_SOURCE_ID if self.origin is SourceOrigin.REPL else STDIN_SOURCE_ID

    @property
    def display_path(self) -> str:
        """Short name for messages: the path as given, or the pseudo-URL."""
        if self.path is not None:
            return str(self.path)
        return REPL_SOURCE_ID if self.origin is SourceOrigin.REPL else STDIN_SOURCE_ID


def read_source(path: str | Path) -> Source:
    """Read a source file as UTF-8.

    Raises:
        SourceNotFoundError: The path does not exist
        SourceIsDirectoryError: The path is a directory
        SourcePermissionDeniedError: The file is not readable
        SourceReadError: Any other I/O or decoding failure
    """
    path = Path(path)
    display = str(path)
    try:
        code = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceNotFoundError(display) from exc
    except IsADirectoryError as exc:
        raise SourceIsDirectoryError(display) from exc
    except PermissionError as exc:
        # Windows reports directories as permission errors
        if path.is_dir():
            raise SourceIsDirectoryError(display) from exc
        raise SourcePermissionDeniedError(display) from exc
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to read %s: %s", display, exc)
        raise SourceReadError(display) from exc

    logger.debug("Read %d characters from %s", len(code), display)
    return Source(code, SourceOrigin.FILE, path)

"""Configuration objects for the lexer, renderer and catalog loader.

All configuration is immutable and validated on construction, so a config
object can be shared freely between lexers and renderers.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from mabel.constants import MAX_CATALOG_SIZE, MAX_DEPTH, MAX_SOURCE_SIZE, STDIN_SOURCE_ID

__all__ = [
    "CatalogConfig",
    "LexerConfig",
    "RendererConfig",
]


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Lexer configuration.

    Attributes:
        preserve_trivia: Emit whitespace, tab, newline and comment tokens.
            When False those tokens are dropped and only significant tokens
            (plus EndOfInput) reach the caller.
        source_id: Identifier stamped on every token and error
            (``mabel://stdin``, ``mabel://REPL`` or a ``file://`` URL)
        max_source_size: Maximum source length in characters. 0 disables the limit.

    Example:
        >>> config = LexerConfig(preserve_trivia=False)
        >>> config.source_id
        'mabel://stdin'
    """

    preserve_trivia: bool = True
    source_id: str = STDIN_SOURCE_ID
    max_source_size: int = MAX_SOURCE_SIZE

    def __post_init__(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If source_id is empty or max_source_size is negative
        """
        if not self.source_id:
            msg = "source_id must be a non-empty string"
            raise ValueError(msg)
        if self.max_source_size < 0:
            msg = f"max_source_size must be >= 0, got {self.max_source_size}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RendererConfig:
    """Diagnostic renderer configuration.

    Attributes:
        use_isolating: Wrap interpolated values in Unicode bidi isolation marks
        max_depth: Maximum template nesting depth during rendering
    """

    use_isolating: bool = True
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Message catalog loading configuration.

    Attributes:
        locale: BCP-47 or POSIX locale code. None selects the system locale.
        strict: Raise CatalogSyntaxError on invalid entries instead of
            recording them as junk
        max_source_size: Maximum size of a single FTL resource in characters
        max_nesting_depth: Maximum placeable nesting depth in templates
    """

    locale: str | None = None
    strict: bool = False
    max_source_size: int = MAX_CATALOG_SIZE
    max_nesting_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        if self.locale is not None and not self.locale.strip():
            msg = "locale must be None or a non-empty locale code"
            raise ValueError(msg)
        if self.max_source_size < 0:
            msg = f"max_source_size must be >= 0, got {self.max_source_size}"
            raise ValueError(msg)
        if self.max_nesting_depth < 1:
            msg = f"max_nesting_depth must be >= 1, got {self.max_nesting_depth}"
            raise ValueError(msg)

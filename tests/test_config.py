"""Tests for configuration validation.

Python 3.13+.
"""

import pytest

from mabel.config import CatalogConfig, LexerConfig, RendererConfig
from mabel.constants import MAX_DEPTH, STDIN_SOURCE_ID


class TestLexerConfig:
    """LexerConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = LexerConfig()
        assert config.preserve_trivia is True
        assert config.source_id == STDIN_SOURCE_ID
        assert config.max_source_size > 0

    def test_empty_source_id(self) -> None:
        with pytest.raises(ValueError, match="source_id must be a non-empty string"):
            LexerConfig(source_id="")

    def test_negative_size(self) -> None:
        with pytest.raises(ValueError, match="max_source_size must be >= 0"):
            LexerConfig(max_source_size=-1)

    def test_zero_size_disables_limit(self) -> None:
        assert LexerConfig(max_source_size=0).max_source_size == 0

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            LexerConfig().preserve_trivia = False  # type: ignore[misc]


class TestRendererConfig:
    """RendererConfig defaults and validation."""

    def test_defaults(self) -> None:
        assert RendererConfig() == RendererConfig(use_isolating=True, max_depth=MAX_DEPTH)

    @pytest.mark.parametrize("depth", [0, -3])
    def test_invalid_depth(self, depth: int) -> None:
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            RendererConfig(max_depth=depth)


class TestCatalogConfig:
    """CatalogConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = CatalogConfig()
        assert config.locale is None
        assert config.strict is False

    def test_blank_locale(self) -> None:
        with pytest.raises(ValueError, match="locale must be None"):
            CatalogConfig(locale="  ")

    def test_negative_size(self) -> None:
        with pytest.raises(ValueError, match="max_source_size must be >= 0"):
            CatalogConfig(max_source_size=-1)

    def test_invalid_nesting_depth(self) -> None:
        with pytest.raises(ValueError, match="max_nesting_depth must be >= 1"):
            CatalogConfig(max_nesting_depth=0)

    def test_hashable(self) -> None:
        assert hash(CatalogConfig(locale="en-US")) == hash(CatalogConfig(locale="en-US"))

"""Tests for the message resource parser.

Covers entries (messages, attributes, comments), patterns with indented
continuation lines, select expressions, and Junk recovery.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from mabel.enums import CommentType
from mabel.syntax import (
    Annotation,
    CatalogParser,
    Comment,
    Identifier,
    Junk,
    Message,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    TextElement,
    VariableReference,
)


def _parse(source: str) -> tuple[object, ...]:
    return CatalogParser().parse(source).entries


def _only_message(source: str) -> Message:
    entries = _parse(source)
    assert len(entries) == 1, entries
    entry = entries[0]
    assert isinstance(entry, Message), entry
    return entry


def _value(source: str) -> Pattern:
    message = _only_message(source)
    assert message.value is not None
    return message.value


def _only_junk(source: str) -> Junk:
    junk = CatalogParser().parse(source).junk
    assert len(junk) == 1
    return junk[0]


# ============================================================================
# MESSAGES
# ============================================================================


class TestMessages:
    """Simple messages and placeables."""

    def test_simple_message(self) -> None:
        message = _only_message("hello = World")
        assert message.id == Identifier("hello")
        assert message.value == Pattern(elements=(TextElement("World"),))
        assert message.attributes == ()

    def test_variable_placeable(self) -> None:
        assert _value("greet = Hello, { $name }!").elements == (
            TextElement("Hello, "),
            Placeable(VariableReference(Identifier("name"))),
            TextElement("!"),
        )

    def test_identifier_with_dashes_and_underscores(self) -> None:
        message = _only_message("lexer-error_x1 = { $show_count }")
        assert message.id.name == "lexer-error_x1"

    def test_string_literal_placeable(self) -> None:
        assert _value('brace = { "{" }').elements == (Placeable(StringLiteral("{")),)

    def test_string_literal_unicode_escapes(self) -> None:
        assert _value('m = { "\\u0041\\U01F600" }').elements == (
            Placeable(StringLiteral("A\U0001f600")),
        )

    def test_number_literal_placeables(self) -> None:
        assert _value("m = { 42 }").elements == (Placeable(NumberLiteral(42, "42")),)
        assert _value("m = { -1.5 }").elements == (
            Placeable(NumberLiteral(Decimal("-1.5"), "-1.5")),
        )

    def test_nested_placeable(self) -> None:
        inner = Placeable(VariableReference(Identifier("x")))
        assert _value("m = { { $x } }").elements == (Placeable(inner),)

    def test_brackets_in_top_level_text_are_literal(self) -> None:
        assert _value("m = [INFO] ready").elements == (TextElement("[INFO] ready"),)

    def test_trailing_spaces_trimmed(self) -> None:
        assert _value("m =    padded   ").elements == (TextElement("padded"),)

    def test_crlf_line_endings(self) -> None:
        entries = _parse("a = x\r\nb = y\r\n")
        assert [e.id.name for e in entries if isinstance(e, Message)] == ["a", "b"]
        first = entries[0]
        assert isinstance(first, Message)
        assert first.value == Pattern(elements=(TextElement("x"),))

    def test_span_covers_message(self) -> None:
        message = _only_message("hello = World")
        assert message.span is not None
        assert (message.span.start, message.span.end) == (0, 13)


# ============================================================================
# MULTILINE PATTERNS AND ATTRIBUTES
# ============================================================================


class TestMultiline:
    """Indented continuation lines and attributes."""

    def test_continuation_lines_joined_with_newline(self) -> None:
        assert _value("m =\n    line one\n    line two").elements == (
            TextElement("line one\nline two"),
        )

    def test_blank_line_inside_pattern_preserved(self) -> None:
        assert _value("m =\n    a\n\n    b").elements == (TextElement("a\n\nb"),)

    def test_unindented_line_ends_pattern(self) -> None:
        entries = _parse("m = a\nn = b")
        assert len(entries) == 2

    def test_attributes_without_value(self) -> None:
        message = _only_message(
            "utils-source-code-read-error =\n"
            "    .not-found = The path { $path } does not exist.\n"
            "    .generic = Failed.\n"
        )
        assert message.value is None
        assert [a.id.name for a in message.attributes] == ["not-found", "generic"]
        not_found = message.get_attribute("not-found")
        assert not_found is not None
        assert not_found.value.elements[1] == Placeable(VariableReference(Identifier("path")))

    def test_value_and_attribute(self) -> None:
        message = _only_message("m = Value\n    .extra = Extra")
        assert message.value == Pattern(elements=(TextElement("Value"),))
        assert message.get_attribute("extra") is not None
        assert message.get_attribute("missing") is None

    def test_attribute_lookup_last_wins(self) -> None:
        message = _only_message("m =\n    .a = first\n    .a = second")
        attribute = message.get_attribute("a")
        assert attribute is not None
        assert attribute.value.elements == (TextElement("second"),)


# ============================================================================
# SELECT EXPRESSIONS
# ============================================================================


class TestSelectExpressions:
    """Variants, default markers and nesting."""

    SOURCE = "items = { $n ->\n    [one] one item\n   *[other] { $n } items\n}\n"

    def _select(self, source: str) -> SelectExpression:
        elements = _value(source).elements
        assert len(elements) == 1
        placeable = elements[0]
        assert isinstance(placeable, Placeable)
        assert isinstance(placeable.expression, SelectExpression)
        return placeable.expression

    def test_variants(self) -> None:
        select = self._select(self.SOURCE)
        assert select.selector == VariableReference(Identifier("n"))
        assert [v.key for v in select.variants] == [Identifier("one"), Identifier("other")]
        assert select.default_variant.key == Identifier("other")
        assert select.variants[0].value.elements == (TextElement("one item"),)
        assert select.variants[1].value.elements == (
            Placeable(VariableReference(Identifier("n"))),
            TextElement(" items"),
        )

    def test_numeric_variant_key(self) -> None:
        select = self._select("m = { $n ->\n    [0] none\n   *[other] some\n}")
        assert select.variants[0].key == NumberLiteral(0, "0")

    def test_nested_select(self) -> None:
        source = (
            "m =\n"
            "    { $count ->\n"
            "        [one]\n"
            "            { $capitalization ->\n"
            "                [uppercase] An operator\n"
            "               *[lowercase] an operator\n"
            "            }\n"
            "       *[other] operators\n"
            "    }\n"
        )
        outer = self._select(source)
        one = outer.variants[0].value.elements
        assert len(one) == 1
        assert isinstance(one[0], Placeable)
        inner = one[0].expression
        assert isinstance(inner, SelectExpression)
        assert inner.default_variant.value.elements == (TextElement("an operator"),)

    def test_missing_default_is_junk(self) -> None:
        junk = _only_junk("m = { $x ->\n    [a] A\n}\n")
        assert "exactly one default variant" in junk.annotations[0].message

    def test_two_defaults_is_junk(self) -> None:
        junk = _only_junk("m = { $x ->\n   *[a] A\n   *[b] B\n}\n")
        assert "found 2" in junk.annotations[0].message

    def test_empty_variant_pattern_is_junk(self) -> None:
        _only_junk("m = { $x ->\n   *[a]\n}\n")

    def test_placeable_selector_rejected(self) -> None:
        junk = _only_junk("m = { { $x } ->\n   *[a] A\n}\n")
        assert "cannot be used as a selector" in junk.annotations[0].message


# ============================================================================
# COMMENTS
# ============================================================================


class TestComments:
    """Comment levels, merging and attachment."""

    def test_adjacent_comment_attached_to_message(self) -> None:
        message = _only_message("# first\n# second\nmsg = x")
        assert message.comment is not None
        assert message.comment.content == "first\nsecond"
        assert message.comment.type is CommentType.COMMENT

    def test_detached_comment_stands_alone(self) -> None:
        entries = _parse("# standalone\n\nmsg = x")
        assert isinstance(entries[0], Comment)
        assert isinstance(entries[1], Message)
        assert entries[1].comment is None

    @pytest.mark.parametrize(
        ("source", "comment_type"),
        [("## Group", CommentType.GROUP), ("### Resource", CommentType.RESOURCE)],
    )
    def test_comment_levels(self, source: str, comment_type: CommentType) -> None:
        entries = _parse(f"{source}\nmsg = x")
        assert isinstance(entries[0], Comment)
        assert entries[0].type is comment_type
        assert isinstance(entries[1], Message)
        assert entries[1].comment is None

    def test_different_levels_not_merged(self) -> None:
        entries = _parse("### A\n## B\n")
        assert [e.type for e in entries if isinstance(e, Comment)] == [
            CommentType.RESOURCE,
            CommentType.GROUP,
        ]

    def test_empty_comment_line(self) -> None:
        entries = _parse("#\n")
        assert entries == (Comment(content="", type=CommentType.COMMENT, span=entries[0].span),)

    def test_hash_without_space_is_junk(self) -> None:
        _only_junk("#notacomment\n")


# ============================================================================
# JUNK RECOVERY
# ============================================================================


class TestJunk:
    """Invalid entries become annotated Junk; parsing continues."""

    def test_missing_equals(self) -> None:
        resource = CatalogParser().parse("hello World\nok = Fine")
        junk, message = resource.entries
        assert isinstance(junk, Junk)
        assert junk.content == "hello World\n"
        assert junk.annotations == (
            Annotation(
                code="PARSE_JUNK",
                message="1:7: Expected '=' after message identifier (expected: '=')",
                span=junk.annotations[0].span,
            ),
        )
        assert isinstance(message, Message)
        assert message.id.name == "ok"

    def test_invalid_entry_start(self) -> None:
        junk = _only_junk("!!!\n")
        assert junk.annotations[0].message == "1:1: Expected an entry start (message or comment)"

    def test_junk_swallows_indented_lines(self) -> None:
        resource = CatalogParser().parse("!!!\n  more junk\nok = fine")
        assert len(resource.junk) == 1
        assert resource.junk[0].content == "!!!\n  more junk\n"
        assert [m.id.name for m in resource.messages] == ["ok"]

    def test_unbalanced_closing_brace(self) -> None:
        junk = _only_junk("m = a } b")
        assert "Unbalanced closing brace" in junk.annotations[0].message

    def test_unterminated_placeable(self) -> None:
        junk = _only_junk("m = { $x")
        assert "'}'" in junk.annotations[0].message

    def test_message_without_value_or_attributes(self) -> None:
        junk = _only_junk("m =\n")
        assert "neither a value nor attributes" in junk.annotations[0].message

    def test_attribute_without_value(self) -> None:
        junk = _only_junk("m = x\n    .a =\n")
        assert "Attribute 'a' has no value" in junk.annotations[0].message

    def test_invalid_string_escape(self) -> None:
        _only_junk('m = { "\\uD800" }')


# ============================================================================
# LIMITS
# ============================================================================


class TestLimits:
    """Size and nesting limits."""

    def test_source_size_limit(self) -> None:
        with pytest.raises(ValueError, match="exceeds maximum"):
            CatalogParser(max_source_size=5).parse("hello = x")

    def test_nesting_depth_limit(self) -> None:
        parser = CatalogParser(max_nesting_depth=2)
        junk = parser.parse("m = { { { $x } } }").junk
        assert len(junk) == 1
        assert "Maximum nesting depth (2) exceeded" in junk[0].annotations[0].message

    def test_nesting_within_limit(self) -> None:
        parser = CatalogParser(max_nesting_depth=2)
        assert len(parser.parse("m = { { $x } }").messages) == 1

    def test_default_limits(self) -> None:
        parser = CatalogParser()
        assert parser.max_source_size > 0
        assert parser.max_nesting_depth > 0

"""Grammar rules for message resources.

Every rule takes an immutable Cursor and returns ``ParseResult[T] | None``.
On failure the rule records a ParseError on the shared ParseContext so the
resource parser can annotate the resulting Junk entry.

Grammar (Fluent subset):
    Message          ::= Identifier blank_inline? "=" blank_inline? Pattern? Attribute*
    Attribute        ::= line_end blank? "." Identifier blank_inline? "=" blank_inline? Pattern
    Pattern          ::= (TextElement | Placeable | indented continuation)+
    Placeable        ::= "{" blank? (SelectExpression | InlineExpression) blank? "}"
    SelectExpression ::= InlineExpression blank? "->" blank? Variant+
    Variant          ::= line_end? blank? "*"? "[" blank_inline? VariantKey blank_inline? "]" Pattern
    InlineExpression ::= VariableReference | StringLiteral | NumberLiteral | Placeable
"""

from dataclasses import dataclass, field

from mabel.constants import MAX_DEPTH
from mabel.enums import CommentType
from mabel.syntax.ast import (
    Attribute,
    Comment,
    Identifier,
    InlineExpression,
    Message,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    SelectExpression,
    Span,
    StringLiteral,
    TextElement,
    VariableReference,
    Variant,
)
from mabel.syntax.cursor import Cursor, ParseError, ParseResult
from mabel.syntax.parser.primitives import (
    _ASCII_DIGITS,
    is_identifier_char,
    is_identifier_start,
    parse_identifier,
    parse_number,
    parse_string_literal,
)

__all__ = [
    "ParseContext",
    "parse_attribute",
    "parse_comment",
    "parse_message",
    "parse_pattern",
    "parse_placeable",
    "parse_select_expression",
    "parse_variant",
]

# Variant keys are short identifiers or numbers; bounded lookahead keeps
# inputs like "[[[[..." linear.
_MAX_VARIANT_LOOKAHEAD = 128


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Attributes:
        max_nesting_depth: Maximum allowed nesting depth for placeables
        current_depth: Current nesting depth (0 = top level)
        failures: Parse errors recorded by rules, shared by nested contexts
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    failures: list[ParseError] = field(default_factory=list)

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been exceeded."""
        return self.current_depth >= self.max_nesting_depth

    def enter_placeable(self) -> "ParseContext":
        """Create new context with incremented depth for entering a placeable."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            failures=self.failures,
        )

    def fail(self, message: str, cursor: Cursor, expected: tuple[str, ...] = ()) -> None:
        """Record a parse failure and return None for the calling rule."""
        self.failures.append(ParseError(message, cursor, expected))

    @property
    def last_failure(self) -> ParseError | None:
        return self.failures[-1] if self.failures else None


# =============================================================================
# Pattern Parsing
# =============================================================================


def _is_variant_marker(cursor: Cursor) -> bool:
    """Check if cursor is at ``[key]`` or ``*[key]`` using bounded lookahead.

    ``[INFO] text`` and ``3 * 5`` stay literal text: a bracket only starts
    a variant when it encloses a valid key and nothing but spaces follows
    on the same line before a newline, ``}``, ``[`` or ``*``.
    """
    if cursor.is_eof:
        return False

    if cursor.current == "*":
        return cursor.peek(1) == "["

    if cursor.current != "[":
        return False

    scan = cursor.advance().skip_spaces()
    has_content = False
    for _ in range(_MAX_VARIANT_LOOKAHEAD):
        if scan.is_eof:
            return False
        c = scan.current
        if c == "]":
            if not has_content:
                return False
            after = scan.advance().skip_spaces()
            return after.is_eof or after.current in ("\n", "}", "[", "*")
        if c == " ":
            scan = scan.skip_spaces()
            if scan.is_eof or scan.current != "]":
                return False
            continue
        valid = (
            is_identifier_start(c) or c in _ASCII_DIGITS or c == "-"
            if not has_content
            else is_identifier_char(c) or c == "."
        )
        if not valid:
            return False
        has_content = True
        scan = scan.advance()

    return False


def _continuation(cursor: Cursor) -> tuple[Cursor, int] | None:
    """Check whether the line after ``cursor`` (at a newline) continues the pattern.

    Continuation lines are indented with at least one space and do not start
    with ``[``, ``*``, ``.`` or ``}``. Blank lines in between are allowed.

    Returns:
        (cursor at the first non-space character of the continuation line,
        number of line breaks crossed), or None if the pattern ends here
    """
    breaks = 0
    line_start = cursor
    while not line_start.is_eof and line_start.current == "\n":
        line_start = line_start.advance()
        breaks += 1
        content = line_start.skip_spaces()
        if not content.is_eof and content.current == "\n":
            line_start = content
            continue
        if line_start.is_eof or line_start.current != " ":
            return None
        if content.is_eof or content.current in ("[", "*", ".", "}"):
            return None
        return content, breaks
    return None


def _append_text(elements: list[PatternElement], text: str) -> None:
    if not text:
        return
    if elements and isinstance(elements[-1], TextElement):
        elements[-1] = TextElement(value=elements[-1].value + text)
    else:
        elements.append(TextElement(value=text))


def _trim_pattern(elements: list[PatternElement]) -> tuple[PatternElement, ...]:
    """Strip leading blank space of the first and trailing blank space of the last text."""
    result = list(elements)
    if result and isinstance(result[0], TextElement):
        stripped = result[0].value.lstrip(" \n")
        if stripped:
            result[0] = TextElement(value=stripped)
        else:
            result.pop(0)
    if result and isinstance(result[-1], TextElement):
        stripped = result[-1].value.rstrip(" \n")
        if stripped:
            result[-1] = TextElement(value=stripped)
        else:
            result.pop()
    return tuple(result)


def parse_pattern(
    cursor: Cursor,
    context: ParseContext,
    *,
    in_variant: bool = False,
) -> ParseResult[Pattern] | None:
    """Parse pattern text and placeables, following indented continuation lines.

    Continuation lines lose their indentation and are joined with newlines.
    Inside a select expression (``in_variant``) the pattern also stops at
    ``}`` and at the next variant marker; at top level a bare ``}`` is an error.

    Examples:
        "Hello"  -> Pattern([TextElement("Hello")])
        "Hi { $name }"  -> Pattern([TextElement("Hi "), Placeable(...)])
        "[INFO] msg"  -> Pattern([TextElement("[INFO] msg")])
    """
    elements: list[PatternElement] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch == "\n":
            continuation = _continuation(cursor)
            if continuation is None:
                break
            cursor, breaks = continuation
            if elements:
                _append_text(elements, "\n" * breaks)
            continue

        if ch == "{":
            placeable_result = parse_placeable(cursor.advance(), context)
            if placeable_result is None:
                return None
            elements.append(placeable_result.value)
            cursor = placeable_result.cursor
            continue

        if ch == "}":
            if in_variant:
                break
            return context.fail("Unbalanced closing brace in pattern", cursor)

        if in_variant and ch in ("[", "*") and _is_variant_marker(cursor):
            break

        text_start = cursor
        while not cursor.is_eof and cursor.current not in ("{", "}", "\n"):
            if (
                in_variant
                and cursor.current in ("[", "*")
                and cursor.pos > text_start.pos
                and _is_variant_marker(cursor)
            ):
                break
            cursor = cursor.advance()
        _append_text(elements, text_start.slice_to(cursor.pos))

    return ParseResult(Pattern(elements=_trim_pattern(elements)), cursor)


# =============================================================================
# Expression Parsing
# =============================================================================


def parse_variable_reference(cursor: Cursor) -> ParseResult[VariableReference] | None:
    """Parse variable reference: $variable"""
    if cursor.is_eof or cursor.current != "$":
        return None

    id_result = parse_identifier(cursor.advance())
    if id_result is None:
        return None
    return ParseResult(VariableReference(id=Identifier(id_result.value)), id_result.cursor)


def parse_inline_expression(
    cursor: Cursor,
    context: ParseContext,
) -> ParseResult[InlineExpression] | None:
    """Parse the expression inside a placeable (before any ``->``)."""
    if cursor.is_eof:
        return context.fail("Expected an expression but found end of input", cursor)

    ch = cursor.current

    if ch == "$":
        var_result = parse_variable_reference(cursor)
        if var_result is None:
            return context.fail("Expected a variable name after '$'", cursor)
        return ParseResult(var_result.value, var_result.cursor)

    if ch == '"':
        str_result = parse_string_literal(cursor)
        if str_result is None:
            return context.fail("Invalid or unterminated string literal", cursor, ('"',))
        return ParseResult(StringLiteral(value=str_result.value), str_result.cursor)

    if ch in _ASCII_DIGITS or ch == "-":
        num_result = parse_number(cursor)
        if num_result is None:
            return context.fail("Invalid number literal", cursor)
        return ParseResult(num_result.value, num_result.cursor)

    if ch == "{":
        nested = parse_placeable(cursor.advance(), context)
        if nested is None:
            return None
        return ParseResult(nested.value, nested.cursor)

    return context.fail("Expected a variable, literal or placeable", cursor, ("$", '"', "{"))


def parse_variant_key(cursor: Cursor) -> ParseResult[Identifier | NumberLiteral] | None:
    """Parse variant key (number or identifier)."""
    if not cursor.is_eof and (cursor.current in _ASCII_DIGITS or cursor.current == "-"):
        num_result = parse_number(cursor)
        if num_result is not None:
            return ParseResult(num_result.value, num_result.cursor)

    id_result = parse_identifier(cursor)
    if id_result is None:
        return None
    return ParseResult(Identifier(id_result.value), id_result.cursor)


def parse_variant(
    cursor: Cursor,
    context: ParseContext,
) -> ParseResult[Variant] | None:
    """Parse variant: ``[key] pattern`` or ``*[key] pattern``

    Examples:
        [one] an operator
        *[other] operators
    """
    is_default = False
    if not cursor.is_eof and cursor.current == "*":
        is_default = True
        cursor = cursor.advance()

    bracket = cursor.expect("[")
    if bracket is None:
        return context.fail("Expected '[' at start of variant", cursor, ("[", "*["))
    cursor = bracket.skip_spaces()

    key_result = parse_variant_key(cursor)
    if key_result is None:
        return context.fail("Expected variant key (identifier or number)", cursor)
    cursor = key_result.cursor.skip_spaces()

    close = cursor.expect("]")
    if close is None:
        return context.fail("Expected ']' after variant key", cursor, ("]",))
    cursor = close.skip_spaces()

    pattern_result = parse_pattern(cursor, context, in_variant=True)
    if pattern_result is None:
        return None
    if not pattern_result.value.elements:
        return context.fail("Expected a pattern for variant", cursor)

    variant = Variant(key=key_result.value, value=pattern_result.value, default=is_default)
    return ParseResult(variant, pattern_result.cursor)


def parse_select_expression(
    cursor: Cursor,
    selector: InlineExpression,
    context: ParseContext,
) -> ParseResult[SelectExpression] | None:
    """Parse the variant list of a select expression.

    The selector and ``->`` have already been consumed. Returns with the
    cursor at the closing ``}`` (not consumed).
    """
    variants: list[Variant] = []

    while True:
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            return context.fail("Unterminated select expression", cursor, ("}",))
        if cursor.current == "}":
            break

        variant_result = parse_variant(cursor, context)
        if variant_result is None:
            return None
        variants.append(variant_result.value)
        cursor = variant_result.cursor

    if not variants:
        return context.fail("Select expression must have at least one variant", cursor)

    default_count = sum(1 for v in variants if v.default)
    if default_count != 1:
        return context.fail(
            f"Select expression must have exactly one default variant, found {default_count}",
            cursor,
            ("*[",),
        )

    return ParseResult(SelectExpression(selector=selector, variants=tuple(variants)), cursor)


def parse_placeable(
    cursor: Cursor,
    context: ParseContext,
) -> ParseResult[Placeable] | None:
    """Parse placeable after its opening ``{``.

    Handles ``{ $var }``, ``{ "text" }``, ``{ 42 }``, ``{ { $nested } }`` and
    ``{ $var -> [key] pattern *[other] pattern }``.

    Security:
        Enforces the context nesting depth so adversarial ``{ { { ...``
        input cannot exhaust the interpreter stack.
    """
    if context.is_depth_exceeded():
        return context.fail(
            f"Maximum nesting depth ({context.max_nesting_depth}) exceeded", cursor
        )
    nested_context = context.enter_placeable()

    cursor = cursor.skip_whitespace()
    expr_result = parse_inline_expression(cursor, nested_context)
    if expr_result is None:
        return None

    expression: InlineExpression | SelectExpression = expr_result.value
    cursor = expr_result.cursor.skip_whitespace()

    if cursor.slice_ahead(2) == "->":
        if isinstance(expression, Placeable):
            return context.fail("A placeable cannot be used as a selector", cursor)
        select_result = parse_select_expression(cursor.advance(2), expression, nested_context)
        if select_result is None:
            return None
        expression = select_result.value
        cursor = select_result.cursor.skip_whitespace()

    close = cursor.expect("}")
    if close is None:
        return context.fail("Expected '}' to close placeable", cursor, ("}",))
    return ParseResult(Placeable(expression=expression), close)


# =============================================================================
# Entry Parsing
# =============================================================================


def _attribute_start(cursor: Cursor) -> Cursor | None:
    """Return a cursor at the ``.`` of an attribute on a following line, if any."""
    if cursor.is_eof or cursor.current != "\n":
        return None
    scan = cursor.skip_whitespace()
    if scan.is_eof or scan.current != ".":
        return None
    return scan


def parse_attribute(
    cursor: Cursor,
    context: ParseContext,
) -> ParseResult[Attribute] | None:
    """Parse attribute: ``.name = pattern``"""
    start = cursor.pos
    dot = cursor.expect(".")
    if dot is None:
        return context.fail("Expected '.' at start of attribute", cursor, (".",))

    id_result = parse_identifier(dot)
    if id_result is None:
        return context.fail("Expected attribute name after '.'", dot)

    cursor = id_result.cursor.skip_spaces()
    equals = cursor.expect("=")
    if equals is None:
        return context.fail("Expected '=' after attribute name", cursor, ("=",))

    pattern_result = parse_pattern(equals.skip_spaces(), context)
    if pattern_result is None:
        return None
    if not pattern_result.value.elements:
        return context.fail(f"Attribute '{id_result.value}' has no value", equals)

    attribute = Attribute(
        id=Identifier(id_result.value),
        value=pattern_result.value,
        span=Span(start=start, end=pattern_result.cursor.pos),
    )
    return ParseResult(attribute, pattern_result.cursor)


def parse_message(
    cursor: Cursor,
    context: ParseContext,
) -> ParseResult[Message] | None:
    """Parse message: ``id = pattern`` followed by optional attributes.

    Example:
        utils-source-code-read-error =
            .not-found = The path { $path } does not exist.
    """
    start = cursor.pos
    id_result = parse_identifier(cursor)
    if id_result is None:
        return context.fail("Expected message identifier", cursor, ("a-z", "A-Z"))

    cursor = id_result.cursor.skip_spaces()
    equals = cursor.expect("=")
    if equals is None:
        return context.fail("Expected '=' after message identifier", cursor, ("=",))

    pattern_result = parse_pattern(equals.skip_spaces(), context)
    if pattern_result is None:
        return None
    cursor = pattern_result.cursor
    value = pattern_result.value if pattern_result.value.elements else None

    attributes: list[Attribute] = []
    while (attribute_cursor := _attribute_start(cursor)) is not None:
        attribute_result = parse_attribute(attribute_cursor, context)
        if attribute_result is None:
            return None
        attributes.append(attribute_result.value)
        cursor = attribute_result.cursor

    if value is None and not attributes:
        return context.fail(
            f"Message '{id_result.value}' has neither a value nor attributes", cursor
        )

    message = Message(
        id=Identifier(id_result.value),
        value=value,
        attributes=tuple(attributes),
        span=Span(start=start, end=cursor.pos),
    )
    return ParseResult(message, cursor)


def parse_comment(cursor: Cursor) -> ParseResult[Comment] | None:
    """Parse a single comment line: ``#``, ``##`` or ``###`` then a space or line end."""
    start = cursor.pos
    hashes = 0
    while hashes < 3 and not cursor.is_eof and cursor.current == "#":
        hashes += 1
        cursor = cursor.advance()

    if not cursor.is_eof and cursor.current not in (" ", "\n"):
        return None

    if not cursor.is_eof and cursor.current == " ":
        cursor = cursor.advance()

    content_start = cursor
    cursor = cursor.skip_to_line_end()
    comment_type = (CommentType.COMMENT, CommentType.GROUP, CommentType.RESOURCE)[hashes - 1]
    comment = Comment(
        content=content_start.slice_to(cursor.pos),
        type=comment_type,
        span=Span(start=start, end=cursor.pos),
    )
    return ParseResult(comment, cursor)

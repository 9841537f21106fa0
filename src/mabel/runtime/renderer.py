"""Diagnostic renderer - turns catalog templates into text.

Walks the template tree of a message: text is emitted verbatim, variables
are formatted from the render context, and select expressions pick one
variant per discriminant (count, show_count, capitalization, show_value).

Python 3.13+. Zero external dependencies.

Thread Safety:
    Rendering state lives in an explicit RenderContext created per call,
    so one renderer can serve any number of threads.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from mabel.config import RendererConfig
from mabel.constants import FSI, PDI
from mabel.diagnostics.codes import Diagnostic
from mabel.diagnostics.errors import MessageNotFoundError, MissingVariableError, RenderDepthError
from mabel.runtime.catalog import MessageCatalog
from mabel.runtime.plural_rules import PluralSelector, three_bucket_category
from mabel.syntax.ast import (
    Expression,
    Identifier,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    TextElement,
    VariableReference,
    Variant,
)

__all__ = ["DiagnosticRenderer", "RenderContext", "format_value"]


@dataclass(slots=True)
class RenderContext:
    """Explicit per-call rendering state.

    Attributes:
        message_id: Id being rendered, for error reporting
        args: Variables available to the template
        max_depth: Maximum template nesting depth
        depth: Current nesting depth
    """

    message_id: str
    args: Mapping[str, object]
    max_depth: int
    depth: int = 0

    def enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise RenderDepthError(self.message_id, self.max_depth)

    def leave(self) -> None:
        self.depth -= 1


def format_value(value: object) -> str:
    """Format a context value for interpolation.

    - str: returned as-is
    - bool: "true"/"false"
    - Enum: its value
    - list/tuple: items formatted and joined with ", "
    - anything else (int, Decimal, float): str()

    Example:
        >>> format_value([8, 16, 32, 64])
        '8, 16, 32, 64'
        >>> format_value(False)
        'false'
    """
    if isinstance(value, str):
        return value
    # bool before Enum/int: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_value(value.value)
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(item) for item in value)
    return str(value)


class DiagnosticRenderer:
    """Renders catalog messages with a render context.

    Rendering is pure: the same catalog, message id and context always
    produce the same text. Only two failures are possible, both programming
    errors: an unknown message (MessageNotFoundError) and a variable that is
    missing on the evaluated path (MissingVariableError).

    Example:
        >>> catalog = MessageCatalog.from_source("greet = Hello, { $name }!")
        >>> renderer = DiagnosticRenderer(catalog, RendererConfig(use_isolating=False))
        >>> renderer.render("greet", {"name": "world"})
        'Hello, world!'
    """

    __slots__ = ("_catalog", "_config", "_plural_selector")

    def __init__(
        self,
        catalog: MessageCatalog,
        config: RendererConfig | None = None,
        *,
        plural_selector: PluralSelector = three_bucket_category,
    ) -> None:
        self._catalog = catalog
        self._config = config or RendererConfig()
        self._plural_selector = plural_selector

    @property
    def catalog(self) -> MessageCatalog:
        return self._catalog

    @property
    def config(self) -> RendererConfig:
        return self._config

    def has_message(self, message_id: str) -> bool:
        """Check if ``message_id`` (``id`` or ``id.attribute``) has a renderable pattern."""
        try:
            self._lookup(message_id)
        except MessageNotFoundError:
            return False
        return True

    def render(self, message_id: str, context: Mapping[str, object] | None = None) -> str:
        """Render a message or message attribute.

        Args:
            message_id: ``id`` or ``id.attribute``
            context: Variables referenced by the template

        Raises:
            MessageNotFoundError: Unknown id or attribute, or a message without a value
            MissingVariableError: A variable on the evaluated path is not in context
            RenderDepthError: Template nesting exceeds ``config.max_depth``
        """
        pattern = self._lookup(message_id)
        render_context = RenderContext(
            message_id=message_id,
            args=context or {},
            max_depth=self._config.max_depth,
        )
        return self._render_pattern(pattern, render_context)

    def render_diagnostic(self, diagnostic: Diagnostic) -> str:
        """Render a Diagnostic using its message id and contextual flags."""
        return self.render(diagnostic.message_id, diagnostic.context())

    def _lookup(self, message_id: str) -> Pattern:
        base_id, _, attribute_name = message_id.partition(".")
        message = self._catalog.get_message(base_id)
        if message is None:
            raise MessageNotFoundError(message_id)

        if attribute_name:
            attribute = message.get_attribute(attribute_name)
            if attribute is None:
                raise MessageNotFoundError(message_id, f"has no attribute '{attribute_name}'")
            return attribute.value

        if message.value is None:
            raise MessageNotFoundError(message_id, "has no value")
        return message.value

    def _render_pattern(self, pattern: Pattern, context: RenderContext) -> str:
        context.enter()
        try:
            isolate = self._config.use_isolating and len(pattern.elements) > 1
            parts: list[str] = []
            for element in pattern.elements:
                match element:
                    case TextElement():
                        parts.append(element.value)
                    case Placeable():
                        formatted = format_value(self._evaluate(element.expression, context))
                        if isolate and not isinstance(element.expression, StringLiteral):
                            parts.append(f"{FSI}{formatted}{PDI}")
                        else:
                            parts.append(formatted)
            return "".join(parts)
        finally:
            context.leave()

    def _evaluate(self, expression: Expression, context: RenderContext) -> object:
        match expression:
            case SelectExpression():
                return self._render_select(expression, context)
            case VariableReference():
                name = expression.id.name
                if name not in context.args:
                    raise MissingVariableError(context.message_id, name)
                return context.args[name]
            case StringLiteral():
                return expression.value
            case NumberLiteral():
                return expression.value
            case Placeable():
                context.enter()
                try:
                    return format_value(self._evaluate(expression.expression, context))
                finally:
                    context.leave()
            case _:
                msg = f"Unknown expression type: {type(expression).__name__}"
                raise TypeError(msg)

    def _render_select(self, expression: SelectExpression, context: RenderContext) -> str:
        """Resolve a select expression.

        Matching priority:
            1. Exact match (identifier name or numeric value)
            2. Plural bucket, for integer and decimal selectors
            3. Default variant
        """
        selector = self._evaluate(expression.selector, context)
        variant = (
            self._find_exact_variant(expression.variants, selector)
            or self._find_plural_variant(expression.variants, selector)
            or expression.default_variant
        )
        return self._render_pattern(variant.value, context)

    @staticmethod
    def _find_exact_variant(variants: Sequence[Variant], selector: object) -> Variant | None:
        selector_str = format_value(selector)
        is_number = isinstance(selector, (int, float, Decimal)) and not isinstance(selector, bool)
        for variant in variants:
            match variant.key:
                case Identifier(name=key_name):
                    if key_name == selector_str:
                        return variant
                case NumberLiteral(value=key_value):
                    if is_number and key_value == selector:
                        return variant
        return None

    def _find_plural_variant(self, variants: Sequence[Variant], selector: object) -> Variant | None:
        if isinstance(selector, bool) or not isinstance(selector, (int, float, Decimal)):
            return None
        category = self._plural_selector(selector)
        for variant in variants:
            if Identifier.guard(variant.key) and variant.key.name == category:
                return variant
        return None

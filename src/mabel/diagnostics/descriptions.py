"""Human readable descriptions of token kinds and data types.

Descriptions are catalog messages selected on count, show_count,
capitalization and show_value, e.g.::

    describe_data_type(renderer, UINT8)                      -> "an 8-bit unsigned integer"
    describe_data_type(renderer, INT8, count=0)              -> "no 8-bit integer"
    describe_token_kind(renderer, TokenKind.OPERATOR, count=3,
                        show_count=True)                     -> "3 operators"

Example values are JSON-quoted before interpolation.
"""

import json

from mabel.compiler.data_type import DataType
from mabel.enums import Capitalization, TokenKind
from mabel.lexer.tokens import Token
from mabel.runtime.renderer import DiagnosticRenderer

__all__ = ["describe_data_type", "describe_token", "describe_token_kind"]


def _description_context(
    count: int,
    capitalization: Capitalization,
    value: str | None,
    show_count: bool,
    show_value: bool,
) -> dict[str, object]:
    if count < 0:
        msg = f"count must be >= 0, got {count}"
        raise ValueError(msg)
    context: dict[str, object] = {
        "count": count,
        "capitalization": capitalization,
        "show_count": show_count,
        "show_value": show_value,
    }
    if value is not None:
        context["value"] = json.dumps(value, ensure_ascii=False)
    return context


def describe_token_kind(
    renderer: DiagnosticRenderer,
    kind: TokenKind,
    *,
    count: int = 1,
    capitalization: Capitalization = Capitalization.LOWER,
    value: str | None = None,
    show_count: bool = False,
    show_value: bool | None = None,
) -> str:
    """Describe a token kind ("an integer literal", "3 operators", ...).

    Token kinds have no zero case: a count of 0 reads like any other plural.

    Args:
        renderer: Renderer over a catalog with ``token-description-*`` messages
        kind: Token kind to describe
        count: Number of tokens
        capitalization: Capitalization of the first word
        value: Example lexeme, shown only when ``show_value`` holds and count is 1
        show_count: Print the number instead of a word form (count other than 1)
        show_value: Defaults to ``value is not None``
    """
    if show_value is None:
        show_value = value is not None
    context = _description_context(count, capitalization, value, show_count, show_value)
    return renderer.render(kind.description_id, context)


def describe_token(
    renderer: DiagnosticRenderer,
    token: Token,
    *,
    count: int = 1,
    capitalization: Capitalization = Capitalization.LOWER,
    value: str | None = None,
    show_count: bool = False,
    show_value: bool = False,
) -> str:
    """Describe a token; the example value defaults to the token's lexeme."""
    return describe_token_kind(
        renderer,
        token.kind,
        count=count,
        capitalization=capitalization,
        value=token.lexeme if value is None else value,
        show_count=show_count,
        show_value=show_value,
    )


def describe_data_type(
    renderer: DiagnosticRenderer,
    data_type: DataType,
    *,
    count: int = 1,
    capitalization: Capitalization = Capitalization.LOWER,
    value: str | None = None,
    show_count: bool = False,
) -> str:
    """Describe a data type ("an 8-bit unsigned integer", "no 8-bit integer", ...).

    The value is shown whenever one is given (at count 1).
    """
    context = _description_context(count, capitalization, value, show_count, value is not None)
    return renderer.render(data_type.description_id, context)

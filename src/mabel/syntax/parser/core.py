"""Message resource parser.

CatalogParser turns the text of a ``.ftl`` resource into a Resource of
Message, Comment and Junk entries. Parsing never stops at the first error:
an invalid entry becomes Junk (annotated with the recorded failure) and
parsing resumes at the next line that can start an entry.

Security:
    Input size and placeable nesting depth are both bounded so a hostile
    catalog cannot exhaust memory or the interpreter stack.
"""

import logging

from mabel.constants import MAX_CATALOG_SIZE, MAX_DEPTH
from mabel.diagnostics.codes import DiagnosticCode
from mabel.enums import CommentType
from mabel.syntax.ast import Annotation, Comment, Entry, Junk, Message, Resource, Span
from mabel.syntax.cursor import Cursor
from mabel.syntax.parser.primitives import is_identifier_start
from mabel.syntax.parser.rules import ParseContext, parse_comment, parse_message

__all__ = ["CatalogParser"]

logger = logging.getLogger(__name__)


def _is_adjacent(source: str, end: int, start: int) -> bool:
    """True when only a single line break separates ``end`` from ``start``."""
    return source[end:start].strip(" ") == "\n"


def _merge_comments(first: Comment, second: Comment) -> Comment:
    span = None
    if first.span is not None and second.span is not None:
        span = Span(start=first.span.start, end=second.span.end)
    return Comment(content=f"{first.content}\n{second.content}", type=first.type, span=span)


def _attach_comment(message: Message, comment: Comment) -> Message:
    return Message(
        id=message.id,
        value=message.value,
        attributes=message.attributes,
        comment=comment,
        span=message.span,
    )


class CatalogParser:
    """Parser for message resources (Fluent subset).

    Attributes:
        max_source_size: Maximum resource size in characters (0 disables the check)
        max_nesting_depth: Maximum placeable nesting depth

    Example:
        >>> resource = CatalogParser().parse("hello = World")
        >>> resource.entries[0].id.name
        'hello'
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_CATALOG_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        return self._max_nesting_depth

    def parse(self, source: str) -> Resource:
        """Parse resource text into a Resource.

        CRLF line endings are normalized to LF before parsing, so spans refer
        to the normalized text.

        Raises:
            ValueError: If source exceeds max_source_size
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Resource size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters)"
            )
            raise ValueError(msg)

        source = source.replace("\r\n", "\n")
        cursor = Cursor(source, 0)
        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        entries: list[Entry] = []

        pending_comment: Comment | None = None
        pending_end = 0

        while True:
            cursor = cursor.skip_whitespace()
            if cursor.is_eof:
                break

            if cursor.current == "#":
                comment_result = parse_comment(cursor)
                if comment_result is not None:
                    comment = comment_result.value
                    if (
                        pending_comment is not None
                        and pending_comment.type == comment.type
                        and _is_adjacent(source, pending_end, cursor.pos)
                    ):
                        pending_comment = _merge_comments(pending_comment, comment)
                    else:
                        if pending_comment is not None:
                            entries.append(pending_comment)
                        pending_comment = comment
                    pending_end = comment_result.cursor.pos
                    cursor = comment_result.cursor
                    continue

            attach: Comment | None = None
            if pending_comment is not None:
                if pending_comment.type == CommentType.COMMENT and _is_adjacent(
                    source, pending_end, cursor.pos
                ):
                    attach = pending_comment
                else:
                    entries.append(pending_comment)
                pending_comment = None

            failures_before = len(context.failures)
            message_result = (
                parse_message(cursor, context) if is_identifier_start(cursor.current) else None
            )

            if message_result is not None:
                message = message_result.value
                if attach is not None:
                    message = _attach_comment(message, attach)
                entries.append(message)
                cursor = message_result.cursor
                continue

            if attach is not None:
                entries.append(attach)

            junk_start = cursor.pos
            if len(context.failures) > failures_before:
                failure = context.failures[-1]
                error_pos = failure.cursor.pos
                description = failure.format_error()
            else:
                error_pos = junk_start
                line, col = cursor.compute_line_col()
                description = f"{line}:{col}: Expected an entry start (message or comment)"

            cursor = self._consume_junk_lines(cursor)
            annotation = Annotation(
                code=DiagnosticCode.PARSE_JUNK.name,
                message=description,
                span=Span(start=error_pos, end=error_pos),
            )
            entries.append(
                Junk(
                    content=source[junk_start : cursor.pos],
                    annotations=(annotation,),
                    span=Span(start=junk_start, end=cursor.pos),
                )
            )
            logger.debug("Junk at offset %d: %s", junk_start, description)

        if pending_comment is not None:
            entries.append(pending_comment)

        return Resource(entries=tuple(entries))

    def _consume_junk_lines(self, cursor: Cursor) -> Cursor:
        """Consume the failing line and every following line that cannot start an entry.

        Junk ends before a line starting with ``#`` or an ASCII letter.
        """
        cursor = cursor.skip_to_line_end().skip_line_end()

        while not cursor.is_eof:
            line_start = cursor
            cursor = cursor.skip_spaces()
            if cursor.is_eof:
                break
            if cursor.current == "#" or is_identifier_start(cursor.current):
                cursor = line_start
                break
            cursor = cursor.skip_to_line_end().skip_line_end()

        return cursor

"""Pull-based lexer.

The Lexer turns source text into tokens one ``next_token()`` call at a time.
It is a small state machine:

    START -> SCANNING -> (SUFFIX_SCAN) -> SCANNING ... -> AT_END
                 \\-> ERROR_RECOVERY --recover()--> SCANNING

AT_END is sticky: once EndOfInput has been produced every further call
returns the same EndOfInput token. After a lexical error the lexer stays in
ERROR_RECOVERY, re-raising the pending error, until the caller invokes
``recover()``.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from mabel.compiler.data_type import DEFAULT_REGISTRY, DataTypeRegistry
from mabel.config import LexerConfig
from mabel.diagnostics.codes import SourceSpan
from mabel.diagnostics.errors import (
    LexicalError,
    UnexpectedCharacterError,
    UnimplementedFeatureError,
)
from mabel.enums import LexerState, TokenKind
from mabel.lexer.numbers import classify_literal, scan_number_body, scan_suffix
from mabel.lexer.tokens import KEYWORDS, LiteralPayload, Position, Token, TokenSpan
from mabel.syntax.cursor import Cursor, LineOffsetCache

__all__ = ["LexResult", "Lexer", "tokenize"]

logger = logging.getLogger(__name__)

_DIGITS: str = "0123456789"

_PUNCTUATION: dict[str, TokenKind] = {
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
}

_SINGLE_CHAR_OPERATORS: str = "+-%"

_QUOTES: str = "\"'"

# Characters at which error recovery resumes scanning.
_RECOVERY_BOUNDARIES: frozenset[str] = frozenset(":;()+-*/%")


def _is_identifier_continue(ch: str) -> bool:
    return ("_" + ch).isidentifier()


class Lexer:
    """Lexer over a single source text.

    Example:
        >>> lexer = Lexer("echo 42i8", LexerConfig(preserve_trivia=False))
        >>> [t.kind.name for t in lexer]
        ['KEYWORD', 'INT_LITERAL', 'END_OF_INPUT']

    Iterating stops after EndOfInput. A lexical error propagates out of the
    iterator; call :meth:`recover` and iterate again to continue.

    Thread Safety:
        Not thread-safe. Use one lexer per thread; tokens are immutable and
        may be shared.
    """

    __slots__ = (
        "_config",
        "_cursor",
        "_eoi",
        "_lines",
        "_pending_error",
        "_registry",
        "_state",
    )

    def __init__(
        self,
        source: str,
        config: LexerConfig | None = None,
        *,
        registry: DataTypeRegistry = DEFAULT_REGISTRY,
    ) -> None:
        """Initialize the lexer.

        Raises:
            ValueError: If source exceeds config.max_source_size
        """
        self._config = config or LexerConfig()
        limit = self._config.max_source_size
        if limit > 0 and len(source) > limit:
            msg = f"Source size ({len(source):,} characters) exceeds maximum ({limit:,} characters)"
            raise ValueError(msg)

        self._cursor = Cursor(source, 0)
        self._lines = LineOffsetCache(source)
        self._registry = registry
        self._state = LexerState.START
        self._pending_error: LexicalError | None = None
        self._eoi: Token | None = None

    @property
    def state(self) -> LexerState:
        return self._state

    @property
    def source_id(self) -> str:
        return self._config.source_id

    @property
    def pending_error(self) -> LexicalError | None:
        """Error that put the lexer into ERROR_RECOVERY, if any."""
        return self._pending_error

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.is_end_of_input:
                return

    def next_token(self) -> Token:
        """Return the next token.

        Trivia tokens are skipped when ``config.preserve_trivia`` is False.

        Raises:
            LexicalError: On invalid input; the lexer enters ERROR_RECOVERY
                and raises the same error again until :meth:`recover` is called
        """
        if self._state is LexerState.AT_END and self._eoi is not None:
            return self._eoi
        if self._state is LexerState.ERROR_RECOVERY and self._pending_error is not None:
            raise self._pending_error

        while True:
            self._state = LexerState.SCANNING
            try:
                token = self._scan_token()
            except LexicalError as error:
                self._state = LexerState.ERROR_RECOVERY
                self._pending_error = error
                logger.debug("Lexical error at offset %d: %s", self._cursor.pos, error)
                raise

            if token.kind is TokenKind.END_OF_INPUT:
                self._state = LexerState.AT_END
                self._eoi = token
                return token
            if token.is_trivia and not self._config.preserve_trivia:
                continue
            return token

    def recover(self) -> bool:
        """Resynchronize after a lexical error.

        Skips the offending text up to the next whitespace, punctuation or
        operator character.

        Returns:
            True if scanning can continue, False if the pending error is not
            recoverable (the lexer stays halted in ERROR_RECOVERY)
        """
        if self._state is not LexerState.ERROR_RECOVERY or self._pending_error is None:
            return self._state is not LexerState.AT_END

        if not self._pending_error.recoverable:
            logger.debug("Lexer halted: %s", self._pending_error)
            return False

        cursor = self._cursor.advance()
        while (
            not cursor.is_eof
            and not cursor.current.isspace()
            and cursor.current not in _RECOVERY_BOUNDARIES
        ):
            cursor = cursor.advance()

        logger.debug(
            "Recovered from %s: skipped %r",
            type(self._pending_error).__name__,
            self._cursor.slice_to(cursor.pos),
        )
        self._cursor = cursor
        self._pending_error = None
        self._state = LexerState.SCANNING
        return True

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _position(self, offset: int) -> Position:
        line, column = self._lines.get_line_col(offset)
        return Position(line=line, column=column, offset=offset)

    def _source_span(self, start: int, end: int) -> SourceSpan:
        line, column = self._lines.get_line_col(start)
        return SourceSpan(start=start, end=end, line=line, column=column)

    def _make_token(
        self,
        kind: TokenKind,
        start: Cursor,
        end: Cursor,
        literal: LiteralPayload | None = None,
    ) -> Token:
        self._cursor = end
        return Token(
            kind=kind,
            lexeme=start.slice_to(end.pos),
            span=TokenSpan(self._position(start.pos), self._position(end.pos)),
            source_id=self._config.source_id,
            literal=literal,
        )

    def _skip_insignificant(self, cursor: Cursor) -> Cursor:
        """Skip whitespace that never forms a token (lone CR, VT, FF, NBSP, ...)."""
        while not cursor.is_eof:
            ch = cursor.current
            if not ch.isspace() or ch in (" ", "\t", "\n"):
                break
            if ch == "\r" and cursor.peek(1) == "\n":
                break
            cursor = cursor.advance()
        return cursor

    def _scan_token(self) -> Token:
        start = self._skip_insignificant(self._cursor)
        self._cursor = start

        if start.is_eof:
            return self._make_token(TokenKind.END_OF_INPUT, start, start)

        ch = start.current

        if ch == " ":
            return self._make_token(TokenKind.WHITESPACE, start, start.skip_while(" "))
        if ch == "\t":
            return self._make_token(TokenKind.TAB, start, start.skip_while("\t"))
        if ch == "\n":
            return self._make_token(TokenKind.NEWLINE, start, start.advance())
        if ch == "\r":
            return self._make_token(TokenKind.NEWLINE, start, start.advance(2))

        if ch.isidentifier():
            end = start.advance()
            while not end.is_eof and _is_identifier_continue(end.current):
                end = end.advance()
            text = start.slice_to(end.pos)
            kind = TokenKind.KEYWORD if text in KEYWORDS else TokenKind.IDENTIFIER
            return self._make_token(kind, start, end)

        if ch in _DIGITS:
            return self._scan_number(start)

        if ch == "/":
            following = start.peek(1)
            if following == "/":
                return self._make_token(
                    TokenKind.SINGLE_LINE_COMMENT, start, start.skip_to_line_end()
                )
            if following == "*":
                raise UnimplementedFeatureError(
                    "multi-line comment",
                    span=self._source_span(start.pos, start.pos + 2),
                    source_id=self.source_id,
                )
            return self._make_token(TokenKind.OPERATOR, start, start.advance())

        if ch == "*":
            length = 2 if start.peek(1) == "*" else 1
            return self._make_token(TokenKind.OPERATOR, start, start.advance(length))

        if ch in _SINGLE_CHAR_OPERATORS:
            return self._make_token(TokenKind.OPERATOR, start, start.advance())

        if ch in _PUNCTUATION:
            return self._make_token(_PUNCTUATION[ch], start, start.advance())

        if ch in _QUOTES:
            raise UnimplementedFeatureError(
                "string literal",
                span=self._source_span(start.pos, start.pos + 1),
                source_id=self.source_id,
            )

        raise UnexpectedCharacterError(
            ch,
            span=self._source_span(start.pos, start.pos + 1),
            source_id=self.source_id,
        )

    def _scan_number(self, start: Cursor) -> Token:
        body_result = scan_number_body(start)
        self._state = LexerState.SUFFIX_SCAN
        suffix_result = scan_suffix(body_result.cursor)
        end = suffix_result.cursor if suffix_result is not None else body_result.cursor

        kind, payload = classify_literal(
            body_result.value,
            suffix_result.value if suffix_result is not None else None,
            self._registry,
            span_for=self._source_span,
            source_id=self.source_id,
        )
        self._state = LexerState.SCANNING
        return self._make_token(kind, start, end, payload)


@dataclass(frozen=True, slots=True)
class LexResult:
    """Outcome of lexing a whole source.

    Attributes:
        tokens: Tokens in source order, ending with EndOfInput unless lexing
            was aborted by an unrecoverable error
        errors: Lexical errors in the order they were encountered
    """

    tokens: tuple[Token, ...]
    errors: tuple[LexicalError, ...]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def completed(self) -> bool:
        """True if lexing reached EndOfInput."""
        return bool(self.tokens) and self.tokens[-1].is_end_of_input


def tokenize(
    source: str,
    config: LexerConfig | None = None,
    *,
    registry: DataTypeRegistry = DEFAULT_REGISTRY,
) -> LexResult:
    """Lex a whole source, recovering from every recoverable error.

    Example:
        >>> result = tokenize("1 @ 2", LexerConfig(preserve_trivia=False))
        >>> [t.lexeme for t in result.tokens]
        ['1', '2', '']
        >>> [type(e).__name__ for e in result.errors]
        ['UnexpectedCharacterError']
    """
    lexer = Lexer(source, config, registry=registry)
    tokens: list[Token] = []
    errors: list[LexicalError] = []

    while True:
        try:
            token = lexer.next_token()
        except LexicalError as error:
            errors.append(error)
            if not lexer.recover():
                break
            continue
        tokens.append(token)
        if token.is_end_of_input:
            break

    return LexResult(tokens=tuple(tokens), errors=tuple(errors))

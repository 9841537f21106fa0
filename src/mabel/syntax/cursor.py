"""Immutable cursor infrastructure for type-safe scanning.

Shared by the source lexer and the message resource parser.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand or through LineOffsetCache

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter)
    - CR-only (Classic Mac, \\r): NOT supported
"""

from dataclasses import dataclass, field

__all__ = ["Cursor", "LineOffsetCache", "ParseError", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive).

        Example:
            >>> start = Cursor("hello world", 0)
            >>> cursor = start
            >>> while not cursor.is_eof and cursor.current != " ":
            ...     cursor = cursor.advance()
            >>> start.slice_to(cursor.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def skip_spaces(self) -> "Cursor":
        """Skip space characters (U+0020 only)."""
        c = self
        while not c.is_eof and c.current == " ":
            c = c.advance()
        return c

    def skip_whitespace(self) -> "Cursor":
        """Skip spaces, newlines and carriage returns."""
        c = self
        while not c.is_eof and c.current in (" ", "\n", "\r"):
            c = c.advance()
        return c

    def skip_while(self, chars: str) -> "Cursor":
        """Skip a run of characters drawn from ``chars``."""
        c = self
        while not c.is_eof and c.current in chars:
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise.

        Example:
            >>> Cursor("hello", 0).expect("h").pos
            1
            >>> Cursor("hello", 0).expect("x") is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor."""
        return self.source[self.pos : self.pos + n]

    def skip_line_end(self) -> "Cursor":
        """Skip LF, CR, or CRLF line ending (unchanged if not at line end)."""
        if self.is_eof:
            return self
        if self.current == "\r":
            cursor = self.advance()
            if not cursor.is_eof and cursor.current == "\n":
                return cursor.advance()
            return cursor
        if self.current == "\n":
            return self.advance()
        return self

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character without consuming it."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    def compute_line_col(self) -> tuple[int, int]:
        """Compute (line, column) for current position, both 1-indexed.

        O(n) in the position: only call for error reporting. Use
        LineOffsetCache for repeated lookups in the same source.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in a single O(n) pass, then answers
    line:column queries in O(log n) using binary search.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(6)
        (2, 1)
        >>> cache.line_text(3)
        'line3'

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source", "_source_len")

    def __init__(self, source: str) -> None:
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source = source
        self._source_len = len(source)

    @property
    def line_count(self) -> int:
        return len(self._offsets)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get (line, column) for position using binary search.

        Positions outside the source are clamped to its bounds.
        """
        if pos < 0:
            pos = 0
        elif pos > self._source_len:
            pos = self._source_len

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)

    def line_text(self, line: int) -> str:
        """Text of a 1-indexed line, without its line ending.

        Raises:
            IndexError: If the line does not exist
        """
        if not 1 <= line <= len(self._offsets):
            msg = f"Line {line} out of range (1..{len(self._offsets)})"
            raise IndexError(msg)
        start = self._offsets[line - 1]
        end = self._offsets[line] - 1 if line < len(self._offsets) else self._source_len
        return self._source[start:end].rstrip("\r")


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse error with location and context.

    Example:
        >>> cursor = Cursor("hello", 2)
        >>> ParseError("Expected '}'", cursor, expected=("}", "]")).format_error()
        "1:3: Expected '}' (expected: '}', ']')"
    """

    message: str
    cursor: Cursor
    expected: tuple[str, ...] = field(default_factory=tuple)

    def format_error(self) -> str:
        """Format error with line:column."""
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.message}"

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and a caret under the error column.

        Example:
            >>> source = "hello = Hi\\nworld = { $name\\nfoo = Bar"
            >>> print(ParseError("Expected '}'", Cursor(source, 26)).format_with_context())
            2:16: Expected '}'
            <BLANKLINE>
               1 | hello = Hi
               2 | world = { $name
                 |                ^
               3 | foo = Bar
        """
        line, col = self.cursor.compute_line_col()
        lines = self.cursor.source.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])
            if i == line:
                gutter = " " * (len(line_num_str) - 2) + "| "
                result_lines.append(gutter + " " * (col - 1) + "^")

        return "\n".join(result_lines)

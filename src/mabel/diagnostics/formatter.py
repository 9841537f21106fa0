"""Diagnostic formatting service.

Lays out a rendered diagnostic message together with its code and source
location. The message text itself always comes from the renderer; this
module only decides presentation.

Python 3.13+. Zero external dependencies.
"""

import json
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> diagnostic = Diagnostic("lexer-error-unexpected-character",
        ...     code=DiagnosticCode.UNEXPECTED_CHARACTER,
        ...     span=SourceSpan(start=2, end=3, line=1, column=3))
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format(diagnostic, 'Unexpected character: "@"', "1 @ 2"))
        error[UNEXPECTED_CHARACTER]: Unexpected character: "@"
          --> mabel://stdin:1:3
           |
         1 | 1 @ 2
           |   ^

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic, 'Unexpected character: "@"'))
        UNEXPECTED_CHARACTER: Unexpected character: "@"
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic, message: str, source: str | None = None) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic being reported
            message: Rendered message text for the diagnostic
            source: Full source text the span refers to (enables the snippet)

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic, message, source)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic, message)
            case OutputFormat.JSON:
                return self._format_json(diagnostic, message)

    def _severity(self, diagnostic: Diagnostic) -> str:
        severity = diagnostic.severity
        if not self.color:
            return severity
        if severity == "error":
            return f"\033[1;31m{severity}\033[0m"  # Bold red
        return f"\033[1;33m{severity}\033[0m"  # Bold yellow

    def _format_rust(self, diagnostic: Diagnostic, message: str, source: str | None) -> str:
        """Format diagnostic in Rust compiler style with an optional source snippet."""
        code = f"[{diagnostic.code.name}]" if diagnostic.code is not None else ""
        parts = [f"{self._severity(diagnostic)}{code}: {message}"]

        span = diagnostic.span
        if span is None:
            return "\n".join(parts)

        parts.append(f"  --> {diagnostic.source_id}:{span.line}:{span.column}")

        if source is not None:
            lines = source.split("\n")
            if span.line <= len(lines):
                line_text = lines[span.line - 1].rstrip("\r")
                gutter = " " * len(str(span.line))
                width = max(1, min(span.end - span.start, len(line_text) - span.column + 1))
                parts.append(f" {gutter} |")
                parts.append(f" {span.line} | {line_text}")
                parts.append(f" {gutter} | {' ' * (span.column - 1)}{'^' * width}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic, message: str) -> str:
        if diagnostic.code is None:
            return message
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic, message: str) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "UNEXPECTED_CHARACTER", "code_value": 1001, "message": "...", ...}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name if diagnostic.code is not None else None,
            "code_value": diagnostic.code.value if diagnostic.code is not None else None,
            "message_id": diagnostic.message_id,
            "message": message,
            "severity": diagnostic.severity,
            "source_id": diagnostic.source_id,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        return json.dumps(data, ensure_ascii=False)

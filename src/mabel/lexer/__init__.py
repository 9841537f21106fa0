"""Source lexer: tokens, numeric literal recognition and the scanner.

Python 3.13+.
"""

from .numbers import LiteralSuffix, NumberBody, classify_literal, scan_number_body, scan_suffix
from .scanner import Lexer, LexResult, tokenize
from .tokens import KEYWORDS, LiteralPayload, Position, Token, TokenSpan

__all__ = [
    "KEYWORDS",
    "LexResult",
    "Lexer",
    "LiteralPayload",
    "LiteralSuffix",
    "NumberBody",
    "Position",
    "Token",
    "TokenSpan",
    "classify_literal",
    "scan_number_body",
    "scan_suffix",
    "tokenize",
]

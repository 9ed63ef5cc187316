"""
Lexical types of the template language.

A template is a flat sequence of static text and #{...} directives;
the lexer does not look inside directive headers, the parser does.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# Directive delimiters
DIRECTIVE_OPEN = "#{"
DIRECTIVE_CLOSE = "}"


class TokenType(enum.Enum):
    """Token types produced by the lexer."""
    TEXT = "TEXT"
    DIRECTIVE = "DIRECTIVE"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error reporting.

    For DIRECTIVE tokens ``value`` holds the header between the delimiters,
    for TEXT tokens the exact source slice.
    """
    type: TokenType
    value: str
    position: int        # Offset in the source text
    line: int            # Line number (1-based)
    column: int          # Column number (1-based)

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token", "DIRECTIVE_OPEN", "DIRECTIVE_CLOSE"]

"""
Lexical analyzer for #{...} templates.

Splits the source into TEXT and DIRECTIVE tokens. The directive delimiter
is not nestable: the first '}' after '#{' always closes the header.
"""

from __future__ import annotations

import logging
from typing import List

from .tokens import DIRECTIVE_CLOSE, DIRECTIVE_OPEN, Token, TokenType

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Single left-to-right scanner over the template source.

    Keeps line/column bookkeeping so that the parser can report the
    position of malformed directives.
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.position = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source.

        Returns:
            List of tokens terminated by an EOF token
        """
        tokens: List[Token] = []

        while self.position < self.length:
            start = self.text.find(DIRECTIVE_OPEN, self.position)
            if start == -1:
                start = self.length

            if start > self.position:
                tokens.append(self._make_token(TokenType.TEXT, self.text[self.position:start]))
                self._advance_to(start)

            if start < self.length:
                tokens.append(self._read_directive())

        tokens.append(Token(TokenType.EOF, "", self.position, self.line, self.column))
        logger.debug(f"Tokenized template of length {self.length} into {len(tokens)} tokens")
        return tokens

    def _read_directive(self) -> Token:
        """Reads '#{ header }' starting at the current position."""
        header_start = self.position + len(DIRECTIVE_OPEN)
        end = self.text.find(DIRECTIVE_CLOSE, header_start)

        if end == -1:
            # Unterminated directive swallows the rest of the input
            header = self.text[header_start:]
            token = self._make_token(TokenType.DIRECTIVE, header)
            logger.debug(f"Unterminated directive at {self.line}:{self.column}, extends to end of input")
            self._advance_to(self.length)
            return token

        token = self._make_token(TokenType.DIRECTIVE, self.text[header_start:end])
        self._advance_to(end + len(DIRECTIVE_CLOSE))
        return token

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        return Token(token_type, value, self.position, self.line, self.column)

    def _advance_to(self, target: int) -> None:
        """Moves the cursor to ``target`` keeping line and column in sync."""
        chunk = self.text[self.position:target]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n")
        else:
            self.column += len(chunk)
        self.position = target


def tokenize_template(text: str) -> List[Token]:
    """Convenience wrapper: tokenizes ``text`` with a fresh lexer."""
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]

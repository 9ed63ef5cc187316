"""
Recursive-descent parser for #{...} templates.

Builds the fragment tree from lexer tokens. Block directives recurse
into the remainder of the token stream until their #{end}; matching is
purely positional, #{end} closes whatever block is innermost.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .directives import Directive, DirectiveKind, split_directive
from .nodes import (
    EqualsNode, ExistsNode, ForNode, FunctionNode, IncludeNode,
    NotEqualsNode, NotExistsNode, TemplateFunction, TemplateNode, TextNode, VariableNode,
)
from .tokens import Token, TokenType
from ..errors import TemplateSyntaxError, UnknownFunctionError

logger = logging.getLogger(__name__)


class ParsingContext:
    """
    Cursor over the token list.

    Provides navigation over tokens during syntax analysis.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0
        self.length = len(tokens)

    def current(self) -> Token:
        """Returns the current token (EOF past the end)."""
        if self.position >= self.length:
            return Token(TokenType.EOF, "", self.position, 0, 0)
        return self.tokens[self.position]

    def advance(self) -> Token:
        """Moves to the next token and returns the previous one."""
        current = self.current()
        if self.position < self.length:
            self.position += 1
        return current

    def is_at_end(self) -> bool:
        return self.position >= self.length or self.current().type == TokenType.EOF


class TemplateParser:
    """
    Parser of template tokens into a fragment tree.

    Function names are resolved against ``functions`` while parsing, so an
    unknown function fails the compilation instead of the render.
    """

    def __init__(
        self,
        tokens: List[Token],
        functions: Optional[Mapping[str, TemplateFunction]] = None,
        template_name: str = "",
    ):
        self.context = ParsingContext(tokens)
        self.functions: Mapping[str, TemplateFunction] = functions or {}
        self.template_name = template_name

        self._builders: Dict[DirectiveKind, Callable[[Directive, Token], TemplateNode]] = {
            DirectiveKind.VARIABLE: self._build_variable,
            DirectiveKind.INCLUDE: self._build_include,
            DirectiveKind.FUNCTION: self._build_function,
            DirectiveKind.EXISTS: self._build_exists,
            DirectiveKind.NOT_EXISTS: self._build_not_exists,
            DirectiveKind.EQUALS: self._build_equals,
            DirectiveKind.NOT_EQUALS: self._build_not_equals,
            DirectiveKind.FOR: self._build_for,
        }

    def parse(self) -> Tuple[TemplateNode, ...]:
        """
        Parses the whole token stream.

        Returns:
            Top-level nodes in source order

        Raises:
            TemplateSyntaxError: On a malformed directive
            UnknownFunctionError: On a reference to an unregistered function
        """
        nodes: List[TemplateNode] = []
        while not self.context.is_at_end():
            closed = self._parse_into(nodes)
            if closed is not None:
                # Stray #{end} without an open block
                logger.warning(
                    f"Ignoring #{{end}} without an open block at {closed.line}:{closed.column}"
                    f"{self._where()}"
                )
        logger.debug(f"Parsed template{self._where()} -> {len(nodes)} top-level nodes")
        return tuple(nodes)

    def _parse_into(self, nodes: List[TemplateNode]) -> Optional[Token]:
        """
        Parses siblings into ``nodes`` until #{end} or end of input.

        Returns:
            The #{end} token that stopped parsing, or None at end of input
        """
        while not self.context.is_at_end():
            token = self.context.advance()

            if token.type == TokenType.TEXT:
                nodes.append(TextNode(text=token.value))
                continue

            directive = self._split(token)
            if directive.kind == DirectiveKind.END:
                return token

            nodes.append(self._builders[directive.kind](directive, token))
        return None

    def _parse_block_body(self, opener: Token) -> Tuple[TemplateNode, ...]:
        """Parses the body of a block directive up to its matching #{end}."""
        children: List[TemplateNode] = []
        end_token = self._parse_into(children)
        if end_token is None:
            # Permissive: the block is closed by the end of input
            logger.debug(
                f"Block opened at {opener.line}:{opener.column}{self._where()} "
                f"is closed implicitly at end of input"
            )
        return tuple(children)

    # ======= Directive builders =======

    def _build_variable(self, directive: Directive, token: Token) -> TemplateNode:
        return VariableNode(path=directive.keyword)

    def _build_include(self, directive: Directive, token: Token) -> TemplateNode:
        path = self._require_arg(directive, token, 0, "include path")
        return IncludeNode(path=path.replace("\\", "/"))

    def _build_function(self, directive: Directive, token: Token) -> TemplateNode:
        name = self._require_arg(directive, token, 0, "function name")
        callback = self.functions.get(name)
        if callback is None:
            raise UnknownFunctionError(name, self.template_name, token.line, token.column)
        path = directive.args[1] if len(directive.args) > 1 else None
        return FunctionNode(name=name, callback=callback, path=path)

    def _build_exists(self, directive: Directive, token: Token) -> TemplateNode:
        path = self._require_arg(directive, token, 0, "path")
        return ExistsNode(path=path, children=self._parse_block_body(token))

    def _build_not_exists(self, directive: Directive, token: Token) -> TemplateNode:
        path = self._require_arg(directive, token, 0, "path")
        return NotExistsNode(path=path, children=self._parse_block_body(token))

    def _build_equals(self, directive: Directive, token: Token) -> TemplateNode:
        path = self._require_arg(directive, token, 0, "path")
        value = self._require_arg(directive, token, 1, "comparison value")
        return EqualsNode(path=path, value=value, children=self._parse_block_body(token))

    def _build_not_equals(self, directive: Directive, token: Token) -> TemplateNode:
        path = self._require_arg(directive, token, 0, "path")
        value = self._require_arg(directive, token, 1, "comparison value")
        return NotEqualsNode(path=path, value=value, children=self._parse_block_body(token))

    def _build_for(self, directive: Directive, token: Token) -> TemplateNode:
        """
        Parses the three accepted loop spellings:
        'for item : list', 'for item: list' and 'for item list'.
        """
        args = " ".join(directive.args).replace(":", " ").split()
        if not args:
            raise self._error("Missing loop variable in #{for}", token)
        if len(args) < 2:
            raise self._error("Missing collection path in #{for}", token)
        return ForNode(variable=args[0], path=args[1], children=self._parse_block_body(token))

    # ======= Helpers =======

    def _split(self, token: Token) -> Directive:
        try:
            return split_directive(token.value)
        except ValueError as e:
            raise self._error(str(e), token)

    def _require_arg(self, directive: Directive, token: Token, index: int, what: str) -> str:
        if len(directive.args) <= index:
            raise self._error(f"Missing {what} in #{{{directive.keyword}}}", token)
        return directive.args[index]

    def _error(self, message: str, token: Token) -> TemplateSyntaxError:
        return TemplateSyntaxError(message, self.template_name, token.line, token.column)

    def _where(self) -> str:
        return f" '{self.template_name}'" if self.template_name else ""


__all__ = ["ParsingContext", "TemplateParser"]

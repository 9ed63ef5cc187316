"""
Tree-walking renderer of compiled templates.

Each fragment kind has one handler, registered in a per-type table.
Handlers write into the sink of the current render; nothing is shared
between render calls.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Type

from .escaping import escape_markup
from .nodes import (
    EqualsNode, ExistsNode, ForNode, FunctionNode, IncludeNode, NotEqualsNode,
    NotExistsNode, RootNode, TemplateNode, TextNode, VariableNode, Writer,
)
from .paths import resolve_include_path
from .scope import Scope
from ..data import DataNode

logger = logging.getLogger(__name__)

# Returns the compiled root of an (already resolved) include path
IncludeProvider = Callable[[str], RootNode]


@dataclass(frozen=True)
class RenderContext:
    """
    State of one position in the tree walk.

    Immutable: loops and includes derive a new context instead of
    mutating the current one.
    """
    data: DataNode
    scope: Scope
    template_path: str
    sink: Writer

    def resolve(self, path: str) -> Optional[DataNode]:
        return self.scope.resolve(path, self.data)

    def resolve_text(self, path: str) -> str:
        """String form of the value at ``path``; '' when absent."""
        node = self.resolve(path)
        return node.as_text() if node is not None else ""

    def bind(self, name: str, node: DataNode) -> "RenderContext":
        return replace(self, scope=self.scope.bind(name, node))

    def enter(self, template_path: str) -> "RenderContext":
        return replace(self, template_path=template_path)


NodeHandler = Callable[[TemplateNode, RenderContext], None]


class TemplateRenderer:
    """
    Interpreter of fragment trees.

    Args:
        include_provider: Fetches compiled includes (through the engine's cache)
        escape: Escape inserted variable values as markup
    """

    def __init__(self, include_provider: Optional[IncludeProvider] = None, escape: bool = True):
        self.include_provider = include_provider
        self.escape = escape

        self._handlers: Dict[Type[TemplateNode], NodeHandler] = {
            RootNode: self._render_root,
            TextNode: self._render_text,
            VariableNode: self._render_variable,
            ExistsNode: self._render_exists,
            NotExistsNode: self._render_not_exists,
            EqualsNode: self._render_equals,
            NotEqualsNode: self._render_not_equals,
            ForNode: self._render_for,
            IncludeNode: self._render_include,
            FunctionNode: self._render_function,
        }

    def render(self, root: RootNode, data: DataNode, sink: Writer, scope: Optional[Scope] = None) -> None:
        """
        Renders ``root`` against ``data`` into ``sink``.

        Errors of includes and function callbacks propagate unchanged;
        whatever was written before the failure stays in the sink.
        """
        context = RenderContext(
            data=DataNode.wrap(data),
            scope=scope if scope is not None else Scope.empty(),
            template_path=root.path,
            sink=sink,
        )
        self._render_node(root, context)

    def render_to_string(self, root: RootNode, data: DataNode) -> str:
        buffer = io.StringIO()
        self.render(root, data, buffer)
        return buffer.getvalue()

    # ======= Dispatch =======

    def _render_node(self, node: TemplateNode, context: RenderContext) -> None:
        handler = self._handlers.get(type(node))
        if handler is None:
            raise TypeError(f"No render handler for {type(node).__name__}")
        handler(node, context)

    def _render_children(self, node, context: RenderContext) -> None:
        for child in node.children:
            self._render_node(child, context)

    # ======= Handlers =======

    def _render_root(self, node: RootNode, context: RenderContext) -> None:
        self._render_children(node, context)

    def _render_text(self, node: TextNode, context: RenderContext) -> None:
        context.sink.write(node.text)

    def _render_variable(self, node: VariableNode, context: RenderContext) -> None:
        value = context.resolve_text(node.path)
        if not value:
            return
        if self.escape:
            value = escape_markup(value)
        if value:
            context.sink.write(value)

    def _render_exists(self, node: ExistsNode, context: RenderContext) -> None:
        if context.resolve(node.path) is not None:
            self._render_children(node, context)

    def _render_not_exists(self, node: NotExistsNode, context: RenderContext) -> None:
        if context.resolve(node.path) is None:
            self._render_children(node, context)

    def _render_equals(self, node: EqualsNode, context: RenderContext) -> None:
        if context.resolve_text(node.path) == node.value:
            self._render_children(node, context)

    def _render_not_equals(self, node: NotEqualsNode, context: RenderContext) -> None:
        if context.resolve_text(node.path) != node.value:
            self._render_children(node, context)

    def _render_for(self, node: ForNode, context: RenderContext) -> None:
        collection = context.resolve(node.path)
        if collection is None:
            return
        for item in collection:
            self._render_children(node, context.bind(node.variable, item))

    def _render_include(self, node: IncludeNode, context: RenderContext) -> None:
        if self.include_provider is None:
            raise RuntimeError(f"No include provider set for including '{node.path}'")
        path = resolve_include_path(context.template_path, node.path)
        logger.debug(f"Including '{path}' from '{context.template_path}'")
        included = self.include_provider(path)
        self._render_node(included, context.enter(path))

    def _render_function(self, node: FunctionNode, context: RenderContext) -> None:
        target = context.resolve(node.path) if node.path else context.data
        if target is None:
            # Missing path: the callback still runs, on an empty node
            target = DataNode.wrap(None)
        node.callback(context.sink, target)


__all__ = ["IncludeProvider", "RenderContext", "TemplateRenderer"]

"""
Template compiler: source text -> fragment tree.

A pure function of the source and the function registry, no I/O.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .lexer import TemplateLexer
from .nodes import RootNode, TemplateFunction
from .parser import TemplateParser

logger = logging.getLogger(__name__)


def compile_template(
    source: str,
    functions: Optional[Mapping[str, TemplateFunction]] = None,
    path: str = "",
    last_modified: Optional[int] = None,
    pinned: bool = False,
) -> RootNode:
    """
    Compiles template source into a RootNode.

    Args:
        source: Template text
        functions: Registry of #{function} callbacks
        path: Template path, stored on the root and used in error messages
        last_modified: Freshness signal observed when the source was loaded
        pinned: Marks templates that never go stale (inline definitions)

    Returns:
        Root of the fragment tree

    Raises:
        TemplateSyntaxError: On a malformed directive
        UnknownFunctionError: On a reference to an unregistered function
    """
    tokens = TemplateLexer(source).tokenize()
    children = TemplateParser(tokens, functions, path).parse()
    logger.debug(f"Compiled template '{path}' ({len(source)} chars, {len(children)} top-level fragments)")
    return RootNode(path=path, children=children, last_modified=last_modified, pinned=pinned)


__all__ = ["compile_template"]

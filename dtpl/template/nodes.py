"""
Fragment tree (AST) of a compiled template.

A closed hierarchy of immutable node classes, one per fragment kind.
Block nodes own their children exclusively; the tree never shares
subtrees. A RootNode is replaced wholesale when a template is recompiled.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Iterable, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    from ..data import DataNode


class FragmentKind(enum.Enum):
    """Kinds of fragments."""
    ROOT = "root"
    STATIC_TEXT = "static_text"
    VARIABLE = "variable"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    FOR_LOOP = "for"
    INCLUDE = "include"
    FUNCTION = "function"


# Callback of #{function ...}: receives the output sink and the data node
TemplateFunction = Callable[["Writer", "DataNode"], None]


@runtime_checkable
class Writer(Protocol):
    """Output sink of the renderer (io.StringIO satisfies it)."""

    def write(self, text: str) -> int:
        ...


@dataclass(frozen=True)
class TemplateNode:
    """Base class of all fragment nodes."""
    kind: ClassVar[FragmentKind]


@dataclass(frozen=True)
class BlockNode(TemplateNode):
    """Base class of nodes closed by #{end}."""
    path: str
    children: Tuple[TemplateNode, ...] = ()


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Static text between directives.

    Emitted verbatim, exactly as it appears in the source.
    """
    kind: ClassVar[FragmentKind] = FragmentKind.STATIC_TEXT
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """Variable insertion #{path.to.value}."""
    kind: ClassVar[FragmentKind] = FragmentKind.VARIABLE
    path: str


@dataclass(frozen=True)
class ExistsNode(BlockNode):
    """#{exists path}...#{end}: body rendered when the path resolves."""
    kind: ClassVar[FragmentKind] = FragmentKind.EXISTS


@dataclass(frozen=True)
class NotExistsNode(BlockNode):
    """#{!exists path}...#{end}: body rendered when the path is absent."""
    kind: ClassVar[FragmentKind] = FragmentKind.NOT_EXISTS


@dataclass(frozen=True)
class EqualsNode(BlockNode):
    """
    #{equals path literal}...#{end}.

    The resolved value is compared by its string form with ``value``.
    """
    kind: ClassVar[FragmentKind] = FragmentKind.EQUALS
    value: str = ""


@dataclass(frozen=True)
class NotEqualsNode(BlockNode):
    """#{!equals path literal}...#{end}, inverse of EqualsNode."""
    kind: ClassVar[FragmentKind] = FragmentKind.NOT_EQUALS
    value: str = ""


@dataclass(frozen=True)
class ForNode(BlockNode):
    """
    #{for variable : path}...#{end}.

    The body is rendered once per element of the collection at ``path``,
    with ``variable`` bound to the element.
    """
    kind: ClassVar[FragmentKind] = FragmentKind.FOR_LOOP
    variable: str = ""


@dataclass(frozen=True)
class IncludeNode(TemplateNode):
    """#{include path}: another template rendered in place."""
    kind: ClassVar[FragmentKind] = FragmentKind.INCLUDE
    path: str


@dataclass(frozen=True)
class FunctionNode(TemplateNode):
    """
    #{function name [path]}.

    The callback is resolved at compile time and stored on the node,
    it is never looked up again while rendering.
    """
    kind: ClassVar[FragmentKind] = FragmentKind.FUNCTION
    name: str
    callback: TemplateFunction = field(compare=False, repr=False)
    path: Optional[str] = None


@dataclass(frozen=True)
class RootNode(TemplateNode):
    """
    Root of one compiled template file.

    ``last_modified`` is the freshness signal observed when the template
    was compiled (None when unknown); ``pinned`` marks templates defined
    inline, which never go stale.
    """
    kind: ClassVar[FragmentKind] = FragmentKind.ROOT
    path: str
    children: Tuple[TemplateNode, ...] = ()
    last_modified: Optional[int] = None
    pinned: bool = False


def iter_nodes(nodes: Iterable[TemplateNode]) -> Iterator[TemplateNode]:
    """Depth-first walk over ``nodes`` and all their descendants."""
    for node in nodes:
        yield node
        children = getattr(node, "children", None)
        if children:
            yield from iter_nodes(children)


def collect_include_paths(root: RootNode) -> List[str]:
    """Include targets of a compiled template, in source order."""
    return [node.path for node in iter_nodes(root.children) if isinstance(node, IncludeNode)]


__all__ = [
    "FragmentKind",
    "TemplateFunction",
    "Writer",
    "TemplateNode",
    "BlockNode",
    "TextNode",
    "VariableNode",
    "ExistsNode",
    "NotExistsNode",
    "EqualsNode",
    "NotEqualsNode",
    "ForNode",
    "IncludeNode",
    "FunctionNode",
    "RootNode",
    "iter_nodes",
    "collect_include_paths",
]

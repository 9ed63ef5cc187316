"""
Loop-binding scope.

An immutable chain of (name -> data node) bindings, newest first. Entering
a loop body creates a child scope; the parent is untouched, so a binding
disappears as soon as the loop that introduced it is done.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from ..data import DataNode

_SEPARATORS = (".", "[")


class Scope:
    """One link of the binding chain."""

    __slots__ = ("name", "node", "parent")

    def __init__(self, name: str = "", node: Optional[DataNode] = None, parent: Optional["Scope"] = None):
        self.name = name
        self.node = node
        self.parent = parent

    @classmethod
    def empty(cls) -> "Scope":
        return cls()

    def bind(self, name: str, node: DataNode) -> "Scope":
        """Returns a child scope with ``name`` bound to ``node``."""
        return Scope(name, node, self)

    def bindings(self) -> Iterator[Tuple[str, DataNode]]:
        """Bindings from newest to oldest."""
        scope: Optional[Scope] = self
        while scope is not None and scope.node is not None:
            yield scope.name, scope.node
            scope = scope.parent

    def resolve(self, path: str, root: DataNode) -> Optional[DataNode]:
        """
        Resolves a data path against the bindings, then the data root.

        A binding matches when its name equals the path or is followed by
        '.' or '[' in it; the remainder is resolved against the bound node.

        Returns:
            Resolved node or None when the path is absent
        """
        for name, node in self.bindings():
            if path == name:
                return node
            if path.startswith(name) and path[len(name)] in _SEPARATORS:
                rest = path[len(name):]
                if rest.startswith("."):
                    rest = rest[1:]
                return node.get(rest)
        return root.get(path)

    def __repr__(self) -> str:
        names = [name for name, _ in self.bindings()]
        return f"Scope({names!r})"


__all__ = ["Scope"]

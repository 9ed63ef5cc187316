"""
Hierarchical JSON-like data model consumed by the renderer.

DataNode wraps a plain Python structure (mappings, sequences, scalars)
and gives the renderer path lookup, iteration and a canonical string form.
A tree built with put()/add() and the equivalent plain structure render
identically, since both end up as the same underlying value.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Iterator, List, Optional, Tuple, Union

# 'name[0][1]' -> ('name', '[0][1]')
_INDEXED_SEGMENT = re.compile(r"^([^\[\]]*)((?:\[\d+\])+)$")
_INDEX = re.compile(r"\[(\d+)\]")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def split_path(path: str) -> List[Union[str, int]]:
    """
    Splits a data path into segments.

    'a.b.c' -> ['a', 'b', 'c']; 'rows[1].cells.0' -> ['rows', 1, 'cells', '0'].
    Numeric dotted segments stay strings, they index lists and name map keys.
    """
    segments: List[Union[str, int]] = []
    if not path:
        return segments
    for part in path.split("."):
        match = _INDEXED_SEGMENT.match(part)
        if match is None:
            segments.append(part)
            continue
        name, indexes = match.groups()
        if name:
            segments.append(name)
        segments.extend(int(i) for i in _INDEX.findall(indexes))
    return segments


def _step(value: Any, segment: Union[str, int]) -> Tuple[bool, Any]:
    """Descends one segment; returns (found, child)."""
    if isinstance(value, DataNode):
        value = value.value
    if isinstance(value, Mapping):
        key = str(segment)
        if key in value:
            return True, value[key]
        return False, None
    if _is_sequence(value):
        try:
            index = int(segment)
        except ValueError:
            return False, None
        if 0 <= index < len(value):
            return True, value[index]
        return False, None
    return False, None


def format_value(value: Any) -> str:
    """
    Canonical string form of a data value.

    Booleans are 'true'/'false', None is empty, maps render as '{k=v, ...}'
    and lists as '[a, b]'.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, DataNode):
        return format_value(value.value)
    if isinstance(value, Mapping):
        items = ", ".join(f"{k}={_format_nested(v)}" for k, v in value.items())
        return "{" + items + "}"
    if _is_sequence(value):
        return "[" + ", ".join(_format_nested(v) for v in value) + "]"
    return str(value)


def _format_nested(value: Any) -> str:
    if value is None:
        return "null"
    return format_value(value)


def _plain(value: Any) -> Any:
    """Unwraps a DataNode to its underlying value; nested nodes are kept as-is."""
    if isinstance(value, DataNode):
        return value.value
    return value


class DataNode:
    """
    A node of the data tree.

    Wraps the underlying value without copying it, so lookups on a wrapped
    plain dict observe the dict itself.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = None):
        self.value = _plain(value) if value is not None else {}

    @classmethod
    def wrap(cls, value: Any) -> "DataNode":
        """Returns ``value`` itself when it already is a DataNode."""
        if isinstance(value, DataNode):
            return value
        node = cls.__new__(cls)
        node.value = value
        return node

    # ======= Lookup =======

    def get(self, path: str) -> Optional["DataNode"]:
        """
        Resolves a dotted path.

        Args:
            path: 'a.b', 'list.0', 'list[0].name'; '' is the node itself

        Returns:
            Child node, or None when any segment is missing
        """
        current = self.value
        for segment in split_path(path):
            found, current = _step(current, segment)
            if not found:
                return None
        return DataNode.wrap(current)

    def exists(self, path: str) -> bool:
        return self.get(path) is not None

    def get_text(self, path: str, default: str = "") -> str:
        """String form of the value at ``path``, or ``default`` when absent."""
        node = self.get(path)
        if node is None:
            return default
        return node.as_text()

    # ======= Building =======

    def put(self, path: str, value: Any) -> "DataNode":
        """
        Stores ``value`` at ``path``, creating intermediate maps.

        Returns:
            self, for chaining
        """
        segments = [str(s) for s in split_path(path)]
        if not segments:
            raise ValueError("Empty data path")
        target = self._ensure_map_path(segments[:-1])
        target[segments[-1]] = _plain(value)
        return self

    def put_map(self, path: str) -> "DataNode":
        """Creates an empty map at ``path`` and returns it as a node."""
        self.put(path, {})
        return self.get(path)

    def put_list(self, path: str) -> "DataNode":
        """Creates an empty list at ``path`` and returns it as a node."""
        self.put(path, [])
        return self.get(path)

    def add(self, value: Any) -> "DataNode":
        """Appends ``value`` to a list node; returns self for chaining."""
        if not isinstance(self.value, list):
            raise TypeError(f"Cannot add to a non-list node ({type(self.value).__name__})")
        self.value.append(_plain(value))
        return self

    def add_map(self) -> "DataNode":
        """Appends an empty map to a list node and returns it as a node."""
        child: dict = {}
        self.add(child)
        return DataNode.wrap(child)

    def _ensure_map_path(self, segments: List[str]) -> dict:
        if not isinstance(self.value, dict):
            raise TypeError(f"Cannot put into a non-map node ({type(self.value).__name__})")
        current = self.value
        for segment in segments:
            child = current.get(segment)
            if not isinstance(child, dict):
                child = {}
                current[segment] = child
            current = child
        return current

    # ======= Views =======

    def __iter__(self) -> Iterator["DataNode"]:
        """
        Iterates the node's elements: list items, map values, or the
        scalar itself once. None iterates nothing.
        """
        value = self.value
        if value is None:
            return
        if isinstance(value, Mapping):
            for item in value.values():
                yield DataNode.wrap(item)
        elif _is_sequence(value):
            for item in value:
                yield DataNode.wrap(item)
        else:
            yield self

    def as_text(self) -> str:
        return format_value(self.value)

    def as_object(self) -> Any:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DataNode):
            return self.value == other.value
        return NotImplemented

    def __repr__(self) -> str:
        return f"DataNode({self.value!r})"

    def __str__(self) -> str:
        return self.as_text()


__all__ = ["DataNode", "split_path", "format_value"]

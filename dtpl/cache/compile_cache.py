"""
In-memory store of compiled templates.

Bounded least-recently-used map from absolute template path to its
compiled root. Staleness is decided by the engine; the store only keeps
entries and evicts the oldest one when full.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional

from ..template.nodes import RootNode

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1024


@dataclass(frozen=True)
class CacheSnapshot:
    capacity: int
    entries: int
    paths: List[str]


class CompileCache:
    """
    Thread-safe LRU cache of compiled templates.

    Every operation holds the lock; reads refresh the entry's recency.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: "OrderedDict[str, RootNode]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, path: str) -> Optional[RootNode]:
        with self._lock:
            root = self._entries.get(path)
            if root is not None:
                self._entries.move_to_end(path)
            return root

    def put(self, path: str, root: RootNode) -> None:
        with self._lock:
            self._entries[path] = root
            self._entries.move_to_end(path)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Compile cache full ({self.capacity}), evicted '{evicted}'")

    def remove(self, path: str) -> bool:
        """Drops the entry of ``path``; returns whether it was cached."""
        with self._lock:
            return self._entries.pop(path, None) is not None

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count:
            logger.debug(f"Compile cache cleared ({count} entries)")

    def contains(self, path: str) -> bool:
        with self._lock:
            return path in self._entries

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.contains(path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def snapshot(self) -> CacheSnapshot:
        with self._lock:
            return CacheSnapshot(capacity=self.capacity, entries=len(self._entries), paths=list(self._entries))


__all__ = ["CompileCache", "CacheSnapshot", "DEFAULT_CAPACITY"]

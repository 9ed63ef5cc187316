"""Tests for the compile cache store."""

import threading

import pytest

from dtpl.cache import CompileCache
from dtpl.template.nodes import RootNode


def root(path: str) -> RootNode:
    return RootNode(path=path)


class TestCompileCache:
    def test_put_get(self):
        cache = CompileCache(4)
        node = root("a")
        cache.put("a", node)
        assert cache.get("a") is node
        assert cache.contains("a")
        assert "a" in cache
        assert len(cache) == 1

    def test_missing(self):
        assert CompileCache(2).get("nope") is None

    def test_lru_eviction(self):
        cache = CompileCache(2)
        cache.put("a", root("a"))
        cache.put("b", root("b"))
        cache.get("a")  # refresh 'a'
        cache.put("c", root("c"))

        assert cache.contains("a")
        assert not cache.contains("b")
        assert cache.contains("c")

    def test_replace_keeps_size(self):
        cache = CompileCache(2)
        cache.put("a", root("a"))
        replacement = root("a2")
        cache.put("a", replacement)
        assert len(cache) == 1
        assert cache.get("a") is replacement

    def test_remove_and_clear(self):
        cache = CompileCache(4)
        cache.put("a", root("a"))
        cache.put("b", root("b"))

        assert cache.remove("a") is True
        assert cache.remove("a") is False
        cache.clear()
        assert len(cache) == 0

    def test_snapshot(self):
        cache = CompileCache(3)
        cache.put("a", root("a"))
        cache.put("b", root("b"))
        snap = cache.snapshot()
        assert snap.capacity == 3
        assert snap.entries == 2
        assert snap.paths == ["a", "b"]

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            CompileCache(0)

    def test_concurrent_access(self):
        cache = CompileCache(16)

        def worker(n: int):
            for i in range(200):
                key = f"{n}-{i % 20}"
                cache.put(key, root(key))
                cache.get(key)
                cache.remove(f"{n}-{(i + 7) % 20}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) <= 16

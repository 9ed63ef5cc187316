from .compile_cache import CacheSnapshot, CompileCache, DEFAULT_CAPACITY

__all__ = ["CompileCache", "CacheSnapshot", "DEFAULT_CAPACITY"]

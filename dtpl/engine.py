"""
Template engine facade.

Owns the configuration, the function registry and the compile cache,
and runs the staleness protocol before every use of a cached template.
"""

from __future__ import annotations

import codecs
import io
import logging
from typing import Any, Dict, Mapping, Optional

from .cache import CompileCache, DEFAULT_CAPACITY
from .config import EngineConfig
from .data import DataNode
from .loaders import FileSystemLoader, ResourceLoader
from .preprocess import Preprocessor, get_preprocessor
from .template.compiler import compile_template
from .template.nodes import RootNode, TemplateFunction
from .template.paths import normalize_root_directory, resolve_root_path
from .template.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class TemplateEngine:
    """
    Compiles, caches and renders #{...} templates.

    Args:
        cache_size: Capacity of the compile cache
        loader: Template source loader (files on disk by default)
    """

    def __init__(self, cache_size: int = DEFAULT_CAPACITY, loader: Optional[ResourceLoader] = None):
        self.cache = CompileCache(cache_size)
        self._loader: ResourceLoader = loader if loader is not None else FileSystemLoader()
        self._root_directory = ""
        self._charset = "utf-8"
        self.escape = True
        self.reload_templates = False
        self.preprocessor: Optional[Preprocessor] = None
        self._functions: Dict[str, TemplateFunction] = {}

    @classmethod
    def from_config(
        cls,
        cfg: EngineConfig,
        loader: Optional[ResourceLoader] = None,
        functions: Optional[Mapping[str, TemplateFunction]] = None,
    ) -> "TemplateEngine":
        """
        Builds an engine from a loaded configuration.

        Raises:
            ValueError: For an unknown pre-processor name or an invalid function name
        """
        engine = cls(cache_size=cfg.cache_size, loader=loader)
        engine.root_directory = cfg.root_directory
        engine.charset = cfg.charset
        engine.escape = cfg.escape
        engine.reload_templates = cfg.reload_templates
        if cfg.preprocessor:
            engine.preprocessor = get_preprocessor(cfg.preprocessor)
        for name, callback in (functions or {}).items():
            engine.register_function(name, callback)
        return engine

    # ======= Configuration =======

    @property
    def root_directory(self) -> str:
        return self._root_directory

    @root_directory.setter
    def root_directory(self, value: str) -> None:
        self._root_directory = normalize_root_directory(value)

    @property
    def charset(self) -> str:
        return self._charset

    @charset.setter
    def charset(self, value: str) -> None:
        if not value:
            raise ValueError("Charset must not be empty")
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown charset: {value}") from e
        if value != self._charset:
            self._charset = value
            # Cached sources were decoded with the previous charset
            self.cache.clear()

    @property
    def loader(self) -> ResourceLoader:
        return self._loader

    @loader.setter
    def loader(self, value: ResourceLoader) -> None:
        if value is None:
            raise ValueError("Loader must not be None")
        self._loader = value

    def register_function(self, name: str, callback: TemplateFunction) -> None:
        """
        Registers a #{function name} callback.

        Templates compiled before the call keep the callbacks they were
        compiled with.

        Raises:
            ValueError: If the name is empty or contains whitespace
        """
        if not name or not name.strip():
            raise ValueError("Function name must not be empty")
        if any(ch.isspace() for ch in name):
            raise ValueError(f"Function name must not contain whitespace: {name!r}")
        if not callable(callback):
            raise ValueError(f"Function '{name}' must be callable")
        self._functions[name] = callback

    def unregister_function(self, name: str) -> bool:
        """Removes a function; returns whether it was registered."""
        return self._functions.pop(name, None) is not None

    @property
    def functions(self) -> Mapping[str, TemplateFunction]:
        return dict(self._functions)

    # ======= Rendering =======

    def render(self, path: str, data: Any = None) -> str:
        """
        Renders the template at ``path``.

        Args:
            path: Template path, resolved against the root directory
            data: DataNode, mapping or None

        Raises:
            TemplateNotFoundError: If the template or one of its includes is missing
            TemplateSyntaxError: If a template fails to compile
            UnknownFunctionError: If a template calls an unregistered function
        """
        absolute = resolve_root_path(self._root_directory, path)
        root = self._get_template(absolute)
        renderer = TemplateRenderer(include_provider=self._get_template, escape=self.escape)
        buffer = io.StringIO()
        renderer.render(root, _wrap_data(data), buffer)
        return buffer.getvalue()

    def render_bytes(self, path: str, data: Any = None) -> bytes:
        """
        Same as render(), encoded with the configured charset.

        Characters the charset cannot represent become numeric character
        references while escaping is on, '?' otherwise.
        """
        errors = "xmlcharrefreplace" if self.escape else "replace"
        return self.render(path, data).encode(self._charset, errors=errors)

    def compile(self, path: str) -> RootNode:
        """Loads and compiles ``path`` through the cache without rendering it."""
        return self._get_template(resolve_root_path(self._root_directory, path))

    def define(self, path: str, source: str) -> RootNode:
        """
        Compiles ``source`` and caches it under ``path``.

        The entry does not come from the loader and is never considered
        stale, even with hot reload on.
        """
        absolute = resolve_root_path(self._root_directory, path)
        root = compile_template(source, self._functions, absolute, pinned=True)
        self.cache.put(absolute, root)
        logger.debug(f"Defined inline template '{absolute}'")
        return root

    def invalidate(self, path: str) -> bool:
        return self.cache.remove(resolve_root_path(self._root_directory, path))

    def invalidate_all(self) -> None:
        self.cache.clear()

    def contains(self, path: str) -> bool:
        return self.cache.contains(resolve_root_path(self._root_directory, path))

    # ======= Cache protocol =======

    def _get_template(self, path: str) -> RootNode:
        """
        Returns the compiled template at an absolute path, compiling it when
        it is not cached or (with hot reload on) when it is stale.
        """
        root = self.cache.get(path)
        if root is not None and not self._is_stale(root):
            return root

        source = self._loader.load_template(path, self._charset)
        if self.preprocessor is not None:
            source = self.preprocessor(source)
        last_modified = self._loader.last_modified(path)

        compiled = compile_template(source, self._functions, path, last_modified=last_modified)
        self.cache.put(path, compiled)
        if root is not None:
            logger.debug(f"Recompiled stale template '{path}'")
        return compiled

    def _is_stale(self, root: RootNode) -> bool:
        if not self.reload_templates or root.pinned:
            return False
        current = self._loader.last_modified(root.path)
        if current is None or current < 1:
            return True
        recorded = root.last_modified if root.last_modified is not None else -1
        return current > recorded


def _wrap_data(data: Any) -> DataNode:
    if data is None:
        return DataNode()
    return DataNode.wrap(data)


__all__ = ["TemplateEngine"]

"""
Template source loaders.

A loader turns an absolute template path into source text and reports a
freshness signal used by hot reload. ``None`` means "unknown", which
makes a cached template always stale while hot reload is on.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable

from .errors import TemplateNotFoundError

logger = logging.getLogger(__name__)


@runtime_checkable
class ResourceLoader(Protocol):
    """Source of template text."""

    def load_template(self, path: str, charset: str) -> str:
        """
        Reads the template at ``path``.

        Raises:
            TemplateNotFoundError: If there is no template at ``path``
        """
        ...

    def last_modified(self, path: str) -> Optional[int]:
        """Modification timestamp in milliseconds, or None when unknown."""
        ...


class FileSystemLoader:
    """Templates stored as files; freshness is the file mtime."""

    def load_template(self, path: str, charset: str) -> str:
        file = Path(path)
        try:
            text = file.read_text(encoding=charset)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise TemplateNotFoundError(path, cause=e) from e
        logger.debug(f"Loaded template file '{path}' ({len(text)} chars)")
        return text

    def last_modified(self, path: str) -> Optional[int]:
        try:
            stat = Path(path).stat()
        except OSError:
            return None
        return stat.st_mtime_ns // 1_000_000


class PackageLoader:
    """
    Templates bundled as package data.

    Paths are relative to the package ('/mail/welcome.html' and
    'mail/welcome.html' name the same resource). Works from wheels and
    zip imports, so no freshness signal is available.
    """

    def __init__(self, package: str):
        self.package = package

    def _resource(self, path: str):
        resource = resources.files(self.package)
        for part in path.replace("\\", "/").split("/"):
            if part and part != ".":
                resource = resource / part
        return resource

    def load_template(self, path: str, charset: str) -> str:
        resource = self._resource(path)
        if not resource.is_file():
            raise TemplateNotFoundError(f"{self.package}:{path}")
        return resource.read_text(encoding=charset)

    def last_modified(self, path: str) -> Optional[int]:
        return None


TemplateEntry = Union[str, Tuple[str, Optional[int]]]


class DictLoader:
    """
    In-memory templates.

    Each entry is either the source text (freshness unknown) or a
    ``(source, last_modified)`` pair. ``set()`` replaces an entry, which
    lets callers simulate edits with explicit timestamps.
    """

    def __init__(self, templates: Optional[Mapping[str, TemplateEntry]] = None):
        self._templates: Dict[str, Tuple[str, Optional[int]]] = {}
        for path, entry in (templates or {}).items():
            if isinstance(entry, tuple):
                self.set(path, entry[0], entry[1])
            else:
                self.set(path, entry)

    def set(self, path: str, source: str, last_modified: Optional[int] = None) -> None:
        self._templates[path] = (source, last_modified)

    def remove(self, path: str) -> None:
        self._templates.pop(path, None)

    def load_template(self, path: str, charset: str) -> str:
        entry = self._templates.get(path)
        if entry is None:
            raise TemplateNotFoundError(path)
        return entry[0]

    def last_modified(self, path: str) -> Optional[int]:
        entry = self._templates.get(path)
        return entry[1] if entry is not None else None


__all__ = ["ResourceLoader", "FileSystemLoader", "PackageLoader", "DictLoader", "TemplateEntry"]

"""
Discovery of template files under a root directory.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import pathspec

DEFAULT_PATTERNS = ("**/*.html", "**/*.txt", "**/*.xml")


def build_template_spec(patterns: Optional[Sequence[str]] = None) -> pathspec.PathSpec:
    """Compiles gitignore-style ``patterns`` (defaults to DEFAULT_PATTERNS)."""
    lines = [p.strip() for p in (patterns or DEFAULT_PATTERNS) if p.strip()]
    return pathspec.GitIgnoreSpec.from_lines(lines)


def iter_templates(root: Path, spec: pathspec.PathSpec) -> Iterable[str]:
    """
    Yields root-relative POSIX paths of files matching ``spec``.

    Hidden directories (.git, .venv, ...) are not entered.
    """
    root = root.resolve()
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for fn in sorted(filenames):
            rel_posix = Path(dirpath, fn).relative_to(root).as_posix()
            if spec.match_file(rel_posix):
                yield rel_posix


def find_templates(root: Path, patterns: Optional[Sequence[str]] = None) -> List[str]:
    """
    Lists templates under ``root`` matching gitignore-style ``patterns``.

    Returns:
        Sorted root-relative POSIX paths
    """
    return sorted(iter_templates(root, build_template_spec(patterns)))


__all__ = ["DEFAULT_PATTERNS", "build_template_spec", "iter_templates", "find_templates"]

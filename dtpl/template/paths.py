"""
Template path resolution.

Paths are POSIX-style strings; backslashes are normalized to '/'.
"""

from __future__ import annotations

import posixpath


def normalize_root_directory(root_directory: str) -> str:
    """Normalizes separators and strips trailing slashes of a root directory."""
    path = root_directory.replace("\\", "/")
    while path.endswith("/"):
        path = path[:-1]
    return path


def resolve_root_path(root_directory: str, path: str) -> str:
    """
    Resolves a top-level template path against the root directory.

    Args:
        root_directory: Normalized root directory ("" when not configured)
        path: Path passed to render()

    Returns:
        Absolute template path
    """
    path = path.replace("\\", "/")
    if not root_directory:
        return path
    if path.startswith("/"):
        return root_directory + path
    return f"{root_directory}/{path}"


def is_absolute_include(target: str) -> bool:
    """Include targets starting with '/' or carrying a scheme ('file:/...') are absolute."""
    return target.startswith("/") or ":/" in target


def resolve_include_path(base_path: str, target: str) -> str:
    """
    Resolves an #{include} target against the including template.

    Rules:
    - '.'-prefixed targets are relative to the including template's directory,
      each '..' segment consumes one directory level
    - '/'-prefixed targets and targets with a scheme are used as-is
    - anything else is a sibling of the including template

    Args:
        base_path: Absolute path of the including template
        target: Include argument as written in the template

    Returns:
        Absolute path of the included template
    """
    target = target.replace("\\", "/")
    if is_absolute_include(target):
        return target

    # Directory part keeps its trailing '/', so a template at '/' yields '/'
    base_dir = base_path[:base_path.rfind("/") + 1]
    if target.startswith("."):
        return posixpath.normpath(base_dir + target)
    return base_dir + target


__all__ = [
    "normalize_root_directory",
    "resolve_root_path",
    "is_absolute_include",
    "resolve_include_path",
]

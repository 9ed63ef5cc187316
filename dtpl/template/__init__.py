"""
#{...} template language: compiler, fragment tree and renderer.
"""

from __future__ import annotations

from .compiler import compile_template
from .escaping import escape_markup
from .nodes import FragmentKind, RootNode, TemplateFunction, TemplateNode, Writer
from .paths import resolve_include_path, resolve_root_path
from .renderer import TemplateRenderer
from .scope import Scope

__all__ = [
    "compile_template",
    "escape_markup",
    "FragmentKind",
    "RootNode",
    "TemplateFunction",
    "TemplateNode",
    "Writer",
    "resolve_include_path",
    "resolve_root_path",
    "TemplateRenderer",
    "Scope",
]

"""
User-facing errors of the template engine.

Everything the embedder (or a template author) can fix inherits from
DtplUserError and is reported by the CLI as a clean message without a
stack trace. Programming errors must NOT inherit from it.
"""

from __future__ import annotations

from typing import Optional


class DtplUserError(Exception):
    """Base class for all user-facing errors of dtpl."""
    pass


class TemplateSyntaxError(DtplUserError):
    """
    Malformed directive found while compiling a template.

    The message is suffixed with the position of the offending directive,
    the same way parser errors are reported elsewhere in the engine.
    """

    def __init__(self, message: str, template: str = "", line: int = 0, column: int = 0):
        location = f" at {line}:{column}" if line else ""
        where = f" in '{template}'" if template else ""
        super().__init__(f"{message}{where}{location}")
        self.template = template
        self.line = line
        self.column = column


class UnknownFunctionError(DtplUserError):
    """#{function name} refers to a function that is not registered."""

    def __init__(self, name: str, template: str = "", line: int = 0, column: int = 0):
        where = f" in '{template}'" if template else ""
        location = f" at {line}:{column}" if line else ""
        super().__init__(f"Unknown function: {name}{where}{location}")
        self.name = name
        self.template = template
        self.line = line
        self.column = column


class TemplateNotFoundError(DtplUserError):
    """Template source could not be loaded (top-level render or include)."""

    def __init__(self, path: str, cause: Optional[Exception] = None):
        super().__init__(f"Template not found: {path}")
        self.path = path
        self.cause = cause


__all__ = [
    "DtplUserError",
    "TemplateSyntaxError",
    "UnknownFunctionError",
    "TemplateNotFoundError",
]

"""
Directive keyword resolution.

Keywords are matched by prefix in a fixed priority order, first match
wins. Negated spellings must be checked before their plain counterparts.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Tuple


class DirectiveKind(enum.Enum):
    NOT_EXISTS = "!exists"
    EXISTS = "exists"
    NOT_EQUALS = "!equals"
    EQUALS = "equals"
    INCLUDE = "include"
    FUNCTION = "function"
    FOR = "for"
    END = "end"
    VARIABLE = "variable"


# (prefix, kind) pairs in priority order
_PREFIX_RULES: Tuple[Tuple[str, DirectiveKind], ...] = (
    ("!ex", DirectiveKind.NOT_EXISTS),
    ("ex", DirectiveKind.EXISTS),
    ("!eq", DirectiveKind.NOT_EQUALS),
    ("eq", DirectiveKind.EQUALS),
    ("in", DirectiveKind.INCLUDE),
    ("fn", DirectiveKind.FUNCTION),
    ("fu", DirectiveKind.FUNCTION),
)

# Keywords that only match when spelled out exactly
_EXACT_RULES = {
    "for": DirectiveKind.FOR,
    "end": DirectiveKind.END,
}


@dataclass(frozen=True)
class Directive:
    """A tokenized directive header."""
    kind: DirectiveKind
    keyword: str          # First token, lower-cased
    args: List[str]       # Remaining whitespace-separated tokens


def resolve_keyword(keyword: str) -> DirectiveKind:
    """
    Maps the first token of a directive header to its kind.

    Args:
        keyword: First token of the header (any case)

    Returns:
        Directive kind; VARIABLE when no keyword rule matches
    """
    lowered = keyword.lower()
    for prefix, kind in _PREFIX_RULES:
        if lowered.startswith(prefix):
            return kind
    return _EXACT_RULES.get(lowered, DirectiveKind.VARIABLE)


def split_directive(header: str) -> Directive:
    """
    Splits a directive header into keyword and positional arguments.

    Raises:
        ValueError: If the header is empty
    """
    parts = header.split()
    if not parts:
        raise ValueError("Empty directive")
    keyword = parts[0].lower()
    return Directive(kind=resolve_keyword(keyword), keyword=keyword, args=parts[1:])


__all__ = ["DirectiveKind", "Directive", "resolve_keyword", "split_directive"]

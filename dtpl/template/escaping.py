"""
HTML/XML escaping of inserted variable values.
"""

from __future__ import annotations

_SPECIAL_CHARS = frozenset('<>&"\'')

_ESCAPE_TABLE = str.maketrans({
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
})


def escape_markup(text: str) -> str:
    """
    Trims ``text`` and escapes the five markup-significant characters.

    Text without any of them is returned trimmed, without translation.
    """
    text = text.strip()
    if not _SPECIAL_CHARS.intersection(text):
        return text
    return text.translate(_ESCAPE_TABLE)


__all__ = ["escape_markup"]

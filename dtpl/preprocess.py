"""
Template pre-processors.

A pre-processor is a ``str -> str`` function applied to template source
once per load, before compilation.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

Preprocessor = Callable[[str], str]

_SCRIPT_OPEN = "<script"
_SCRIPT_CLOSE = "</scrip"


def minify_html(text: str) -> str:
    """
    Simple and fast HTML minifier.

    - runs of whitespace collapse to a single space
    - the content of <script> elements is copied untouched
    - the space between '>' or '}' and a following '<' or '#' is dropped

    Directives survive minification: only whitespace is touched.
    """
    if not text:
        return text

    out: List[str] = []
    in_script = False
    was_whitespace = False

    for i, c in enumerate(text):
        if in_script:
            out.append(c)
            if c == "<" and text[i:i + len(_SCRIPT_CLOSE)].lower() == _SCRIPT_CLOSE:
                in_script = False
        elif c.isspace():
            if was_whitespace:
                continue
            was_whitespace = True
            out.append(" ")
        elif c == "<" and text[i:i + len(_SCRIPT_OPEN)].lower() == _SCRIPT_OPEN:
            in_script = True
            out.append(c)
        elif c in "<#" and len(out) > 2 and out[-2] in ">}" and out[-1] == " ":
            # Replaces the collapsed space; whitespace right after is still skipped
            out[-1] = c
        else:
            was_whitespace = False
            out.append(c)

    result = "".join(out)
    logger.debug(f"Minified template source: {len(text)} -> {len(result)} chars")
    return result


_PREPROCESSORS: Dict[str, Preprocessor] = {
    "minify-html": minify_html,
}


def get_preprocessor(name: str) -> Preprocessor:
    """
    Looks up a pre-processor by its configuration name.

    Raises:
        ValueError: For an unknown name
    """
    try:
        return _PREPROCESSORS[name]
    except KeyError:
        known = ", ".join(sorted(_PREPROCESSORS))
        raise ValueError(f"Unknown preprocessor '{name}' (known: {known})") from None


def available_preprocessors() -> List[str]:
    return sorted(_PREPROCESSORS)


__all__ = ["Preprocessor", "minify_html", "get_preprocessor", "available_preprocessors"]

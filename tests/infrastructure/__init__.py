"""
Shared test infrastructure.

Modules:
- file_utils: creating template and data files
- rendering_utils: building engines and rendering templates
- cli_utils: running the command line interface
"""

from .file_utils import write, touch_later
from .rendering_utils import make_engine, render_source
from .cli_utils import run_cli, jload

__all__ = [
    "write", "touch_later",
    "make_engine", "render_source",
    "run_cli", "jload",
]

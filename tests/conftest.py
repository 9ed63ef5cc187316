import textwrap
from pathlib import Path

import pytest

from dtpl.config import RELOAD_ENV
from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Template tree: a page with relative, parent-relative and sibling includes."""
    root = tmp_path / "www"
    write(
        root / "pages" / "index.html",
        textwrap.dedent("""\
        #{include ../parts/header.html}
        <ul>#{for user : users}<li>#{user.name}</li>#{end}</ul>
        #{include footer.html}""")
    )
    write(root / "pages" / "footer.html", "<footer>#{site}</footer>")
    write(root / "parts" / "header.html", "<h1>#{title}</h1>")
    return root


@pytest.fixture(autouse=True)
def _no_reload_override(monkeypatch):
    # DTPL_RELOAD from the developer's shell must not leak into tests
    monkeypatch.delenv(RELOAD_ENV, raising=False)

"""Tests for template loaders."""

import os
from pathlib import Path

import pytest

from dtpl.errors import TemplateNotFoundError
from dtpl.loaders import DictLoader, FileSystemLoader, PackageLoader, ResourceLoader
from tests.infrastructure.file_utils import write


class TestFileSystemLoader:
    def test_load(self, tmp_path: Path):
        p = write(tmp_path / "a.html", "héllo")
        assert FileSystemLoader().load_template(str(p), "utf-8") == "héllo"

    def test_charset(self, tmp_path: Path):
        p = tmp_path / "latin.html"
        p.write_bytes("é".encode("latin-1"))
        assert FileSystemLoader().load_template(str(p), "latin-1") == "é"

    def test_missing(self, tmp_path: Path):
        with pytest.raises(TemplateNotFoundError) as exc:
            FileSystemLoader().load_template(str(tmp_path / "nope.html"), "utf-8")
        assert exc.value.path.endswith("nope.html")
        assert isinstance(exc.value.cause, FileNotFoundError)

    def test_directory_is_not_a_template(self, tmp_path: Path):
        with pytest.raises(TemplateNotFoundError):
            FileSystemLoader().load_template(str(tmp_path), "utf-8")

    def test_last_modified_in_milliseconds(self, tmp_path: Path):
        p = write(tmp_path / "a.html", "x")
        os.utime(p, ns=(1_700_000_000_500_000_000, 1_700_000_000_500_000_000))
        assert FileSystemLoader().last_modified(str(p)) == 1_700_000_000_500

    def test_last_modified_unknown_for_missing_file(self, tmp_path: Path):
        assert FileSystemLoader().last_modified(str(tmp_path / "nope")) is None


class TestDictLoader:
    def test_entries(self):
        loader = DictLoader({"a": "A", "b": ("B", 10)})
        assert loader.load_template("a", "utf-8") == "A"
        assert loader.last_modified("a") is None
        assert loader.load_template("b", "utf-8") == "B"
        assert loader.last_modified("b") == 10

    def test_set_and_remove(self):
        loader = DictLoader()
        loader.set("a", "v1", 1)
        loader.set("a", "v2", 2)
        assert loader.load_template("a", "utf-8") == "v2"
        loader.remove("a")
        with pytest.raises(TemplateNotFoundError):
            loader.load_template("a", "utf-8")


class TestPackageLoader:
    def test_load_bundled_module_source(self):
        loader = PackageLoader("dtpl.template")
        text = loader.load_template("/escaping.py", "utf-8")
        assert "escape_markup" in text
        assert loader.last_modified("escaping.py") is None

    def test_missing_resource(self):
        with pytest.raises(TemplateNotFoundError, match="dtpl.template:missing.html"):
            PackageLoader("dtpl.template").load_template("missing.html", "utf-8")


def test_loaders_satisfy_protocol():
    for loader in (FileSystemLoader(), DictLoader(), PackageLoader("dtpl.template")):
        assert isinstance(loader, ResourceLoader)

"""Tests for directive keyword resolution."""

import pytest

from dtpl.template.directives import DirectiveKind, resolve_keyword, split_directive


class TestResolveKeyword:
    @pytest.mark.parametrize("keyword, kind", [
        ("!exists", DirectiveKind.NOT_EXISTS),
        ("!ex", DirectiveKind.NOT_EXISTS),
        ("exists", DirectiveKind.EXISTS),
        ("Ex", DirectiveKind.EXISTS),
        ("!equals", DirectiveKind.NOT_EQUALS),
        ("!eq", DirectiveKind.NOT_EQUALS),
        ("equals", DirectiveKind.EQUALS),
        ("eq", DirectiveKind.EQUALS),
        ("include", DirectiveKind.INCLUDE),
        ("in", DirectiveKind.INCLUDE),
        ("function", DirectiveKind.FUNCTION),
        ("fn", DirectiveKind.FUNCTION),
        ("fu", DirectiveKind.FUNCTION),
        ("for", DirectiveKind.FOR),
        ("FOR", DirectiveKind.FOR),
        ("end", DirectiveKind.END),
        ("user.name", DirectiveKind.VARIABLE),
        ("format", DirectiveKind.VARIABLE),
    ])
    def test_kinds(self, keyword, kind):
        assert resolve_keyword(keyword) == kind


class TestSplitDirective:
    def test_keyword_and_args(self):
        directive = split_directive("  eq  status   active ")
        assert directive.kind == DirectiveKind.EQUALS
        assert directive.keyword == "eq"
        assert directive.args == ["status", "active"]

    def test_keyword_is_lower_cased(self):
        directive = split_directive("User.Name extra")
        assert directive.kind == DirectiveKind.VARIABLE
        assert directive.keyword == "user.name"

    def test_empty_header(self):
        with pytest.raises(ValueError, match="Empty directive"):
            split_directive(" \t ")

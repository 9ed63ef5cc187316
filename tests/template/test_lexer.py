"""
Tests for the template lexer.

Covers splitting the source into text and directive tokens:
- plain text
- #{...} directives
- position tracking
- unterminated and non-nested directives
"""

from dtpl.template.lexer import TemplateLexer, tokenize_template
from dtpl.template.tokens import Token, TokenType


class TestTemplateLexer:
    """Basic lexer behaviour."""

    def test_empty_template(self):
        """An empty template yields only the EOF token."""
        tokens = TemplateLexer("").tokenize()

        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].value == ""
        assert tokens[0].position == 0
        assert tokens[0].line == 1
        assert tokens[0].column == 1

    def test_plain_text(self):
        """Text without directives is a single TEXT token."""
        text = "Hello, world!"
        tokens = TemplateLexer(text).tokenize()

        assert len(tokens) == 2  # TEXT + EOF
        assert tokens[0].type == TokenType.TEXT
        assert tokens[0].value == text
        assert tokens[1].type == TokenType.EOF

    def test_directive_between_text(self):
        tokens = tokenize_template("Hello #{name}!")

        assert [t.type for t in tokens] == [
            TokenType.TEXT, TokenType.DIRECTIVE, TokenType.TEXT, TokenType.EOF,
        ]
        assert tokens[0].value == "Hello "
        assert tokens[1].value == "name"
        assert tokens[1].position == 6
        assert tokens[1].column == 7
        assert tokens[2].value == "!"
        assert tokens[2].position == 13

    def test_adjacent_directives(self):
        """No empty TEXT tokens are produced between adjacent directives."""
        tokens = tokenize_template("#{a}#{b}")

        assert [t.type for t in tokens] == [TokenType.DIRECTIVE, TokenType.DIRECTIVE, TokenType.EOF]
        assert [t.value for t in tokens[:2]] == ["a", "b"]

    def test_header_keeps_inner_whitespace(self):
        """The header is passed to the parser unsplit."""
        tokens = tokenize_template("#{ for item : items }")
        assert tokens[0].value == " for item : items "

    def test_multiline_positions(self):
        """Line and column are tracked across newlines."""
        tokens = tokenize_template("line 1\nline 2 #{x}\n#{y}")

        directives = [t for t in tokens if t.type == TokenType.DIRECTIVE]
        assert (directives[0].line, directives[0].column) == (2, 8)
        assert (directives[1].line, directives[1].column) == (3, 1)

    def test_eof_position(self):
        tokens = tokenize_template("ab\ncd")
        eof = tokens[-1]
        assert eof.type == TokenType.EOF
        assert eof.position == 5
        assert (eof.line, eof.column) == (2, 3)


class TestLexerEdgeCases:
    """Malformed and unusual input."""

    def test_unterminated_directive_runs_to_end(self):
        """An unterminated #{ swallows the rest of the input."""
        tokens = tokenize_template("text #{name and more")

        assert tokens[0] == Token(TokenType.TEXT, "text ", 0, 1, 1)
        assert tokens[1].type == TokenType.DIRECTIVE
        assert tokens[1].value == "name and more"
        assert tokens[2].type == TokenType.EOF

    def test_directives_do_not_nest(self):
        """The first '}' closes the header."""
        tokens = tokenize_template("#{a{b}c}")

        assert tokens[0].type == TokenType.DIRECTIVE
        assert tokens[0].value == "a{b"
        assert tokens[1].type == TokenType.TEXT
        assert tokens[1].value == "c}"

    def test_lone_hash_and_brace_are_text(self):
        tokens = tokenize_template("# {not a directive} #")
        assert len(tokens) == 2
        assert tokens[0].value == "# {not a directive} #"

    def test_empty_header(self):
        """An empty header is still a directive token; the parser rejects it."""
        tokens = tokenize_template("a#{}b")
        assert tokens[1].type == TokenType.DIRECTIVE
        assert tokens[1].value == ""

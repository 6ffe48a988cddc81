"""Tests for the htmpl lexer."""

from __future__ import annotations

import pytest

from htmpl import EscapeMode, Lexer, Token, TokenType, normalize_newlines, tokenize


def _types(tokens: list[Token]) -> list[TokenType]:
    return [t.type for t in tokens]


class TestTags:
    """Recognition of each tag form."""

    def test_var_between_text(self):
        tokens = tokenize('Hi <tmpl_var name="who">!')
        assert tokens == [
            Token(TokenType.TEXT, "Hi ", 1, 0),
            Token(TokenType.VAR, "who", 1, 3),
            Token(TokenType.TEXT, "!", 1, 24),
        ]

    @pytest.mark.parametrize(
        ("source", "escape"),
        [
            ('<tmpl_var name="x" escape="html">', EscapeMode.HTML),
            ('<tmpl_var name="x" escape="url">', EscapeMode.URL),
            ("<tmpl_var name=x escape=url>", EscapeMode.URL),
            ('<tmpl_var name="x">', EscapeMode.NONE),
        ],
    )
    def test_escape_attribute(self, source, escape):
        (token,) = tokenize(source)
        assert token.type is TokenType.VAR
        assert token.value == "x"
        assert token.escape is escape

    def test_case_insensitive_keywords(self):
        (token,) = tokenize('<TMPL_VAR NAME="Title" ESCAPE="HTML">')
        assert token.type is TokenType.VAR
        assert token.escape is EscapeMode.HTML
        # The name itself keeps its case
        assert token.value == "Title"

    def test_name_key_is_optional(self):
        assert tokenize("<tmpl_if flag>") == [Token(TokenType.IF, "flag", 1, 0)]
        assert tokenize('<tmpl_loop "rows">')[0].value == "rows"

    def test_dotted_and_dashed_names(self):
        (token,) = tokenize('<tmpl_var name="user.first_name-2">')
        assert token.value == "user.first_name-2"

    @pytest.mark.parametrize(
        ("source", "kind"),
        [
            ("<tmpl_if x>", TokenType.IF),
            ("<tmpl_unless x>", TokenType.UNLESS),
            ("<tmpl_loop x>", TokenType.LOOP),
            ("<tmpl_include x.tmpl>", TokenType.INCLUDE),
        ],
    )
    def test_openers(self, source, kind):
        (token,) = tokenize(source)
        assert token.type is kind

    @pytest.mark.parametrize("kind", ["if", "unless", "loop"])
    def test_close_tags_are_lowercased(self, kind):
        (token,) = tokenize(f"</TMPL_{kind.upper()}>")
        assert token == Token(TokenType.CLOSE, kind, 1, 0)

    def test_else(self):
        assert _types(tokenize("<tmpl_if x>a<tmpl_else>b</tmpl_if>")) == [
            TokenType.IF,
            TokenType.TEXT,
            TokenType.ELSE,
            TokenType.TEXT,
            TokenType.CLOSE,
        ]

    def test_nameless_unless(self):
        assert tokenize("<tmpl_unless>") == [Token(TokenType.UNLESS, "", 1, 0)]

    def test_include_name(self):
        (token,) = tokenize('<tmpl_include name="partials.header-v2.tmpl">')
        assert token.type is TokenType.INCLUDE
        assert token.value == "partials.header-v2.tmpl"


class TestMalformedTags:
    """Tag-like text that does not match stays literal."""

    @pytest.mark.parametrize(
        "source",
        [
            "<tmpl_var>",
            '<tmpl_bogus name="x">',
            "</tmpl_var>",
            '<tmpl_var name="x" class="y">',
            "<tmpl_if >",
            "< tmpl_var x>",
        ],
    )
    def test_passed_through_as_text(self, source):
        assert tokenize(source) == [Token(TokenType.TEXT, source, 1, 0)]

    def test_malformed_next_to_valid(self):
        tokens = tokenize("<tmpl_var><tmpl_var x>")
        assert tokens == [
            Token(TokenType.TEXT, "<tmpl_var>", 1, 0),
            Token(TokenType.VAR, "x", 1, 10),
        ]


class TestLines:
    """Line splitting and positions."""

    def test_line_without_tags_is_one_text_token(self):
        assert tokenize("  plain   text  ") == [Token(TokenType.TEXT, "  plain   text  ", 1, 0)]

    def test_newlines_are_not_reinserted(self):
        assert [t.value for t in tokenize("a\nb\n\nc")] == ["a", "b", "c"]

    def test_keep_newlines(self):
        tokens = Lexer(keep_newlines=True).tokenize("a\nb\n\nc")
        assert [t.value for t in tokens] == ["a", "\n", "b", "\n", "\n", "c"]

    def test_positions(self):
        tokens = tokenize("x\n  <tmpl_var y>")
        assert tokens[1] == Token(TokenType.TEXT, "  ", 2, 0)
        assert tokens[2] == Token(TokenType.VAR, "y", 2, 2)

    def test_crlf_is_normalized_before_splitting(self):
        assert [t.value for t in tokenize("a\r\nb\rc")] == ["a", "b", "c"]

    def test_empty_source(self):
        assert tokenize("") == []


def test_normalize_newlines():
    assert normalize_newlines("a\r\nb\rc\n\r\nd") == "a\nb\nc\n\nd"

"""Lexer for HTML::Template-style tags.

Splits template source into TEXT tokens and tag tokens. The lexer works
line by line and never fails: anything that looks like a tag but does not
match the grammar is kept as literal text.

Recognized tags (case-insensitive):
    <tmpl_var name="x" [escape="html"|"url"]>
    <tmpl_if name="x"> ... [<tmpl_else>] ... </tmpl_if>
    <tmpl_unless name="x"> ... [<tmpl_else>] ... </tmpl_unless>
    <tmpl_loop name="x"> ... </tmpl_loop>
    <tmpl_include name="file.tmpl">

The ``name=`` key and the quotes are optional: ``<tmpl_var x>`` works.

Example:
    >>> tokenize('Hi <tmpl_var name="who">!')
    [Token(TEXT, 'Hi '), Token(VAR, 'who'), Token(TEXT, '!')]

"""

from __future__ import annotations

import re

from htmpl._types import OPENING_TAGS, EscapeMode, Token, TokenType

# Order of alternatives matters: a named opener is tried before the bare
# <tmpl_unless> form.
_TAG_RE = re.compile(
    r"<tmpl_(?P<kind>var|if|unless|loop|include)\s+"
    r"(?:name=)?\"?(?P<name>[a-zA-Z0-9_\-.]+)\"?\s*"
    r"(?:escape=\"?(?P<escape>url|html)\"?)?\s*>"
    r"|</tmpl_(?P<close>if|unless|loop)>"
    r"|<tmpl_(?P<else>else)>"
    r"|<tmpl_(?P<unless>unless)>",
    re.IGNORECASE,
)

_NEWLINE_RE = re.compile(r"\r\n?")


def normalize_newlines(source: str) -> str:
    """Fold CRLF and bare CR line endings to LF."""
    return _NEWLINE_RE.sub("\n", source)


class Lexer:
    """Tokenize template source.

    Args:
        keep_newlines: Emit a ``"\\n"`` TEXT token between source lines.
            Off by default, which joins consecutive lines without a line
            break.

    """

    __slots__ = ("_keep_newlines",)

    def __init__(self, keep_newlines: bool = False):
        self._keep_newlines = keep_newlines

    def tokenize(self, source: str) -> list[Token]:
        tokens: list[Token] = []
        lines = normalize_newlines(source).split("\n")
        for lineno, line in enumerate(lines, start=1):
            if self._keep_newlines and lineno > 1:
                tokens.append(Token(TokenType.TEXT, "\n", lineno, 0))
            tokens.extend(self._tokenize_line(line, lineno))
        return tokens

    def _tokenize_line(self, line: str, lineno: int) -> list[Token]:
        tokens: list[Token] = []
        pos = 0
        for match in _TAG_RE.finditer(line):
            start = match.start()
            if start > pos:
                tokens.append(Token(TokenType.TEXT, line[pos:start], lineno, pos))
            tokens.append(self._tag_token(match, lineno))
            pos = match.end()
        if pos < len(line):
            tokens.append(Token(TokenType.TEXT, line[pos:], lineno, pos))
        return tokens

    def _tag_token(self, match: re.Match[str], lineno: int) -> Token:
        col = match.start()
        if match.group("kind"):
            escape = match.group("escape")
            return Token(
                OPENING_TAGS[match.group("kind").lower()],
                match.group("name"),
                lineno,
                col,
                EscapeMode(escape.lower()) if escape else EscapeMode.NONE,
            )
        if match.group("close"):
            return Token(TokenType.CLOSE, match.group("close").lower(), lineno, col)
        if match.group("else"):
            return Token(TokenType.ELSE, "", lineno, col)
        # Nameless <tmpl_unless>: guards on nothing, so its body always renders
        return Token(TokenType.UNLESS, "", lineno, col)


def tokenize(source: str, keep_newlines: bool = False) -> list[Token]:
    """Tokenize template source with a default Lexer."""
    return Lexer(keep_newlines=keep_newlines).tokenize(source)

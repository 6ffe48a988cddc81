"""Token types shared by the lexer and compiler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of token produced by the lexer."""

    TEXT = "text"
    VAR = "var"
    IF = "if"
    UNLESS = "unless"
    LOOP = "loop"
    ELSE = "else"
    CLOSE = "close"
    INCLUDE = "include"


class EscapeMode(Enum):
    """Escaping applied to a ``<tmpl_var>`` value."""

    NONE = "none"
    HTML = "html"
    URL = "url"


# Tag keyword -> token type for opening tags that carry a name
OPENING_TAGS: dict[str, TokenType] = {
    "var": TokenType.VAR,
    "if": TokenType.IF,
    "unless": TokenType.UNLESS,
    "loop": TokenType.LOOP,
    "include": TokenType.INCLUDE,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    Attributes:
        type: Token kind
        value: Literal text for TEXT, the name path for VAR/IF/UNLESS/LOOP/INCLUDE,
            the closed block kind for CLOSE, empty for ELSE
        lineno: 1-based source line
        col_offset: 0-based column of the token start
        escape: Escape mode (VAR only)

    """

    type: TokenType
    value: str
    lineno: int = 1
    col_offset: int = 0
    escape: EscapeMode = EscapeMode.NONE

    def __repr__(self) -> str:
        if self.escape is not EscapeMode.NONE:
            return f"Token({self.type.name}, {self.value!r}, escape={self.escape.value})"
        return f"Token({self.type.name}, {self.value!r})"

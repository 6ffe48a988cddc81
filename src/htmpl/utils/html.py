"""Escaping collaborators for ``<tmpl_var escape="...">``."""

from __future__ import annotations

from urllib.parse import quote

# Single-pass HTML escaping via str.translate()
_HTML_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# Characters a URI may contain unencoded; the rest are percent-encoded.
# Same set as ECMAScript encodeURI, so whole URLs survive unchanged.
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


def html_escape(value: str) -> str:
    """Escape ``& < > " '`` for safe embedding in markup.

    Example:
        >>> html_escape("<b>")
        '&lt;b&gt;'
    """
    return value.translate(_HTML_ESCAPE_TABLE)


def url_encode(value: str) -> str:
    """Percent-encode text as UTF-8, keeping URI punctuation.

    Text that is not valid UTF-8, such as a lone surrogate, raises
    ``UnicodeEncodeError``, the same case in which ``encodeURI`` throws.

    Example:
        >>> url_encode("a b")
        'a%20b'
    """
    return quote(value, safe=_URI_SAFE)

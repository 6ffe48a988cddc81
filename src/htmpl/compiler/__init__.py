"""Token stream to Program compilation."""

from htmpl.compiler.core import Compiler
from htmpl.compiler.scope import Frame, Ref, ScopeStack

__all__ = [
    "Compiler",
    "Frame",
    "Ref",
    "ScopeStack",
]

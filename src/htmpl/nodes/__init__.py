"""Operations that make up a compiled template program."""

from htmpl.nodes.base import Op
from htmpl.nodes.control_flow import Else, End, If, Loop, Unless
from htmpl.nodes.output import Output, Text
from htmpl.nodes.program import Program

__all__ = [
    "Else",
    "End",
    "If",
    "Loop",
    "Op",
    "Output",
    "Program",
    "Text",
    "Unless",
]

"""Compiled templates and the program evaluator."""

from htmpl.template.core import OutputSink, Template
from htmpl.template.helpers import UNDEFINED
from htmpl.template.runtime import execute

__all__ = [
    "UNDEFINED",
    "OutputSink",
    "Template",
    "execute",
]

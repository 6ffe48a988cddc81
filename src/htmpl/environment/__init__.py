"""Environment, loaders and exceptions."""

from htmpl.environment.exceptions import (
    ErrorCode,
    IncludeDepthError,
    MissingTemplateError,
    StructuralMismatchError,
    TemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from htmpl.environment.loaders import (
    ChoiceLoader,
    DictLoader,
    FileSystemLoader,
    FunctionLoader,
    Loader,
)
from htmpl.environment.core import Environment

__all__ = [
    "ChoiceLoader",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionLoader",
    "IncludeDepthError",
    "Loader",
    "MissingTemplateError",
    "StructuralMismatchError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateSyntaxError",
]

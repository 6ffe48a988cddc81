"""htmpl — HTML::Template-style templates for Python.

Compiles templates written with ``<tmpl_*>`` tags into a reusable program
that renders against a data binding. The template is parsed once; each
render only walks the compiled program.

Quickstart:
    >>> from htmpl import Environment
    >>> env = Environment()
    >>> t = env.from_string('Hello, <tmpl_var name="name" escape="html">!')
    >>> t.render({"name": "<World>"})
    'Hello, &lt;World&gt;!'

File-based templates:
    >>> from htmpl import Environment, FileSystemLoader
    >>> env = Environment(loader=FileSystemLoader("templates/"))
    >>> page = env.get_template("page.tmpl", data={"rows": rows})
    >>> page.render()

Tags:
    <tmpl_var name="x" [escape="html"|"url"]>
    <tmpl_if name="x"> ... [<tmpl_else>] ... </tmpl_if>
    <tmpl_unless name="x"> ... [<tmpl_else>] ... </tmpl_unless>
    <tmpl_loop name="x"> ... </tmpl_loop>
    <tmpl_include name="other.tmpl">

Architecture:
Template Source → Lexer → Tokens → Compiler → Program → execute(data)

The Program is a flat tuple of immutable operations interpreted by a
fixed evaluator loop; no Python code is generated or exec'd.

Includes are rendered when the including template is compiled, using the
data given at construction. Their output is frozen into the program and
does not change on later renders.

"""

# Environment first: the compiler imports its exceptions module.
from htmpl.environment import (
    ChoiceLoader,
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    FunctionLoader,
    IncludeDepthError,
    Loader,
    MissingTemplateError,
    StructuralMismatchError,
    TemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from htmpl._types import EscapeMode, Token, TokenType
from htmpl.compiler import Compiler, Ref, ScopeStack
from htmpl.lexer import Lexer, normalize_newlines, tokenize
from htmpl.nodes import Program
from htmpl.template import UNDEFINED, OutputSink, Template, execute
from htmpl.utils.html import html_escape, url_encode

__version__ = "0.1.0"

__all__ = [
    "UNDEFINED",
    "ChoiceLoader",
    "Compiler",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "EscapeMode",
    "FileSystemLoader",
    "FunctionLoader",
    "IncludeDepthError",
    "Lexer",
    "Loader",
    "MissingTemplateError",
    "OutputSink",
    "Program",
    "Ref",
    "ScopeStack",
    "StructuralMismatchError",
    "Template",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateSyntaxError",
    "Token",
    "TokenType",
    "__version__",
    "execute",
    "html_escape",
    "normalize_newlines",
    "tokenize",
    "url_encode",
]

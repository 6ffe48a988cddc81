"""htmpl Environment — configuration and template construction.

The Environment ties the pipeline together:

    source → normalize_newlines → Lexer → Compiler → Program → Template

and supplies the loader used for construction by location and for
``<tmpl_include>``.

Configuration:
    All options are constructor keywords:

        >>> env = Environment(
        ...     loader=FileSystemLoader("templates/"),
        ...     strict_blocks=True,     # raise on mismatched close tags
        ...     keep_newlines=True,     # keep line breaks between source lines
        ...     max_include_depth=20,
        ... )

Missing Templates:
    Construction fails with MissingTemplateError ("No template supplied.")
    when there is neither literal source nor a location the loader can
    fetch. Loader exceptions of any kind count as "nothing fetched"; the
    original exception is chained as ``__cause__``.

"""

from __future__ import annotations

import logging
from typing import Any

from htmpl._types import EscapeMode
from htmpl.compile_context import CompileContext
from htmpl.compiler.core import Compiler
from htmpl.environment.exceptions import MissingTemplateError
from htmpl.environment.loaders import Loader
from htmpl.lexer import Lexer, normalize_newlines
from htmpl.nodes import Program
from htmpl.template import OutputSink, Template, execute
from htmpl.template.runtime import Escaper
from htmpl.utils.html import html_escape, url_encode

logger = logging.getLogger(__name__)

_NO_TEMPLATE = "No template supplied."


class Environment:
    """Central configuration for compiling and loading templates.

    Args:
        loader: Where templates are fetched from (by location and for
            includes); None allows only literal sources
        strict_blocks: Raise StructuralMismatchError for mismatched, stray
            or unclosed block tags instead of repairing them
        keep_newlines: Keep line breaks between source lines in the output
        max_include_depth: Deepest allowed include chain
        html_escape: Function for ``escape="html"``
        url_encode: Function for ``escape="url"``

    Example:
            >>> env = Environment(loader=DictLoader({"row.tmpl": "<td><tmpl_var v></td>"}))
            >>> env.get_template("row.tmpl").render({"v": 1})
            '<td>1</td>'

    """

    __slots__ = (
        "_escapers",
        "_lexer",
        "keep_newlines",
        "loader",
        "max_include_depth",
        "strict_blocks",
    )

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        strict_blocks: bool = False,
        keep_newlines: bool = False,
        max_include_depth: int = 50,
        html_escape: Escaper = html_escape,
        url_encode: Escaper = url_encode,
    ):
        self.loader = loader
        self.strict_blocks = strict_blocks
        self.keep_newlines = keep_newlines
        self.max_include_depth = max_include_depth
        self._escapers: dict[EscapeMode, Escaper] = {
            EscapeMode.HTML: html_escape,
            EscapeMode.URL: url_encode,
        }
        self._lexer = Lexer(keep_newlines=keep_newlines)

    def template(
        self,
        source: str | None = None,
        location: str | None = None,
        data: Any = None,
        target: OutputSink | None = None,
        name: str | None = None,
    ) -> Template:
        """Construct a Template from literal source or a loader location.

        Literal ``source`` wins when it is non-empty; otherwise ``location``
        is fetched through the loader. ``data`` is both the initial binding
        for ``render()`` and the binding used to render includes.

        Raises:
            MissingTemplateError: Neither yields any template text
        """
        filename = None
        if source:
            text = source
        elif location:
            text, filename = self._load_source(location)
            name = name or location
        else:
            raise MissingTemplateError(_NO_TEMPLATE)

        text = normalize_newlines(text)
        program = self.compile(text, name=name, data=data)
        return Template(
            program,
            name=name,
            filename=filename,
            source=text,
            data=data,
            target=target,
            escapers=self._escapers,
        )

    def from_string(
        self,
        source: str,
        data: Any = None,
        target: OutputSink | None = None,
        name: str | None = None,
    ) -> Template:
        """Compile a Template from literal source text."""
        return self.template(source=source, data=data, target=target, name=name)

    def get_template(
        self,
        location: str,
        data: Any = None,
        target: OutputSink | None = None,
    ) -> Template:
        """Fetch a template through the loader and compile it."""
        return self.template(location=location, data=data, target=target)

    def compile(
        self,
        source: str,
        *,
        name: str | None = None,
        data: Any = None,
        context: CompileContext | None = None,
    ) -> Program:
        """Compile source text to a Program.

        Args:
            source: Template text
            name: Template name for messages
            data: Binding used to render ``<tmpl_include>`` templates
            context: Include state when compiling an included template
        """
        source = normalize_newlines(source)
        if context is None:
            context = CompileContext(template_name=name, max_include_depth=self.max_include_depth)
        context.source = source
        compiler = Compiler(strict=self.strict_blocks, include=self._include)
        return compiler.compile(self._lexer.tokenize(source), data=data, context=context)

    def _include(self, name: str, data: Any, context: CompileContext) -> str:
        """Fetch, compile and render an included template."""
        source, _ = self._load_source(name)
        program = self.compile(source, data=data, context=context)
        return execute(program, data, self._escapers)

    def _load_source(self, location: str) -> tuple[str, str | None]:
        if self.loader is None:
            raise MissingTemplateError(
                f"{_NO_TEMPLATE} No loader configured to fetch '{location}'",
                location=location,
            )
        try:
            source, filename = self.loader.get_source(location)
        except Exception as exc:
            logger.warning("Could not fetch template %r: %s", location, exc)
            raise MissingTemplateError(
                f"{_NO_TEMPLATE} Could not fetch '{location}': {exc}",
                location=location,
            ) from exc
        if not source:
            raise MissingTemplateError(
                f"{_NO_TEMPLATE} '{location}' is empty",
                location=location,
            )
        logger.debug("Fetched template %r from %s", location, filename or "<loader>")
        return source, filename

    def __repr__(self) -> str:
        return (
            f"<Environment loader={type(self.loader).__name__ if self.loader else None} "
            f"strict_blocks={self.strict_blocks}>"
        )

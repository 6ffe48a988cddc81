"""htmpl Template — a compiled program plus its data binding.

A Template is created once per template text by the Environment and then
rendered as often as needed. Rendering only walks the compiled Program;
the source is never tokenized again.

Data Binding:
    The template remembers the last data it was given. ``render(data)``
    replaces it when ``data`` is non-empty; ``render()`` reuses it:

        >>> t = env.from_string("Hi <tmpl_var name>", data={"name": "Ann"})
        >>> t.render()
        'Hi Ann'
        >>> t.render({"name": "Bob"})
        'Hi Bob'
        >>> t.render()
        'Hi Bob'

Output Sinks:
    ``render_to_target()`` writes the result to the template's ``target``,
    any object with a ``write(str)`` method (an open file, ``io.StringIO``,
    a response body, ...).

Thread-Safety:
    The Program is immutable and ``execute()`` keeps all state local, but
    the remembered data binding is per Template. Pass data explicitly when
    one Template is shared between threads.

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from htmpl.template.runtime import DEFAULT_ESCAPERS, Escaper, execute

if TYPE_CHECKING:
    from htmpl._types import EscapeMode
    from htmpl.nodes import Program

logger = logging.getLogger(__name__)


@runtime_checkable
class OutputSink(Protocol):
    """Anything rendered text can be handed to."""

    def write(self, text: str, /) -> Any: ...


class Template:
    """Compiled template ready for rendering.

    Attributes:
        target: Output sink used by ``render_to_target()``, or None

    Example:
            >>> from htmpl import Environment
            >>> env = Environment()
            >>> t = env.from_string('<tmpl_loop rows><tmpl_var v></tmpl_loop>')
            >>> t.render({"rows": [{"v": 1}, {"v": 2}, {"v": 3}]})
            '123'

    """

    __slots__ = (
        "_data",
        "_escapers",
        "_filename",
        "_name",
        "_program",
        "_source",
        "target",
    )

    def __init__(
        self,
        program: Program,
        *,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
        data: Any = None,
        target: OutputSink | None = None,
        escapers: dict[EscapeMode, Escaper] | None = None,
    ):
        self._program = program
        self._name = name
        self._filename = filename
        self._source = source
        self._data = data
        self._escapers = escapers or DEFAULT_ESCAPERS
        self.target = target

    @property
    def program(self) -> Program:
        """The compiled Program."""
        return self._program

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def source(self) -> str | None:
        """Normalized template source."""
        return self._source

    @property
    def data(self) -> Any:
        """Last data binding supplied."""
        return self._data

    def render(self, data: Any = None, /, **context: Any) -> str:
        """Render with ``data``, or with the last data supplied.

        Keyword arguments are merged over ``data``, which must then be a
        mapping or ``None``:

            >>> t.render({"a": 1}, b=2)  # binds {"a": 1, "b": 2}

        Raises:
            TypeError: Keyword arguments given with non-mapping data
        """
        data = _merge_context(data, context)
        if data:
            self._data = data
        return execute(self._program, self._data, self._escapers)

    def render_to_target(self, data: Any = None, /, **context: Any) -> None:
        """Render and write the result to ``target``.

        Without a target nothing is rendered; the data is still remembered.
        """
        if self.target is None:
            data = _merge_context(data, context)
            if data:
                self._data = data
            logger.debug("Template %s has no target; skipping render", self._name or "<string>")
            return
        self.target.write(self.render(data, **context))

    def __repr__(self) -> str:
        return f"<Template {self._name or '<string>'!r} ops={len(self._program)}>"


def _merge_context(data: Any, context: dict[str, Any]) -> Any:
    if not context:
        return data
    if data is None:
        return dict(context)
    if not isinstance(data, Mapping):
        raise TypeError(
            f"Keyword arguments need mapping data, got {type(data).__name__}; "
            "pass a dict or set the values on the object"
        )
    return {**data, **context}

"""Template loaders.

Loaders supply template source for construction by location and for
``<tmpl_include>``. They implement ``get_source(name)`` returning
``(source, filename)`` and raise ``TemplateNotFoundError`` when the
template does not exist.

Built-in Loaders:
- `FileSystemLoader`: Load from filesystem directories
- `DictLoader`: Load from an in-memory dictionary (testing/embedded)
- `ChoiceLoader`: Try multiple loaders in order
- `FunctionLoader`: Wrap a fetch callable (HTTP client, CMS, ...)

Custom Loaders:
Implement the Loader protocol:
    ```python
    class DatabaseLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            row = db.query("SELECT source FROM templates WHERE name = ?", name)
            if not row:
                raise TemplateNotFoundError(f"Template '{name}' not found")
            return row.source, f"db://{name}"
    ```

Fetches are synchronous with no timeout and no retry. Any exception a
loader raises is reported by the Environment as a missing template.

"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from htmpl.environment.exceptions import TemplateNotFoundError


@runtime_checkable
class Loader(Protocol):
    """Anything with a ``get_source(name)`` method."""

    def get_source(self, name: str) -> tuple[str, str | None]: ...


class FileSystemLoader:
    """Load templates from filesystem directories.

    Directories are searched in order; the first matching file wins:
        ```python
        loader = FileSystemLoader(["themes/custom/", "themes/default/"])
        ```

    Example:
            >>> loader = FileSystemLoader("templates/")
            >>> source, filename = loader.get_source("page.tmpl")
            >>> print(filename)
            'templates/page.tmpl'

    Raises:
        TemplateNotFoundError: If template not found in any search path

    """

    __slots__ = ("_encoding", "_paths")

    def __init__(
        self,
        paths: str | Path | list[str | Path],
        encoding: str = "utf-8",
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._encoding = encoding

    def get_source(self, name: str) -> tuple[str, str]:
        """Load template source from filesystem."""
        for base in self._paths:
            path = base / name
            if path.is_file():
                return path.read_text(self._encoding), str(path)

        raise TemplateNotFoundError(
            f"Template '{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def list_templates(self) -> list[str]:
        """List all ``.tmpl`` and ``.html`` templates in search paths."""
        templates = set()
        for base in self._paths:
            if base.is_dir():
                for pattern in ("*.tmpl", "*.html"):
                    for path in base.rglob(pattern):
                        templates.add(path.relative_to(base).as_posix())
        return sorted(templates)


class DictLoader:
    """Load templates from an in-memory dictionary.

    Example:
            >>> env = Environment(loader=DictLoader({
            ...     "nav.tmpl": '<nav><tmpl_var name="title"></nav>',
            ... }))
            >>> env.get_template("nav.tmpl", data={"title": "Home"}).render()
            '<nav>Home</nav>'

    Raises:
        TemplateNotFoundError: If template name not in mapping; the message
            suggests a close match when there is one

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: dict[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            from difflib import get_close_matches

            available = sorted(self._mapping.keys())
            msg = f"Template '{name}' not found"
            matches = get_close_matches(name, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping.keys())


class ChoiceLoader:
    """Try multiple loaders in order, returning the first match.

    Example:
            >>> loader = ChoiceLoader([
            ...     DictLoader({"nav.tmpl": "<nav>Custom</nav>"}),
            ...     FileSystemLoader("templates/"),
            ... ])

    Raises:
        TemplateNotFoundError: If no loader can find the template

    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: list[Loader]):
        self._loaders = loaders

    def get_source(self, name: str) -> tuple[str, str | None]:
        """Try each loader in order, return first match."""
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(
            f"Template '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def list_templates(self) -> list[str]:
        """Merge template lists from all loaders (deduplicated, sorted)."""
        templates: set[str] = set()
        for loader in self._loaders:
            if hasattr(loader, "list_templates"):
                templates.update(loader.list_templates())
        return sorted(templates)


class FunctionLoader:
    """Wrap a fetch callable as a template loader.

    The callable takes a location and returns:
        - ``str``: Template source (filename will be ``"<function>"``).
        - ``tuple[str, str | None]``: ``(source, filename)``.
        - ``None``: Template not found (raises ``TemplateNotFoundError``).

    Example:
            >>> from urllib.request import urlopen
            >>> def fetch(url):
            ...     with urlopen(url) as response:
            ...         return response.read().decode(), url
            >>> env = Environment(loader=FunctionLoader(fetch))
            >>> env.get_template("https://example.com/page.tmpl")

    Raises:
        TemplateNotFoundError: If ``load_func`` returns ``None``

    """

    __slots__ = ("_load_func",)

    def __init__(
        self,
        load_func: Callable[[str], str | tuple[str, str | None] | None],
    ):
        self._load_func = load_func

    def get_source(self, name: str) -> tuple[str, str | None]:
        """Call the load function and normalize the result."""
        result = self._load_func(name)

        if result is None:
            raise TemplateNotFoundError(f"Template '{name}' not found")

        if isinstance(result, str):
            return result, "<function>"

        return result

    def list_templates(self) -> list[str]:
        """FunctionLoader cannot enumerate templates."""
        return []

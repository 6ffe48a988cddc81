"""Exceptions for the htmpl template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError       # Loader could not supply the template
│   └── MissingTemplateError    # Nothing to compile at construction
├── TemplateSyntaxError         # Block structure error (strict mode)
│   └── StructuralMismatchError # Close tag does not match its opener
└── IncludeDepthError           # Include chain too deep (cycle)

Missing data never raises: unknown names render as empty text and test
false in conditionals.

Example:
    ```
    H-PAR-001: Syntax Error: </tmpl_if> closes <tmpl_loop> opened at line 2
      --> page.tmpl:4:0
       |
      4 | </tmpl_if>
       | ^
    ```

"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Searchable error codes.

    Format: H-{CATEGORY}-{NUMBER}
    Categories: PAR (compiler structure), TPL (template loading)
    """

    # Structure errors (H-PAR-xxx)
    STRUCTURAL_MISMATCH = "H-PAR-001"
    UNEXPECTED_ELSE = "H-PAR-002"
    UNEXPECTED_CLOSE = "H-PAR-003"
    UNCLOSED_BLOCK = "H-PAR-004"

    # Template loading errors (H-TPL-xxx)
    TEMPLATE_NOT_FOUND = "H-TPL-001"
    MISSING_TEMPLATE = "H-TPL-002"
    INCLUDE_DEPTH = "H-TPL-003"


def format_template_stack(stack: list[str] | None) -> str:
    """Format an include chain for error messages.

    Example:
        >>> print(format_template_stack(["page.tmpl", "nav.tmpl"]))
        Include stack:
          • page.tmpl
          • nav.tmpl
    """
    if not stack:
        return ""
    lines = ["Include stack:"]
    lines.extend(f"  • {name}" for name in stack)
    return "\n".join(lines)


class TemplateError(Exception):
    """Base exception for all htmpl template errors.

        >>> try:
        ...     env.get_template("page.tmpl")
        ... except TemplateError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-block summary prefixed with its code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(TemplateError):
    """The loader could not find or fetch a template.

    Example:
        >>> env.get_template("nonexistent.tmpl")
        TemplateNotFoundError: Template 'nonexistent.tmpl' not found in: templates/
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class MissingTemplateError(TemplateNotFoundError):
    """Construction had neither literal source nor a fetched location.

    Fetch failures are reported through this error too; the original
    loader exception is chained as ``__cause__``.
    """

    code: ErrorCode | None = ErrorCode.MISSING_TEMPLATE

    def __init__(self, message: str = "No template supplied.", location: str | None = None):
        self.location = location
        super().__init__(message)


class TemplateSyntaxError(TemplateError):
    """Template structure error.

    Only raised when the environment is created with ``strict_blocks=True``.
    When ``source`` and ``lineno`` are provided, the message includes the
    offending line with a caret under ``col_offset``.
    """

    code: ErrorCode | None = ErrorCode.STRUCTURAL_MISMATCH

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.source = source
        self.col_offset = col_offset
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        location = self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"

        header = f"Syntax Error: {self.message}\n  --> {location}"

        if self.source and self.lineno:
            lines = self.source.splitlines()
            if 0 < self.lineno <= len(lines):
                error_line = lines[self.lineno - 1]
                snippet = f"\n   |\n{self.lineno:>3} | {error_line}"
                if self.col_offset is not None:
                    snippet += f"\n   | {' ' * self.col_offset}^"
                return header + snippet

        return header


class StructuralMismatchError(TemplateSyntaxError):
    """A close tag, else tag, or end of template does not fit the open blocks."""


class IncludeDepthError(TemplateError):
    """Include chain exceeded the environment's ``max_include_depth``.

    Almost always a cycle: ``a.tmpl`` includes ``b.tmpl`` includes ``a.tmpl``.
    """

    code: ErrorCode | None = ErrorCode.INCLUDE_DEPTH

    def __init__(self, template_name: str, max_depth: int, stack: list[str] | None = None):
        self.template_name = template_name
        self.max_depth = max_depth
        self.stack = stack or []
        message = (
            f"Maximum include depth exceeded ({max_depth}) when including '{template_name}'"
        )
        trace = format_template_stack(self.stack)
        if trace:
            message += f"\n{trace}"
        message += "\n  Suggestion: Check for circular includes: A → B → A"
        super().__init__(message)

"""Per-compile state for include resolution.

Includes are resolved while the outer template compiles, so the include
depth and the chain of templates being compiled live here rather than in
any render-time state.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CompileContext:
    """State shared by one compile and the includes it triggers.

    Attributes:
        template_name: Template being compiled (for messages)
        source: Its normalized source (for syntax error snippets)
        include_depth: How many includes deep this compile is
        max_include_depth: Limit before IncludeDepthError
        template_stack: Names of the enclosing templates, outermost first
    """

    template_name: str | None = None
    source: str | None = None

    # 50 is deep enough for any real template hierarchy while catching
    # circular includes early.
    include_depth: int = 0
    max_include_depth: int = 50

    template_stack: list[str] = field(default_factory=list)

    def check_include_depth(self, template_name: str) -> None:
        """Raise IncludeDepthError if one more include would exceed the limit."""
        if self.include_depth >= self.max_include_depth:
            from htmpl.environment.exceptions import IncludeDepthError

            raise IncludeDepthError(
                template_name,
                self.max_include_depth,
                stack=[*self.template_stack, self.template_name or "<template>"],
            )

    def child_context(self, template_name: str) -> CompileContext:
        """Create the context for compiling an included template."""
        return CompileContext(
            template_name=template_name,
            source=None,  # Child templates load their own source
            include_depth=self.include_depth + 1,
            max_include_depth=self.max_include_depth,
            template_stack=[*self.template_stack, self.template_name or "<template>"],
        )

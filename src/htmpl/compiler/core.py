"""htmpl Compiler — token stream to Program.

The compiler makes a single pass over the tokens. There is no syntax tree:
each token emits operations straight into a flat list, and a stack of open
blocks records where each conditional or loop started so that its ``Else``
and ``End`` operations can be linked back to it when they arrive.

Scope:
    Names are resolved against a ScopeStack when they are compiled, so
    every Output/If/Unless/Loop operation carries a Ref that already knows
    which loop item it is relative to. The stack gains a frame when a loop
    opens and loses it when that loop's block closes.

Block Matching:
    By default a close tag closes the innermost open block whatever its
    kind, stray close and else tags are ignored, and blocks still open at
    the end of the template are closed implicitly. Each repair is logged as
    a warning. With ``strict=True`` the same situations raise
    StructuralMismatchError instead.

Includes:
    ``<tmpl_include>`` is resolved during compilation. The included
    template is compiled and rendered against the data binding given to
    ``compile()``, and its output becomes literal text in this program.
    Later renders with different data do not change it.

Example:
        >>> from htmpl.lexer import tokenize
        >>> program = Compiler().compile(tokenize('<tmpl_loop rows><tmpl_var v></tmpl_loop>'))
        >>> print(program.dump())
        0000 loop data.rows slot=1 end=2
        0001 output data.rows[i1].v
        0002 end loop start=0

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from htmpl._types import Token, TokenType
from htmpl.compile_context import CompileContext
from htmpl.compiler.scope import ScopeStack
from htmpl.environment.exceptions import (
    ErrorCode,
    MissingTemplateError,
    StructuralMismatchError,
)
from htmpl.nodes import Else, End, If, Loop, Op, Output, Program, Text, Unless

logger = logging.getLogger(__name__)

# (name, data, context) -> rendered text of the included template
IncludeFunc = Callable[[str, Any, CompileContext], str]


@dataclass(slots=True)
class _OpenBlock:
    kind: str
    start_index: int
    lineno: int
    col_offset: int
    else_index: int | None = None


class Compiler:
    """Compile a token stream into a Program.

    Args:
        strict: Raise StructuralMismatchError on mismatched, stray or
            unclosed blocks instead of repairing them
        include: Callback that fetches, compiles and renders an included
            template; without one, any ``<tmpl_include>`` raises
            MissingTemplateError

    A Compiler is reusable but not thread-safe; use one per thread.
    """

    __slots__ = (
        "_blocks",
        "_context",
        "_data",
        "_dispatch",
        "_include",
        "_ops",
        "_scope",
        "_strict",
    )

    def __init__(self, *, strict: bool = False, include: IncludeFunc | None = None):
        self._strict = strict
        self._include = include
        self._ops: list[Op] = []
        self._blocks: list[_OpenBlock] = []
        self._scope = ScopeStack()
        self._context = CompileContext()
        self._data: Any = None
        self._dispatch: dict[TokenType, Callable[[Token], None]] = {
            TokenType.TEXT: self._compile_text,
            TokenType.VAR: self._compile_var,
            TokenType.IF: self._compile_if,
            TokenType.UNLESS: self._compile_unless,
            TokenType.ELSE: self._compile_else,
            TokenType.LOOP: self._compile_loop,
            TokenType.CLOSE: self._compile_close,
            TokenType.INCLUDE: self._compile_include,
        }

    def compile(
        self,
        tokens: Sequence[Token],
        *,
        name: str | None = None,
        data: Any = None,
        context: CompileContext | None = None,
    ) -> Program:
        """Compile tokens into a Program.

        Args:
            tokens: Output of the lexer
            name: Template name, used when no ``context`` is given
            data: Data binding used to render included templates
            context: Template name, source and include depth

        Raises:
            StructuralMismatchError: Block structure is broken (strict only)
            MissingTemplateError: An included template cannot be fetched
            IncludeDepthError: Includes nest too deeply
        """
        self._ops = []
        self._blocks = []
        self._scope = ScopeStack()
        self._context = context or CompileContext(template_name=name)
        self._data = data

        for token in tokens:
            self._dispatch[token.type](token)
        self._close_remaining()

        program = Program(tuple(self._ops), name=self._context.template_name)
        logger.debug(
            "Compiled %s: %d tokens -> %d ops",
            self._context.template_name or "<template>",
            len(tokens),
            len(program),
        )
        return program

    # ─────────────────────────────────────────────────────────────────────
    # Token handlers
    # ─────────────────────────────────────────────────────────────────────

    def _compile_text(self, token: Token) -> None:
        self._append_text(token.value, token)

    def _compile_var(self, token: Token) -> None:
        self._ops.append(
            Output(
                lineno=token.lineno,
                col_offset=token.col_offset,
                ref=self._scope.resolve(token.value),
                escape=token.escape,
            )
        )

    def _compile_if(self, token: Token) -> None:
        self._open_block("if", If(token.lineno, token.col_offset, self._scope.resolve(token.value)))

    def _compile_unless(self, token: Token) -> None:
        self._open_block(
            "unless", Unless(token.lineno, token.col_offset, self._scope.resolve(token.value))
        )

    def _compile_loop(self, token: Token) -> None:
        # The sequence is resolved in the enclosing scope, then the loop's
        # own frame is pushed for everything inside it.
        ref = self._scope.resolve(token.value)
        frame = self._scope.push(token.value)
        self._open_block(
            "loop", Loop(token.lineno, token.col_offset, ref=ref, slot=frame.slot)
        )

    def _compile_else(self, token: Token) -> None:
        block = self._blocks[-1] if self._blocks else None
        if block is None or block.kind == "loop":
            self._repair(
                "<tmpl_else> outside <tmpl_if> or <tmpl_unless>",
                token,
                ErrorCode.UNEXPECTED_ELSE,
            )
            return
        if block.else_index is not None:
            self._repair(
                f"second <tmpl_else> in <tmpl_{block.kind}> opened at line {block.lineno}",
                token,
                ErrorCode.UNEXPECTED_ELSE,
            )
            return
        block.else_index = len(self._ops)
        self._ops.append(Else(token.lineno, token.col_offset))

    def _compile_close(self, token: Token) -> None:
        if not self._blocks:
            self._repair(
                f"</tmpl_{token.value}> without an open block",
                token,
                ErrorCode.UNEXPECTED_CLOSE,
            )
            return
        block = self._blocks[-1]
        if block.kind != token.value:
            self._repair(
                f"</tmpl_{token.value}> closes <tmpl_{block.kind}> opened at line {block.lineno}",
                token,
                ErrorCode.STRUCTURAL_MISMATCH,
                repaired=True,
            )
        self._close_block(token.lineno, token.col_offset)

    def _compile_include(self, token: Token) -> None:
        name = token.value
        if self._include is None:
            raise MissingTemplateError(
                f"No loader available for <tmpl_include name=\"{name}\">", location=name
            )
        self._context.check_include_depth(name)
        logger.debug(
            "Including %s into %s", name, self._context.template_name or "<template>"
        )
        text = self._include(name, self._data, self._context.child_context(name))
        self._append_text(text, token)

    # ─────────────────────────────────────────────────────────────────────
    # Emission helpers
    # ─────────────────────────────────────────────────────────────────────

    def _append_text(self, value: str, token: Token) -> None:
        if not value:
            return
        last = self._ops[-1] if self._ops else None
        if isinstance(last, Text):
            self._ops[-1] = replace(last, value=last.value + value)
        else:
            self._ops.append(Text(token.lineno, token.col_offset, value))

    def _open_block(self, kind: str, op: Op) -> None:
        self._blocks.append(_OpenBlock(kind, len(self._ops), op.lineno, op.col_offset))
        self._ops.append(op)

    def _close_block(self, lineno: int, col_offset: int) -> None:
        block = self._blocks.pop()
        end_index = len(self._ops)
        self._ops.append(End(lineno, col_offset, kind=block.kind, start_index=block.start_index))

        opener = self._ops[block.start_index]
        if isinstance(opener, Loop):
            self._ops[block.start_index] = replace(opener, end_index=end_index)
            self._scope.pop()
        else:
            self._ops[block.start_index] = replace(
                opener, else_index=block.else_index, end_index=end_index
            )
            if block.else_index is not None:
                self._ops[block.else_index] = replace(
                    self._ops[block.else_index], end_index=end_index
                )

    def _close_remaining(self) -> None:
        while self._blocks:
            block = self._blocks[-1]
            self._repair(
                f"<tmpl_{block.kind}> is never closed",
                Token(TokenType.CLOSE, block.kind, block.lineno, block.col_offset),
                ErrorCode.UNCLOSED_BLOCK,
                repaired=True,
            )
            self._close_block(block.lineno, block.col_offset)

    def _repair(
        self,
        message: str,
        token: Token,
        code: ErrorCode,
        *,
        repaired: bool = False,
    ) -> None:
        """Raise in strict mode, otherwise log what is being tolerated."""
        if self._strict:
            raise StructuralMismatchError(
                message,
                lineno=token.lineno,
                name=self._context.template_name,
                source=self._context.source,
                col_offset=token.col_offset,
                code=code,
            )
        logger.warning(
            "%s:%d: %s (%s)",
            self._context.template_name or "<template>",
            token.lineno,
            message,
            "repaired" if repaired else "ignored",
        )

"""Compiled program container."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from htmpl._types import EscapeMode
from htmpl.nodes.base import Op
from htmpl.nodes.control_flow import Else, End, If, Loop, Unless
from htmpl.nodes.output import Output, Text


@dataclass(frozen=True, slots=True)
class Program:
    """An immutable sequence of operations produced by the compiler.

    Attributes:
        ops: Operations in execution order
        name: Template name (for logging and ``dump()``)

    """

    ops: tuple[Op, ...]
    name: str | None = None

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[Op]:
        return iter(self.ops)

    def dump(self) -> str:
        """Return a human-readable listing, one operation per line.

        Example:
            >>> print(program.dump())
            0000 text 'Rows: '
            0001 loop data.rows slot=1 end=3
            0002 output html(data.rows[i1].v)
            0003 end loop start=1
        """
        return "\n".join(f"{i:04d} {_describe(op)}" for i, op in enumerate(self.ops))


def _describe_text(op: Text) -> str:
    return f"text {op.value!r}"


def _describe_output(op: Output) -> str:
    if op.escape is EscapeMode.NONE:
        return f"output {op.ref}"
    return f"output {op.escape.value}({op.ref})"


def _describe_conditional(op: If | Unless) -> str:
    kind = "if" if isinstance(op, If) else "unless"
    branch = f" else={op.else_index}" if op.else_index is not None else ""
    return f"{kind} {op.ref}{branch} end={op.end_index}"


def _describe_else(op: Else) -> str:
    return f"else end={op.end_index}"


def _describe_loop(op: Loop) -> str:
    return f"loop {op.ref} slot={op.slot} end={op.end_index}"


def _describe_end(op: End) -> str:
    return f"end {op.kind} start={op.start_index}"


_DESCRIBERS: dict[type[Op], Callable[[Any], str]] = {
    Text: _describe_text,
    Output: _describe_output,
    If: _describe_conditional,
    Unless: _describe_conditional,
    Else: _describe_else,
    Loop: _describe_loop,
    End: _describe_end,
}


def _describe(op: Op) -> str:
    describer = _DESCRIBERS.get(type(op))
    if describer is None:
        return type(op).__name__
    return describer(op)

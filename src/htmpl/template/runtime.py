"""Program evaluator.

Walks a Program's operations with a program counter. Conditionals and
loops jump using the indices the compiler stored on them:

    If/Unless  guard false → else_index + 1, or end_index + 1 without else
    Else       reached only after the guarded branch → end_index + 1
    Loop       empty → end_index + 1, otherwise enter with index 0
    End(loop)  more items → start_index + 1, otherwise leave

Each open loop owns one slot in ``loops``, keyed by the slot number the
compiler assigned. A Ref is resolved against the current item of its
innermost loop slot, or the root binding when it has none.

Thread-Safety:
All state is local to one ``execute()`` call; programs are never mutated.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from htmpl._types import EscapeMode
from htmpl.nodes import Else, End, If, Loop, Op, Output, Program, Text, Unless
from htmpl.template.helpers import if_test, is_sequence, is_truthy, lookup_path, to_text
from htmpl.utils.html import html_escape, url_encode

if TYPE_CHECKING:
    from htmpl.compiler.scope import Ref

Escaper = Callable[[str], str]


@dataclass(slots=True)
class _LoopState:
    items: Sequence[Any]
    index: int = 0

    @property
    def item(self) -> Any:
        return self.items[self.index]


class _Evaluator:
    __slots__ = ("_buf", "_data", "_escapers", "_loops", "_ops")

    def __init__(self, program: Program, data: Any, escapers: dict[EscapeMode, Escaper]):
        self._ops = program.ops
        self._data = data
        self._escapers = escapers
        self._buf: list[str] = []
        self._loops: dict[int, _LoopState] = {}

    def run(self) -> str:
        ops = self._ops
        dispatch = _DISPATCH
        pc = 0
        while pc < len(ops):
            op = ops[pc]
            pc = dispatch[type(op)](self, op, pc)
        return "".join(self._buf)

    def _resolve(self, ref: Ref) -> Any:
        base = self._loops[ref.slot].item if ref.slot else self._data
        return lookup_path(base, ref.path)

    def _text(self, op: Text, pc: int) -> int:
        self._buf.append(op.value)
        return pc + 1

    def _output(self, op: Output, pc: int) -> int:
        text = to_text(self._resolve(op.ref))
        escaper = self._escapers.get(op.escape)
        self._buf.append(escaper(text) if escaper else text)
        return pc + 1

    def _if(self, op: If, pc: int) -> int:
        if if_test(self._resolve(op.ref)):
            return pc + 1
        return _skip_branch(op)

    def _unless(self, op: Unless, pc: int) -> int:
        if not is_truthy(self._resolve(op.ref)):
            return pc + 1
        return _skip_branch(op)

    def _else(self, op: Else, pc: int) -> int:
        return op.end_index + 1

    def _loop(self, op: Loop, pc: int) -> int:
        items = self._resolve(op.ref)
        if not is_sequence(items) or not items:
            return op.end_index + 1
        self._loops[op.slot] = _LoopState(items)
        return pc + 1

    def _end(self, op: End, pc: int) -> int:
        if op.kind != "loop":
            return pc + 1
        opener = self._ops[op.start_index]
        state = self._loops[opener.slot]
        state.index += 1
        if state.index < len(state.items):
            return op.start_index + 1
        del self._loops[opener.slot]
        return pc + 1


def _skip_branch(op: If | Unless) -> int:
    if op.else_index is not None:
        return op.else_index + 1
    return op.end_index + 1


_DISPATCH: dict[type[Op], Callable[[_Evaluator, Any, int], int]] = {
    Text: _Evaluator._text,
    Output: _Evaluator._output,
    If: _Evaluator._if,
    Unless: _Evaluator._unless,
    Else: _Evaluator._else,
    Loop: _Evaluator._loop,
    End: _Evaluator._end,
}

DEFAULT_ESCAPERS: dict[EscapeMode, Escaper] = {
    EscapeMode.HTML: html_escape,
    EscapeMode.URL: url_encode,
}


def execute(
    program: Program,
    data: Any = None,
    escapers: dict[EscapeMode, Escaper] | None = None,
) -> str:
    """Render a Program against a data binding.

    Args:
        program: Compiled program
        data: Data binding; names the template uses but the binding lacks
            render as empty text
        escapers: Override the HTML and URL escaping functions

    Returns:
        Rendered text
    """
    return _Evaluator(program, data, escapers or DEFAULT_ESCAPERS).run()

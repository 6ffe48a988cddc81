"""Control flow operations.

Blocks are not nested trees: an opener records the index of its ``Else``
and ``End`` operations and the runtime jumps between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from htmpl.nodes.base import Op

if TYPE_CHECKING:
    from htmpl.compiler.scope import Ref


@dataclass(frozen=True, slots=True)
class If(Op):
    """Conditional: <tmpl_if name="x"> ... [<tmpl_else>] ... </tmpl_if>"""

    ref: Ref
    else_index: int | None = None
    end_index: int = -1


@dataclass(frozen=True, slots=True)
class Unless(Op):
    """Negated conditional: <tmpl_unless name="x"> ... </tmpl_unless>"""

    ref: Ref
    else_index: int | None = None
    end_index: int = -1


@dataclass(frozen=True, slots=True)
class Else(Op):
    """Alternate branch of the enclosing If/Unless.

    Only reached when the guarded branch ran, so it always jumps to the end.
    """

    end_index: int = -1


@dataclass(frozen=True, slots=True)
class Loop(Op):
    """Iteration: <tmpl_loop name="rows"> ... </tmpl_loop>

    ``slot`` is the loop-index slot owned by this loop (its nesting depth).
    """

    ref: Ref
    slot: int
    end_index: int = -1


@dataclass(frozen=True, slots=True)
class End(Op):
    """Close of the block opened at ``start_index``."""

    kind: str
    start_index: int = -1

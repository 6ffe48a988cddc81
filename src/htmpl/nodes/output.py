"""Output operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from htmpl._types import EscapeMode
from htmpl.nodes.base import Op

if TYPE_CHECKING:
    from htmpl.compiler.scope import Ref


@dataclass(frozen=True, slots=True)
class Text(Op):
    """Literal text between tags."""

    value: str


@dataclass(frozen=True, slots=True)
class Output(Op):
    """Variable output: <tmpl_var name="x" escape="html">"""

    ref: Ref
    escape: EscapeMode = EscapeMode.NONE

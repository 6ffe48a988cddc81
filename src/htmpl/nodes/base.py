"""Base operation class for compiled programs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Op:
    """Base class for all program operations.

    All operations track the source location of the tag or text that
    produced them. Operations are immutable, so a compiled program can be
    shared between renders and threads.

    """

    lineno: int
    col_offset: int

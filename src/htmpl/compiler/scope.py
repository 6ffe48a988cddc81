"""Loop scope tracking for the compiler.

Names in a template are relative to the innermost open loop. Inside
``<tmpl_loop name="outer"><tmpl_loop name="inner">`` the name ``x`` means
``data.outer[i1].inner[i2].x``, where ``i1`` and ``i2`` are the index slots
owned by the two loops. Slots are numbered by nesting depth, so sibling
loops at the same depth reuse the same slot.
"""

from __future__ import annotations

from dataclasses import dataclass

ROOT_NAME = "data"


def split_path(name: str) -> tuple[str, ...]:
    """Split a dotted name into its segments, dropping empty ones."""
    return tuple(part for part in name.split(".") if part)


@dataclass(frozen=True, slots=True)
class Frame:
    """One open loop: the path of the iterated sequence and its index slot."""

    path: tuple[str, ...]
    slot: int

    def __str__(self) -> str:
        return f"{'.'.join(self.path)}[i{self.slot}]"


@dataclass(frozen=True, slots=True)
class Ref:
    """A name resolved against the loop scope in effect where it appears.

    Attributes:
        frames: Open loops, outermost first
        path: Name segments relative to the innermost loop item

    """

    frames: tuple[Frame, ...]
    path: tuple[str, ...]

    @property
    def slot(self) -> int:
        """Index slot of the innermost loop, or 0 for the root binding."""
        return self.frames[-1].slot if self.frames else 0

    def __str__(self) -> str:
        parts = [ROOT_NAME, *(str(frame) for frame in self.frames)]
        if self.path:
            parts.append(".".join(self.path))
        return ".".join(parts)


class ScopeStack:
    """Stack of open loop frames, rooted at the data binding.

    Every ``push()`` must be matched by exactly one ``pop()``; popping the
    root raises ``IndexError``.

    Example:
        >>> scope = ScopeStack()
        >>> _ = scope.push("outer")
        >>> str(scope.resolve("x"))
        'data.outer[i1].x'
    """

    __slots__ = ("_frames",)

    def __init__(self) -> None:
        self._frames: list[Frame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    def resolve(self, name: str) -> Ref:
        return Ref(tuple(self._frames), split_path(name))

    def push(self, name: str) -> Frame:
        frame = Frame(split_path(name), self.depth + 1)
        self._frames.append(frame)
        return frame

    def pop(self) -> Frame:
        if not self._frames:
            raise IndexError("pop from root scope")
        return self._frames.pop()

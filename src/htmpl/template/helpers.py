"""Value lookup and truthiness used by the runtime.

Lookups are lenient: a name that is missing from the data binding
resolves to UNDEFINED instead of raising, so partial data never breaks a
render. UNDEFINED is falsy and renders as empty text.

Thread-Safety:
All functions are stateless and safe for concurrent use.

"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from numbers import Number
from typing import Any


class _Undefined:
    """Sentinel for a name the data binding does not provide."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


def is_sequence(value: Any) -> bool:
    """True for lists, tuples and other sequences, but not strings or bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def lookup(value: Any, key: str) -> Any:
    """Look up one name segment on a value.

    Tries a mapping key, then a sequence index for all-digit segments,
    then an attribute. Returns UNDEFINED when none applies.

    Only a missing attribute counts as undefined: anything else a property
    or ``__getattr__`` raises propagates out of the render.
    """
    if value is None or value is UNDEFINED:
        return UNDEFINED
    if isinstance(value, Mapping):
        return value.get(key, UNDEFINED)
    if key.isdigit() and is_sequence(value):
        index = int(key)
        return value[index] if index < len(value) else UNDEFINED
    return getattr(value, key, UNDEFINED)


def lookup_path(value: Any, path: Sequence[str]) -> Any:
    """Follow a dotted path from ``value``; an empty path is UNDEFINED."""
    if not path:
        return UNDEFINED
    for key in path:
        value = lookup(value, key)
        if value is UNDEFINED:
            break
    return value


def is_truthy(value: Any) -> bool:
    """Truthiness used by ``<tmpl_unless>``.

    ``None``, UNDEFINED, ``False``, zero, NaN and the empty string are
    false. Everything else is true, including empty lists and mappings.
    """
    if value is None or value is UNDEFINED or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, Number):
        # NaN compares unequal to itself
        return value == value and value != 0
    return True


def if_test(value: Any) -> bool:
    """Guard used by ``<tmpl_if>``: a non-empty sequence or a truthy non-sequence."""
    if is_sequence(value):
        return len(value) > 0
    return is_truthy(value)


def to_text(value: Any) -> str:
    """Convert a value for output.

    ``None`` and UNDEFINED become empty text; booleans render as
    ``true``/``false``.
    """
    if value is None or value is UNDEFINED:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return value
    return str(value)

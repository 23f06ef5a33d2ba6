"""Composite key construction.

A key is either a single primitive (a non-empty string or a number) used as
is, or an ordered sequence of segments joined with the store delimiter::

    >>> make_key(["icao", "more"])
    'icao:more'
    >>> make_key(1234)
    1234
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from django_hashstore.types import KeyT

DEFAULT_DELIMITER = ":"


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid key
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_valid_delimiter(delimiter: Any) -> bool:
    """Check whether a delimiter option is usable (non-empty string or number)."""
    return (isinstance(delimiter, str) and bool(delimiter)) or _is_number(delimiter)


def make_key(key: Any, delimiter: str | int | float = DEFAULT_DELIMITER) -> KeyT | None:
    """Compose a key from ``key``, returning None when it is not a valid key."""
    if isinstance(key, list | tuple):
        if not key:
            return None
        return str(delimiter).join(str(segment) for segment in key)
    if isinstance(key, str):
        return key or None
    if _is_number(key):
        return key
    return None


def make_pattern(pattern: Any, delimiter: str | int | float = DEFAULT_DELIMITER) -> KeyT | None:
    """Compose a key search pattern.

    Patterns follow the same rules as keys, so ``["icao", "*"]`` becomes
    ``"icao:*"``.
    """
    return make_key(pattern, delimiter)

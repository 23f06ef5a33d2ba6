"""Argument normalization for store operations.

Every store operation accepts a loose call shape (variadic fields, a single
list of fields, a mapping of field values, ...). The functions here reduce
each shape to one request object so the store only ever deals with a single
canonical form per operation. They never talk to the engine; invalid input
raises one of the :mod:`django_hashstore.exceptions` validation errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from django_hashstore.exceptions import InvalidDataError, InvalidFieldError, InvalidKeyError, InvalidPatternError
from django_hashstore.keys import DEFAULT_DELIMITER, make_key, make_pattern
from django_hashstore.types import (
    ClearRequest,
    DeleteRequest,
    ExistsRequest,
    FieldsRequest,
    GetRequest,
    KeysRequest,
    SetRequest,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from django_hashstore.types import CallbackT, KeyT


def split_callback(args: Sequence[Any]) -> tuple[CallbackT | None, list[Any]]:
    """Separate a trailing completion callback from the positional arguments."""
    args = list(args)
    if args and callable(args[-1]):
        return args.pop(), args
    return None, args


def _unwrap(args: Sequence[Any]) -> list[Any]:
    # A single list or tuple stands in for its elements (one level only)
    if len(args) == 1 and isinstance(args[0], list | tuple):
        return list(args[0])
    return list(args)


def _require_key(args: Sequence[Any], delimiter: str | int | float) -> KeyT:
    key = make_key(args[0], delimiter) if args else None
    if key is None:
        raise InvalidKeyError
    return key


def normalize_get(args: Sequence[Any], delimiter: str | int | float = DEFAULT_DELIMITER) -> GetRequest:
    """Build a read request from ``(key, [raw], *fields)``.

    No fields means every field of the hash.
    """
    key = _require_key(args, delimiter)
    rest = list(args[1:])
    raw = False
    if rest and isinstance(rest[0], bool):
        raw = rest.pop(0)
    fields = _unwrap(rest)
    return GetRequest(key=key, fields=tuple(fields) if fields else None, raw=raw)


def normalize_set(args: Sequence[Any], delimiter: str | int | float = DEFAULT_DELIMITER) -> SetRequest:
    """Build a write request from ``(key, mapping)`` or ``(key, field, value, ...)``.

    With alternating pairs, a trailing field without a value is dropped.
    """
    key = _require_key(args, delimiter)
    rest = _unwrap(args[1:])

    if len(rest) == 1:
        payload = rest[0]
        if not isinstance(payload, Mapping) or not payload:
            raise InvalidDataError
        # Copy so the caller's mapping is never touched by encoding
        return SetRequest(key=key, mapping=dict(payload))

    mapping = {rest[i]: rest[i + 1] for i in range(0, len(rest) - 1, 2)}
    if not mapping:
        raise InvalidDataError
    return SetRequest(key=key, mapping=mapping)


def normalize_exists(args: Sequence[Any], delimiter: str | int | float = DEFAULT_DELIMITER) -> ExistsRequest:
    key = _require_key(args, delimiter)
    if len(args) < 2 or args[1] is None:
        raise InvalidFieldError
    return ExistsRequest(key=key, field=args[1])


def normalize_delete(args: Sequence[Any], delimiter: str | int | float = DEFAULT_DELIMITER) -> DeleteRequest:
    key = _require_key(args, delimiter)
    return DeleteRequest(key=key, fields=tuple(_unwrap(args[1:])))


def normalize_fields(args: Sequence[Any], delimiter: str | int | float = DEFAULT_DELIMITER) -> FieldsRequest:
    return FieldsRequest(key=_require_key(args, delimiter))


def normalize_keys(args: Sequence[Any], delimiter: str | int | float = DEFAULT_DELIMITER) -> KeysRequest:
    pattern = make_pattern(args[0], delimiter) if args else None
    if pattern is None:
        raise InvalidPatternError
    return KeysRequest(pattern=pattern)


def normalize_clear(args: Sequence[Any], delimiter: str | int | float = DEFAULT_DELIMITER) -> ClearRequest:
    """Build a clear request from ``(*keys)`` or ``([keys])``.

    Each entry is composed on its own, so ``clear(["icao", "itu"])`` removes two
    keys while ``clear([["icao", "more"]])`` removes ``icao:more``. Entries that
    do not compose are skipped.
    """
    keys = tuple(key for key in (make_key(value, delimiter) for value in _unwrap(args)) if key is not None)
    if not keys:
        raise InvalidKeyError
    return ClearRequest(keys=keys)

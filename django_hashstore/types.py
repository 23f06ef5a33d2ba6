"""Type aliases and request types for django-hashstore.

Compatible with redis-py and valkey-py type systems, defined locally
to avoid a runtime dependency on either library for type annotations.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# A composed key as sent to the engine
type KeyT = str | int | float

# Completion callback: (error, result)
type CallbackT = Callable[[BaseException | None, Any], Any]


class Signal(StrEnum):
    """Connection lifecycle signals re-emitted by the store."""

    READY = "ready"
    CONNECTED = "connected"
    CLOSED = "closed"
    ERROR = "error"


@dataclass(frozen=True)
class StoreOptions:
    """Store configuration, fixed at construction."""

    delimiter: str | int | float = ":"
    auto_cast: bool = True
    serializer: Any = None


# =============================================================================
# Canonical requests produced by django_hashstore.normalize
# =============================================================================


@dataclass(frozen=True)
class GetRequest:
    key: KeyT
    # None means every field of the hash
    fields: tuple[Any, ...] | None = None
    raw: bool = False


@dataclass(frozen=True)
class SetRequest:
    key: KeyT
    mapping: dict[Any, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ExistsRequest:
    key: KeyT
    field: Any


@dataclass(frozen=True)
class DeleteRequest:
    key: KeyT
    fields: tuple[Any, ...] = ()


@dataclass(frozen=True)
class FieldsRequest:
    key: KeyT


@dataclass(frozen=True)
class KeysRequest:
    pattern: KeyT


@dataclass(frozen=True)
class ClearRequest:
    keys: tuple[KeyT, ...]


type RequestT = GetRequest | SetRequest | ExistsRequest | DeleteRequest | FieldsRequest | KeysRequest | ClearRequest

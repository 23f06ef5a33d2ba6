"""Hash store backends.

A hash store reads and writes fields of hash records kept in a
Redis-compatible server. Values are cast through JSON on the way in and out
(unless ``auto_cast`` is disabled), keys may be given as sequences of segments
joined with the store delimiter, and every operation accepts several call
shapes.

Each operation comes in two flavours:

- a coroutine (``aget``, ``aset``, ...) that returns the result and raises on
  invalid arguments or engine failures;
- a callback method (``get``, ``set``, ...) taking a trailing
  ``callback(error, result)``, which schedules the work on the running event
  loop and returns the store so calls can be chained.

Callback methods must be called from inside a running event loop, otherwise
they raise ``RuntimeError``.

Usage::

    store = RedisHashStore(location="redis://localhost:6379/0")
    await store.aset("icao", {"alpha": "dot dash", "xray": 13})
    await store.aget("icao", "xray")  # 13

    store.get("icao", "alpha", "xray", lambda err, values: ...)
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from django_hashstore.client.default import KeyValueEngineClient, RedisEngineClient, ValkeyEngineClient
from django_hashstore.codec import ValueCodec
from django_hashstore.exceptions import HashStoreError
from django_hashstore.keys import DEFAULT_DELIMITER, is_valid_delimiter, make_key
from django_hashstore.lifecycle import SignalEmitter, forward_signals
from django_hashstore.normalize import (
    normalize_clear,
    normalize_delete,
    normalize_exists,
    normalize_fields,
    normalize_get,
    normalize_keys,
    normalize_set,
    split_callback,
)
from django_hashstore.types import StoreOptions

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from django_hashstore.types import (
        CallbackT,
        ClearRequest,
        DeleteRequest,
        ExistsRequest,
        FieldsRequest,
        GetRequest,
        KeysRequest,
        KeyT,
        RequestT,
        SetRequest,
    )

# Alias builtin set type to avoid shadowing by the set() method
_Set = set

logger = logging.getLogger(__name__)


# =============================================================================
# KeyValueHashStore - base class (library-agnostic)
# =============================================================================


class KeyValueHashStore(SignalEmitter):
    """Hash store over an async Redis-compatible engine client.

    Args:
        client: An async redis-py / valkey-py client, or an already built
            :class:`KeyValueEngineClient`. When omitted, one is created from
            ``options`` (``location``, ``host``, ``port``, ``password``,
            ``db``, ...).
        delimiter: Joins key segments. Must be a non-empty string or a
            number, otherwise ``":"`` is used.
        auto_cast: JSON-encode values on write and decode them on read.
        serializer: Serializer instance, class or import path used when
            casting. Defaults to :class:`~django_hashstore.serializers.json.JSONSerializer`.
        **options: Connection options for the engine client.

    The store re-emits the engine client's ``ready``, ``connected``,
    ``closed`` and ``error`` signals; register listeners with :meth:`on`.
    """

    # Class attributes - subclasses override these
    _engine_class: type[KeyValueEngineClient] = KeyValueEngineClient

    def __init__(
        self,
        client: Any = None,
        *,
        delimiter: str | int | float = DEFAULT_DELIMITER,
        auto_cast: bool = True,
        serializer: str | type | Any | None = None,
        **options: Any,
    ) -> None:
        super().__init__()
        if not is_valid_delimiter(delimiter):
            delimiter = DEFAULT_DELIMITER
        self._options = StoreOptions(delimiter=delimiter, auto_cast=bool(auto_cast), serializer=serializer)
        self._codec = ValueCodec(auto_cast=self._options.auto_cast, serializer=self._options.serializer)

        if isinstance(client, KeyValueEngineClient):
            self._engine = client
        else:
            self._engine = self._engine_class(client, **options)

        # Strong references to in-flight callback tasks
        self._tasks: _Set[asyncio.Task[None]] = _Set()

        forward_signals(self._engine, self)

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def delimiter(self) -> str | int | float:
        return self._options.delimiter

    @property
    def auto_cast(self) -> bool:
        return self._options.auto_cast

    @property
    def client(self) -> Any:
        """The underlying redis-py / valkey-py async client."""
        return self._engine.client

    @property
    def engine(self) -> KeyValueEngineClient:
        return self._engine

    def make_key(self, key: Any) -> KeyT | None:
        """Compose ``key`` with this store's delimiter (None if invalid)."""
        return make_key(key, self.delimiter)

    # =========================================================================
    # Connection Lifecycle
    # =========================================================================

    async def connect(self) -> bool:
        """Check the connection, firing ``connected`` and ``ready`` on success."""
        return await self._engine.connect()

    async def close(self) -> None:
        """Close the engine connection, firing ``closed``."""
        await self._engine.close()

    async def __aenter__(self) -> KeyValueHashStore:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # =========================================================================
    # Coroutine Operations
    # =========================================================================

    async def aget(self, key: Any = None, *args: Any) -> Any:
        """Read hash fields.

        ``aget(key)`` returns every field as a dict. ``aget(key, field)``
        returns that field's value and ``aget(key, f1, f2, ...)`` (or a list of
        fields) returns a dict in request order. Pass ``True`` right after the
        key to get the stored bytes without casting. Missing fields are None.

        Raises:
            InvalidKeyError: If no key can be composed from ``key``
        """
        return await self._get(normalize_get((key, *args), self.delimiter))

    async def aset(self, key: Any = None, *args: Any) -> None:
        """Write hash fields from a mapping or from alternating field/value pairs.

        Raises:
            InvalidKeyError: If no key can be composed from ``key``
            InvalidDataError: If no field/value pair can be resolved
        """
        await self._set(normalize_set((key, *args), self.delimiter))

    async def aexists(self, key: Any = None, field: Any = None) -> bool:
        """Check whether a hash field exists.

        Raises:
            InvalidKeyError: If no key can be composed from ``key``
            InvalidFieldError: If ``field`` is missing
        """
        return await self._exists(normalize_exists((key, field), self.delimiter))

    async def adelete(self, key: Any = None, *args: Any) -> None:
        """Delete hash fields, given individually or as a list."""
        await self._delete(normalize_delete((key, *args), self.delimiter))

    async def afields(self, key: Any = None) -> list[Any]:
        """List the field names of a hash."""
        return await self._fields(normalize_fields((key,), self.delimiter))

    async def akeys(self, pattern: Any = None) -> list[Any]:
        """List keys matching a glob-style pattern.

        Raises:
            InvalidPatternError: If the pattern is empty or not a string,
                number or sequence of segments
        """
        return await self._keys(normalize_keys((pattern,), self.delimiter))

    async def aclear(self, *keys: Any) -> None:
        """Remove whole keys, given individually or as a list."""
        await self._clear(normalize_clear(keys, self.delimiter))

    # =========================================================================
    # Callback Operations
    # =========================================================================

    def get(self, *args: Any) -> KeyValueHashStore:
        """``get(key, [raw], *fields, callback)``; see :meth:`aget`."""
        return self._dispatch("get", normalize_get, self._get, args)

    def set(self, *args: Any) -> KeyValueHashStore:
        """``set(key, mapping, callback)`` or ``set(key, field, value, ..., callback)``."""
        return self._dispatch("set", normalize_set, self._set, args)

    def exists(self, *args: Any) -> KeyValueHashStore:
        """``exists(key, field, callback)``."""
        return self._dispatch("exists", normalize_exists, self._exists, args)

    def delete(self, *args: Any) -> KeyValueHashStore:
        """``delete(key, *fields, callback)``."""
        return self._dispatch("delete", normalize_delete, self._delete, args)

    def fields(self, *args: Any) -> KeyValueHashStore:
        """``fields(key, callback)``."""
        return self._dispatch("fields", normalize_fields, self._fields, args)

    def keys(self, *args: Any) -> KeyValueHashStore:
        """``keys(pattern, callback)``."""
        return self._dispatch("keys", normalize_keys, self._keys, args)

    def clear(self, *args: Any) -> KeyValueHashStore:
        """``clear(*keys, callback)``."""
        return self._dispatch("clear", normalize_clear, self._clear, args)

    def _dispatch(
        self,
        name: str,
        normalizer: Callable[[Sequence[Any], Any], RequestT],
        handler: Callable[[Any], Awaitable[Any]],
        args: Sequence[Any],
    ) -> KeyValueHashStore:
        """Schedule an operation and return immediately.

        Without a trailing callable there is nobody to report to, so the call
        is dropped.

        Raises:
            RuntimeError: If called with a callback outside a running event loop
        """
        callback, args = split_callback(args)
        if callback is None:
            logger.debug("%s() called without a callback, ignoring", name)
            return self

        task = asyncio.get_running_loop().create_task(self._complete(name, normalizer, handler, args, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return self

    async def _complete(
        self,
        name: str,
        normalizer: Callable[[Sequence[Any], Any], RequestT],
        handler: Callable[[Any], Awaitable[Any]],
        args: Sequence[Any],
        callback: CallbackT,
    ) -> None:
        error: Exception | None = None
        result = None
        try:
            result = await handler(normalizer(args, self.delimiter))
        except HashStoreError as e:
            logger.debug("%s() rejected: %s", name, e)
            error = e
        except Exception as e:
            error = e

        try:
            callback(error, result)
        except Exception:
            logger.exception("Callback for %s() failed", name)

    # =========================================================================
    # Request Handlers
    # =========================================================================

    async def _get(self, request: GetRequest) -> Any:
        decode = self._codec.decode
        if request.fields is None:
            data = await self._engine.hgetall(request.key)
            return {self._codec.decode_name(f): decode(v, raw=request.raw) for f, v in data.items()}

        values = await self._engine.hmget(request.key, request.fields)
        if len(request.fields) == 1:
            return decode(values[0], raw=request.raw)
        return {f: decode(v, raw=request.raw) for f, v in zip(request.fields, values, strict=True)}

    async def _set(self, request: SetRequest) -> None:
        mapping = {f: self._codec.encode(v) for f, v in request.mapping.items()}
        await self._engine.hset(request.key, mapping)

    async def _exists(self, request: ExistsRequest) -> bool:
        return await self._engine.hexists(request.key, request.field)

    async def _delete(self, request: DeleteRequest) -> None:
        if request.fields:
            await self._engine.hdel(request.key, *request.fields)

    async def _fields(self, request: FieldsRequest) -> list[Any]:
        return [self._codec.decode_name(f) for f in await self._engine.hkeys(request.key)]

    async def _keys(self, request: KeysRequest) -> list[Any]:
        return [self._codec.decode_name(k) for k in await self._engine.keys(request.pattern)]

    async def _clear(self, request: ClearRequest) -> None:
        await self._engine.delete(*request.keys)


# =============================================================================
# Concrete Implementations
# =============================================================================


class RedisHashStore(KeyValueHashStore):
    """Hash store backed by redis-py."""

    _engine_class = RedisEngineClient


class ValkeyHashStore(KeyValueHashStore):
    """Hash store backed by valkey-py."""

    _engine_class = ValkeyEngineClient


HashStore = RedisHashStore

"""Engine client classes for Redis-compatible backends.

The engine client is the only place that talks to the server. It exposes the
fixed set of commands the store needs and reports the connection lifecycle as
signals. Replies are returned exactly as the underlying library produced them;
decoding belongs to the store.

Architecture:
- KeyValueEngineClient: Base class with all logic, library-agnostic
- RedisEngineClient: Builds redis-py clients
- ValkeyEngineClient: Builds valkey-py clients

The class attribute pattern allows subclasses to swap the underlying library
while inheriting everything else.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django_hashstore.exceptions import _connection_errors
from django_hashstore.lifecycle import SignalEmitter
from django_hashstore.pool import get_connection_factory
from django_hashstore.types import Signal

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from django_hashstore.types import KeyT

logger = logging.getLogger(__name__)


# =============================================================================
# KeyValueEngineClient - base class (library-agnostic)
# =============================================================================


class KeyValueEngineClient(SignalEmitter):
    """Async engine client with lifecycle signals.

    Emits ``CONNECTED`` then ``READY`` after the first successful round-trip,
    ``ERROR`` with the exception whenever a connection-level failure surfaces,
    and ``CLOSED`` once :meth:`close` has run. Command errors (wrong type,
    unsupported values) are raised without any signal.

    Subclasses must set:
    - _connection_factory_class: Dotted path of the factory used when no
      client is supplied
    """

    # Class attributes - subclasses override these
    _connection_factory_class: str | None = None

    def __init__(
        self,
        client: Any = None,
        *,
        connection_factory: str | type | None = None,
        **options: Any,
    ) -> None:
        """Initialize the engine client.

        Args:
            client: An existing async client; built from ``options`` when omitted
            connection_factory: Connection factory class or import path
            **options: Connection options (location, host, port, password, db, ...)
        """
        super().__init__()
        if client is None:
            factory = get_connection_factory(options, connection_factory or self._connection_factory_class)
            client = factory.connect()
        self._client = client
        self._connected = False

    @property
    def client(self) -> Any:
        """The underlying redis-py / valkey-py async client."""
        return self._client

    @property
    def connected(self) -> bool:
        return self._connected

    # =========================================================================
    # Connection Lifecycle
    # =========================================================================

    def _mark_connected(self) -> None:
        if not self._connected:
            self._connected = True
            self.emit(Signal.CONNECTED)
            self.emit(Signal.READY)

    async def _execute(self, command: str, *args: Any, **kwargs: Any) -> Any:
        """Run one command, translating connection state into signals."""
        logger.debug("Executing %s", command.upper())
        try:
            result = await getattr(self._client, command)(*args, **kwargs)
        except _connection_errors as e:
            self._connected = False
            self.emit(Signal.ERROR, e)
            raise
        self._mark_connected()
        return result

    async def connect(self) -> bool:
        """Round-trip a PING so lifecycle signals fire before the first command."""
        return bool(await self._execute("ping"))

    async def close(self) -> None:
        """Close the client and its connection pool."""
        await self._client.aclose()
        self._connected = False
        self.emit(Signal.CLOSED)

    # =========================================================================
    # Hash Operations
    # =========================================================================

    async def hgetall(self, key: KeyT) -> dict[Any, Any]:
        """Get all hash fields."""
        return await self._execute("hgetall", key)

    async def hmget(self, key: KeyT, fields: Sequence[Any]) -> list[Any]:
        """Get multiple hash fields, aligned with ``fields``."""
        return await self._execute("hmget", key, list(fields))

    async def hset(self, key: KeyT, mapping: Mapping[Any, Any]) -> int:
        """Set multiple hash fields."""
        return await self._execute("hset", key, mapping=mapping)

    async def hexists(self, key: KeyT, field: Any) -> bool:
        """Check if a hash field exists."""
        return bool(await self._execute("hexists", key, field))

    async def hdel(self, key: KeyT, *fields: Any) -> int:
        """Delete hash fields."""
        return await self._execute("hdel", key, *fields)

    async def hkeys(self, key: KeyT) -> list[Any]:
        """Get all field names in a hash."""
        return await self._execute("hkeys", key)

    # =========================================================================
    # Key Operations
    # =========================================================================

    async def keys(self, pattern: KeyT) -> list[Any]:
        """Get all keys matching pattern."""
        return await self._execute("keys", pattern)

    async def delete(self, *keys: KeyT) -> int:
        """Remove keys."""
        return await self._execute("delete", *keys)


# =============================================================================
# Concrete Implementations
# =============================================================================


class RedisEngineClient(KeyValueEngineClient):
    """Engine client using redis-py's asyncio client."""

    _connection_factory_class = "django_hashstore.pool.ConnectionFactory"


class ValkeyEngineClient(KeyValueEngineClient):
    """Engine client using valkey-py's asyncio client."""

    _connection_factory_class = "django_hashstore.pool.ValkeyConnectionFactory"

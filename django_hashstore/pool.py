"""Connection factories for the async engine clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from django.utils.module_loading import import_string

if TYPE_CHECKING:
    from redis.asyncio import ConnectionPool, Redis

# Try to import redis-py
_REDIS_AVAILABLE = False
try:
    from redis.asyncio import ConnectionPool as RedisConnectionPool
    from redis.asyncio import Redis as RedisClient

    _REDIS_AVAILABLE = True
except ImportError:
    RedisConnectionPool = None  # type: ignore[assignment,misc]
    RedisClient = None  # type: ignore[assignment,misc]

# Try to import valkey-py
_VALKEY_AVAILABLE = False
try:
    from valkey.asyncio import ConnectionPool as ValkeyConnectionPool
    from valkey.asyncio import Valkey as ValkeyClient

    _VALKEY_AVAILABLE = True
except ImportError:
    ValkeyConnectionPool = None  # type: ignore[assignment,misc]
    ValkeyClient = None  # type: ignore[assignment,misc]

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379

# Known options that we handle explicitly (not passed to pool)
_KNOWN_OPTIONS = frozenset(
    {
        "location",
        "host",
        "port",
        "password",
        "pw",
        "pass_",
        "db",
        "database",
        "pool_class",
        "client_class",
        "connection_factory",
    },
)


def parse_db(value: Any) -> int | None:
    """Parse a database index option; anything unusable yields None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError:
            return None
    return None


class ConnectionFactory:
    """Connection factory for a standalone Redis server.

    Builds an async client from either a ``location`` URL or ``host``/``port``
    options. ``password`` (or ``pw``/``pass_``) and ``db`` (or ``database``)
    are applied when the URL does not already carry them. Every other option is
    passed through to the connection pool.
    """

    pool_class: Any = RedisConnectionPool
    client_class: Any = RedisClient
    scheme = "redis"

    def __init__(self, options: dict):
        self.options = options

        # Pool and client class - accept class or string path
        pool_class = options.get("pool_class", self.pool_class)
        if isinstance(pool_class, str):
            pool_class = import_string(pool_class)
        self.pool_class = pool_class

        client_class = options.get("client_class", self.client_class)
        if isinstance(client_class, str):
            client_class = import_string(client_class)
        self.client_class = client_class

    def _get_pool_options(self) -> dict:
        """Get options to pass directly to ConnectionPool.from_url().

        Unknown options are passed through to the pool.
        """
        pool_options = {key: value for key, value in self.options.items() if key not in _KNOWN_OPTIONS}

        password = self.options.get("password") or self.options.get("pw") or self.options.get("pass_")
        if password:
            pool_options["password"] = password
        return pool_options

    def get_url(self) -> str:
        """Resolve the server URL, appending the db index when it is missing."""
        url = self.options.get("location")
        if not url:
            host = self.options.get("host") or DEFAULT_HOST
            port = self.options.get("port") or DEFAULT_PORT
            url = f"{self.scheme}://{host}:{port}"

        db = self.options.get("db")
        if db is None:
            db = self.options.get("database")
        db = parse_db(db)
        if db is not None:
            parsed = urlparse(url)
            if not parsed.path or parsed.path == "/":
                url = f"{url.rstrip('/')}/{db}"
        return url

    def connect(self) -> Redis:
        """Create a new client for the configured server."""
        if self.pool_class is None or self.client_class is None:
            msg = f"{type(self).__name__} requires its client library to be installed"
            raise RuntimeError(msg)
        pool = self._create_pool(self.get_url())
        return self.client_class(connection_pool=pool)

    def _create_pool(self, url: str) -> ConnectionPool:
        """Create a new connection pool."""
        return self.pool_class.from_url(url, **self._get_pool_options())


class ValkeyConnectionFactory(ConnectionFactory):
    """Connection factory for a standalone Valkey server."""

    pool_class: Any = ValkeyConnectionPool
    client_class: Any = ValkeyClient
    scheme = "valkey"


def get_connection_factory(options: dict, connection_factory: str | type | None = None) -> ConnectionFactory:
    """Get the connection factory for the given options.

    ``connection_factory`` (or the option of the same name) may be a class or
    an import path; it defaults to :class:`ConnectionFactory`.
    """
    factory_path = connection_factory or options.get("connection_factory") or "django_hashstore.pool.ConnectionFactory"

    if isinstance(factory_path, str):
        factory_class = import_string(factory_path)
    else:
        factory_class = factory_path

    return factory_class(options)

import pytest
from redis.asyncio import Redis

from django_hashstore import pool


def test_connection_factory_default():
    cf = pool.get_connection_factory(options={})
    assert type(cf) is pool.ConnectionFactory


@pytest.mark.parametrize(
    "conn_factory,expected",
    [
        ("django_hashstore.pool.ValkeyConnectionFactory", pool.ValkeyConnectionFactory),
        ("django_hashstore.pool.ConnectionFactory", pool.ConnectionFactory),
        (pool.ConnectionFactory, pool.ConnectionFactory),
    ],
)
def test_connection_factory_opts(conn_factory, expected):
    cf = pool.get_connection_factory(options={"connection_factory": conn_factory})
    assert isinstance(cf, expected)


@pytest.mark.parametrize(
    "options,url",
    [
        ({}, "redis://localhost:6379"),
        ({"host": "cache.local", "port": 6380}, "redis://cache.local:6380"),
        ({"host": "cache.local", "db": 3}, "redis://cache.local:6379/3"),
        ({"database": "4"}, "redis://localhost:6379/4"),
        ({"db": "not a number"}, "redis://localhost:6379"),
        ({"db": True}, "redis://localhost:6379"),
        ({"location": "redis://cache.local:6379/1", "db": 3}, "redis://cache.local:6379/1"),
        ({"location": "redis://cache.local:6379/", "db": 0}, "redis://cache.local:6379/0"),
    ],
)
def test_get_url(options, url):
    assert pool.ConnectionFactory(options).get_url() == url


def test_parse_db():
    assert pool.parse_db(2) == 2
    assert pool.parse_db("12") == 12
    assert pool.parse_db("x") is None
    assert pool.parse_db(None) is None
    assert pool.parse_db(False) is None


def test_connect_builds_async_client():
    client = pool.ConnectionFactory(
        {"host": "cache.local", "port": 6380, "db": "2", "pw": "secret", "socket_timeout": 5},
    ).connect()
    assert isinstance(client, Redis)
    kwargs = client.connection_pool.connection_kwargs
    assert kwargs["host"] == "cache.local"
    assert kwargs["port"] == 6380
    assert kwargs["db"] == 2
    assert kwargs["password"] == "secret"
    assert kwargs["socket_timeout"] == 5


def test_password_aliases():
    for alias in ("password", "pw", "pass_"):
        options = pool.ConnectionFactory({alias: "secret"})._get_pool_options()
        assert options == {"password": "secret"}

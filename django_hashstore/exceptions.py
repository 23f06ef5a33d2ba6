# Derived from django-redis (https://github.com/jazzband/django-redis)
# Copyright (c) 2011-2016 Andrey Antukh <niwi@niwi.nz>
# Copyright (c) 2011 Sean Bleier
# Licensed under BSD-3-Clause
#
# django-redis was used as inspiration for this project.

"""Exceptions for django-hashstore.

Validation errors are raised (or handed to the completion callback) before
any command reaches the engine. Errors raised by the engine client itself are
never wrapped; ``_connection_errors`` only exists so the engine client can tell
connection-level failures apart for lifecycle signalling.
"""

import socket

# Build exception tuples from available libraries (redis-py / valkey-py).
_connection_error_list: list[type[Exception]] = [socket.timeout]

try:
    from redis.exceptions import ConnectionError as RedisConnectionError
    from redis.exceptions import TimeoutError as RedisTimeoutError

    _connection_error_list.extend([RedisConnectionError, RedisTimeoutError])
except ImportError:
    pass

try:
    from valkey.exceptions import ConnectionError as ValkeyConnectionError
    from valkey.exceptions import TimeoutError as ValkeyTimeoutError

    _connection_error_list.extend([ValkeyConnectionError, ValkeyTimeoutError])
except ImportError:
    pass

_connection_errors = tuple(_connection_error_list)


class HashStoreError(Exception):
    """Base class for argument validation errors.

    Subclasses carry a fixed message so callers can match on either the type
    or ``str(error)``.
    """

    message = "Invalid arguments"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidKeyError(HashStoreError):
    """Raised when a key cannot be composed from the supplied input.

    Example:
        Handling a bad key::

            from django_hashstore.exceptions import InvalidKeyError

            try:
                await store.aget([])
            except InvalidKeyError:
                ...
    """

    message = "Invalid key"


class InvalidFieldError(HashStoreError):
    """Raised when an operation that needs exactly one field gets none."""

    message = "Invalid field"


class InvalidDataError(HashStoreError):
    """Raised when a write resolves to zero field/value pairs."""

    message = "Invalid data"


class InvalidPatternError(HashStoreError):
    """Raised when a key search pattern is empty or of an unsupported type."""

    message = "Invalid pattern"


class SerializerError(Exception):
    """Raised when serialization or deserialization fails.

    The value codec treats this as "not a serialized value" and hands the
    original text back to the caller.
    """

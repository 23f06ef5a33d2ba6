# Engine clients (do actual Redis operations) - internal use
from django_hashstore.client.default import (
    KeyValueEngineClient,
    RedisEngineClient,
    ValkeyEngineClient,
)

__all__ = [
    "KeyValueEngineClient",
    "RedisEngineClient",
    "ValkeyEngineClient",
]

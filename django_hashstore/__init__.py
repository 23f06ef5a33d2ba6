VERSION = (1, 0, 0)
__version__ = ".".join(map(str, VERSION))

from django_hashstore.exceptions import (  # noqa: E402
    HashStoreError,
    InvalidDataError,
    InvalidFieldError,
    InvalidKeyError,
    InvalidPatternError,
)
from django_hashstore.store import (  # noqa: E402
    HashStore,
    KeyValueHashStore,
    RedisHashStore,
    ValkeyHashStore,
)
from django_hashstore.types import Signal  # noqa: E402

__all__ = [
    "HashStore",
    "HashStoreError",
    "InvalidDataError",
    "InvalidFieldError",
    "InvalidKeyError",
    "InvalidPatternError",
    "KeyValueHashStore",
    "RedisHashStore",
    "Signal",
    "ValkeyHashStore",
]

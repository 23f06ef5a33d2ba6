"""Value encoding between application values and hash field contents."""

from __future__ import annotations

from typing import Any

from django_hashstore.compat import create_serializer
from django_hashstore.exceptions import SerializerError

_RAW_TYPES = (bytes, bytearray, memoryview)


class ValueCodec:
    """Reversible encode/decode of hash field values.

    Raw byte values and strings are written untouched. Everything else is
    serialized (JSON by default) when ``auto_cast`` is enabled. On the way
    back, text that parses as a serialized value is returned as that value
    and anything else is returned as the text itself.
    """

    def __init__(self, *, auto_cast: bool = True, serializer: Any = None) -> None:
        self.auto_cast = auto_cast
        self.serializer = create_serializer(serializer)

    def encode(self, value: Any) -> Any:
        """Encode a value for storage."""
        if isinstance(value, _RAW_TYPES) or isinstance(value, str):
            return value
        if not self.auto_cast:
            # The engine client decides what it accepts
            return value
        return self.serializer.dumps(value)

    def decode(self, value: Any, *, raw: bool = False) -> Any:
        """Decode a value read from storage.

        None stays None so a missing field is never confused with an empty one.
        """
        if value is None or raw:
            return value
        if isinstance(value, _RAW_TYPES):
            try:
                value = bytes(value).decode()
            except UnicodeDecodeError:
                return value
        if not self.auto_cast or not isinstance(value, str):
            return value
        try:
            return self.serializer.loads(value)
        except SerializerError:
            return value

    def decode_name(self, value: Any) -> Any:
        """Decode a key or field name (text only, never cast)."""
        return value.decode() if isinstance(value, bytes) else value

import json
import math
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

from django_hashstore.exceptions import SerializerError
from django_hashstore.serializers.base import BaseSerializer

COMPACT_SEPARATORS = (",", ":")


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not valid JSON"
    raise ValueError(msg)


def _without_non_finite(obj: Any) -> Any:
    """Replace NaN and infinities with None, as JSON has no spelling for them."""
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {key: _without_non_finite(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_without_non_finite(value) for value in obj]
    return obj


class JSONSerializer(BaseSerializer):
    """JSON-based serializer using Django's DjangoJSONEncoder.

    Produces compact, strict JSON text, so a number written as ``13`` is
    stored as the text ``"13"`` and read back as the number ``13``. Non-finite
    floats are written as ``null``, and the ``NaN``/``Infinity`` tokens are not
    accepted on read.

    By default uses Django's DjangoJSONEncoder which adds support for:
    - datetime, date, time objects
    - timedelta (as ISO 8601 duration)
    - Decimal (as string)
    - UUID (as string)
    - Promise (lazy strings)

    Attributes:
        encoder_class: The JSON encoder class to use. Defaults to DjangoJSONEncoder.
            Can be overridden by subclasses for custom encoding.

    Example:
        Pass a custom serializer to the store::

            store = RedisHashStore(
                location="redis://localhost:6379/1",
                serializer="myproject.serializers.PrettyJSONSerializer",
            )
    """

    encoder_class = DjangoJSONEncoder

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.separators = kwargs.get("separators") or COMPACT_SEPARATORS

    def dumps(self, obj: Any) -> str:
        try:
            return json.dumps(obj, cls=self.encoder_class, separators=self.separators, allow_nan=False)
        except ValueError as e:
            if "Out of range float" not in str(e):
                raise
            return json.dumps(
                _without_non_finite(obj),
                cls=self.encoder_class,
                separators=self.separators,
                allow_nan=False,
            )

    def loads(self, data: str) -> Any:
        try:
            return json.loads(data, parse_constant=_reject_constant)
        except (ValueError, TypeError) as e:
            raise SerializerError from e

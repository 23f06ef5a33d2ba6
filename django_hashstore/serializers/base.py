from typing import Any


class BaseSerializer:
    """Base class for hash field value serializers.

    A serializer turns application values into the text stored in a hash
    field and back. ``loads`` must raise
    :class:`~django_hashstore.exceptions.SerializerError` when the text is not
    something it produced; the value codec then hands the text back unchanged.

    Serializers accept ``**kwargs`` for configuration. The
    ``create_serializer()`` function in ``django_hashstore.compat`` passes the
    store options through as kwargs.
    """

    def __init__(self, **kwargs: Any) -> None:
        pass

    def dumps(self, obj: Any) -> str:
        raise NotImplementedError

    def loads(self, data: str) -> Any:
        raise NotImplementedError

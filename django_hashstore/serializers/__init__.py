from django_hashstore.serializers.base import BaseSerializer
from django_hashstore.serializers.json import JSONSerializer

__all__ = ["BaseSerializer", "JSONSerializer"]

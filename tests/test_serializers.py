import datetime
import decimal
import uuid

import pytest

from django_hashstore.compat import create_serializer
from django_hashstore.exceptions import SerializerError
from django_hashstore.serializers.json import JSONSerializer


class TestJSONSerializer:
    def test_basic_roundtrip(self):
        serializer = JSONSerializer()
        data = {"key": "value", "number": 42, "nested": {"list": [1, 2, 3]}}
        encoded = serializer.dumps(data)
        assert isinstance(encoded, str)
        assert serializer.loads(encoded) == data

    def test_number_is_canonical_text(self):
        serializer = JSONSerializer()
        assert serializer.dumps(13) == "13"
        assert serializer.loads("13") == 13

    def test_django_types(self):
        serializer = JSONSerializer()
        when = datetime.datetime(2024, 1, 2, 3, 4, 5)
        ident = uuid.UUID("12345678-1234-5678-1234-567812345678")
        encoded = serializer.dumps({"when": when, "amount": decimal.Decimal("1.10"), "id": ident})
        assert serializer.loads(encoded) == {
            "when": "2024-01-02T03:04:05",
            "amount": "1.10",
            "id": "12345678-1234-5678-1234-567812345678",
        }

    def test_compact_by_default(self):
        assert JSONSerializer().dumps({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_separators_option(self):
        serializer = JSONSerializer(separators=(", ", ": "))
        assert serializer.dumps({"a": [1, 2]}) == '{"a": [1, 2]}'

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (float("nan"), "null"),
            (float("inf"), "null"),
            ([1.5, float("-inf")], "[1.5,null]"),
            ({"a": (float("nan"), 2)}, '{"a":[null,2]}'),
        ],
    )
    def test_non_finite_floats_become_null(self, value, expected):
        assert JSONSerializer().dumps(value) == expected

    def test_circular_reference_still_raises(self):
        data: list = []
        data.append(data)
        with pytest.raises(ValueError, match="Circular"):
            JSONSerializer().dumps(data)

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", "[1, NaN]"])
    def test_non_standard_constants_raise(self, text):
        with pytest.raises(SerializerError):
            JSONSerializer().loads(text)

    def test_invalid_text_raises(self):
        serializer = JSONSerializer()
        with pytest.raises(SerializerError):
            serializer.loads("dash dot dash dot")


class TestCreateSerializer:
    def test_default_is_json(self):
        assert isinstance(create_serializer(None), JSONSerializer)

    def test_dotted_path(self):
        serializer = create_serializer("django_hashstore.serializers.json.JSONSerializer")
        assert isinstance(serializer, JSONSerializer)

    def test_class(self):
        assert isinstance(create_serializer(JSONSerializer), JSONSerializer)

    def test_instance_is_kept(self):
        serializer = JSONSerializer()
        assert create_serializer(serializer) is serializer

"""Tests for composite key construction."""

import pytest

from django_hashstore.keys import is_valid_delimiter, make_key, make_pattern


class TestMakeKey:
    def test_sequence_is_joined_with_default_delimiter(self):
        assert make_key(["icao", "more"]) == "icao:more"
        assert make_key(("alpha", "bravo", "charlie")) == "alpha:bravo:charlie"

    def test_custom_delimiter(self):
        assert make_key(["alpha", "bravo"], "-") == "alpha-bravo"

    def test_numeric_delimiter(self):
        assert make_key(["alpha", "bravo"], 0) == "alpha0bravo"

    def test_segments_are_coerced_to_strings(self):
        assert make_key(["user", 42, 1.5]) == "user:42:1.5"

    def test_single_segment_sequence(self):
        assert make_key(["icao"]) == "icao"

    def test_string_is_returned_unchanged(self):
        assert make_key("icao") == "icao"

    def test_number_is_returned_unchanged(self):
        key = make_key(1234)
        assert key == 1234
        assert isinstance(key, int)
        assert make_key(12.5) == 12.5

    @pytest.mark.parametrize("key", [[], (), "", None, True, False, {}, {"a": 1}, b"icao", object()])
    def test_invalid_keys(self, key):
        assert make_key(key) is None

    def test_pattern_follows_key_rules(self):
        assert make_pattern("ic*") == "ic*"
        assert make_pattern(["icao", "*"]) == "icao:*"
        assert make_pattern({}) is None
        assert make_pattern("") is None


class TestDelimiter:
    @pytest.mark.parametrize("delimiter", [":", "-", "::", 0, 7, 1.5])
    def test_valid(self, delimiter):
        assert is_valid_delimiter(delimiter)

    @pytest.mark.parametrize("delimiter", ["", None, True, [":"], b":"])
    def test_invalid(self, delimiter):
        assert not is_valid_delimiter(delimiter)

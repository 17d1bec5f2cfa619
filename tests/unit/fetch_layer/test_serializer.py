"""
Unit Tests for payload serialization.
"""

import pytest

from redis_cacher.fetch.serializer import decode, encode


@pytest.mark.unit
class TestEncode:
    def test_encodes_json_text(self):
        assert encode({"some": "object", "for": {"testing": 123581321}}) == (
            '{"some":"object","for":{"testing":123581321}}'
        )

    def test_encodes_strings_with_quotes(self):
        assert encode("simple") == '"simple"'

    def test_none_encodes_to_null(self):
        assert encode(None) == "null"

    def test_unserializable_value_raises_type_error(self):
        with pytest.raises(TypeError):
            encode(object())


@pytest.mark.unit
class TestDecode:
    def test_decodes_json(self):
        assert decode('"simple"') == "simple"
        assert decode("666") == 666
        assert decode('{"a": [1, 2, {"b": null}]}') == {"a": [1, 2, {"b": None}]}

    def test_falls_back_to_raw_text(self):
        assert decode("simple") == "simple"

    def test_falls_back_for_truncated_json(self):
        assert decode('{"a": ') == '{"a": '

    def test_nested_value_survives_encode_decode(self):
        value = {"user": {"id": 42, "tags": ["a", "b"], "score": 0.5, "active": True}}

        assert decode(encode(value)) == value

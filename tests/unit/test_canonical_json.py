"""
Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for leaf-to-bytes conversion and canonical JSON.
These tests ensure equal leaves always commit to identical bytes.
"""

import math
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest
from pydantic import BaseModel

from merkle_commit.schemas import (
    CanonicalizationException,
    ConfigurationException,
    LeafEncodingException,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
    leaf_to_bytes,
    validate_text_encoding,
)


class Color(str, Enum):
    """Sample enum for testing."""
    RED = "red"


class Level(Enum):
    LOW = 1


class Reading(BaseModel):
    """Sample model for testing."""
    sensor: str
    value: float
    note: str | None = None


class Tagged:
    """Leaf type that supplies its own byte form."""

    def __init__(self, tag: str) -> None:
        self.tag = tag

    def __bytes__(self) -> bytes:
        return b"tag:" + self.tag.encode()


class TestLeafToBytes:
    """Tests for the "convertible to bytes" capability."""

    def test_bytes_used_as_is(self):
        assert leaf_to_bytes(b"\x00\xffraw") == b"\x00\xffraw"

    def test_bytearray_and_memoryview(self):
        assert leaf_to_bytes(bytearray(b"abc")) == b"abc"
        assert leaf_to_bytes(memoryview(b"abc")) == b"abc"

    def test_str_encoded_utf8_by_default(self):
        assert leaf_to_bytes("héllo") == "héllo".encode("utf-8")

    def test_str_with_other_encoding(self):
        assert leaf_to_bytes("abc", encoding="utf-16-le") == "abc".encode("utf-16-le")

    def test_unencodable_text(self):
        with pytest.raises(LeafEncodingException, match="ascii"):
            leaf_to_bytes("héllo", encoding="ascii")

    def test_dunder_bytes(self):
        assert leaf_to_bytes(Tagged("x")) == b"tag:x"

    def test_dict_is_canonical_json(self):
        assert leaf_to_bytes({"b": 2, "a": 1}) == b'{"a":1,"b":2}'

    def test_dict_key_order_irrelevant(self):
        assert leaf_to_bytes({"z": 1, "a": 2}) == leaf_to_bytes({"a": 2, "z": 1})

    def test_list_order_preserved(self):
        assert leaf_to_bytes([3, 1, 2]) != leaf_to_bytes([1, 2, 3])

    def test_numbers(self):
        assert leaf_to_bytes(42) == b"42"
        assert leaf_to_bytes(True) == b"true"
        assert leaf_to_bytes(1.5) == b"1.5"

    def test_model(self):
        assert leaf_to_bytes(Reading(sensor="t1", value=20.5)) == b'{"sensor":"t1","value":20.5}'

    def test_str_enum_is_text(self):
        assert leaf_to_bytes(Color.RED) == b"red"

    def test_none_rejected(self):
        with pytest.raises(LeafEncodingException, match="NoneType"):
            leaf_to_bytes(None)

    def test_arbitrary_object_rejected(self):
        with pytest.raises(LeafEncodingException):
            leaf_to_bytes(object())

    def test_leaf_encoding_error_is_type_error(self):
        with pytest.raises(TypeError):
            leaf_to_bytes(object())


class TestCanonicalJson:
    """Tests for dumps_canonical / canonicalize_value."""

    def test_no_whitespace_sorted(self):
        assert dumps_canonical({"b": [1, 2], "a": {"y": 1, "x": 2}}) == '{"a":{"x":2,"y":1},"b":[1,2]}'

    def test_none_excluded(self):
        assert dumps_canonical({"a": 1, "b": None}) == '{"a":1}'

    def test_nan_raises(self):
        with pytest.raises(CanonicalizationException, match="Non-finite"):
            dumps_canonical({"v": math.nan})

    def test_infinity_raises(self):
        with pytest.raises(CanonicalizationException):
            leaf_to_bytes([math.inf])

    def test_enum_value(self):
        assert canonicalize_value(Level.LOW) == 1

    def test_bytes_to_hex(self):
        assert canonicalize_value({"d": b"\xde\xad"}) == {"d": "dead"}

    def test_non_str_key_raises(self):
        with pytest.raises(CanonicalizationException, match="expected str") as exc_info:
            canonicalize_value({"outer": {1: "a"}})

        assert exc_info.value.details["path"] == "outer"
        assert exc_info.value.details["key_type"] == "int"

    def test_int_and_str_keys_do_not_collide(self):
        """{1: "a", "1": "b"} must not commit to the same bytes as {"1": "b"}."""
        with pytest.raises(CanonicalizationException):
            leaf_to_bytes({1: "a", "1": "b"})

    def test_nested_unknown_type_raises(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"inner": [object()]})

        assert exc_info.value.details["path"] == "inner[0]"

    def test_datetime_normalized_to_utc(self):
        aware = datetime(2026, 1, 27, 23, 35, tzinfo=timezone(timedelta(hours=2)))

        assert format_datetime_canonical(aware) == "2026-01-27T21:35:00Z"
        assert format_datetime_canonical(datetime(2026, 1, 27, 21, 35)) == "2026-01-27T21:35:00Z"


class TestTextEncodingValidation:
    def test_normalizes_name(self):
        assert validate_text_encoding("UTF8") == "utf-8"

    def test_unknown_encoding(self):
        with pytest.raises(ConfigurationException) as exc_info:
            validate_text_encoding("no-such-codec")

        assert exc_info.value.details["field_path"] == "hashing.text_encoding"

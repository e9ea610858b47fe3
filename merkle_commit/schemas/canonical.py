"""
Schemas & Canonicalization
File: canonical.py

Purpose: Turn leaf values into the exact bytes that get hashed.

A leaf is anything "convertible to bytes". Raw byte strings and text are
taken as-is; structured values (dicts, lists, Pydantic models, numbers)
go through canonical JSON so that equal values always hash identically.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import codecs
import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException, ConfigurationException, LeafEncodingException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")

DEFAULT_TEXT_ENCODING = "utf-8"


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with Z suffix for UTC.

    Returns:
        ISO-8601 formatted string with Z suffix (e.g., "2026-01-27T21:35:00Z").
    """
    utc_dt = ensure_utc(dt)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _validate_float(value: float, path: str = "") -> None:
    """
    Validate that a float is finite (not NaN or Infinity).

    Raises:
        CanonicalizationException: If the float is NaN or Infinity.
    """
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized
            (NaN/Infinity floats, non-str mapping keys, or a type with no
            canonical form).
    """
    if value is None:
        return None

    if isinstance(value, bool):
        # Must check bool before int since bool is subclass of int
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        _validate_float(value, path)
        return value

    if isinstance(value, str):
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if isinstance(value, BaseModel):
        dumped = value.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        )
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        for k in value:
            if not isinstance(k, str):
                # 1 and "1" would otherwise serialize to the same key
                raise CanonicalizationException(
                    message=f"Mapping key {k!r} is {type(k).__name__}, expected str",
                    details={"path": path, "key_type": type(k).__name__},
                )
        # Keys will be sorted during JSON serialization
        return {
            k: canonicalize_value(v, f"{path}.{k}" if path else k)
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to canonical JSON string.

    Returns:
        A canonical JSON string with:
            - Sorted keys
            - No extra whitespace
            - None fields excluded
            - Datetimes as ISO-8601 with Z suffix
            - Enums as their values
            - No NaN/Infinity floats

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except Exception as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def validate_text_encoding(encoding: str) -> str:
    """
    Check that a text encoding name is known to the codec registry.

    Returns:
        The normalized codec name (e.g. "UTF8" -> "utf-8").

    Raises:
        ConfigurationException: If the encoding is unknown.
    """
    try:
        return codecs.lookup(encoding).name
    except LookupError as e:
        raise ConfigurationException(
            message=f"Unknown text encoding: {encoding!r}",
            field_path="hashing.text_encoding",
        ) from e


def leaf_to_bytes(leaf: Any, encoding: str = DEFAULT_TEXT_ENCODING) -> bytes:
    """
    Convert a leaf value to the bytes that are committed to.

    Rules, in order:
    1. bytes / bytearray / memoryview: used as-is
    2. str: encoded with ``encoding``
    3. Objects defining ``__bytes__``: ``bytes(leaf)``
    4. Pydantic models, dicts, lists, tuples, numbers, bools:
       canonical JSON, UTF-8 encoded

    Args:
        leaf: The leaf value
        encoding: Text encoding applied to str leaves

    Returns:
        Raw leaf bytes

    Raises:
        LeafEncodingException: If the leaf has no byte representation
            (including text that the encoding cannot represent)
        CanonicalizationException: If a structured leaf contains
            values with no canonical form
    """
    if isinstance(leaf, (bytes, bytearray, memoryview)):
        return bytes(leaf)

    if isinstance(leaf, str):
        try:
            return leaf.encode(encoding)
        except UnicodeEncodeError as e:
            raise LeafEncodingException(
                message=f"Leaf text cannot be encoded as {encoding}",
                details={"encoding": encoding, "error": str(e)},
            ) from e

    if hasattr(type(leaf), "__bytes__"):
        return bytes(leaf)

    if isinstance(leaf, (BaseModel, dict, list, tuple, int, float, Enum, datetime)):
        return dumps_canonical(leaf).encode("utf-8")

    raise LeafEncodingException(
        message=f"Leaf of type {type(leaf).__name__} is not convertible to bytes",
        details={"type": type(leaf).__name__},
    )

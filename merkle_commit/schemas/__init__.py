"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the error taxonomy and leaf canonicalization API.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    DEFAULT_TEXT_ENCODING,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
    leaf_to_bytes,
    validate_text_encoding,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    EmptyInput,
    EmptyInputException,
    ErrorCodes,
    IndexOutOfRange,
    IndexOutOfRangeException,
    LeafEncodingException,
    MalformedProof,
    MalformedProofException,
    MerkleError,
    MerkleException,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "DEFAULT_TEXT_ENCODING",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    "leaf_to_bytes",
    "validate_text_encoding",
    # Errors
    "CanonicalizationException",
    "ConfigurationException",
    "EmptyInput",
    "EmptyInputException",
    "ErrorCodes",
    "IndexOutOfRange",
    "IndexOutOfRangeException",
    "LeafEncodingException",
    "MalformedProof",
    "MalformedProofException",
    "MerkleError",
    "MerkleException",
]

"""
Core cryptographic utilities.

Provides the Hasher used for leaf and node digests, plus hex helpers.
"""
from .hashing import (
    LEAF_PREFIX,
    NODE_PREFIX,
    DEFAULT_HASHER,
    Hasher,
    blake2b512,
    to_hex,
    from_hex,
)

__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "DEFAULT_HASHER",
    "Hasher",
    "blake2b512",
    "to_hex",
    "from_hex",
]

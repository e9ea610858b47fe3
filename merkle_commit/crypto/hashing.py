"""
Hashing Utilities
Leaf and node hashing for Merkle commitments.

This module provides:
- Hasher: domain-separated leaf/node hashing over a pluggable primitive
- BLAKE2b-512 hashing for raw bytes
- Hex encoding/decoding with 0x prefix

Domain Separation (Hard Contract):
1. Leaf hash:  H(0x00 || leaf_bytes)
2. Node hash:  H(0x01 || left || right)

Leaf and node preimages never collide, so an internal node can never be
presented as a leaf.

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Hasher keeps no state between calls
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable

from merkle_commit.schemas.errors import MalformedProofException

# Domain separation prefixes
LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"


def blake2b512(data: bytes) -> bytes:
    """
    Compute the BLAKE2b-512 hash of raw bytes (no domain prefix).

    Args:
        data: Raw bytes to hash

    Returns:
        64-byte BLAKE2b digest
    """
    return hashlib.blake2b(data).digest()


class Hasher:
    """
    Hashes leaves and pairs of node digests.

    The underlying primitive is any zero-argument factory returning a
    hashlib-style object (``update``/``digest``/``digest_size``).
    BLAKE2b with a 64-byte digest is the default.

    Example:
        >>> hasher = Hasher()
        >>> len(hasher.hash_leaf(b"abc"))
        64
        >>> hasher.hash_pair(b"a" * 64, b"b" * 64) != hasher.hash_pair(b"b" * 64, b"a" * 64)
        True
    """

    __slots__ = ("_factory", "digest_size")

    def __init__(self, hash_factory: Callable[[], Any] = hashlib.blake2b) -> None:
        self._factory = hash_factory
        self.digest_size: int = hash_factory().digest_size

    def _digest(self, prefix: bytes, *parts: bytes) -> bytes:
        h = self._factory()
        h.update(prefix)
        for part in parts:
            h.update(part)
        return h.digest()

    def hash_leaf(self, content: bytes) -> bytes:
        """Hash raw leaf bytes under the leaf domain prefix."""
        return self._digest(LEAF_PREFIX, content)

    def hash_pair(self, left: bytes, right: bytes) -> bytes:
        """
        Hash two child digests into their parent.

        Order matters: ``hash_pair(a, b) != hash_pair(b, a)``.

        Raises:
            MalformedProofException: If either operand is not a digest
                of this hasher's width
        """
        for side, digest in (("left", left), ("right", right)):
            if len(digest) != self.digest_size:
                raise MalformedProofException(
                    message=(
                        f"{side} digest is {len(digest)} bytes, "
                        f"expected {self.digest_size}"
                    ),
                    details={"side": side, "length": len(digest)},
                )
        return self._digest(NODE_PREFIX, left, right)

    def __repr__(self) -> str:
        name = getattr(self._factory(), "name", "custom")
        return f"Hasher(name={name!r}, digest_size={self.digest_size})"


DEFAULT_HASHER = Hasher()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "blake2b512",
    "Hasher",
    "DEFAULT_HASHER",
    "to_hex",
    "from_hex",
]

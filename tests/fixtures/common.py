"""
Common test fixtures shared by all test modules.

Provides leaf factories and tampering helpers.
"""

SAMPLE_LEAVES: tuple[str, ...] = ("abc", "bcd", "cde", "def", "efg")


def make_leaves(count: int, prefix: str = "leaf") -> list[str]:
    """Create ``count`` distinct text leaves: leaf0, leaf1, ..."""
    return [f"{prefix}{i}" for i in range(count)]


def tamper_byte(data: bytes, position: int = 0) -> bytes:
    """Flip every bit of one byte."""
    mutable = bytearray(data)
    mutable[position] ^= 0xFF
    return bytes(mutable)

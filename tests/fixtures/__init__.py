"""
Test fixtures package for merkle_commit tests.

Usage:
    from fixtures import make_leaves, SAMPLE_LEAVES
"""

from .common import (
    SAMPLE_LEAVES,
    make_leaves,
    tamper_byte,
)

__all__ = [
    "SAMPLE_LEAVES",
    "make_leaves",
    "tamper_byte",
]

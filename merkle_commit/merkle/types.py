"""
Merkle Types
Shared digest/proof definitions and the positional pairing rule.

Pairing Rule (Hard Contract):
- Each level is scanned left to right in pairs (0,1), (2,3), ...
- A node at an even position pairs with the next position; at an odd
  position, with the previous one
- When a level has an odd count, its last node is unpaired and is carried
  up unchanged to the end of the next level
- A node at position i always lands at position i // 2 on the next level,
  carried or not

Tree construction and proof verification both derive sibling positions
from ``sibling_position``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from merkle_commit.crypto.hashing import to_hex
from merkle_commit.schemas.canonical import canonicalize_value
from merkle_commit.schemas.errors import MalformedProofException

# Fixed-width output of the hash function
Digest = bytes

T = TypeVar("T")


@dataclass(frozen=True)
class MerkleProof(Generic[T]):
    """
    An inclusion proof for a single leaf.

    The proof is self-contained: it carries no reference back to the tree
    and holds everything a verifier needs besides the root.

    Attributes:
        hashes: Sibling digests from the leaf's level upward, excluding
            levels where the path node was carried up unpaired
        num_of_leaves: Leaf count of the tree the proof was built from
        leaf_index: 0-based position of the proven leaf
        leaf_content: The original leaf value, hashed again by the verifier
    """
    hashes: tuple[Digest, ...]
    num_of_leaves: int
    leaf_index: int
    leaf_content: T

    def __post_init__(self) -> None:
        hashes = tuple(self.hashes)
        for position, h in enumerate(hashes):
            if not isinstance(h, (bytes, bytearray, memoryview)):
                raise MalformedProofException(
                    message=f"Sibling {position} is {type(h).__name__}, expected bytes",
                    leaf_index=self.leaf_index,
                    details={"position": position, "type": type(h).__name__},
                )
        object.__setattr__(self, "hashes", tuple(bytes(h) for h in hashes))

    def to_dict(self) -> dict[str, Any]:
        """Display form: 0x-hex digests and canonicalized leaf content."""
        return {
            "hashes": [to_hex(h) for h in self.hashes],
            "num_of_leaves": self.num_of_leaves,
            "leaf_index": self.leaf_index,
            "leaf_content": canonicalize_value(self.leaf_content),
        }


def sibling_position(index: int, width: int) -> Optional[int]:
    """
    Position of the node paired with ``index`` on a level of ``width`` nodes.

    Returns:
        The sibling's position, or None when ``index`` is the unpaired
        last node of an odd-width level
    """
    if index % 2 == 1:
        return index - 1
    if index + 1 < width:
        return index + 1
    return None


def next_width(width: int) -> int:
    """Node count of the level above one with ``width`` nodes."""
    return (width + 1) // 2


def compute_tree_height(num_of_leaves: int) -> int:
    """
    Number of pairing rounds between the leaves and the root.

    Equals ceil(log2(n)) for n > 1 and 0 for a single leaf. No proof
    for a tree of this size can hold more siblings than this.
    """
    height = 0
    width = num_of_leaves
    while width > 1:
        width = next_width(width)
        height += 1
    return height


def proof_path_length(num_of_leaves: int, leaf_index: int) -> int:
    """
    Number of sibling digests recorded for ``leaf_index``.

    Example:
        >>> proof_path_length(3, 2)  # carried up once, then paired once
        1
        >>> proof_path_length(4, 2)
        2
    """
    count = 0
    width = num_of_leaves
    index = leaf_index
    while width > 1:
        if sibling_position(index, width) is not None:
            count += 1
        index //= 2
        width = next_width(width)
    return count


def minimum_path_length(num_of_leaves: int) -> int:
    """
    Fewest sibling digests any proof for a tree of this size records.

    Only the last node of a level is ever carried up, and the last node
    always lands on the last position of the next level, so the shortest
    path belongs to the last leaf.
    """
    if num_of_leaves < 1:
        return 0
    return proof_path_length(num_of_leaves, num_of_leaves - 1)


__all__ = [
    "Digest",
    "MerkleProof",
    "sibling_position",
    "next_width",
    "compute_tree_height",
    "proof_path_length",
    "minimum_path_length",
]

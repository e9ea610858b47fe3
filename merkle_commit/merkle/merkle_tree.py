"""
Merkle Tree Implementation
Deterministic Merkle root computation and proof generation.

This module provides:
- Deterministic Merkle root computation over arbitrary leaf values
- Merkle proof generation for any leaf index
- Carry-up rule for levels with an odd number of nodes

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = Hasher.hash_leaf(leaf_to_bytes(value))
2. Parent hashing: parent = Hasher.hash_pair(left, right)
3. Odd levels: the last node is carried up unchanged, never paired with itself
4. Empty leaves: rejected with EmptyInputException
5. Single leaf: root = hash_leaf(leaf), proof has no siblings

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
- Leaves are not retained after a call returns
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, TypeVar

from merkle_commit.config.runtime import get_default_config
from merkle_commit.crypto.hashing import DEFAULT_HASHER, Hasher
from merkle_commit.merkle.types import Digest, MerkleProof, sibling_position
from merkle_commit.schemas.canonical import leaf_to_bytes
from merkle_commit.schemas.errors import EmptyInputException, IndexOutOfRangeException

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_hashing(
    hasher: Optional[Hasher],
    encoding: Optional[str],
) -> tuple[Hasher, str]:
    """Fill in the default hasher and the configured text encoding."""
    return (
        hasher if hasher is not None else DEFAULT_HASHER,
        encoding if encoding is not None else get_default_config().text_encoding,
    )


def hash_leaves(leaves: Sequence[T], hasher: Hasher, encoding: str) -> list[Digest]:
    """Level 0: the domain-separated hash of every leaf, in order."""
    return [hasher.hash_leaf(leaf_to_bytes(leaf, encoding)) for leaf in leaves]


def next_level(level: Sequence[Digest], hasher: Hasher) -> list[Digest]:
    """
    Derive the level above ``level``.

    Adjacent pairs are hashed left to right; an unpaired last node
    is carried up unchanged.

    Example:
        [a, b, c] -> [hash_pair(a, b), c]
    """
    parents: list[Digest] = []
    for i in range(0, len(level) - 1, 2):
        parents.append(hasher.hash_pair(level[i], level[i + 1]))
    if len(level) % 2 == 1:
        parents.append(level[-1])
    return parents


def build_levels(level_zero: Sequence[Digest], hasher: Hasher) -> list[list[Digest]]:
    """
    Build every level from the leaf hashes up to the root.

    Returns:
        Levels bottom-up; the last level holds exactly the root
    """
    levels: list[list[Digest]] = [list(level_zero)]
    while len(levels[-1]) > 1:
        levels.append(next_level(levels[-1], hasher))
    return levels


def collect_siblings(levels: Sequence[Sequence[Digest]], leaf_index: int) -> list[Digest]:
    """
    Walk the path from ``leaf_index`` to the root, recording siblings.

    Levels where the path node is the carried-up unpaired node contribute
    no sibling.
    """
    siblings: list[Digest] = []
    index = leaf_index
    for level in levels[:-1]:
        sibling = sibling_position(index, len(level))
        if sibling is not None:
            siblings.append(level[sibling])
        index //= 2
    return siblings


def materialize_leaves(leaves: Iterable[T]) -> list[T]:
    """Collect ``leaves`` into a list, rejecting an empty sequence."""
    items = list(leaves)
    if not items:
        raise EmptyInputException()
    return items


def merkle_root(
    leaves: Iterable[T],
    *,
    hasher: Optional[Hasher] = None,
    encoding: Optional[str] = None,
) -> Digest:
    """
    Compute the Merkle root over an ordered, non-empty sequence of leaves.

    Algorithm:
    1. Hash each leaf to form level 0
    2. Repeatedly pair adjacent digests; carry an odd one out up unchanged
    3. Stop when one digest remains: the root

    Example: [a, b, c] -> [ab, c] -> [abc]

    Args:
        leaves: Leaf values, each convertible to bytes. Order matters.
        hasher: Hasher to use (default: BLAKE2b-512)
        encoding: Text encoding for str leaves (default: from config)

    Returns:
        The root digest

    Raises:
        EmptyInputException: If ``leaves`` is empty
    """
    hasher, encoding = resolve_hashing(hasher, encoding)
    items = materialize_leaves(leaves)

    level = hash_leaves(items, hasher, encoding)
    height = 0
    while len(level) > 1:
        level = next_level(level, hasher)
        height += 1

    logger.debug(f"Computed Merkle root over {len(items)} leaves, height {height}")
    return level[0]


def merkle_proof(
    leaves: Iterable[T],
    leaf_index: int,
    *,
    hasher: Optional[Hasher] = None,
    encoding: Optional[str] = None,
) -> MerkleProof[T]:
    """
    Generate an inclusion proof for the leaf at ``leaf_index``.

    Rebuilds the tree exactly as ``merkle_root`` does, recording at each
    level the sibling of the node on the leaf-to-root path.

    Args:
        leaves: The same leaf sequence used for ``merkle_root``
        leaf_index: 0-based index of the leaf to prove
        hasher: Hasher to use (default: BLAKE2b-512)
        encoding: Text encoding for str leaves (default: from config)

    Returns:
        MerkleProof with bottom-up siblings, leaf count, index and content

    Raises:
        EmptyInputException: If ``leaves`` is empty
        IndexOutOfRangeException: If ``leaf_index`` is negative or
            not less than the number of leaves
    """
    hasher, encoding = resolve_hashing(hasher, encoding)
    items = materialize_leaves(leaves)

    if leaf_index < 0 or leaf_index >= len(items):
        raise IndexOutOfRangeException(
            message=f"Leaf index {leaf_index} out of range for {len(items)} leaves",
            leaf_index=leaf_index,
            num_of_leaves=len(items),
        )

    levels = build_levels(hash_leaves(items, hasher, encoding), hasher)
    siblings = collect_siblings(levels, leaf_index)

    logger.debug(
        f"Built proof for leaf {leaf_index} of {len(items)} with {len(siblings)} siblings"
    )
    return MerkleProof(
        hashes=tuple(siblings),
        num_of_leaves=len(items),
        leaf_index=leaf_index,
        leaf_content=items[leaf_index],
    )


__all__ = [
    "resolve_hashing",
    "hash_leaves",
    "next_level",
    "build_levels",
    "collect_siblings",
    "materialize_leaves",
    "merkle_root",
    "merkle_proof",
]

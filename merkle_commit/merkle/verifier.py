"""
Merkle Proof Verification
Recompute a candidate root from one leaf and its proof.

Verification Rules:
1. Start from hash_leaf(leaf_content)
2. Replay the ascent level by level using num_of_leaves to know each
   level's width; a level where the path node is carried up unpaired
   consumes no sibling
3. Left child (even position): parent = hash_pair(current, sibling)
   Right child (odd position):  parent = hash_pair(sibling, current)
4. Compare the candidate to the claimed root in constant time

Outcomes:
- A proof whose shape is impossible for its declared leaf count raises
  MalformedProofException
- Any other mismatch returns False; every rejected proof goes through
  the same full ascent and comparison
"""
from __future__ import annotations

import hmac
import logging
from typing import Any, Optional

from merkle_commit.crypto.hashing import Hasher
from merkle_commit.merkle.merkle_tree import resolve_hashing
from merkle_commit.merkle.types import (
    Digest,
    MerkleProof,
    compute_tree_height,
    minimum_path_length,
    next_width,
    sibling_position,
)
from merkle_commit.schemas.canonical import leaf_to_bytes
from merkle_commit.schemas.errors import MalformedProofException

logger = logging.getLogger(__name__)


def validate_proof_shape(proof: MerkleProof[Any], hasher: Hasher) -> None:
    """
    Reject proofs that no tree with ``proof.num_of_leaves`` leaves could produce.

    Raises:
        MalformedProofException: On a non-positive leaf count, an index
            outside [0, num_of_leaves), a sibling count no leaf of the tree
            could have, or a sibling of the wrong width
    """
    num_of_leaves = proof.num_of_leaves
    if num_of_leaves < 1:
        raise MalformedProofException(
            message=f"Proof declares {num_of_leaves} leaves",
            leaf_index=proof.leaf_index,
            details={"num_of_leaves": num_of_leaves},
        )

    if proof.leaf_index < 0 or proof.leaf_index >= num_of_leaves:
        raise MalformedProofException(
            message=f"Leaf index {proof.leaf_index} out of range for {num_of_leaves} leaves",
            leaf_index=proof.leaf_index,
            details={"num_of_leaves": num_of_leaves},
        )

    height = compute_tree_height(num_of_leaves)
    if len(proof.hashes) > height:
        raise MalformedProofException(
            message=(
                f"Proof has {len(proof.hashes)} siblings but a tree of "
                f"{num_of_leaves} leaves has only {height} levels"
            ),
            leaf_index=proof.leaf_index,
            details={"num_of_leaves": num_of_leaves, "siblings": len(proof.hashes)},
        )

    shortest = minimum_path_length(num_of_leaves)
    if len(proof.hashes) < shortest:
        raise MalformedProofException(
            message=(
                f"Proof has {len(proof.hashes)} siblings but every leaf of a tree of "
                f"{num_of_leaves} leaves has at least {shortest}"
            ),
            leaf_index=proof.leaf_index,
            details={"num_of_leaves": num_of_leaves, "siblings": len(proof.hashes)},
        )

    for position, sibling in enumerate(proof.hashes):
        if len(sibling) != hasher.digest_size:
            raise MalformedProofException(
                message=(
                    f"Sibling {position} is {len(sibling)} bytes, "
                    f"expected {hasher.digest_size}"
                ),
                leaf_index=proof.leaf_index,
                details={"position": position, "length": len(sibling)},
            )


def verify_proof(
    root: Digest,
    proof: MerkleProof[Any],
    *,
    hasher: Optional[Hasher] = None,
    encoding: Optional[str] = None,
) -> bool:
    """
    Check that ``proof`` places its leaf under ``root``.

    Args:
        root: The claimed Merkle root
        proof: Proof produced by ``merkle_proof`` (or received from elsewhere)
        hasher: Hasher the tree was built with (default: BLAKE2b-512)
        encoding: Text encoding for str leaves (default: from config)

    Returns:
        True iff the recomputed root equals ``root``

    Raises:
        MalformedProofException: If the proof's shape is inconsistent
            with its declared leaf count
    """
    hasher, encoding = resolve_hashing(hasher, encoding)
    validate_proof_shape(proof, hasher)

    current = hasher.hash_leaf(leaf_to_bytes(proof.leaf_content, encoding))
    siblings = proof.hashes
    filler = bytes(hasher.digest_size)
    consumed = 0
    exhausted = False

    index = proof.leaf_index
    width = proof.num_of_leaves
    while width > 1:
        if sibling_position(index, width) is not None:
            if consumed < len(siblings):
                sibling = siblings[consumed]
                consumed += 1
            else:
                # Out of siblings: pair with a zero digest for the remaining levels
                sibling = filler
                exhausted = True
            if index % 2 == 0:
                current = hasher.hash_pair(current, sibling)
            else:
                current = hasher.hash_pair(sibling, current)
        index //= 2
        width = next_width(width)

    matches = hmac.compare_digest(current, bytes(root))
    valid = matches and not exhausted and consumed == len(siblings)

    logger.debug(f"Verified proof for leaf {proof.leaf_index} of {proof.num_of_leaves}: {valid}")
    return valid


__all__ = [
    "validate_proof_shape",
    "verify_proof",
]

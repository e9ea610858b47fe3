"""
Merkle Proofs Convenience Wrappers
Class-based interfaces bound to one Hasher and text encoding.

This module provides:
- MerkleProver: Compute roots and generate proofs
- MerkleVerifier: Verify proofs

These wrap the functions in merkle_tree.py and verifier.py so that a
party holding a non-default Hasher does not have to pass it on every call.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, TypeVar

from merkle_commit.crypto.hashing import Hasher
from merkle_commit.merkle.merkle_tree import (
    materialize_leaves,
    build_levels,
    collect_siblings,
    hash_leaves,
    merkle_proof,
    merkle_root,
    resolve_hashing,
)
from merkle_commit.merkle.types import Digest, MerkleProof
from merkle_commit.merkle.verifier import verify_proof

T = TypeVar("T")


class MerkleProver:
    """
    Computes roots and proofs with a fixed Hasher.

    Example:
        >>> prover = MerkleProver()
        >>> root = prover.root(["abc", "bcd", "cde"])
        >>> proof = prover.prove(["abc", "bcd", "cde"], 2)
        >>> len(proof.hashes)
        1
    """

    def __init__(self, hasher: Optional[Hasher] = None, encoding: Optional[str] = None) -> None:
        self.hasher, self.encoding = resolve_hashing(hasher, encoding)

    def root(self, leaves: Iterable[Any]) -> Digest:
        """Compute the Merkle root of ``leaves``."""
        return merkle_root(leaves, hasher=self.hasher, encoding=self.encoding)

    def prove(self, leaves: Iterable[T], leaf_index: int) -> MerkleProof[T]:
        """
        Generate a proof for the leaf at ``leaf_index``.

        Raises:
            EmptyInputException: If leaves is empty
            IndexOutOfRangeException: If leaf_index is out of range
        """
        return merkle_proof(leaves, leaf_index, hasher=self.hasher, encoding=self.encoding)

    def prove_all(self, leaves: Iterable[T]) -> list[MerkleProof[T]]:
        """
        Generate a proof for every leaf, building the tree only once.

        Raises:
            EmptyInputException: If leaves is empty
        """
        items: Sequence[T] = materialize_leaves(leaves)
        levels = build_levels(hash_leaves(items, self.hasher, self.encoding), self.hasher)
        return [
            MerkleProof(
                hashes=tuple(collect_siblings(levels, index)),
                num_of_leaves=len(items),
                leaf_index=index,
                leaf_content=leaf,
            )
            for index, leaf in enumerate(items)
        ]


class MerkleVerifier:
    """
    Verifies proofs with a fixed Hasher.

    Example:
        >>> prover, verifier = MerkleProver(), MerkleVerifier()
        >>> leaves = ["abc", "bcd", "cde"]
        >>> verifier.verify(prover.root(leaves), prover.prove(leaves, 1))
        True
    """

    def __init__(self, hasher: Optional[Hasher] = None, encoding: Optional[str] = None) -> None:
        self.hasher, self.encoding = resolve_hashing(hasher, encoding)

    def verify(self, root: Digest, proof: MerkleProof[Any]) -> bool:
        """
        Verify a Merkle proof against ``root``.

        Raises:
            MalformedProofException: If the proof's shape is inconsistent
        """
        return verify_proof(root, proof, hasher=self.hasher, encoding=self.encoding)

    def verify_leaf(
        self,
        root: Digest,
        leaf: Any,
        leaf_index: int,
        num_of_leaves: int,
        hashes: Sequence[Digest],
    ) -> bool:
        """
        Verify a leaf is included in ``root`` using raw proof components.

        Builds a MerkleProof and verifies it.
        """
        proof = MerkleProof(
            hashes=tuple(hashes),
            num_of_leaves=num_of_leaves,
            leaf_index=leaf_index,
            leaf_content=leaf,
        )
        return self.verify(root, proof)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]

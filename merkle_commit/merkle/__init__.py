"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleProof: Inclusion proof for one leaf
- merkle_root: Compute root from leaf values
- merkle_proof: Generate proof for a specific leaf
- verify_proof: Verify a proof against a claimed root

Canonical Commitment Rules:
1. Leaf hashing: H(0x00 || leaf_bytes)
2. Parent hashing: H(0x01 || left || right)
3. Odd levels: carry the last node up unchanged
4. Empty tree: rejected (EmptyInputException)
5. Single leaf: root = hash of that leaf

Usage:
    from merkle_commit.merkle import merkle_root, merkle_proof, verify_proof

    leaves = ["abc", "bcd", "cde", "def", "efg"]
    root = merkle_root(leaves)
    proof = merkle_proof(leaves, 2)
    assert verify_proof(root, proof)
"""
from .types import (
    Digest,
    MerkleProof,
    compute_tree_height,
    minimum_path_length,
    proof_path_length,
    sibling_position,
)

from .merkle_tree import (
    merkle_root,
    merkle_proof,
)

from .verifier import (
    validate_proof_shape,
    verify_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Digest",
    "MerkleProof",
    # Core functions
    "merkle_root",
    "merkle_proof",
    "verify_proof",
    "validate_proof_shape",
    "compute_tree_height",
    "proof_path_length",
    "minimum_path_length",
    "sibling_position",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]

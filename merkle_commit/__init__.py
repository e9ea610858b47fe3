"""merkle_commit - Merkle roots, inclusion proofs and proof verification."""
__version__ = "0.1.0"
from merkle_commit.crypto.hashing import DEFAULT_HASHER, Hasher, from_hex, to_hex
from merkle_commit.merkle import (
    Digest,
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    merkle_proof,
    merkle_root,
    verify_proof,
)
from merkle_commit.schemas.errors import (
    EmptyInput,
    IndexOutOfRange,
    MalformedProof,
    MerkleError,
    MerkleException,
)
__all__ = ["DEFAULT_HASHER", "Digest", "EmptyInput", "Hasher", "IndexOutOfRange",
           "MalformedProof", "MerkleError", "MerkleException", "MerkleProof",
           "MerkleProver", "MerkleVerifier", "from_hex", "merkle_proof", "merkle_root",
           "to_hex", "verify_proof"]

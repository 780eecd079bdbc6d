"""
Merkle Proofs for Claim Allowlists
Position-agnostic proof verification against a committed root.

This module provides:
- ClaimProof: Dataclass for an (account, max_amount) inclusion proof
- leaf_hash: Compute the allowlist leaf for a claim
- process_proof / verify_proof: Fold and verify sibling proofs
- MerkleVerifier: Class-based convenience wrapper

Canonical Commitment Rules:
1. Leaf hashing: keccak256(abi.encodePacked(account, max_amount))
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Empty proof: root = leaf

Usage:
    from core.merkle import MerkleVerifier, leaf_hash

    ok = MerkleVerifier.verify_claim(account, 1000, siblings, root)
"""
from .merkle_tree import (
    ClaimProof,
    leaf_hash,
    process_proof,
    verify_proof,
    verify_claim_proof,
)

from .merkle_proofs import (
    MerkleVerifier,
)


__all__ = [
    "ClaimProof",
    "leaf_hash",
    "process_proof",
    "verify_proof",
    "verify_claim_proof",
    "MerkleVerifier",
]

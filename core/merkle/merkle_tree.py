"""
Merkle Proof Verification
Position-agnostic Merkle proof verification for claim allowlists.

This module provides:
- Leaf hashing for (account, max_amount) claims
- Proof folding with sorted pair hashing
- Proof verification against a committed root

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(abi.encodePacked(account, max_amount))
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
3. Proofs are ordered bottom-up and carry no left/right flags
4. Empty proof: the leaf itself must equal the root

Determinism Notes:
- No randomness or non-deterministic ordering
- Tree construction (padding, odd leaf counts) is the tree builder's concern;
  this module accepts any proof that folds to the root
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import encode_leaf, hash_pair, keccak256


@dataclass(frozen=True)
class ClaimProof:
    """
    A Merkle proof for a single (account, max_amount) allowlist entry.

    Attributes:
        account: Claimant address
        max_amount: Cumulative amount the allowlist grants the account
        siblings: Sibling hashes from bottom to top of the tree
    """
    account: str
    max_amount: int
    siblings: list[bytes] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_amount < 0:
            raise ValueError(f"max_amount must be non-negative, got {self.max_amount}")

    @property
    def leaf(self) -> bytes:
        return leaf_hash(self.account, self.max_amount)


def leaf_hash(account: str, max_amount: int) -> bytes:
    """
    Compute the allowlist leaf for an account and its max amount.

    Args:
        account: Claimant address (0x-prefixed)
        max_amount: Cumulative allotment for the account

    Returns:
        32-byte leaf hash
    """
    return keccak256(encode_leaf(account, max_amount))


def process_proof(proof: Sequence[bytes], leaf: bytes) -> bytes:
    """
    Fold a proof left to right starting from the leaf.

    Each step combines the running hash with the next sibling using
    sorted pair hashing, so the caller never supplies positions.

    Args:
        proof: Sibling hashes, bottom-up
        leaf: The leaf hash to start from

    Returns:
        The reconstructed root
    """
    computed = leaf
    for sibling in proof:
        computed = hash_pair(computed, sibling)
    return computed


def verify_proof(proof: Sequence[bytes], root: bytes, leaf: bytes) -> bool:
    """
    Verify that a leaf is committed to by a root.

    Args:
        proof: Sibling hashes, bottom-up
        root: The committed Merkle root
        leaf: The leaf hash being proven

    Returns:
        True if the proof folds to the root, False otherwise
    """
    return process_proof(proof, leaf) == root


def verify_claim_proof(proof: ClaimProof, root: bytes) -> bool:
    """Verify a ClaimProof against a root."""
    return verify_proof(proof.siblings, root, proof.leaf)


__all__ = [
    "ClaimProof",
    "leaf_hash",
    "process_proof",
    "verify_proof",
    "verify_claim_proof",
]

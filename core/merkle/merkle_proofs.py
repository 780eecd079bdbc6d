"""
Merkle Verifier Convenience Wrapper
Thin class-based interface around the functions in merkle_tree.py.
"""
from __future__ import annotations

from typing import Sequence

from core.merkle.merkle_tree import (
    ClaimProof,
    leaf_hash,
    verify_claim_proof,
    verify_proof,
)


class MerkleVerifier:
    """
    Convenience class for verifying allowlist proofs.

    Example:
        >>> MerkleVerifier.verify_claim(account, 1000, siblings, root)
        True
    """

    @staticmethod
    def verify(proof: Sequence[bytes], root: bytes, leaf: bytes) -> bool:
        """
        Verify a raw leaf against a root.

        Args:
            proof: Sibling hashes, bottom-up
            root: The committed Merkle root
            leaf: The leaf hash being proven

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_proof(proof, root, leaf)

    @staticmethod
    def verify_claim(
        account: str,
        max_amount: int,
        proof: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify that (account, max_amount) is in the allowlist committed by root.

        The leaf is computed here, so callers cannot substitute a leaf for a
        different account or amount.
        """
        return verify_proof(proof, root, leaf_hash(account, max_amount))

    @staticmethod
    def verify_proof_object(proof: ClaimProof, root: bytes) -> bool:
        """Verify a ClaimProof against a root."""
        return verify_claim_proof(proof, root)


__all__ = [
    "MerkleVerifier",
]

"""
Merkle Verifier Unit Tests
Tests for core/merkle/merkle_tree.py and core/merkle/merkle_proofs.py

Tests:
1. Empty proof - valid iff leaf == root
2. Proof verification - every leaf of built trees verifies
3. Position independence - sibling order within a pair does not matter
4. Tamper detection - tampered sibling/leaf/root fails verification
5. Leaf binding - a proof cannot be reused for another account or amount
"""
import pytest

from core.crypto.hashing import ZERO_HASH, hash_pair, keccak256
from core.merkle import (
    ClaimProof,
    MerkleVerifier,
    leaf_hash,
    process_proof,
    verify_claim_proof,
    verify_proof,
)

from fixtures.common import (
    ALICE,
    BOB,
    CAROL,
    build_proof,
    build_root,
    make_account,
    make_distribution,
)


class TestEmptyProof:
    """A proof with no siblings."""

    def test_leaf_equal_to_root_verifies(self):
        leaf = leaf_hash(ALICE, 1000)
        assert MerkleVerifier.verify([], leaf, leaf)

    def test_leaf_different_from_root_fails(self):
        assert not MerkleVerifier.verify([], keccak256(b"root"), leaf_hash(ALICE, 1000))

    def test_single_leaf_tree(self):
        dist = make_distribution({ALICE: 42})
        assert dist.root == leaf_hash(ALICE, 42)
        assert dist.proof(ALICE) == []
        assert MerkleVerifier.verify_claim(ALICE, 42, [], dist.root)


class TestProofVerification:
    """Every leaf of a built tree verifies against its root."""

    @pytest.mark.parametrize("size", [2, 3, 4, 5, 7, 8, 13])
    def test_all_leaves_verify(self, size):
        leaves = [leaf_hash(make_account(f"acct{i}"), i + 1) for i in range(size)]
        root = build_root(leaves)

        for index, leaf in enumerate(leaves):
            assert verify_proof(build_proof(leaves, index), root, leaf)

    def test_process_proof_reconstructs_root(self):
        leaves = [keccak256(bytes([i])) for i in range(4)]
        root = build_root(leaves)
        assert process_proof(build_proof(leaves, 2), leaves[2]) == root

    def test_two_level_tree_by_hand(self):
        a, b, c, d = (keccak256(bytes([i])) for i in range(4))
        root = hash_pair(hash_pair(a, b), hash_pair(c, d))

        assert MerkleVerifier.verify([b, hash_pair(c, d)], root, a)
        assert MerkleVerifier.verify([c, hash_pair(a, b)], root, d)

    def test_abc_with_zero_padding(self, distribution):
        for account, amount in distribution.allotments.items():
            assert MerkleVerifier.verify_claim(account, amount, distribution.proof(account), distribution.root)

    def test_claim_proof_object(self, distribution):
        proof = ClaimProof(account=BOB, max_amount=2500, siblings=distribution.proof(BOB))

        assert proof.leaf == leaf_hash(BOB, 2500)
        assert verify_claim_proof(proof, distribution.root)
        assert MerkleVerifier.verify_proof_object(proof, distribution.root)

    def test_claim_proof_rejects_negative_amount(self):
        with pytest.raises(ValueError, match="non-negative"):
            ClaimProof(account=ALICE, max_amount=-1)


class TestTamperDetection:
    """Modified proofs, leaves or roots are rejected."""

    def test_tampered_sibling(self, distribution):
        proof = distribution.proof(ALICE)
        proof[0] = keccak256(b"tampered")
        assert not MerkleVerifier.verify_claim(ALICE, 1000, proof, distribution.root)

    def test_tampered_root(self, distribution):
        assert not MerkleVerifier.verify_claim(ALICE, 1000, distribution.proof(ALICE), keccak256(b"other"))

    def test_zero_root(self, distribution):
        assert not MerkleVerifier.verify_claim(ALICE, 1000, distribution.proof(ALICE), ZERO_HASH)

    def test_truncated_proof(self, distribution):
        proof = distribution.proof(ALICE)[:-1]
        assert not MerkleVerifier.verify_claim(ALICE, 1000, proof, distribution.root)

    def test_extra_sibling(self, distribution):
        proof = distribution.proof(ALICE) + [keccak256(b"extra")]
        assert not MerkleVerifier.verify_claim(ALICE, 1000, proof, distribution.root)


class TestLeafBinding:
    """The leaf is derived from (account, amount), so proofs do not transfer."""

    def test_other_accounts_proof(self, distribution):
        assert not MerkleVerifier.verify_claim(BOB, 2500, distribution.proof(ALICE), distribution.root)

    def test_different_amount(self, distribution):
        assert not MerkleVerifier.verify_claim(ALICE, 1001, distribution.proof(ALICE), distribution.root)

    def test_different_account_same_amount(self, distribution):
        assert not MerkleVerifier.verify_claim(CAROL, 1000, distribution.proof(ALICE), distribution.root)

    def test_leaf_hash_matches_packed_encoding(self):
        expected = keccak256(bytes.fromhex(ALICE[2:]) + (1000).to_bytes(32, "big"))
        assert leaf_hash(ALICE, 1000) == expected

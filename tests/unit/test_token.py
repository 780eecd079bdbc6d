"""
Fungible Token Unit Tests
Tests for core/chain/token.py
"""
import pytest

from core.chain import ZERO_ADDRESS, FungibleToken
from core.schemas.errors import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    RevertedError,
)

from fixtures.common import ALICE, BOB, CAROL, DEPLOYER, make_token


class TestMint:
    """Minting and the optional minter role."""

    def test_mint_credits_and_emits(self, chain, token):
        token.mint(ALICE, ALICE, 500)

        assert token.balance_of(ALICE) == 500
        assert token.total_supply == 500
        event = chain.logs(address=token.address, name="Transfer")[-1].event
        assert event.sender == ZERO_ADDRESS
        assert event.recipient == ALICE

    def test_restricted_minter(self, chain):
        token = chain.deploy(DEPLOYER, FungibleToken, "Gated", "GTD", minter=DEPLOYER)

        with pytest.raises(RevertedError, match="minter"):
            token.mint(ALICE, ALICE, 1)
        token.mint(DEPLOYER, ALICE, 1)
        assert token.balance_of(ALICE) == 1


class TestTransfer:
    """transfer / approve / transfer_from on a reverting token."""

    def test_transfer(self, token):
        token.mint(ALICE, ALICE, 100)

        assert token.transfer(ALICE, BOB, 30) is True
        assert token.balance_of(ALICE) == 70
        assert token.balance_of(BOB) == 30

    def test_transfer_insufficient_balance_reverts(self, token):
        token.mint(ALICE, ALICE, 10)
        with pytest.raises(InsufficientBalanceError):
            token.transfer(ALICE, BOB, 11)
        assert token.balance_of(ALICE) == 10

    def test_approve_and_transfer_from(self, token):
        token.mint(ALICE, ALICE, 100)
        assert token.approve(ALICE, BOB, 60) is True

        assert token.transfer_from(BOB, ALICE, CAROL, 50) is True
        assert token.balance_of(CAROL) == 50
        assert token.allowance(ALICE, BOB) == 10

    def test_transfer_from_without_allowance(self, token):
        token.mint(ALICE, ALICE, 100)
        with pytest.raises(InsufficientAllowanceError):
            token.transfer_from(BOB, ALICE, CAROL, 1)

    def test_failed_transfer_from_keeps_allowance(self, token):
        token.mint(ALICE, ALICE, 5)
        token.approve(ALICE, BOB, 50)

        with pytest.raises(InsufficientBalanceError):
            token.transfer_from(BOB, ALICE, CAROL, 10)
        assert token.allowance(ALICE, BOB) == 50


class TestFalseReturningToken:
    """reverts_on_failure=False returns False instead of raising."""

    def test_transfer_returns_false(self, chain):
        token = make_token(chain, reverts_on_failure=False)
        token.mint(ALICE, ALICE, 10)

        assert token.transfer(ALICE, BOB, 11) is False
        assert token.balance_of(ALICE) == 10
        assert token.balance_of(BOB) == 0

    def test_transfer_from_returns_false_and_keeps_allowance(self, chain):
        token = make_token(chain, reverts_on_failure=False)
        token.mint(ALICE, ALICE, 5)
        token.approve(ALICE, BOB, 50)

        assert token.transfer_from(BOB, ALICE, CAROL, 10) is False
        assert token.allowance(ALICE, BOB) == 50
        assert token.balance_of(CAROL) == 0

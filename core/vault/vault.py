"""
Merkle Vault

One distribution campaign: a single asset, an allowlist root, a claim
window and a per-account ledger of claimed amounts.

Claim rules (checked in this order):
1. Window start must be set            -> StartNotSetError
2. start <= now <= end                 -> TooEarlyError / TooLateError
3. Root must be set                    -> NoRootError
4. max_amount > already claimed        -> InvalidAmountError
5. Leaf must verify against the root   -> InvalidProofError

Ledger effects are written before the payout, and the payout section is
guarded against re-entry. Any failure reverts the whole call.

Allotments are cumulative: a later root may raise an account's max amount
and the account then receives only the difference.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from core.chain.address import is_native_asset, normalize_address
from core.chain.chain import Chain, Contract, external
from core.crypto.hashing import HASH_LENGTH, UINT256_MAX, ZERO_HASH, to_hex
from core.merkle import MerkleVerifier
from core.schemas.errors import (
    InvalidAmountError,
    InvalidProofError,
    InvalidRootError,
    InvalidTimeError,
    NativeNotAcceptedError,
    NoRootError,
    NoTokensError,
    OnlyOperatorError,
    OnlyOwnerError,
    StartNotSetError,
    TooEarlyError,
    TooLateError,
)
from core.schemas.events import Claimed, RootUpdated, WindowConfigured, Withdrawn
from core.schemas.vault import ClaimReceipt, VaultPhase, VaultSnapshot
from core.vault.adapter import AssetTransferAdapter, adapter_for
from core.vault.guard import ReentrancyGuard
from core.vault.window import DistributionWindow, WindowLimits


logger = logging.getLogger(__name__)


class MerkleVault(ReentrancyGuard, Contract):
    """
    Claim ledger for one campaign.

    Attributes:
        root: Current allowlist commitment (ZERO_HASH = unset)
        window: Current distribution window
        total_claimed: Sum of every delta paid out
    """

    def __init__(
        self,
        chain: Chain,
        address: str,
        asset: str,
        owner: str,
        operator: str,
        limits: WindowLimits = WindowLimits(),
    ) -> None:
        super().__init__(chain, address)
        self._asset = normalize_address(asset)
        self._owner = normalize_address(owner)
        self._operator = normalize_address(operator)
        self.limits = limits
        self.root: bytes = ZERO_HASH
        self.window = DistributionWindow()
        self.total_claimed = 0
        self._claimed: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def asset(self) -> str:
        return self._asset

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def operator(self) -> str:
        return self._operator

    @property
    def is_native(self) -> bool:
        return is_native_asset(self._asset)

    @property
    def adapter(self) -> AssetTransferAdapter:
        return adapter_for(self.chain, self._asset)

    @property
    def start_time(self) -> int:
        return self.window.start

    @property
    def end_time(self) -> int:
        return self.window.end

    def claimed_of(self, account: str) -> int:
        return self._claimed.get(normalize_address(account), 0)

    def claimants(self) -> dict[str, int]:
        return dict(self._claimed)

    def balance(self) -> int:
        return self.adapter.balance_of(self.address)

    def phase(self, now: Optional[int] = None) -> VaultPhase:
        now = self.chain.timestamp if now is None else now
        if not self.window.is_configured:
            return VaultPhase.UNCONFIGURED
        if self.window.has_ended(now):
            return VaultPhase.ENDED
        if self.window.is_active(now) and self.root != ZERO_HASH:
            return VaultPhase.LIVE
        return VaultPhase.ARMED

    def snapshot_view(self) -> VaultSnapshot:
        return VaultSnapshot(
            address=self.address,
            asset=self._asset,
            is_native=self.is_native,
            owner=self._owner,
            operator=self._operator,
            root=to_hex(self.root),
            start_time=self.window.start,
            end_time=self.window.end,
            total_claimed=self.total_claimed,
            balance=self.balance(),
            phase=self.phase(),
            timestamp=self.chain.timestamp,
        )

    # ------------------------------------------------------------------
    # Native currency
    # ------------------------------------------------------------------

    def receive(self, sender: str, amount: int) -> None:
        if not self.is_native:
            raise NativeNotAcceptedError(
                details={"vault": self.address, "sender": sender, "amount": amount},
            )
        logger.debug(f"Vault {self.address} received {amount} native from {sender}")

    # ------------------------------------------------------------------
    # Operator
    # ------------------------------------------------------------------

    def _only_operator(self, caller: str) -> None:
        if caller != self._operator:
            raise OnlyOperatorError(details={"caller": caller, "operator": self._operator})

    def _only_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise OnlyOwnerError(details={"caller": caller, "owner": self._owner})

    @external
    def set_window(self, caller: str, start: int, duration: int) -> DistributionWindow:
        """Replace the distribution window (operator only)."""
        self._only_operator(caller)
        self.window = self.window.rearm(start, duration, self.chain.timestamp, self.limits)
        self.emit(WindowConfigured(start=self.window.start, end=self.window.end))
        logger.info(
            f"Vault {self.address} window set to [{self.window.start}, {self.window.end}]"
        )
        return self.window

    @external
    def set_root(self, caller: str, root: bytes) -> None:
        """Replace the allowlist root (operator only). Claimed amounts carry over."""
        self._only_operator(caller)
        if len(root) != HASH_LENGTH or root == ZERO_HASH:
            raise InvalidRootError(details={"root": to_hex(root)})
        previous = self.root
        self.root = bytes(root)
        self.emit(RootUpdated(previous_root=to_hex(previous), root=to_hex(self.root)))
        logger.info(f"Vault {self.address} root updated to {to_hex(self.root)}")

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    @external
    def claim(self, caller: str, max_amount: int, proof: Sequence[bytes]) -> ClaimReceipt:
        """
        Claim the difference between max_amount and what caller already claimed.

        Args:
            caller: Claimant; the leaf is built from this account
            max_amount: Cumulative allotment proven by the proof
            proof: Sibling hashes, bottom-up

        Returns:
            ClaimReceipt with the delta paid
        """
        with self.non_reentrant("claim"):
            now = self.chain.timestamp
            if not self.window.is_configured:
                raise StartNotSetError()
            if now < self.window.start:
                raise TooEarlyError(details={"now": now, "start": self.window.start})
            if now > self.window.end:
                raise TooLateError(details={"now": now, "end": self.window.end})
            if self.root == ZERO_HASH:
                raise NoRootError()

            already = self._claimed.get(caller, 0)
            if (
                not isinstance(max_amount, int)
                or isinstance(max_amount, bool)
                or max_amount > UINT256_MAX
                or max_amount <= already
            ):
                raise InvalidAmountError(
                    details={"account": caller, "max_amount": max_amount, "claimed": already},
                )

            if not MerkleVerifier.verify_claim(caller, max_amount, list(proof), self.root):
                logger.debug(f"Rejected proof for {caller} ({max_amount}) on {self.address}")
                raise InvalidProofError(details={"account": caller, "max_amount": max_amount})

            delta = max_amount - already
            self._claimed[caller] = max_amount
            self.total_claimed += delta

            self.adapter.pay_out(self.address, caller, delta)

            self.emit(Claimed(account=caller, amount=delta))
            logger.info(f"Vault {self.address} paid {delta} to {caller} (total {max_amount})")
            return ClaimReceipt(account=caller, amount=delta, claimed_total=max_amount)

    # ------------------------------------------------------------------
    # Owner
    # ------------------------------------------------------------------

    @external
    def withdraw(self, caller: str) -> int:
        """Drain the whole balance to the owner once the window is over (owner only)."""
        self._only_owner(caller)
        with self.non_reentrant("withdraw"):
            now = self.chain.timestamp
            if now <= self.window.end:
                raise InvalidTimeError(
                    "Distribution window has not ended",
                    details={"now": now, "end": self.window.end},
                )
            amount = self.balance()
            if amount == 0:
                raise NoTokensError()

            self.adapter.pay_out(self.address, self._owner, amount)

            self.emit(Withdrawn(owner=self._owner, amount=amount))
            logger.info(f"Vault {self.address} withdrew {amount} to owner {self._owner}")
            return amount


__all__ = ["MerkleVault"]

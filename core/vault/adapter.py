"""
Asset Transfer Adapters

Uniform pay-out / pull-in / balance interface over the two asset kinds a
vault can hold:

- TokenTransferAdapter: fungible token via transfer / transfer_from.
  A False return value is treated exactly like a revert.
- NativeTransferAdapter: native currency via a low-level value send.
  A recipient that rejects the send fails the transfer.

Every failure surfaces as TransferFailedError.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from core.chain.address import is_native_asset, normalize_address
from core.chain.chain import Chain
from core.chain.token import FungibleToken
from core.schemas.errors import (
    TransferFailedError,
    UnknownContractError,
    VaultException,
)


logger = logging.getLogger(__name__)


class AssetTransferAdapter(ABC):
    """Base class for asset-specific transfer paths."""

    def __init__(self, chain: Chain, asset: str) -> None:
        self.chain = chain
        self.asset = normalize_address(asset)

    @property
    @abstractmethod
    def is_native(self) -> bool:
        ...

    @abstractmethod
    def balance_of(self, holder: str) -> int:
        """Amount of the asset held by an account."""

    @abstractmethod
    def pay_out(self, sender: str, to: str, amount: int) -> None:
        """
        Move ``amount`` from ``sender`` (the calling contract) to ``to``.

        Raises:
            TransferFailedError: The transfer did not happen
        """

    @abstractmethod
    def pull_in(self, spender: str, owner: str, to: str, amount: int) -> None:
        """
        Move ``amount`` from ``owner`` to ``to`` using ``spender``'s allowance.

        Raises:
            TransferFailedError: The transfer did not happen
        """

    def _failed(self, action: str, amount: int, **details) -> TransferFailedError:
        logger.warning(f"{action} of {amount} {self.asset} failed: {details}")
        return TransferFailedError(
            f"{action} failed",
            details={"asset": self.asset, "amount": amount, **details},
        )


class TokenTransferAdapter(AssetTransferAdapter):
    """Transfers through an allowance-based fungible token."""

    @property
    def is_native(self) -> bool:
        return False

    def _token(self) -> FungibleToken:
        try:
            return self.chain.get_contract(self.asset, FungibleToken)
        except UnknownContractError as e:
            raise self._failed("Token lookup", 0, reason=e.message) from e

    def balance_of(self, holder: str) -> int:
        return self._token().balance_of(holder)

    def pay_out(self, sender: str, to: str, amount: int) -> None:
        token = self._token()
        try:
            ok = token.transfer(sender, to, amount)
        except VaultException as e:
            raise self._failed("Token transfer", amount, to=to, reason=e.code) from e
        if not ok:
            raise self._failed("Token transfer", amount, to=to, reason="returned false")

    def pull_in(self, spender: str, owner: str, to: str, amount: int) -> None:
        token = self._token()
        try:
            ok = token.transfer_from(spender, owner, to, amount)
        except VaultException as e:
            raise self._failed("Token transfer_from", amount, owner=owner, to=to, reason=e.code) from e
        if not ok:
            raise self._failed("Token transfer_from", amount, owner=owner, to=to, reason="returned false")


class NativeTransferAdapter(AssetTransferAdapter):
    """Transfers native currency with a low-level send."""

    @property
    def is_native(self) -> bool:
        return True

    def balance_of(self, holder: str) -> int:
        return self.chain.balance_of(holder)

    def pay_out(self, sender: str, to: str, amount: int) -> None:
        if not self.chain.send_value(sender, to, amount):
            raise self._failed("Native send", amount, to=to)

    def pull_in(self, spender: str, owner: str, to: str, amount: int) -> None:
        # Native currency has no allowances; the spender forwards what it holds
        if not self.chain.send_value(spender, to, amount):
            raise self._failed("Native send", amount, owner=owner, to=to)


def adapter_for(chain: Chain, asset: str) -> AssetTransferAdapter:
    """Pick the transfer path for an asset identifier."""
    if is_native_asset(asset):
        return NativeTransferAdapter(chain, asset)
    return TokenTransferAdapter(chain, asset)


__all__ = [
    "AssetTransferAdapter",
    "TokenTransferAdapter",
    "NativeTransferAdapter",
    "adapter_for",
]

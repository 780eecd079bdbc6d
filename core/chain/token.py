"""
Fungible Token

Allowance-based fungible token on the ledger model.

Some real tokens signal failure by returning False instead of reverting;
``reverts_on_failure=False`` reproduces that behavior so callers can be
tested against it.
"""

from __future__ import annotations

import logging

from core.chain.address import ZERO_ADDRESS, normalize_address
from core.chain.chain import Chain, Contract, external
from core.schemas.errors import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    RevertedError,
    VaultException,
)
from core.schemas.events import Approval, Transfer


logger = logging.getLogger(__name__)


class FungibleToken(Contract):
    """Minimal fungible token: balances, allowances, mint, transfer, transfer_from."""

    def __init__(
        self,
        chain: Chain,
        address: str,
        name: str,
        symbol: str,
        decimals: int = 18,
        *,
        minter: str | None = None,
        reverts_on_failure: bool = True,
    ) -> None:
        super().__init__(chain, address)
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.minter = normalize_address(minter) if minter else None
        self.reverts_on_failure = reverts_on_failure
        self.total_supply = 0
        self.balances: dict[str, int] = {}
        self.allowances: dict[tuple[str, str], int] = {}

    # --- views --------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self.balances.get(normalize_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    # --- external -----------------------------------------------------------

    @external
    def mint(self, caller: str, to: str, amount: int) -> None:
        if self.minter is not None and caller != self.minter:
            raise RevertedError("Caller is not the minter", details={"caller": caller})
        if amount < 0:
            raise RevertedError("Negative amount")
        to = normalize_address(to)
        self.total_supply += amount
        self.balances[to] = self.balances.get(to, 0) + amount
        self.emit(Transfer(sender=ZERO_ADDRESS, recipient=to, amount=amount))

    @external
    def approve(self, caller: str, spender: str, amount: int) -> bool:
        if amount < 0:
            raise RevertedError("Negative amount")
        spender = normalize_address(spender)
        self.allowances[(caller, spender)] = amount
        self.emit(Approval(owner=caller, spender=spender, amount=amount))
        return True

    @external
    def transfer(self, caller: str, to: str, amount: int) -> bool:
        return self._fail_soft(self._move, caller, normalize_address(to), amount)

    @external
    def transfer_from(self, caller: str, owner: str, to: str, amount: int) -> bool:
        owner = normalize_address(owner)
        to = normalize_address(to)

        def spend() -> None:
            allowed = self.allowances.get((owner, caller), 0)
            if allowed < amount:
                raise InsufficientAllowanceError(
                    details={"owner": owner, "spender": caller, "allowance": allowed, "required": amount},
                )
            self.allowances[(owner, caller)] = allowed - amount
            self._move(owner, to, amount)

        return self._fail_soft(spend)

    # --- internals ----------------------------------------------------------

    def _move(self, sender: str, to: str, amount: int) -> None:
        if amount < 0:
            raise RevertedError("Negative amount")
        available = self.balances.get(sender, 0)
        if available < amount:
            raise InsufficientBalanceError(
                details={"account": sender, "balance": available, "required": amount},
            )
        self.balances[sender] = available - amount
        self.balances[to] = self.balances.get(to, 0) + amount
        self.emit(Transfer(sender=sender, recipient=to, amount=amount))

    def _fail_soft(self, operation, *args) -> bool:
        if self.reverts_on_failure:
            operation(*args)
            return True
        try:
            with self.chain.transaction(self):
                operation(*args)
        except VaultException as e:
            logger.debug(f"{self.symbol} transfer returned false: {e.code}")
            return False
        return True


__all__ = ["FungibleToken"]

"""
Ledger Model

In-memory stand-in for the host platform: a clock, native balances,
deployed contracts, an event log and call-level atomicity.

Atomicity Rules:
1. Every external call runs inside Chain.transaction()
2. transaction() opens a savepoint holding balances, nonces and the log
   length; contract storage is copied the first time a contract is
   entered inside it (touch), so untouched contracts cost nothing
3. Any exception escaping the block restores the savepoint and is re-raised
4. Savepoints nest: a failed sub-call (e.g. a rejected value send) is rolled
   back on its own; a committed sub-call hands its copies to the parent
5. Calls are sequential: there is no interleaving beyond synchronous
   re-entry through receive hooks and token callbacks
"""

from __future__ import annotations

import copy
import functools
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, TypeVar

from core.chain.address import ZERO_ADDRESS, create_address, normalize_address
from core.schemas.errors import (
    InsufficientBalanceError,
    RevertedError,
    UnknownContractError,
    VaultException,
)
from core.schemas.events import ChainEvent, LogEntry


logger = logging.getLogger(__name__)

C = TypeVar("C", bound="Contract")


class Contract:
    """
    Base class for contracts deployed on a Chain.

    Instance attributes are the contract's storage. Everything except the
    names in TRANSIENT is captured by snapshot() and put back by restore().
    """

    TRANSIENT: frozenset[str] = frozenset({"chain", "address"})

    def __init__(self, chain: "Chain", address: str) -> None:
        self.chain = chain
        self.address = address

    def snapshot(self) -> dict[str, Any]:
        return {
            key: copy.deepcopy(value)
            for key, value in vars(self).items()
            if key not in self.TRANSIENT
        }

    def restore(self, state: dict[str, Any]) -> None:
        for key in [k for k in vars(self) if k not in self.TRANSIENT]:
            delattr(self, key)
        self.__dict__.update(state)

    def receive(self, sender: str, amount: int) -> None:
        """Hook for plain native-currency sends. Contracts reject them unless overridden."""
        raise RevertedError(
            f"{type(self).__name__} does not accept native currency",
            details={"contract": self.address, "sender": sender},
        )

    def emit(self, event: ChainEvent) -> None:
        self.chain.emit(self.address, event)


def external(func: Optional[Callable] = None, *, payable: bool = False):
    """
    Mark a contract method as an external entry point.

    The wrapped method takes the calling account as its first argument,
    runs inside a chain transaction, and, when payable, receives a
    ``value`` keyword that is moved from the caller to the contract
    before the body runs.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(self: Contract, caller: str, *args: Any, value: int = 0, **kwargs: Any) -> Any:
            caller = normalize_address(caller)
            if value < 0:
                raise RevertedError("Negative value")
            if value and not payable:
                raise RevertedError(
                    f"{fn.__name__} is not payable",
                    details={"value": value},
                )
            with self.chain.transaction(self):
                if payable:
                    if value:
                        self.chain.move_value(caller, self.address, value)
                    return fn(self, caller, *args, value=value, **kwargs)
                return fn(self, caller, *args, **kwargs)

        wrapper.__external__ = True
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


@dataclass
class _Snapshot:
    balances: dict[str, int]
    nonces: dict[str, int]
    log_length: int
    contracts: dict[str, dict[str, Any]]


@dataclass
class _Savepoint:
    balances: dict[str, int]
    nonces: dict[str, int]
    log_length: int
    deployed: set[str]
    saved: dict[str, dict[str, Any]] = field(default_factory=dict)


class Chain:
    """
    A single-threaded ledger with a settable clock.

    Example:
        >>> chain = Chain(chain_id=1, timestamp=1_700_000_000)
        >>> chain.fund(alice, 10**18)
        >>> token = chain.deploy(alice, FungibleToken, "Reward", "RWD")
    """

    def __init__(
        self,
        chain_id: int = 1,
        timestamp: Optional[int] = None,
        block_number: int = 1,
    ) -> None:
        self.chain_id = chain_id
        self.timestamp = int(time.time()) if timestamp is None else timestamp
        self.block_number = block_number
        self._balances: dict[str, int] = {}
        self._nonces: dict[str, int] = {}
        self._contracts: dict[str, Contract] = {}
        self._logs: list[LogEntry] = []
        self._savepoints: list[_Savepoint] = []

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def advance(self, seconds: int, blocks: int = 1) -> int:
        """Move the clock forward and mine blocks. Returns the new timestamp."""
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")
        self.timestamp += seconds
        self.block_number += blocks
        return self.timestamp

    def set_time(self, timestamp: int) -> None:
        if timestamp < self.timestamp:
            raise ValueError(
                f"Cannot move the clock backwards ({timestamp} < {self.timestamp})"
            )
        if timestamp > self.timestamp:
            self.block_number += 1
        self.timestamp = timestamp

    def mine(self, blocks: int = 1) -> int:
        self.block_number += blocks
        return self.block_number

    # ------------------------------------------------------------------
    # Native currency
    # ------------------------------------------------------------------

    def balance_of(self, address: str) -> int:
        return self._balances.get(normalize_address(address), 0)

    def fund(self, address: str, amount: int) -> None:
        """Credit native currency out of thin air (faucet)."""
        if amount < 0:
            raise ValueError("Cannot fund a negative amount")
        address = normalize_address(address)
        self._balances[address] = self._balances.get(address, 0) + amount

    def move_value(self, sender: str, to: str, amount: int) -> None:
        """Move native currency without invoking any receive hook."""
        sender = normalize_address(sender)
        to = normalize_address(to)
        if amount < 0:
            raise RevertedError("Negative value")
        available = self._balances.get(sender, 0)
        if available < amount:
            raise InsufficientBalanceError(
                details={"account": sender, "balance": available, "required": amount},
            )
        self._balances[sender] = available - amount
        self._balances[to] = self._balances.get(to, 0) + amount

    def transfer_value(self, sender: str, to: str, amount: int) -> None:
        """
        Send native currency and run the recipient's receive hook.

        Raises whatever the recipient raises; the whole send is reverted.
        """
        with self.transaction():
            self.move_value(sender, to, amount)
            recipient = self.contract_at(to)
            if recipient is not None:
                self.touch(recipient)
                recipient.receive(normalize_address(sender), amount)

    def send_value(self, sender: str, to: str, amount: int) -> bool:
        """
        Low-level value send: returns False instead of raising when the
        recipient rejects the payment, its receive hook fails in any way,
        or the sender lacks funds. The send itself is rolled back.
        """
        try:
            self.transfer_value(sender, to, amount)
        except VaultException as e:
            logger.debug(f"Value send {sender} -> {to} ({amount}) reverted: {e.code}")
            return False
        except Exception as e:
            logger.warning(
                f"Value send {sender} -> {to} ({amount}) failed in receive hook: "
                f"{type(e).__name__}: {e}"
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    def next_address(self, deployer: str) -> str:
        deployer = normalize_address(deployer)
        return create_address(deployer, self._nonces.get(deployer, 0))

    def deploy(self, deployer: str, contract_cls: type[C], *args: Any, **kwargs: Any) -> C:
        """Deploy a contract at the deployer's next nonce-derived address."""
        deployer = normalize_address(deployer)
        with self.transaction():
            address = self.next_address(deployer)
            self._nonces[deployer] = self._nonces.get(deployer, 0) + 1
            return self.deploy_at(address, contract_cls, *args, **kwargs)

    def deploy_at(self, address: str, contract_cls: type[C], *args: Any, **kwargs: Any) -> C:
        """Deploy a contract at a precomputed address (CREATE2-style)."""
        address = normalize_address(address)
        if address == ZERO_ADDRESS or self.has_code(address):
            raise RevertedError(
                "Deployment address is occupied",
                details={"address": address},
            )
        with self.transaction():
            contract = contract_cls(self, address, *args, **kwargs)
            self._contracts[address] = contract
        logger.debug(f"Deployed {contract_cls.__name__} at {address}")
        return contract

    def has_code(self, address: str) -> bool:
        return normalize_address(address) in self._contracts

    def contract_at(self, address: str) -> Optional[Contract]:
        return self._contracts.get(normalize_address(address))

    def get_contract(self, address: str, contract_cls: type[C] = Contract) -> C:
        """Return the contract at an address, checking its type."""
        contract = self.contract_at(address)
        if contract is None or not isinstance(contract, contract_cls):
            raise UnknownContractError(
                f"No {contract_cls.__name__} at {address}",
                details={"address": address},
            )
        return contract

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def emit(self, address: str, event: ChainEvent) -> None:
        self._logs.append(
            LogEntry(
                address=address,
                block_number=self.block_number,
                timestamp=self.timestamp,
                event=event,
            )
        )

    def logs(self, address: Optional[str] = None, name: Optional[str] = None) -> list[LogEntry]:
        """Return emitted events, optionally filtered by emitter and event name."""
        entries = self._logs
        if address is not None:
            address = normalize_address(address)
            entries = [e for e in entries if e.address == address]
        if name is not None:
            entries = [e for e in entries if e.name == name]
        return list(entries)

    # ------------------------------------------------------------------
    # Atomicity
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Current transaction nesting depth (0 outside any call)."""
        return len(self._savepoints)

    @contextmanager
    def transaction(self, *contracts: Contract) -> Iterator[None]:
        """
        Savepoint around a call. Restores all state if any exception
        escapes, then re-raises it.

        Args:
            contracts: Contracts about to run code in this call; their
                storage is copied on entry
        """
        savepoint = _Savepoint(
            balances=dict(self._balances),
            nonces=dict(self._nonces),
            log_length=len(self._logs),
            deployed=set(self._contracts),
        )
        self._savepoints.append(savepoint)
        try:
            for contract in contracts:
                self.touch(contract)
            yield
        except Exception:
            self._savepoints.pop()
            self._rollback(savepoint)
            raise
        else:
            self._savepoints.pop()
            self._commit(savepoint)

    def touch(self, contract: Contract) -> None:
        """Copy a contract's storage into the open savepoint before it runs."""
        if not self._savepoints:
            return
        savepoint = self._savepoints[-1]
        address = contract.address
        if address in savepoint.deployed and address not in savepoint.saved:
            savepoint.saved[address] = contract.snapshot()

    def _commit(self, savepoint: _Savepoint) -> None:
        # A copy taken in a child predates any change made since the
        # parent opened, unless the parent already holds its own
        if not self._savepoints:
            return
        parent = self._savepoints[-1]
        for address, state in savepoint.saved.items():
            if address in parent.deployed and address not in parent.saved:
                parent.saved[address] = state

    def _rollback(self, savepoint: _Savepoint) -> None:
        self._balances = savepoint.balances
        self._nonces = savepoint.nonces
        del self._logs[savepoint.log_length:]
        self._contracts = {
            address: contract
            for address, contract in self._contracts.items()
            if address in savepoint.deployed
        }
        for address, state in savepoint.saved.items():
            self._contracts[address].restore(state)

    def full_snapshot(self) -> _Snapshot:
        """Deep copy of the whole ledger, for inspection and comparison."""
        return _Snapshot(
            balances=dict(self._balances),
            nonces=dict(self._nonces),
            log_length=len(self._logs),
            contracts={
                address: contract.snapshot()
                for address, contract in self._contracts.items()
            },
        )


__all__ = [
    "Chain",
    "Contract",
    "external",
]

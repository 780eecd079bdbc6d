"""
Events
File: events.py

Purpose: Signals emitted by contracts on the ledger model.
Each successful state change appends one of these to the chain's log;
a reverted call leaves no events behind.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny


class ChainEvent(BaseModel):
    """Base class for emitted events."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Event name")


class Transfer(ChainEvent):
    """Fungible token moved between accounts (mints come from the zero address)."""

    name: Literal["Transfer"] = "Transfer"
    sender: str
    recipient: str
    amount: int = Field(..., ge=0)


class Approval(ChainEvent):
    """Token allowance set."""

    name: Literal["Approval"] = "Approval"
    owner: str
    spender: str
    amount: int = Field(..., ge=0)


class WindowConfigured(ChainEvent):
    """Distribution window replaced."""

    name: Literal["WindowConfigured"] = "WindowConfigured"
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class RootUpdated(ChainEvent):
    """Allowlist commitment replaced."""

    name: Literal["RootUpdated"] = "RootUpdated"
    previous_root: str
    root: str


class Claimed(ChainEvent):
    """Claimant received the delta between its new and previous allotment."""

    name: Literal["Claimed"] = "Claimed"
    account: str
    amount: int = Field(..., gt=0)


class Withdrawn(ChainEvent):
    """Owner drained the residual balance."""

    name: Literal["Withdrawn"] = "Withdrawn"
    owner: str
    amount: int = Field(..., gt=0)


class VaultCreated(ChainEvent):
    """Factory deployed, funded and registered a vault."""

    name: Literal["VaultCreated"] = "VaultCreated"
    creator: str
    operator: str
    asset: str
    vault: str


class LogEntry(BaseModel):
    """An event together with the contract that emitted it and the block context."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Emitting contract")
    block_number: int = Field(..., ge=0)
    timestamp: int = Field(..., ge=0)
    event: SerializeAsAny[ChainEvent]

    @property
    def name(self) -> str:
        return self.event.name

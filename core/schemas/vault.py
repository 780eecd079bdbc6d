"""
Vault Schemas
File: vault.py

Purpose: Read-only views of vault state for the API, the CLI and tests.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VaultPhase(str, Enum):
    """
    Claim state machine phase at a given time.

    UNCONFIGURED: no window has ever been set
    ARMED: window set but claims not yet possible (pending start or no root)
    LIVE: window active and root set
    ENDED: window end has passed; a new window re-arms the vault
    """

    UNCONFIGURED = "unconfigured"
    ARMED = "armed"
    LIVE = "live"
    ENDED = "ended"


class VaultSnapshot(BaseModel):
    """Point-in-time view of a vault."""

    model_config = ConfigDict(extra="forbid")

    address: str = Field(..., description="Vault address")
    asset: str = Field(..., description="Token address or the native-currency sentinel")
    is_native: bool = Field(..., description="Whether the vault holds native currency")
    owner: str = Field(..., description="Account allowed to withdraw residual funds")
    operator: str = Field(..., description="Account allowed to set window and root")
    root: str = Field(..., description="Current allowlist commitment (0x-hex, zero = unset)")
    start_time: int = Field(..., ge=0)
    end_time: int = Field(..., ge=0)
    total_claimed: int = Field(..., ge=0)
    balance: int = Field(..., ge=0)
    phase: VaultPhase
    timestamp: int = Field(..., ge=0, description="Chain time the snapshot was taken at")


class ClaimReceipt(BaseModel):
    """Outcome of a successful claim."""

    model_config = ConfigDict(extra="forbid")

    account: str
    amount: int = Field(..., gt=0, description="Delta paid by this claim")
    claimed_total: int = Field(..., gt=0, description="Account's cumulative claimed amount")

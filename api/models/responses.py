"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.vault import ClaimReceipt, VaultSnapshot


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "dropvault-api"
    version: str = "v1"


class ChainResponse(BaseModel):
    """Current ledger state."""

    ok: bool = True
    chain_id: int
    timestamp: int
    block_number: int
    factory: str = Field(..., description="Address of the devnet vault factory")


class TxResponse(BaseModel):
    """Acknowledgement of a state-changing call with no return value."""

    ok: bool = True
    block_number: int
    timestamp: int


class TokenResponse(BaseModel):
    """A deployed fungible token."""

    ok: bool = True
    token: str
    name: str
    symbol: str
    decimals: int
    total_supply: int = 0


class BalanceResponse(BaseModel):
    """Balance of one account in one asset."""

    ok: bool = True
    asset: str
    account: str
    balance: int


class VaultResponse(BaseModel):
    """Point-in-time view of a vault."""

    ok: bool = True
    vault: VaultSnapshot


class VaultListResponse(BaseModel):
    """Every vault created by the devnet factory, in creation order."""

    ok: bool = True
    vaults: list[str] = Field(default_factory=list)


class ClaimedResponse(BaseModel):
    """Cumulative amount an account has claimed from a vault."""

    ok: bool = True
    vault: str
    account: str
    claimed: int


class WindowResponse(BaseModel):
    """Window after a successful reconfiguration."""

    ok: bool = True
    vault: str
    start: int
    end: int


class ClaimResponse(BaseModel):
    """Outcome of a successful claim."""

    ok: bool = True
    vault: str
    receipt: ClaimReceipt


class WithdrawResponse(BaseModel):
    """Outcome of a successful withdrawal."""

    ok: bool = True
    vault: str
    amount: int


class EventsResponse(BaseModel):
    """Events emitted by one contract."""

    ok: bool = True
    address: str
    events: list[dict[str, Any]] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")

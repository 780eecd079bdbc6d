"""
API Request Models

Pydantic models for API request validation.

Addresses are plain 0x-hex strings; checksumming and zero-address rules
are applied by the ledger, so they surface as domain errors.
"""

from pydantic import BaseModel, Field


class AdvanceRequest(BaseModel):
    """Request body for POST /chain/advance."""

    seconds: int = Field(..., ge=0, description="Seconds to move the clock forward")
    blocks: int = Field(default=1, ge=0, description="Blocks to mine")


class FundRequest(BaseModel):
    """Request body for POST /chain/fund (native faucet)."""

    account: str = Field(..., description="Account to credit")
    amount: int = Field(..., ge=0, description="Native amount to credit")


class CreateTokenRequest(BaseModel):
    """Request body for POST /tokens."""

    deployer: str = Field(..., description="Deploying account")
    name: str = Field(..., min_length=1, max_length=64)
    symbol: str = Field(..., min_length=1, max_length=16)
    decimals: int = Field(default=18, ge=0, le=77)
    reverts_on_failure: bool = Field(
        default=True,
        description="False makes failed transfers return false instead of reverting",
    )


class MintRequest(BaseModel):
    """Request body for POST /tokens/{token}/mint."""

    caller: str
    to: str
    amount: int = Field(..., ge=0)


class ApproveRequest(BaseModel):
    """Request body for POST /tokens/{token}/approve."""

    caller: str
    spender: str
    amount: int = Field(..., ge=0)


class CreateVaultRequest(BaseModel):
    """Request body for POST /vaults."""

    caller: str = Field(..., description="Creator; becomes the vault owner")
    asset: str = Field(..., description="Token address or the native-currency sentinel")
    operator: str = Field(..., description="Account allowed to set window and root")
    total_amount: int = Field(..., description="Amount deposited into the vault")
    value: int = Field(default=0, ge=0, description="Native value attached to the call")


class SetWindowRequest(BaseModel):
    """Request body for POST /vaults/{vault}/window."""

    caller: str
    start: int = Field(..., description="Window start (epoch seconds)")
    duration: int = Field(..., description="Window length in seconds")


class SetRootRequest(BaseModel):
    """Request body for POST /vaults/{vault}/root."""

    caller: str
    root: str = Field(..., description="0x-prefixed 32-byte Merkle root")


class ClaimRequest(BaseModel):
    """Request body for POST /vaults/{vault}/claim."""

    caller: str
    max_amount: int = Field(..., description="Cumulative allotment proven by the proof")
    proof: list[str] = Field(default_factory=list, description="0x-prefixed sibling hashes, bottom-up")


class WithdrawRequest(BaseModel):
    """Request body for POST /vaults/{vault}/withdraw."""

    caller: str

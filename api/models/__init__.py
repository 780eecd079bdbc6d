"""API request and response models."""

from api.models.requests import (
    AdvanceRequest,
    ApproveRequest,
    ClaimRequest,
    CreateTokenRequest,
    CreateVaultRequest,
    FundRequest,
    MintRequest,
    SetRootRequest,
    SetWindowRequest,
    WithdrawRequest,
)
from api.models.responses import (
    BalanceResponse,
    ChainResponse,
    ClaimedResponse,
    ClaimResponse,
    ErrorDetail,
    ErrorResponse,
    EventsResponse,
    HealthResponse,
    TokenResponse,
    TxResponse,
    VaultListResponse,
    VaultResponse,
    WindowResponse,
    WithdrawResponse,
)

__all__ = [
    "AdvanceRequest",
    "ApproveRequest",
    "ClaimRequest",
    "CreateTokenRequest",
    "CreateVaultRequest",
    "FundRequest",
    "MintRequest",
    "SetRootRequest",
    "SetWindowRequest",
    "WithdrawRequest",
    "BalanceResponse",
    "ChainResponse",
    "ClaimedResponse",
    "ClaimResponse",
    "ErrorDetail",
    "ErrorResponse",
    "EventsResponse",
    "HealthResponse",
    "TokenResponse",
    "TxResponse",
    "VaultListResponse",
    "VaultResponse",
    "WindowResponse",
    "WithdrawResponse",
]

"""
Vault Routes

Create vaults through the devnet factory and drive their lifecycle:
window, root, claims, withdrawal and event history.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import Devnet, get_devnet, parse_address
from api.errors import InvalidRequestError
from api.models.requests import (
    ClaimRequest,
    CreateVaultRequest,
    SetRootRequest,
    SetWindowRequest,
    WithdrawRequest,
)
from api.models.responses import (
    ClaimedResponse,
    ClaimResponse,
    EventsResponse,
    TxResponse,
    VaultListResponse,
    VaultResponse,
    WindowResponse,
    WithdrawResponse,
)
from core.crypto.hashing import from_hex


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vaults", tags=["vaults"])


def _decode(value: str, field: str) -> bytes:
    try:
        return from_hex(value)
    except ValueError as e:
        raise InvalidRequestError(str(e), details={field: value}) from e


@router.post("", response_model=VaultResponse)
async def create_vault(request: CreateVaultRequest, devnet: Devnet = Depends(get_devnet)) -> VaultResponse:
    """Deploy and fund a vault. The caller becomes its owner."""
    vault = devnet.factory.create_vault(
        parse_address(request.caller, "caller"),
        parse_address(request.asset, "asset"),
        parse_address(request.operator, "operator"),
        request.total_amount,
        value=request.value,
    )
    return VaultResponse(vault=vault.snapshot_view())


@router.get("", response_model=VaultListResponse)
async def list_vaults(devnet: Devnet = Depends(get_devnet)) -> VaultListResponse:
    return VaultListResponse(vaults=devnet.factory.vaults())


@router.get("/{vault}", response_model=VaultResponse)
async def get_vault(vault: str, devnet: Devnet = Depends(get_devnet)) -> VaultResponse:
    return VaultResponse(vault=devnet.vault(vault).snapshot_view())


@router.get("/{vault}/claimed/{account}", response_model=ClaimedResponse)
async def get_claimed(vault: str, account: str, devnet: Devnet = Depends(get_devnet)) -> ClaimedResponse:
    contract = devnet.vault(vault)
    account = parse_address(account, "account")
    return ClaimedResponse(
        vault=contract.address,
        account=account,
        claimed=contract.claimed_of(account),
    )


@router.post("/{vault}/window", response_model=WindowResponse)
async def set_window(vault: str, request: SetWindowRequest, devnet: Devnet = Depends(get_devnet)) -> WindowResponse:
    contract = devnet.vault(vault)
    window = contract.set_window(
        parse_address(request.caller, "caller"),
        request.start,
        request.duration,
    )
    return WindowResponse(vault=contract.address, start=window.start, end=window.end)


@router.post("/{vault}/root", response_model=TxResponse)
async def set_root(vault: str, request: SetRootRequest, devnet: Devnet = Depends(get_devnet)) -> TxResponse:
    contract = devnet.vault(vault)
    contract.set_root(
        parse_address(request.caller, "caller"),
        _decode(request.root, "root"),
    )
    return TxResponse(block_number=devnet.chain.block_number, timestamp=devnet.chain.timestamp)


@router.post("/{vault}/claim", response_model=ClaimResponse)
async def claim(vault: str, request: ClaimRequest, devnet: Devnet = Depends(get_devnet)) -> ClaimResponse:
    contract = devnet.vault(vault)
    proof = [_decode(sibling, "proof") for sibling in request.proof]
    receipt = contract.claim(
        parse_address(request.caller, "caller"),
        request.max_amount,
        proof,
    )
    return ClaimResponse(vault=contract.address, receipt=receipt)


@router.post("/{vault}/withdraw", response_model=WithdrawResponse)
async def withdraw(vault: str, request: WithdrawRequest, devnet: Devnet = Depends(get_devnet)) -> WithdrawResponse:
    contract = devnet.vault(vault)
    amount = contract.withdraw(parse_address(request.caller, "caller"))
    return WithdrawResponse(vault=contract.address, amount=amount)


@router.get("/{vault}/events", response_model=EventsResponse)
async def vault_events(vault: str, devnet: Devnet = Depends(get_devnet)) -> EventsResponse:
    contract = devnet.vault(vault)
    entries = devnet.chain.logs(address=contract.address)
    return EventsResponse(
        address=contract.address,
        events=[entry.model_dump(mode="json") for entry in entries],
    )

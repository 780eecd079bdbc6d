"""
Chain Routes

Inspect and drive the devnet ledger: clock and native faucet.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import Devnet, get_devnet, parse_address
from api.models.requests import AdvanceRequest, FundRequest
from api.models.responses import BalanceResponse, ChainResponse, TxResponse
from core.chain import NATIVE_ASSET


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chain", tags=["chain"])


def _chain_state(devnet: Devnet) -> ChainResponse:
    return ChainResponse(
        chain_id=devnet.chain.chain_id,
        timestamp=devnet.chain.timestamp,
        block_number=devnet.chain.block_number,
        factory=devnet.factory.address,
    )


@router.get("", response_model=ChainResponse)
async def get_chain(devnet: Devnet = Depends(get_devnet)) -> ChainResponse:
    return _chain_state(devnet)


@router.post("/advance", response_model=ChainResponse)
async def advance(request: AdvanceRequest, devnet: Devnet = Depends(get_devnet)) -> ChainResponse:
    """Move the clock forward and mine blocks."""
    devnet.chain.advance(request.seconds, blocks=request.blocks)
    logger.debug(f"Clock advanced by {request.seconds}s to {devnet.chain.timestamp}")
    return _chain_state(devnet)


@router.post("/fund", response_model=TxResponse)
async def fund(request: FundRequest, devnet: Devnet = Depends(get_devnet)) -> TxResponse:
    """Credit native currency to an account."""
    account = parse_address(request.account, "account")
    devnet.chain.fund(account, request.amount)
    return TxResponse(block_number=devnet.chain.block_number, timestamp=devnet.chain.timestamp)


@router.get("/balances/{account}", response_model=BalanceResponse)
async def native_balance(account: str, devnet: Devnet = Depends(get_devnet)) -> BalanceResponse:
    account = parse_address(account, "account")
    return BalanceResponse(
        asset=NATIVE_ASSET,
        account=account,
        balance=devnet.chain.balance_of(account),
    )

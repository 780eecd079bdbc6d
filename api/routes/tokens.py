"""
Token Routes

Deploy fungible tokens on the devnet and move them around.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import Devnet, get_devnet, parse_address
from api.models.requests import ApproveRequest, CreateTokenRequest, MintRequest
from api.models.responses import BalanceResponse, TokenResponse, TxResponse
from core.chain import FungibleToken


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tokens", tags=["tokens"])


def _token_view(token: FungibleToken) -> TokenResponse:
    return TokenResponse(
        token=token.address,
        name=token.name,
        symbol=token.symbol,
        decimals=token.decimals,
        total_supply=token.total_supply,
    )


@router.post("", response_model=TokenResponse)
async def create_token(request: CreateTokenRequest, devnet: Devnet = Depends(get_devnet)) -> TokenResponse:
    deployer = parse_address(request.deployer, "deployer")
    token = devnet.chain.deploy(
        deployer,
        FungibleToken,
        request.name,
        request.symbol,
        request.decimals,
        reverts_on_failure=request.reverts_on_failure,
    )
    logger.info(f"Deployed token {token.symbol} at {token.address}")
    return _token_view(token)


@router.get("/{token}", response_model=TokenResponse)
async def get_token(token: str, devnet: Devnet = Depends(get_devnet)) -> TokenResponse:
    return _token_view(devnet.token(parse_address(token, "token")))


@router.post("/{token}/mint", response_model=TxResponse)
async def mint(token: str, request: MintRequest, devnet: Devnet = Depends(get_devnet)) -> TxResponse:
    contract = devnet.token(parse_address(token, "token"))
    contract.mint(
        parse_address(request.caller, "caller"),
        parse_address(request.to, "to"),
        request.amount,
    )
    return TxResponse(block_number=devnet.chain.block_number, timestamp=devnet.chain.timestamp)


@router.post("/{token}/approve", response_model=TxResponse)
async def approve(token: str, request: ApproveRequest, devnet: Devnet = Depends(get_devnet)) -> TxResponse:
    contract = devnet.token(parse_address(token, "token"))
    contract.approve(
        parse_address(request.caller, "caller"),
        parse_address(request.spender, "spender"),
        request.amount,
    )
    return TxResponse(block_number=devnet.chain.block_number, timestamp=devnet.chain.timestamp)


@router.get("/{token}/balances/{account}", response_model=BalanceResponse)
async def token_balance(token: str, account: str, devnet: Devnet = Depends(get_devnet)) -> BalanceResponse:
    contract = devnet.token(parse_address(token, "token"))
    account = parse_address(account, "account")
    return BalanceResponse(
        asset=contract.address,
        account=account,
        balance=contract.balance_of(account),
    )

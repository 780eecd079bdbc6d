"""
Ledger Model

Minimal host platform for vaults: clock, native balances, contracts,
fungible tokens, events and call-level atomicity.
"""
from .address import (
    ZERO_ADDRESS,
    NATIVE_ASSET,
    normalize_address,
    is_zero_address,
    is_native_asset,
    create_address,
    create2_address,
)
from .chain import Chain, Contract, external
from .token import FungibleToken

__all__ = [
    "ZERO_ADDRESS",
    "NATIVE_ASSET",
    "normalize_address",
    "is_zero_address",
    "is_native_asset",
    "create_address",
    "create2_address",
    "Chain",
    "Contract",
    "external",
    "FungibleToken",
]

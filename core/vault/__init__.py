"""
Merkle Vaults

Claim ledger, distribution window, asset adapters and the vault factory.

Usage:
    from core.chain import Chain, NATIVE_ASSET
    from core.vault import VaultFactory

    factory = chain.deploy(deployer, VaultFactory)
    vault = factory.create_vault(creator, NATIVE_ASSET, operator, 10**18, value=10**18)
    vault.set_window(operator, start, duration)
    vault.set_root(operator, root)
    vault.claim(claimant, max_amount, proof)
"""
from .window import (
    DAY,
    MAX_DURATION,
    MAX_START_OFFSET,
    WindowLimits,
    DistributionWindow,
)
from .guard import ReentrancyGuard
from .adapter import (
    AssetTransferAdapter,
    TokenTransferAdapter,
    NativeTransferAdapter,
    adapter_for,
)
from .vault import MerkleVault
from .factory import VaultFactory

__all__ = [
    "DAY",
    "MAX_DURATION",
    "MAX_START_OFFSET",
    "WindowLimits",
    "DistributionWindow",
    "ReentrancyGuard",
    "AssetTransferAdapter",
    "TokenTransferAdapter",
    "NativeTransferAdapter",
    "adapter_for",
    "MerkleVault",
    "VaultFactory",
]

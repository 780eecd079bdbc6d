"""
API Dependencies

Dependency injection for the API.
Provides the process-wide devnet: one ledger with a deployed vault factory.
"""

from __future__ import annotations

import logging
from typing import Optional

from api.errors import InvalidRequestError, NotFoundError
from core.chain import Chain, FungibleToken, normalize_address
from core.config.runtime import RuntimeConfig, get_default_config
from core.vault import MerkleVault, VaultFactory

logger = logging.getLogger(__name__)


# Account that deploys the devnet factory
DEVNET_DEPLOYER = normalize_address("0x" + "d0" * 20)


class Devnet:
    """
    In-memory ledger plus the factory every sandbox vault is created by.

    Window limits come from the runtime config and apply to every vault.
    """

    def __init__(self, config: RuntimeConfig) -> None:
        self.config = config
        self.chain = Chain(
            chain_id=config.chain.chain_id,
            timestamp=config.chain.genesis_timestamp,
        )
        self.factory = self.chain.deploy(
            DEVNET_DEPLOYER,
            VaultFactory,
            limits=config.window.to_limits(),
        )
        logger.info(
            f"Devnet ready: chain {self.chain.chain_id}, factory {self.factory.address}, "
            f"t={self.chain.timestamp}"
        )

    def vault(self, address: str) -> MerkleVault:
        vault = self.factory.get_vault(address)
        if vault is None:
            raise NotFoundError(f"Unknown vault: {address}", details={"vault": address})
        return vault

    def token(self, address: str) -> FungibleToken:
        contract = self.chain.contract_at(address)
        if not isinstance(contract, FungibleToken):
            raise NotFoundError(f"Unknown token: {address}", details={"token": address})
        return contract


def parse_address(value: str, field: str = "address") -> str:
    """Normalize a path or body address, rejecting malformed input."""
    try:
        return normalize_address(value)
    except ValueError as e:
        raise InvalidRequestError(str(e), details={field: value}) from e


_devnet: Optional[Devnet] = None


def get_devnet() -> Devnet:
    """Return the process-wide devnet, creating it from config on first use."""
    global _devnet
    if _devnet is None:
        _devnet = Devnet(get_default_config())
    return _devnet


def reset_devnet(config: Optional[RuntimeConfig] = None) -> Devnet:
    """Replace the devnet with a fresh one (used by tests)."""
    global _devnet
    _devnet = Devnet(config or get_default_config())
    return _devnet

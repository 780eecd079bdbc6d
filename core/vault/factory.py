"""
Vault Factory

Deploys, funds and registers one MerkleVault per campaign.

Address derivation:
    salt = keccak256(packed(asset, total_amount, creator, chain_id, block_number))
    init_code_hash = keccak256(packed("MerkleVault", asset, creator, operator))
    vault = create2_address(factory, salt, init_code_hash)

The block number is the creation ordinal: an identical call in the same
block derives the same address and fails with VaultAlreadyExistsError.
"""

from __future__ import annotations

import logging
from typing import Optional

from eth_abi.packed import encode_packed

from core.chain.address import (
    create2_address,
    is_native_asset,
    is_zero_address,
    normalize_address,
)
from core.chain.chain import Chain, Contract, external
from core.crypto.hashing import UINT256_MAX, keccak256
from core.schemas.errors import (
    AmountMismatchError,
    InvalidOperatorError,
    InvalidTokenError,
    InvalidTotalAmountError,
    NativeSendFailedError,
    TransferFailedError,
    UnexpectedNativeError,
    VaultAlreadyExistsError,
)
from core.schemas.events import VaultCreated
from core.vault.adapter import adapter_for
from core.vault.vault import MerkleVault
from core.vault.window import WindowLimits


logger = logging.getLogger(__name__)

VAULT_CODE_ID = "MerkleVault"


class VaultFactory(Contract):
    """
    Creates campaign vaults and remembers which addresses it created.

    The creator of a vault becomes its owner.
    """

    def __init__(
        self,
        chain: Chain,
        address: str,
        limits: WindowLimits = WindowLimits(),
    ) -> None:
        super().__init__(chain, address)
        self.limits = limits
        self._registry: list[str] = []

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def is_vault(self, address: str) -> bool:
        try:
            return normalize_address(address) in self._registry
        except ValueError:
            return False

    def vaults(self) -> list[str]:
        return list(self._registry)

    def get_vault(self, address: str) -> Optional[MerkleVault]:
        if not self.is_vault(address):
            return None
        return self.chain.get_contract(address, MerkleVault)

    # ------------------------------------------------------------------
    # Address derivation
    # ------------------------------------------------------------------

    def compute_salt(
        self,
        asset: str,
        total_amount: int,
        creator: str,
        ordinal: Optional[int] = None,
    ) -> bytes:
        ordinal = self.chain.block_number if ordinal is None else ordinal
        return keccak256(
            encode_packed(
                ["address", "uint256", "address", "uint256", "uint256"],
                [
                    normalize_address(asset),
                    total_amount,
                    normalize_address(creator),
                    self.chain.chain_id,
                    ordinal,
                ],
            )
        )

    @staticmethod
    def init_code_hash(asset: str, owner: str, operator: str) -> bytes:
        return keccak256(
            encode_packed(
                ["string", "address", "address", "address"],
                [
                    VAULT_CODE_ID,
                    normalize_address(asset),
                    normalize_address(owner),
                    normalize_address(operator),
                ],
            )
        )

    def compute_vault_address(
        self,
        asset: str,
        operator: str,
        total_amount: int,
        creator: str,
        ordinal: Optional[int] = None,
    ) -> str:
        """Predict the address create_vault would use for these inputs."""
        salt = self.compute_salt(asset, total_amount, creator, ordinal)
        return create2_address(
            self.address,
            salt,
            self.init_code_hash(asset, creator, operator),
        )

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @external(payable=True)
    def create_vault(
        self,
        caller: str,
        asset: str,
        operator: str,
        total_amount: int,
        *,
        value: int = 0,
    ) -> MerkleVault:
        """
        Deploy and fund a vault for ``asset``.

        Native asset: ``value`` must equal ``total_amount`` and is forwarded.
        Token asset: ``value`` must be zero and ``total_amount`` is pulled
        from the caller, who must have approved this factory.
        """
        try:
            asset = normalize_address(asset)
        except ValueError as e:
            raise InvalidTokenError(details={"asset": asset}) from e
        if is_zero_address(asset):
            raise InvalidTokenError(details={"asset": asset})
        try:
            operator = normalize_address(operator)
        except ValueError as e:
            raise InvalidOperatorError(details={"operator": operator}) from e
        if is_zero_address(operator):
            raise InvalidOperatorError(details={"operator": operator})
        if (
            not isinstance(total_amount, int)
            or isinstance(total_amount, bool)
            or total_amount <= 0
            or total_amount > UINT256_MAX
        ):
            raise InvalidTotalAmountError(details={"total_amount": total_amount})

        native = is_native_asset(asset)

        if native and value != total_amount:
            raise AmountMismatchError(details={"value": value, "total_amount": total_amount})
        if not native and value != 0:
            raise UnexpectedNativeError(details={"value": value})

        vault_address = self.compute_vault_address(asset, operator, total_amount, caller)
        if self.chain.has_code(vault_address):
            raise VaultAlreadyExistsError(
                details={"vault": vault_address, "block_number": self.chain.block_number},
            )

        vault = self.chain.deploy_at(
            vault_address,
            MerkleVault,
            asset=asset,
            owner=caller,
            operator=operator,
            limits=self.limits,
        )

        adapter = adapter_for(self.chain, asset)
        if native:
            try:
                adapter.pull_in(self.address, caller, vault.address, total_amount)
            except TransferFailedError as e:
                raise NativeSendFailedError(
                    details={"vault": vault.address, "amount": total_amount},
                ) from e
        else:
            adapter.pull_in(self.address, caller, vault.address, total_amount)

        self._registry.append(vault.address)
        self.emit(
            VaultCreated(
                creator=caller,
                operator=operator,
                asset=asset,
                vault=vault.address,
            )
        )
        logger.info(
            f"Created vault {vault.address} for {total_amount} of {asset} "
            f"(creator {caller}, operator {operator})"
        )
        return vault


__all__ = ["VaultFactory", "VAULT_CODE_ID"]

"""
Address Helpers

Address normalization and deterministic address derivation for contracts
deployed on the ledger model.
"""

from __future__ import annotations

from eth_abi.packed import encode_packed
from eth_utils import is_address, to_checksum_address

from core.crypto.hashing import keccak256


ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Sentinel asset identifier for the chain's native currency
NATIVE_ASSET = to_checksum_address("0x" + "ee" * 20)


def normalize_address(address: str) -> str:
    """
    Return the checksummed form of an address.

    Raises:
        ValueError: If the value is not a 20-byte hex address
    """
    if not isinstance(address, str) or not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return to_checksum_address(address)


def is_zero_address(address: str) -> bool:
    return normalize_address(address) == ZERO_ADDRESS


def is_native_asset(asset: str) -> bool:
    return normalize_address(asset) == NATIVE_ASSET


def create_address(deployer: str, nonce: int) -> str:
    """
    Derive the address of a plain deployment from deployer and nonce.

    address = keccak256(deployer ++ uint256(nonce))[12:]
    """
    digest = keccak256(encode_packed(["address", "uint256"], [normalize_address(deployer), nonce]))
    return to_checksum_address(digest[12:])


def create2_address(deployer: str, salt: bytes, init_code_hash: bytes) -> str:
    """
    Derive a CREATE2-style address.

    address = keccak256(0xff ++ deployer ++ salt ++ init_code_hash)[12:]

    Identical inputs always yield the same address, so a second deployment
    with the same deployer, salt and init code collides with the first.
    """
    if len(salt) != 32 or len(init_code_hash) != 32:
        raise ValueError("salt and init_code_hash must be 32 bytes")
    payload = (
        b"\xff"
        + bytes.fromhex(normalize_address(deployer)[2:])
        + salt
        + init_code_hash
    )
    return to_checksum_address(keccak256(payload)[12:])


__all__ = [
    "ZERO_ADDRESS",
    "NATIVE_ASSET",
    "normalize_address",
    "is_zero_address",
    "is_native_asset",
    "create_address",
    "create2_address",
]

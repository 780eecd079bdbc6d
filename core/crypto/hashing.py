"""
Hashing Utilities
Keccak-256 hashing and hex helpers for allowlist commitments.

This module provides:
- Keccak-256 hashing for raw bytes
- Commutative pair hashing for Merkle parents (smaller operand first)
- Packed (address, uint256) encoding for claim leaves
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Pair hashing orders operands byte-lexicographically, so proofs carry no
  left/right position information
- Leaf encoding matches abi.encodePacked(address, uint256): 20 + 32 bytes
- All operations are deterministic
"""
from __future__ import annotations

from eth_abi.packed import encode_packed
from eth_utils import keccak


HASH_LENGTH = 32
UINT256_MAX = 2**256 - 1

# The unset root / padding leaf
ZERO_HASH: bytes = b"\x00" * HASH_LENGTH


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two nodes in sorted order: keccak256(min(a, b) + max(a, b)).

    Because the operands are sorted, hash_pair(a, b) == hash_pair(b, a).
    """
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


def encode_leaf(account: str, amount: int) -> bytes:
    """
    Pack an (account, amount) pair as abi.encodePacked(address, uint256).

    Args:
        account: 0x-prefixed 20-byte address
        amount: Non-negative integer that fits in uint256

    Returns:
        52 bytes: the raw address followed by the big-endian amount

    Raises:
        ValueError: If the amount is outside the uint256 range
    """
    if amount < 0 or amount > UINT256_MAX:
        raise ValueError(f"Amount out of uint256 range: {amount}")
    return encode_packed(["address", "uint256"], [account, amount])


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def from_hex32(hex_string: str) -> bytes:
    """Decode a 0x-prefixed hex string that must hold exactly 32 bytes."""
    data = from_hex(hex_string)
    if len(data) != HASH_LENGTH:
        raise ValueError(f"Expected {HASH_LENGTH} bytes, got {len(data)}")
    return data


__all__ = [
    "HASH_LENGTH",
    "UINT256_MAX",
    "ZERO_HASH",
    "keccak256",
    "hash_pair",
    "encode_leaf",
    "to_hex",
    "from_hex",
    "from_hex32",
]

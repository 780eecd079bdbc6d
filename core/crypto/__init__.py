"""
Core cryptographic utilities.

Keccak-256 hashing, sorted pair hashing and leaf encoding.
"""
from .hashing import (
    HASH_LENGTH,
    UINT256_MAX,
    ZERO_HASH,
    keccak256,
    hash_pair,
    encode_leaf,
    to_hex,
    from_hex,
    from_hex32,
)

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

"""
CLI Leaf Command

Print the allowlist leaf for an (account, max_amount) pair.

Usage:
    dropvault leaf 0xAbC... 1000 [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from core.chain.address import normalize_address
from core.crypto.hashing import encode_leaf, to_hex
from core.merkle import leaf_hash


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def leaf_cmd(args: Namespace) -> int:
    """
    Execute the leaf command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        account = normalize_address(args.account)
        amount = int(args.amount, 0)
        encoded = encode_leaf(account, amount)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf = to_hex(leaf_hash(account, amount))

    if args.json:
        print(json.dumps({
            "account": account,
            "amount": str(amount),
            "encoded": to_hex(encoded),
            "leaf": leaf,
        }, indent=2))
    else:
        print(leaf)
    return EXIT_SUCCESS

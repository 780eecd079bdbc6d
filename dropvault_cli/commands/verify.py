"""
CLI Verify Command

Check an off-chain distribution file against its root before publishing it:
every (account, amount, proof) entry must fold to the committed root.

Distribution file format:
    {
      "root": "0x...",
      "claims": {
        "0xAccount": {"amount": "1000", "proof": ["0x...", ...]},
        ...
      }
    }

Amounts may be JSON integers or decimal strings.

Usage:
    dropvault verify distribution.json [--account A] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.chain.address import normalize_address
from core.crypto.hashing import from_hex, from_hex32, to_hex
from core.merkle import MerkleVerifier, leaf_hash


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class EntryResult:
    """Outcome of checking one distribution entry."""
    account: str
    amount: str
    ok: bool
    leaf: str = ""
    error: str = ""


@dataclass
class VerifySummary:
    """Summary of distribution verification for CLI output."""
    path: str = ""
    root: str = ""
    entries: list[EntryResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for e in self.entries if e.ok)

    @property
    def failed(self) -> int:
        return len(self.entries) - self.passed

    @property
    def all_ok(self) -> bool:
        return not self.errors and bool(self.entries) and self.failed == 0

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ok"] = self.all_ok
        d["passed"] = self.passed
        d["failed"] = self.failed
        if not d["errors"]:
            del d["errors"]
        return d


def load_distribution(path: Path) -> dict[str, Any]:
    """Read a distribution file and check its top-level shape."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict) or "root" not in data or not isinstance(data.get("claims"), dict):
        raise ValueError("Distribution must be an object with 'root' and 'claims'")
    return data


def check_entry(account: str, entry: Any, root: bytes) -> EntryResult:
    """Verify one claims entry against the root."""
    raw_amount = entry.get("amount") if isinstance(entry, dict) else None
    try:
        account = normalize_address(account)
        if raw_amount is None:
            raise ValueError("missing amount")
        amount = int(raw_amount)
        raw_proof = entry.get("proof", [])
        if not isinstance(raw_proof, list) or not all(isinstance(p, str) for p in raw_proof):
            raise ValueError("proof must be a list of hex strings")
        proof = [from_hex(p) for p in raw_proof]
        leaf = leaf_hash(account, amount)
    except (ValueError, TypeError) as e:
        return EntryResult(account=account, amount=str(raw_amount), ok=False, error=str(e))

    ok = MerkleVerifier.verify(proof, root, leaf)
    return EntryResult(
        account=account,
        amount=str(amount),
        ok=ok,
        leaf=to_hex(leaf),
        error="" if ok else "proof does not match root",
    )


def verify_distribution(
    path: Path,
    data: dict[str, Any],
    account: str | None = None,
) -> VerifySummary:
    """Check every entry (or a single account's entry) of a distribution."""
    summary = VerifySummary(path=str(path), root=str(data["root"]))

    try:
        root = from_hex32(data["root"])
    except (ValueError, AttributeError) as e:
        summary.errors.append(f"Invalid root: {e}")
        return summary

    claims: dict[str, Any] = data["claims"]
    if account is not None:
        try:
            wanted = normalize_address(account)
        except ValueError as e:
            summary.errors.append(str(e))
            return summary
        matches = {
            k: v for k, v in claims.items()
            if k.lower() == wanted.lower()
        }
        if not matches:
            summary.errors.append(f"No entry for {wanted}")
            return summary
        claims = matches

    for claim_account, entry in claims.items():
        result = check_entry(claim_account, entry, root)
        if not result.ok:
            logger.debug(f"Entry {claim_account} failed: {result.error}")
        summary.entries.append(result)

    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"distribution: {summary.path}")
    print(f"root: {summary.root}")
    print(f"entries: {summary.passed} passed, {summary.failed} failed")

    for err in summary.errors:
        print(f"  ✗ {err}")

    for entry in summary.entries:
        status = "✓" if entry.ok else "✗"
        suffix = f" ({entry.error})" if entry.error else ""
        print(f"  {status} {entry.account} {entry.amount}{suffix}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    path = Path(args.distribution)

    if not path.exists():
        print(f"Error: Distribution not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        data = load_distribution(path)
    except (OSError, ValueError) as e:
        print(f"Error loading distribution: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = verify_distribution(path, data, account=args.account)

    if args.json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED

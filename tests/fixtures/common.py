"""
Common test fixtures shared by all modules.

Provides factory functions for the building blocks of vault tests:
- Deterministic accounts
- Chain / FungibleToken / VaultFactory setup
- An off-chain allowlist tree builder (sorted-pair keccak, duplicate-last padding)

These are the foundational building blocks used by higher-level fixtures.
"""

from dataclasses import dataclass, field
from typing import Optional

from eth_utils import to_checksum_address

from core.chain import NATIVE_ASSET, Chain, FungibleToken
from core.crypto.hashing import ZERO_HASH, hash_pair, keccak256
from core.merkle import leaf_hash
from core.vault import DAY, MerkleVault, VaultFactory


GENESIS_TIMESTAMP = 1_700_000_000


# =============================================================================
# Accounts
# =============================================================================

def make_account(label: str) -> str:
    """Derive a stable checksummed address from a label."""
    return to_checksum_address(keccak256(label.encode())[12:])


DEPLOYER = make_account("deployer")
CREATOR = make_account("creator")
OPERATOR = make_account("operator")
ALICE = make_account("alice")
BOB = make_account("bob")
CAROL = make_account("carol")
MALLORY = make_account("mallory")


# =============================================================================
# Ledger Factories
# =============================================================================

def make_chain(timestamp: int = GENESIS_TIMESTAMP, chain_id: int = 1) -> Chain:
    """Create a ledger with a fixed clock."""
    return Chain(chain_id=chain_id, timestamp=timestamp)


def make_token(
    chain: Chain,
    deployer: str = DEPLOYER,
    name: str = "Reward",
    symbol: str = "RWD",
    reverts_on_failure: bool = True,
) -> FungibleToken:
    """Deploy a fungible token."""
    return chain.deploy(
        deployer,
        FungibleToken,
        name,
        symbol,
        reverts_on_failure=reverts_on_failure,
    )


def make_factory(chain: Chain, deployer: str = DEPLOYER, **kwargs) -> VaultFactory:
    """Deploy a vault factory."""
    return chain.deploy(deployer, VaultFactory, **kwargs)


def make_native_vault(
    chain: Chain,
    factory: VaultFactory,
    total_amount: int = 10_000,
    creator: str = CREATOR,
    operator: str = OPERATOR,
) -> MerkleVault:
    """Fund the creator and create a native-currency vault."""
    chain.fund(creator, total_amount)
    return factory.create_vault(creator, NATIVE_ASSET, operator, total_amount, value=total_amount)


def make_token_vault(
    chain: Chain,
    factory: VaultFactory,
    token: FungibleToken,
    total_amount: int = 10_000,
    creator: str = CREATOR,
    operator: str = OPERATOR,
) -> MerkleVault:
    """Mint to the creator, approve the factory and create a token vault."""
    token.mint(creator, creator, total_amount)
    token.approve(creator, factory.address, total_amount)
    return factory.create_vault(creator, token.address, operator, total_amount)


def open_window(
    chain: Chain,
    vault: MerkleVault,
    root: Optional[bytes] = None,
    delay: int = 60,
    duration: int = 7 * DAY,
    operator: str = OPERATOR,
) -> None:
    """Set a window starting ``delay`` seconds from now, optionally a root, and move into it."""
    vault.set_window(operator, chain.timestamp + delay, duration)
    if root is not None:
        vault.set_root(operator, root)
    chain.set_time(vault.start_time)


# =============================================================================
# Allowlist Tree Builder
# =============================================================================

def build_root(leaves: list[bytes]) -> bytes:
    """
    Build a sorted-pair Merkle root.

    Padding Rule: Duplicate last node at each level if odd.
    Single leaf: the root is the leaf itself.
    """
    if not leaves:
        raise ValueError("Cannot build a tree from no leaves")

    current_level = list(leaves)
    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])
        current_level = [
            hash_pair(current_level[i], current_level[i + 1])
            for i in range(0, len(current_level), 2)
        ]
    return current_level[0]


def build_proof(leaves: list[bytes], index: int) -> list[bytes]:
    """Collect bottom-up siblings for the leaf at ``index``."""
    if index < 0 or index >= len(leaves):
        raise IndexError(f"Leaf index {index} out of range for {len(leaves)} leaves")

    siblings: list[bytes] = []
    current_level = list(leaves)
    current_index = index
    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])
        siblings.append(current_level[current_index ^ 1])
        current_level = [
            hash_pair(current_level[i], current_level[i + 1])
            for i in range(0, len(current_level), 2)
        ]
        current_index //= 2
    return siblings


@dataclass
class Distribution:
    """
    An off-chain allowlist: cumulative allotments plus optional padding leaves.

    Example:
        >>> dist = Distribution({ALICE: 1000, BOB: 2500}, padding=[ZERO_HASH])
        >>> vault.set_root(OPERATOR, dist.root)
        >>> vault.claim(ALICE, 1000, dist.proof(ALICE))
    """
    allotments: dict[str, int]
    padding: list[bytes] = field(default_factory=list)

    @property
    def accounts(self) -> list[str]:
        return list(self.allotments)

    @property
    def leaves(self) -> list[bytes]:
        return [leaf_hash(a, amount) for a, amount in self.allotments.items()] + list(self.padding)

    @property
    def root(self) -> bytes:
        return build_root(self.leaves)

    def proof(self, account: str) -> list[bytes]:
        return build_proof(self.leaves, self.accounts.index(account))

    def to_file_dict(self) -> dict:
        """Serialize in the format read by `dropvault verify`."""
        return {
            "root": "0x" + self.root.hex(),
            "claims": {
                account: {
                    "amount": str(amount),
                    "proof": ["0x" + p.hex() for p in self.proof(account)],
                }
                for account, amount in self.allotments.items()
            },
        }


def make_distribution(
    allotments: Optional[dict[str, int]] = None,
    pad_zero_leaf: bool = False,
) -> Distribution:
    """Create a Distribution (default: A/B/C with 1000/2500/3000)."""
    if allotments is None:
        allotments = {ALICE: 1000, BOB: 2500, CAROL: 3000}
    padding = [ZERO_HASH] if pad_zero_leaf else []
    return Distribution(dict(allotments), padding)

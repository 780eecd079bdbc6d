"""
Ledger Model Unit Tests
Tests for core/chain/address.py and core/chain/chain.py

Tests:
- Address normalization and derivation
- Clock and native balances
- Deployment and contract lookup
- Transaction rollback, including nested savepoints
- The external decorator (caller normalization, payable handling)
"""
import pytest

from core.chain import (
    NATIVE_ASSET,
    ZERO_ADDRESS,
    Chain,
    Contract,
    create2_address,
    create_address,
    external,
    is_native_asset,
    is_zero_address,
    normalize_address,
)
from core.crypto.hashing import keccak256
from core.schemas.errors import (
    InsufficientBalanceError,
    RevertedError,
    UnknownContractError,
)
from core.schemas.events import Transfer

from fixtures.common import ALICE, BOB, DEPLOYER, GENESIS_TIMESTAMP
from fixtures.contracts import AcceptingReceiver, FaultyReceiver, RejectingReceiver


class Counter(Contract):
    """Minimal contract used to exercise the external decorator."""

    def __init__(self, chain, address, start=0):
        super().__init__(chain, address)
        self.value = start
        self.deposits = 0

    @external
    def bump(self, caller, fail=False):
        self.value += 1
        self.emit(Transfer(sender=caller, recipient=self.address, amount=self.value))
        if fail:
            raise RevertedError("bump failed")
        return self.value

    @external(payable=True)
    def deposit(self, caller, *, value=0):
        self.deposits += value
        return value

    @external(payable=True)
    def crash(self, caller, *, value=0):
        self.value += 1
        self.deposits += value
        self.emit(Transfer(sender=caller, recipient=self.address, amount=value))
        raise RuntimeError("unexpected failure")

    @external
    def bump_twice_second_fails(self, caller):
        self.bump(caller)
        try:
            self.bump(caller, fail=True)
        except RevertedError:
            pass
        return self.value


class TestAddresses:
    """Normalization and deterministic derivation."""

    def test_normalize_checksums(self):
        assert normalize_address(ALICE.lower()) == ALICE

    @pytest.mark.parametrize("bad", ["", "0x1234", "not an address", None, 12])
    def test_normalize_rejects_invalid(self, bad):
        with pytest.raises(ValueError):
            normalize_address(bad)

    def test_zero_and_native(self):
        assert is_zero_address(ZERO_ADDRESS)
        assert not is_zero_address(NATIVE_ASSET)
        assert is_native_asset(NATIVE_ASSET.lower())
        assert not is_native_asset(ALICE)

    def test_create_address_depends_on_nonce(self):
        assert create_address(DEPLOYER, 0) != create_address(DEPLOYER, 1)
        assert create_address(DEPLOYER, 0) == create_address(DEPLOYER.lower(), 0)

    def test_create2_deterministic(self):
        salt = keccak256(b"salt")
        code = keccak256(b"code")

        first = create2_address(DEPLOYER, salt, code)
        assert first == create2_address(DEPLOYER, salt, code)
        assert first != create2_address(DEPLOYER, keccak256(b"other"), code)
        assert first == normalize_address(first)

    def test_create2_rejects_short_salt(self):
        with pytest.raises(ValueError, match="32 bytes"):
            create2_address(DEPLOYER, b"\x01", keccak256(b"code"))


class TestClockAndBalances:
    """Clock movement and native currency."""

    def test_advance(self, chain):
        block = chain.block_number
        assert chain.advance(60) == GENESIS_TIMESTAMP + 60
        assert chain.block_number == block + 1

    def test_clock_cannot_go_backwards(self, chain):
        with pytest.raises(ValueError):
            chain.set_time(GENESIS_TIMESTAMP - 1)
        with pytest.raises(ValueError):
            chain.advance(-1)

    def test_set_time_mines_a_block(self, chain):
        block = chain.block_number
        chain.set_time(GENESIS_TIMESTAMP + 5)
        assert chain.block_number == block + 1

    def test_fund_and_move(self, chain):
        chain.fund(ALICE, 100)
        chain.move_value(ALICE, BOB, 40)

        assert chain.balance_of(ALICE) == 60
        assert chain.balance_of(BOB) == 40

    def test_move_more_than_balance(self, chain):
        chain.fund(ALICE, 10)
        with pytest.raises(InsufficientBalanceError):
            chain.move_value(ALICE, BOB, 11)

    def test_send_to_rejecting_contract(self, chain):
        receiver = chain.deploy(DEPLOYER, RejectingReceiver)
        chain.fund(ALICE, 100)

        assert chain.send_value(ALICE, receiver.address, 50) is False
        assert chain.balance_of(ALICE) == 100
        assert chain.balance_of(receiver.address) == 0

    def test_send_to_crashing_contract(self, chain):
        receiver = chain.deploy(DEPLOYER, FaultyReceiver)
        chain.fund(ALICE, 100)

        assert chain.send_value(ALICE, receiver.address, 50) is False
        assert receiver.received == 0
        assert chain.balance_of(ALICE) == 100
        assert chain.balance_of(receiver.address) == 0

    def test_send_to_accepting_contract(self, chain):
        receiver = chain.deploy(DEPLOYER, AcceptingReceiver)
        chain.fund(ALICE, 100)

        assert chain.send_value(ALICE, receiver.address, 50) is True
        assert receiver.received == 50
        assert chain.balance_of(receiver.address) == 50

    def test_plain_contract_rejects_value(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        chain.fund(ALICE, 1)
        with pytest.raises(RevertedError):
            chain.transfer_value(ALICE, counter.address, 1)


class TestDeployment:
    """Deployment and lookup."""

    def test_deploy_uses_nonce_addresses(self, chain):
        first = chain.deploy(DEPLOYER, Counter)
        second = chain.deploy(DEPLOYER, Counter)

        assert first.address == create_address(DEPLOYER, 0)
        assert second.address == create_address(DEPLOYER, 1)

    def test_deploy_at_occupied(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        with pytest.raises(RevertedError, match="occupied"):
            chain.deploy_at(counter.address, Counter)

    def test_get_contract_checks_type(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)

        assert chain.get_contract(counter.address, Counter) is counter
        with pytest.raises(UnknownContractError):
            chain.get_contract(counter.address, RejectingReceiver)
        with pytest.raises(UnknownContractError):
            chain.get_contract(ALICE)


class TestAtomicity:
    """Snapshots around external calls."""

    def test_successful_call_keeps_state(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)

        assert counter.bump(ALICE) == 1
        assert counter.value == 1
        assert len(chain.logs(address=counter.address)) == 1

    def test_failed_call_restores_storage_and_logs(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        counter.bump(ALICE)

        with pytest.raises(RevertedError):
            counter.bump(ALICE, fail=True)

        assert counter.value == 1
        assert len(chain.logs(address=counter.address)) == 1

    def test_nested_failure_rolls_back_only_inner_call(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)

        assert counter.bump_twice_second_fails(ALICE) == 1
        assert len(chain.logs(address=counter.address)) == 1

    def test_depth_resets(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        with pytest.raises(RevertedError):
            counter.bump(ALICE, fail=True)
        assert chain.depth == 0

    def test_unexpected_exception_rolls_back(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        counter.bump(ALICE)
        chain.fund(ALICE, 10)

        with pytest.raises(RuntimeError):
            counter.crash(ALICE, value=4)

        assert counter.value == 1
        assert counter.deposits == 0
        assert chain.balance_of(ALICE) == 10
        assert chain.balance_of(counter.address) == 0
        assert len(chain.logs(address=counter.address)) == 1
        assert chain.depth == 0

    def test_only_entered_contracts_are_copied(self, chain):
        class Tracked(Counter):
            copies = 0

            def snapshot(self):
                Tracked.copies += 1
                return super().snapshot()

        active = chain.deploy(DEPLOYER, Counter)
        bystanders = [chain.deploy(DEPLOYER, Tracked) for _ in range(3)]
        Tracked.copies = 0

        active.bump(ALICE)
        with pytest.raises(RevertedError):
            active.bump(ALICE, fail=True)

        assert Tracked.copies == 0
        bystanders[0].bump(ALICE)
        assert Tracked.copies == 1

    def test_new_contract_dropped_with_failed_parent(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        address = chain.next_address(DEPLOYER)

        with pytest.raises(RevertedError):
            with chain.transaction(counter):
                chain.deploy(DEPLOYER, Counter)
                counter.bump(ALICE)
                raise RevertedError("outer failed")

        assert not chain.has_code(address)
        assert counter.value == 0
        assert chain.next_address(DEPLOYER) == address

    def test_failed_deploy_leaves_no_contract(self, chain):
        class Exploding(Contract):
            def __init__(self, chain, address):
                super().__init__(chain, address)
                raise RevertedError("constructor failed")

        address = chain.next_address(DEPLOYER)
        with pytest.raises(RevertedError):
            chain.deploy(DEPLOYER, Exploding)

        assert not chain.has_code(address)
        assert chain.next_address(DEPLOYER) == address

    def test_logs_filter_by_name(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        counter.bump(ALICE)

        assert len(chain.logs(name="Transfer")) == 1
        assert chain.logs(name="Approval") == []


class TestExternalDecorator:
    """Caller normalization and payable handling."""

    def test_caller_is_normalized(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        counter.bump(ALICE.lower())

        entry = chain.logs(address=counter.address)[0]
        assert entry.event.sender == ALICE

    def test_value_on_non_payable_rejected(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        chain.fund(ALICE, 10)
        with pytest.raises(RevertedError, match="not payable"):
            counter.bump(ALICE, value=1)

    def test_negative_value_rejected(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        with pytest.raises(RevertedError):
            counter.deposit(ALICE, value=-1)

    def test_payable_moves_value(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        chain.fund(ALICE, 10)

        assert counter.deposit(ALICE, value=7) == 7
        assert chain.balance_of(counter.address) == 7
        assert chain.balance_of(ALICE) == 3
        assert counter.deposits == 7

    def test_payable_without_funds(self, chain):
        counter = chain.deploy(DEPLOYER, Counter)
        with pytest.raises(InsufficientBalanceError):
            counter.deposit(ALICE, value=1)
        assert counter.deposits == 0

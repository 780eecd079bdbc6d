"""
Pytest configuration and shared fixtures for dropvault tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

# Import fixture modules
_common = importlib.import_module("fixtures.common")

# Extract factory functions
make_chain = _common.make_chain
make_token = _common.make_token
make_factory = _common.make_factory
make_native_vault = _common.make_native_vault
make_token_vault = _common.make_token_vault
make_distribution = _common.make_distribution


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def chain():
    """Provide a ledger with a fixed genesis clock."""
    return make_chain()


@pytest.fixture
def token(chain):
    """Provide a reverting fungible token."""
    return make_token(chain)


@pytest.fixture
def factory(chain):
    """Provide a vault factory with default window limits."""
    return make_factory(chain)


@pytest.fixture
def native_vault(chain, factory):
    """Provide a native-currency vault holding 10_000."""
    return make_native_vault(chain, factory)


@pytest.fixture
def token_vault(chain, factory, token):
    """Provide a token vault holding 10_000 RWD."""
    return make_token_vault(chain, factory, token)


@pytest.fixture(params=["native", "token"])
def any_vault(request, chain, factory, token):
    """Provide each kind of vault in turn."""
    if request.param == "native":
        return make_native_vault(chain, factory)
    return make_token_vault(chain, factory, token)


@pytest.fixture
def distribution():
    """Provide the A/B/C (1000/2500/3000) allowlist with a zero padding leaf."""
    return make_distribution(pad_zero_leaf=True)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_reverts_cleanly(chain):
    """Helper asserting a call raises and leaves every balance and the log untouched."""
    def _assert(exc_type, fn, *args, **kwargs):
        before = chain.full_snapshot()
        with pytest.raises(exc_type) as excinfo:
            fn(*args, **kwargs)
        after = chain.full_snapshot()
        assert after.balances == before.balances
        assert after.log_length == before.log_length
        assert after.contracts == before.contracts
        return excinfo.value
    return _assert

"""Pytest configuration and fixtures."""

import pytest

from pairhook.models import PoolKey
from tests.helpers import ALICE, TOKEN_A, TOKEN_B, HookEnvironment, make_environment

# Full-range liquidity large enough that the ledger holds ample balances
DEEP_LIQUIDITY = 10**21


@pytest.fixture
def env() -> HookEnvironment:
    """Hook on a fresh fake ledger, no pools yet."""
    return make_environment()


@pytest.fixture
def pool(env: HookEnvironment) -> PoolKey:
    """Initialized TOKEN_A/TOKEN_B pool with a 1000/1000 reference pair."""
    key = env.make_pool(TOKEN_A, TOKEN_B)
    env.add_reference_pair(TOKEN_A, 1000, TOKEN_B, 1000)
    return key


@pytest.fixture
def liquid_pool(env: HookEnvironment, pool: PoolKey) -> PoolKey:
    """The reference pool above with deep full-range ledger liquidity."""
    env.add_full_range(ALICE, pool, DEEP_LIQUIDITY)
    return pool

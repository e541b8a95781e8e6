"""Swaps on a pool holding the native asset.

The ledger pool is NATIVE/TOKEN_A (native sorts first) while the reference
pair holds WETH/TOKEN_A with TOKEN_A as its token0, so reserves and outputs
are re-oriented on every swap.
"""

import pytest

from pairhook.math import Q96
from pairhook.models import BalanceDelta
from tests.helpers import ALICE, BOB, HOOK, NATIVE_ASSET, TOKEN_A, WETH

LIQUIDITY = 10**21


@pytest.fixture
def native_pool(env):
    """1 native = 4 TOKEN_A on both the ledger and the reference pair."""
    key = env.make_pool(NATIVE_ASSET, TOKEN_A, sqrt_price_x96=2 * Q96)
    env.add_reference_pair(NATIVE_ASSET, 1000, TOKEN_A, 4000)
    env.add_full_range(ALICE, key, LIQUIDITY)
    return key


class TestNativeFlow:
    """Tests for wrapping and unwrapping around the reference pair."""

    def test_pair_order_differs_from_key(self, env, native_pool):
        pair = env.pairs[env.hook.reference_pool_address(native_pool).lower()]
        assert native_pool.currency0 == NATIVE_ASSET
        assert (pair.token0, pair.token1) == (TOKEN_A, WETH)

    def test_native_in(self, env, native_pool):
        pair = env.pairs[env.hook.reference_pool_address(native_pool).lower()]
        env.fund(NATIVE_ASSET, BOB, 1_000)

        delta = env.swap(BOB, native_pool, zero_for_one=True, amount_specified=-100)

        # 4000 * 100 / (200 + 1000) = 333 out; quoted 400 at the ledger price
        assert delta == BalanceDelta(-100, 266)
        assert pair.get_reserves() == (4000 - 333, 1100)
        assert env.balance(NATIVE_ASSET, BOB) == 900
        assert env.balance(TOKEN_A, BOB) == 266

    def test_native_out(self, env, native_pool):
        pair = env.pairs[env.hook.reference_pool_address(native_pool).lower()]
        env.fund(TOKEN_A, BOB, 1_000)

        delta = env.swap(BOB, native_pool, zero_for_one=False, amount_specified=-100)

        # 1000 * 100 / (200 + 4000) = 23 out; quoted 25 at the ledger price
        assert delta == BalanceDelta(21, -100)
        assert pair.get_reserves() == (4100, 1000 - 23)
        assert env.balance(NATIVE_ASSET, BOB) == 21

    def test_hook_keeps_no_balance(self, env, native_pool):
        env.fund(NATIVE_ASSET, BOB, 1_000)
        env.fund(TOKEN_A, BOB, 1_000)
        env.swap(BOB, native_pool, zero_for_one=True, amount_specified=-100)
        env.swap(BOB, native_pool, zero_for_one=False, amount_specified=-100)
        for asset in (NATIVE_ASSET, WETH, TOKEN_A):
            assert env.balance(asset, HOOK) == 0

"""Tests for fee distribution to liquidity providers and the hook."""

import pytest

from pairhook.errors import SettlementFailure
from pairhook.fees import FeeDistributor, FeeStep
from pairhook.math import Q96
from pairhook.models import BalanceDelta
from pairhook.settlement import SettlementAdapter
from tests.helpers import HOOK, LEDGER, TOKEN_A, TOKEN_B, WETH, make_pool_key
from tests.helpers.fakes import FakeWrappedNative, InMemoryAssetBook

KEY = make_pool_key(TOKEN_A, TOKEN_B)


class RecordingLedger:
    """Ledger stub that records donate/take calls."""

    address = LEDGER
    block_number = 1

    def __init__(self, fail_donate: bool = False) -> None:
        self.calls: list[tuple] = []
        self.fail_donate = fail_donate

    def donate(self, caller, key, amount0, amount1):
        if self.fail_donate:
            raise ValueError("no liquidity to donate to")
        self.calls.append(("donate", caller, key.pool_id, amount0, amount1))
        return BalanceDelta(-amount0, -amount1)

    def take(self, caller, currency, to, amount):
        self.calls.append(("take", caller, currency, to, amount))


def make_step(total: int, retained: int, fee_is_token0: bool = False) -> FeeStep:
    return FeeStep(
        sqrt_price=Q96,
        fee_asset=TOKEN_A if fee_is_token0 else TOKEN_B,
        fee_is_token0=fee_is_token0,
        pre_fee_output_amount=83,
        quoted_output_amount=100,
        total_fee=total,
        retained_fee=retained,
    )


def make_distributor(ledger: RecordingLedger) -> FeeDistributor:
    book = InMemoryAssetBook()
    adapter = SettlementAdapter(HOOK, ledger, book, FakeWrappedNative(book, WETH))
    return FeeDistributor(ledger, adapter)


class TestFeeDistributor:
    """Tests for FeeDistributor.distribute."""

    def test_all_donated(self):
        ledger = RecordingLedger()
        make_distributor(ledger).distribute(KEY, make_step(17, 0))
        assert ledger.calls == [("donate", HOOK, KEY.pool_id, 0, 17)]

    def test_donation_in_token0(self):
        ledger = RecordingLedger()
        make_distributor(ledger).distribute(KEY, make_step(17, 0, fee_is_token0=True))
        assert ledger.calls == [("donate", HOOK, KEY.pool_id, 17, 0)]

    def test_split(self):
        ledger = RecordingLedger()
        make_distributor(ledger).distribute(KEY, make_step(17, 1))
        assert ledger.calls == [
            ("donate", HOOK, KEY.pool_id, 0, 16),
            ("take", HOOK, TOKEN_B, HOOK, 1),
        ]

    def test_all_retained_skips_donation(self):
        ledger = RecordingLedger()
        make_distributor(ledger).distribute(KEY, make_step(17, 17))
        assert ledger.calls == [("take", HOOK, TOKEN_B, HOOK, 17)]

    def test_donate_failure_is_settlement_failure(self):
        ledger = RecordingLedger(fail_donate=True)
        with pytest.raises(SettlementFailure):
            make_distributor(ledger).distribute(KEY, make_step(17, 0))

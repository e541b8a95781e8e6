"""Tests for the dynamic fee calculator."""

import pytest

from pairhook.fees import DynamicFeeCalculator, FeeStep, split_fee
from pairhook.math import Q96
from pairhook.models import BalanceDelta, SwapParams
from tests.helpers import TOKEN_A, TOKEN_B, make_pool_key

KEY = make_pool_key(TOKEN_A, TOKEN_B)


# --- split_fee Tests ---


class TestSplitFee:
    """Tests for the retained/donated split."""

    def test_all_donated_by_default(self):
        assert split_fee(17, 0) == (0, 17)

    def test_all_retained(self):
        assert split_fee(17, 10_000) == (17, 0)

    def test_truncation_goes_to_donation(self):
        # 17 * 1000 / 10000 = 1.7 -> 1 retained
        assert split_fee(17, 1_000) == (1, 16)

    def test_zero_fee(self):
        assert split_fee(0, 5_000) == (0, 0)

    @pytest.mark.parametrize("bips", [-1, 10_001])
    def test_bips_out_of_range(self, bips):
        with pytest.raises(ValueError):
            split_fee(10, bips)

    def test_negative_fee(self):
        with pytest.raises(ValueError):
            split_fee(-1, 0)


# --- DynamicFeeCalculator Tests ---


class TestDynamicFeeExactInput:
    """Fee on swaps where the unspecified leg is paid to the swapper."""

    def test_reference_swap(self):
        """100 in, 83 out at a unit price: quoted 100, fee 17."""
        step = DynamicFeeCalculator().compute(
            KEY, SwapParams(True, -100), BalanceDelta(-100, 83), Q96, 0
        )
        assert step.fee_asset == TOKEN_B
        assert not step.fee_is_token0
        assert step.quoted_output_amount == 100
        assert step.pre_fee_output_amount == 83
        assert step.total_fee == 17
        assert step.retained_fee == 0
        assert step.donated_fee == 17

    def test_fee_capped_at_output(self):
        """When the quote exceeds twice the output the fee is the whole output."""
        step = DynamicFeeCalculator().compute(
            KEY, SwapParams(True, -100), BalanceDelta(-100, 30), Q96, 0
        )
        assert step.total_fee == 30

    def test_paid_specified_leg_quotes_rounding_down(self):
        """sqrtP = 1.5: 3 token0 paid quote to 6.75 token1, rounded down to 6."""
        step = DynamicFeeCalculator().compute(
            KEY, SwapParams(True, -3), BalanceDelta(-3, 5), Q96 * 3 // 2, 0
        )
        assert step.quoted_output_amount == 6
        assert step.total_fee == 1

    def test_one_for_zero_fee_in_token0(self):
        step = DynamicFeeCalculator().compute(
            KEY, SwapParams(False, -100), BalanceDelta(90, -100), Q96, 0
        )
        assert step.fee_asset == TOKEN_A
        assert step.fee_is_token0
        assert step.total_fee == 10

    def test_retained_share(self):
        step = DynamicFeeCalculator().compute(
            KEY, SwapParams(True, -100), BalanceDelta(-100, 83), Q96, 5_000
        )
        assert (step.retained_fee, step.donated_fee) == (8, 9)


class TestDynamicFeeExactOutput:
    """Fee on swaps where the unspecified leg is owed by the swapper."""

    def test_received_specified_leg_quotes_rounding_up(self):
        """sqrtP = 1.5, 3 token0 received: 6.75 token1 quoted, rounded up to 7."""
        step = DynamicFeeCalculator().compute(
            KEY, SwapParams(False, 3), BalanceDelta(3, -8), Q96 * 3 // 2, 0
        )
        assert step.fee_asset == TOKEN_B
        assert step.quoted_output_amount == 7
        assert step.total_fee == 1

    def test_fee_not_capped_for_exact_output(self):
        step = DynamicFeeCalculator().compute(
            KEY, SwapParams(True, 83), BalanceDelta(-100, 83), Q96, 0
        )
        # Specified leg is token1 (83); unspecified token0 paid 100, quoted 83
        assert step.fee_asset == TOKEN_A
        assert step.total_fee == 17


class TestFeeStep:
    def test_donated_is_remainder(self):
        step = FeeStep(
            sqrt_price=Q96,
            fee_asset=TOKEN_B,
            fee_is_token0=False,
            pre_fee_output_amount=83,
            quoted_output_amount=100,
            total_fee=17,
            retained_fee=5,
        )
        assert step.donated_fee == 12


class TestSplitFeeExactness:
    @pytest.mark.parametrize("total", [0, 1, 9_999, 10**18 + 7, 2**128 - 1])
    @pytest.mark.parametrize("bips", [0, 1, 1_000, 3_333, 9_999, 10_000])
    def test_parts_sum_to_total(self, total, bips):
        retained, donated = split_fee(total, bips)
        assert retained == total * bips // 10_000
        assert retained + donated == total
        assert 0 <= retained <= total

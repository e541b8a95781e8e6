"""Tests for Q64.96 price math."""

import pytest

from pairhook.math import (
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    Q96,
    Rounding,
    SqrtPriceX96,
    mul_div,
)
from pairhook.safe_int import DivisionByZero, Underflow


class TestMulDiv:
    """Tests for directional multiply-divide."""

    def test_exact_division_ignores_rounding(self):
        assert mul_div(6, 4, 3, Rounding.DOWN) == 8
        assert mul_div(6, 4, 3, Rounding.UP) == 8

    def test_rounding_direction(self):
        assert mul_div(7, 1, 2, Rounding.DOWN) == 3
        assert mul_div(7, 1, 2, Rounding.UP) == 4

    def test_wide_intermediate_product(self):
        """No truncation even when a * b exceeds 512 bits."""
        a = 2**300 + 1
        assert mul_div(a, 2**300, 2**300, Rounding.DOWN) == a

    def test_zero_denominator(self):
        with pytest.raises(DivisionByZero):
            mul_div(1, 1, 0, Rounding.DOWN)

    def test_negative_operand(self):
        with pytest.raises(Underflow):
            mul_div(-1, 1, 1, Rounding.DOWN)


class TestSqrtPriceX96:
    """Tests for the sqrt price value type."""

    def test_bounds(self):
        SqrtPriceX96(MIN_SQRT_PRICE)
        SqrtPriceX96(MAX_SQRT_PRICE - 1)
        with pytest.raises(ValueError):
            SqrtPriceX96(MIN_SQRT_PRICE - 1)
        with pytest.raises(ValueError):
            SqrtPriceX96(MAX_SQRT_PRICE)

    def test_unit_price_quotes_one_to_one(self):
        price = SqrtPriceX96(Q96)
        assert price.token0_to_token1(100, Rounding.DOWN) == 100
        assert price.token1_to_token0(100, Rounding.UP) == 100

    def test_quote_direction_and_rounding(self):
        """sqrtP = 1.5 gives price 9/4 token1 per token0."""
        price = SqrtPriceX96(Q96 * 3 // 2)
        assert price.quote(4, from_token0=True, rounding=Rounding.DOWN) == 9
        assert price.quote(3, from_token0=True, rounding=Rounding.DOWN) == 6
        assert price.quote(3, from_token0=True, rounding=Rounding.UP) == 7
        assert price.quote(9, from_token0=False, rounding=Rounding.DOWN) == 4

    def test_from_reserves(self):
        assert SqrtPriceX96.from_reserves(1000, 1000).value == Q96
        assert SqrtPriceX96.from_reserves(4, 9).value == Q96 * 3 // 2

    def test_from_reserves_rejects_empty(self):
        with pytest.raises(ValueError):
            SqrtPriceX96.from_reserves(0, 1)

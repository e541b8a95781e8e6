"""Q64.96 fixed-point price math.

The host ledger reports pool prices as sqrt(price) * 2^96 (a Q64.96 value),
where price is token1 per token0. Every multiply-divide here takes an
explicit rounding direction so callers decide who absorbs the rounding.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from pairhook.safe_int import S, Underflow

__all__ = [
    "Q96",
    "Q192",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "Rounding",
    "mul_div",
    "SqrtPriceX96",
]

Q96 = 2**96
Q192 = 2**192

# sqrt price bounds at MIN_TICK and MAX_TICK (upper bound is exclusive)
MIN_SQRT_PRICE = 4_295_128_739
MAX_SQRT_PRICE = 1_461_446_703_485_210_103_287_273_052_203_988_822_378_723_970_342


class Rounding(Enum):
    """Rounding direction for a multiply-divide."""

    DOWN = "down"
    UP = "up"


def mul_div(a: int, b: int, denominator: int, rounding: Rounding) -> int:
    """Compute a * b / denominator with a single rounding step.

    The full product is kept exact before dividing, so no intermediate
    truncation occurs regardless of operand width.

    Raises:
        DivisionByZero: If denominator is zero
        Underflow: If any operand is negative
    """
    if a < 0 or b < 0 or denominator < 0:
        raise Underflow(f"mul_div operands must be unsigned: {a}, {b}, {denominator}")
    product = S(a) * S(b)
    if rounding is Rounding.UP:
        return product.ceiling_div(denominator).value
    return (product // denominator).value


@dataclass(frozen=True)
class SqrtPriceX96:
    """A pool price as sqrt(token1/token0) in Q64.96.

    Attributes:
        value: Raw Q64.96 integer, within [MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    """

    value: int

    def __post_init__(self) -> None:
        if not MIN_SQRT_PRICE <= self.value < MAX_SQRT_PRICE:
            raise ValueError(f"sqrt price out of range: {self.value}")

    @classmethod
    def from_reserves(cls, reserve0: int, reserve1: int) -> SqrtPriceX96:
        """Price implied by a pair of reserves, rounded down."""
        if reserve0 <= 0 or reserve1 <= 0:
            raise ValueError("Reserves must be positive")
        return cls(math.isqrt(mul_div(reserve1, Q192, reserve0, Rounding.DOWN)))

    @property
    def price_x192(self) -> int:
        """token1-per-token0 price scaled by 2^192 (exact)."""
        return self.value * self.value

    def token0_to_token1(self, amount0: int, rounding: Rounding) -> int:
        """Value amount0 of token0 in token1 at this price."""
        return mul_div(amount0, self.price_x192, Q192, rounding)

    def token1_to_token0(self, amount1: int, rounding: Rounding) -> int:
        """Value amount1 of token1 in token0 at this price."""
        return mul_div(amount1, Q192, self.price_x192, rounding)

    def quote(self, amount: int, from_token0: bool, rounding: Rounding) -> int:
        """Counter-amount of ``amount`` at this price, in the other token."""
        if from_token0:
            return self.token0_to_token1(amount, rounding)
        return self.token1_to_token0(amount, rounding)

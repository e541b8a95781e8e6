"""Fixed-point math for ledger prices."""

from pairhook.math.fixed_point import (
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    Q96,
    Q192,
    Rounding,
    SqrtPriceX96,
    mul_div,
)

__all__ = [
    "Q96",
    "Q192",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "Rounding",
    "SqrtPriceX96",
    "mul_div",
]

"""Dynamic fee computation and distribution.

Usage:
    from pairhook.fees import DynamicFeeCalculator, FeeDistributor

    step = DynamicFeeCalculator().compute(key, params, delta, sqrt_price, bips)
    FeeDistributor(ledger, adapter).distribute(key, step)
"""

from pairhook.fees.calculator import DynamicFeeCalculator, FeeStep, split_fee
from pairhook.fees.distributor import FeeDistributor

__all__ = [
    "DynamicFeeCalculator",
    "FeeStep",
    "split_fee",
    "FeeDistributor",
]

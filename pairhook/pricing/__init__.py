"""Pricing engine: reference-pool curve and pre-swap strategies."""

from pairhook.pricing.curve import HalfMarginalCurve, half_marginal_curve
from pairhook.pricing.strategies import (
    ExternalPoolPricing,
    LedgerCurvePricing,
    PricingStrategy,
    SwapStep,
)

__all__ = [
    # Curve
    "HalfMarginalCurve",
    "half_marginal_curve",
    # Strategies
    "PricingStrategy",
    "SwapStep",
    "ExternalPoolPricing",
    "LedgerCurvePricing",
]

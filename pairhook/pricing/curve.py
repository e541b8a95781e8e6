"""Counter-amount formulas against the reference pool's reserves.

The curve is constant product with liquidity taken at 50% marginal cost:

    amount_out = reserve_out * amount_in / (2 * amount_in + reserve_in)
    amount_in  = reserve_in * amount_out / (reserve_out - 2 * amount_out) + 1

Output rounds down and input rounds up (the +1), so the reference pool is
never underpaid.
"""

from __future__ import annotations

import structlog

from pairhook.errors import InsufficientLiquidityError
from pairhook.safe_int import S

logger = structlog.get_logger()


class HalfMarginalCurve:
    """Pricing engine math. Stateless; all arithmetic is exact integer."""

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Output for an exact input.

        Args:
            amount_in: Input token amount
            reserve_in: Reference reserve of the input token
            reserve_out: Reference reserve of the output token

        Returns:
            Output token amount, rounded down

        Raises:
            InsufficientLiquidityError: If either reserve is zero
        """
        _require_reserves(reserve_in, reserve_out)

        numerator = S(reserve_out) * S(amount_in)
        denominator = S(amount_in) * 2 + S(reserve_in)

        return (numerator // denominator).to_uint256()

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Input required for an exact output.

        Args:
            amount_out: Desired output token amount
            reserve_in: Reference reserve of the input token
            reserve_out: Reference reserve of the output token

        Returns:
            Input token amount, rounded up

        Raises:
            InsufficientLiquidityError: If a reserve is zero or
                reserve_out <= 2 * amount_out
        """
        _require_reserves(reserve_in, reserve_out)

        doubled = S(amount_out) * 2
        if S(reserve_out) <= doubled:
            logger.warning(
                "amount_exceeds_available_liquidity",
                amount_out=amount_out,
                reserve_out=reserve_out,
            )
            raise InsufficientLiquidityError(
                f"Amount {amount_out} exceeds available liquidity (reserve_out={reserve_out})"
            )

        numerator = S(reserve_in) * S(amount_out)
        denominator = S(reserve_out) - doubled

        return ((numerator // denominator) + 1).to_uint256()


def _require_reserves(reserve_in: int, reserve_out: int) -> None:
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError(
            f"Reference pool has no liquidity (reserves {reserve_in}, {reserve_out})"
        )


# Singleton instance
half_marginal_curve = HalfMarginalCurve()


__all__ = ["HalfMarginalCurve", "half_marginal_curve"]

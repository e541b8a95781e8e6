"""Dynamic swap fee derived from realized price movement.

After the ledger executes a swap, the specified leg is re-valued at the
post-swap price. The gap between that no-fee amount and the unspecified
amount actually realized is the swap's fee, denominated in the unspecified
currency.

Uses SafeInt and directional mul_div so the fee is computed exactly:
- a paid specified leg (negative, exact input) quotes rounding down
- a received specified leg (positive, exact output) quotes rounding up
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pairhook.constants import BIPS_DENOMINATOR
from pairhook.math import Rounding, SqrtPriceX96
from pairhook.models import BalanceDelta, PoolKey, SwapParams
from pairhook.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class FeeStep:
    """Fee computation for one swap.

    Attributes:
        sqrt_price: Post-swap ledger price (Q64.96)
        fee_asset: Currency the fee is charged in (the unspecified one)
        fee_is_token0: True if fee_asset is currency0
        pre_fee_output_amount: Unspecified amount the swap realized (absolute)
        quoted_output_amount: Unspecified amount at the post-swap price, no fee
        total_fee: Fee charged to the swapper
        retained_fee: Portion kept by the hook for the administrator
    """

    sqrt_price: int
    fee_asset: str
    fee_is_token0: bool
    pre_fee_output_amount: int
    quoted_output_amount: int
    total_fee: int
    retained_fee: int

    @property
    def donated_fee(self) -> int:
        """Portion donated to in-range liquidity providers."""
        return self.total_fee - self.retained_fee


def split_fee(total_fee: int, retained_fee_bips: int) -> tuple[int, int]:
    """Split a fee into (retained, donated).

    retained = total_fee * bips / 10_000 rounded down, so truncation always
    lands on the donated side.

    Raises:
        ValueError: If total_fee is negative or bips is outside [0, 10_000]
    """
    if total_fee < 0:
        raise ValueError(f"Fee cannot be negative: {total_fee}")
    if not 0 <= retained_fee_bips <= BIPS_DENOMINATOR:
        raise ValueError(f"Retained fee bips out of range: {retained_fee_bips}")

    retained = (S(total_fee) * S(retained_fee_bips)) // BIPS_DENOMINATOR
    donated = S(total_fee) - retained
    return retained.value, donated.value


class DynamicFeeCalculator:
    """Computes the after-swap fee from the realized caller delta."""

    def compute(
        self,
        key: PoolKey,
        params: SwapParams,
        delta: BalanceDelta,
        sqrt_price_x96: int,
        retained_fee_bips: int,
    ) -> FeeStep:
        """Derive the fee for a completed swap.

        Args:
            key: Pool that was swapped
            params: Swap parameters
            delta: Swapper's realized delta (before the fee)
            sqrt_price_x96: Ledger price after the swap
            retained_fee_bips: Pool's retained share setting

        Returns:
            FeeStep with total and retained fee
        """
        specified_is_token0 = params.specified_is_token0
        fee_is_token0 = not specified_is_token0

        specified = delta.amount(specified_is_token0)
        unspecified = delta.amount(fee_is_token0)
        incoming = unspecified > 0
        rounding = Rounding.DOWN if specified < 0 else Rounding.UP

        quoted = SqrtPriceX96(sqrt_price_x96).quote(
            abs(specified), from_token0=specified_is_token0, rounding=rounding
        )
        realized = abs(unspecified)
        total_fee = abs(S(quoted).signed_sub(realized))
        if incoming:
            # Never take more than the swapper receives
            total_fee = total_fee.min(realized)

        retained, _ = split_fee(total_fee.to_int128(), retained_fee_bips)

        step = FeeStep(
            sqrt_price=sqrt_price_x96,
            fee_asset=key.currency(fee_is_token0),
            fee_is_token0=fee_is_token0,
            pre_fee_output_amount=realized,
            quoted_output_amount=quoted,
            total_fee=total_fee.value,
            retained_fee=retained,
        )
        logger.debug(
            "dynamic_fee_computed",
            pool_id=key.pool_id[:18] + "...",
            quoted=quoted,
            realized=realized,
            total_fee=step.total_fee,
            retained_fee=step.retained_fee,
        )
        return step

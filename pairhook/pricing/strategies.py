"""Pre-swap pricing strategies.

Two pricing paths share one interface:

- ExternalPoolPricing: executes the whole swap against the reference pool and
  returns a delta that cancels the ledger's own curve.
- LedgerCurvePricing: leaves pricing to the ledger's curve; only the throttle
  and the after-swap dynamic fee apply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog

from pairhook.errors import ReferencePoolNotFound
from pairhook.interfaces import ReferencePool, ReferencePoolResolver
from pairhook.locator import canonical_asset, pair_for
from pairhook.models import (
    ZERO_BEFORE_SWAP_DELTA,
    BeforeSwapDelta,
    PoolKey,
    SwapParams,
    is_native,
)
from pairhook.pricing.curve import HalfMarginalCurve, half_marginal_curve
from pairhook.safe_int import S
from pairhook.settlement import SettlementAdapter

logger = structlog.get_logger()


class PricingStrategy(Protocol):
    """Decides the pre-swap delta for a swap routed through the hook."""

    def before_swap(self, key: PoolKey, params: SwapParams) -> BeforeSwapDelta:
        """Price (and settle, if the strategy executes externally) one swap.

        Args:
            key: Ledger pool being swapped
            params: Swap parameters as forwarded by the ledger

        Returns:
            Delta booked on the hook, in (specified, unspecified) terms
        """
        ...


@dataclass
class SwapStep:
    """Per-swap computation record; never outlives the pre-swap hook.

    Attributes:
        exact_input: True if the specified amount is the input
        specified_is_token0: True if the specified amount is in currency0
        specified_asset: Ledger currency of the specified amount
        unspecified_asset: Ledger currency of the derived amount
        specified_amount: Caller-supplied amount (absolute)
        unspecified_amount: Derived amount (absolute)
        pair_address: Reference pool address
        reserve0: Reference reserve of ledger currency0
        reserve1: Reference reserve of ledger currency1
    """

    exact_input: bool
    specified_is_token0: bool
    specified_asset: str
    unspecified_asset: str
    specified_amount: int
    pair_address: str
    reserve0: int
    reserve1: int
    unspecified_amount: int = 0

    @property
    def zero_for_one(self) -> bool:
        return self.exact_input == self.specified_is_token0

    @property
    def amount_in(self) -> int:
        return self.specified_amount if self.exact_input else self.unspecified_amount

    @property
    def amount_out(self) -> int:
        return self.unspecified_amount if self.exact_input else self.specified_amount

    @property
    def input_asset(self) -> str:
        return self.specified_asset if self.exact_input else self.unspecified_asset

    @property
    def output_asset(self) -> str:
        return self.unspecified_asset if self.exact_input else self.specified_asset

    @property
    def return_delta(self) -> BeforeSwapDelta:
        """Delta that cancels the ledger leg and books the derived amount.

        Exact input: the hook is credited the input and debited the output.
        Exact output: the hook is credited the input owed, debited the output.
        """
        if self.exact_input:
            return BeforeSwapDelta(
                specified=S(self.specified_amount).to_int128(),
                unspecified=-S(self.unspecified_amount).to_int128(),
            )
        return BeforeSwapDelta(
            specified=-S(self.specified_amount).to_int128(),
            unspecified=S(self.unspecified_amount).to_int128(),
        )


class ExternalPoolPricing:
    """Prices and executes swaps against the reference constant-product pair."""

    def __init__(
        self,
        adapter: SettlementAdapter,
        resolve_pool: ReferencePoolResolver,
        factory: str,
        init_code_hash: str,
        curve: HalfMarginalCurve | None = None,
    ) -> None:
        self._adapter = adapter
        self._resolve_pool = resolve_pool
        self._factory = factory
        self._init_code_hash = init_code_hash
        self._curve = curve or half_marginal_curve

    def locate(self, key: PoolKey) -> ReferencePool:
        """Resolve the reference pair for a pool's currencies.

        Raises:
            ReferencePoolNotFound: If nothing is deployed at the computed address
        """
        address = pair_for(
            key.currency0,
            key.currency1,
            factory=self._factory,
            init_code_hash=self._init_code_hash,
            wrapped_native=self._adapter.wrapped_native_address,
        )
        pool = self._resolve_pool(address)
        wrapped = self._adapter.wrapped_native_address
        expected = {
            canonical_asset(key.currency0, wrapped),
            canonical_asset(key.currency1, wrapped),
        }
        if pool is not None and {pool.token0.lower(), pool.token1.lower()} != expected:
            logger.warning("reference_pool_token_mismatch", pair=address)
            pool = None
        if pool is None:
            logger.warning(
                "reference_pool_missing",
                pair=address,
                currency0=key.currency0,
                currency1=key.currency1,
            )
            raise ReferencePoolNotFound(address, key.currency0, key.currency1)
        return pool

    def build_step(self, key: PoolKey, params: SwapParams, pool: ReferencePool) -> SwapStep:
        """Read reserves and derive the unspecified amount."""
        reserve_a, reserve_b = pool.get_reserves()
        if self._pair_token0_is_currency0(key, pool):
            reserve0, reserve1 = reserve_a, reserve_b
        else:
            reserve0, reserve1 = reserve_b, reserve_a

        specified_is_token0 = params.specified_is_token0
        step = SwapStep(
            exact_input=params.exact_input,
            specified_is_token0=specified_is_token0,
            specified_asset=key.currency(specified_is_token0),
            unspecified_asset=key.currency(not specified_is_token0),
            specified_amount=abs(params.amount_specified),
            pair_address=pool.address,
            reserve0=reserve0,
            reserve1=reserve1,
        )

        if params.zero_for_one:
            reserve_in, reserve_out = reserve0, reserve1
        else:
            reserve_in, reserve_out = reserve1, reserve0

        if step.exact_input:
            step.unspecified_amount = self._curve.get_amount_out(
                step.specified_amount, reserve_in, reserve_out
            )
        else:
            step.unspecified_amount = self._curve.get_amount_in(
                step.specified_amount, reserve_in, reserve_out
            )
        return step

    def before_swap(self, key: PoolKey, params: SwapParams) -> BeforeSwapDelta:
        """Execute the swap on the reference pair and settle both legs."""
        pool = self.locate(key)
        step = self.build_step(key, params, pool)
        # Validates the int128 range before any value moves
        delta = step.return_delta

        self._adapter.take(step.input_asset, step.amount_in, recipient=pool.address)

        output_is_pair_token0 = canonical_asset(
            step.output_asset, self._adapter.wrapped_native_address
        ) == pool.token0.lower()
        amount0_out = step.amount_out if output_is_pair_token0 else 0
        amount1_out = 0 if output_is_pair_token0 else step.amount_out
        self._adapter.call_guarded(
            "reference_swap",
            step.output_asset,
            step.amount_out,
            lambda: pool.swap(amount0_out, amount1_out, self._adapter.owner),
        )

        if is_native(step.output_asset):
            self._adapter.unwrap(step.amount_out)
        self._adapter.settle(step.output_asset, step.amount_out)

        logger.debug(
            "external_swap_settled",
            pair=pool.address,
            zero_for_one=params.zero_for_one,
            exact_input=step.exact_input,
            amount_in=step.amount_in,
            amount_out=step.amount_out,
            reserve0=step.reserve0,
            reserve1=step.reserve1,
        )
        return delta

    def _pair_token0_is_currency0(self, key: PoolKey, pool: ReferencePool) -> bool:
        wrapped = self._adapter.wrapped_native_address
        return canonical_asset(key.currency0, wrapped) == pool.token0.lower()


class LedgerCurvePricing:
    """Leaves pricing to the ledger's own curve."""

    def before_swap(self, key: PoolKey, params: SwapParams) -> BeforeSwapDelta:
        return ZERO_BEFORE_SWAP_DELTA


__all__ = [
    "PricingStrategy",
    "SwapStep",
    "ExternalPoolPricing",
    "LedgerCurvePricing",
]

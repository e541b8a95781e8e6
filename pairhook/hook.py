"""Pair settlement hook: the entry point the host ledger calls into.

The ledger invokes PairHook around pool initialization, liquidity changes
and swaps. Before a swap the direction throttle is checked and the active
pricing strategy settles the swap; after it the dynamic fee is derived from
the post-swap price and split between a donation to liquidity providers and
a retained share claimable by the administrator.
"""

from __future__ import annotations

import copy

import structlog

from pairhook.admin import AdministratorCapability, issue_capability
from pairhook.config import DEFAULT_HOOK_CONFIG, HookConfig
from pairhook.constants import BIPS_DENOMINATOR
from pairhook.errors import (
    ClaimExceedsBalance,
    InsufficientShares,
    InvalidRetainedFeeBips,
    PoolNotBound,
    PoolNotInitialized,
    Unauthorized,
    ZeroSwapAmount,
)
from pairhook.fees import DynamicFeeCalculator, FeeDistributor
from pairhook.interfaces import (
    AssetBook,
    Ledger,
    ReferencePoolResolver,
    ShareTokenFactory,
    WrappedNative,
)
from pairhook.locator import pair_for
from pairhook.models import (
    BalanceDelta,
    BeforeSwapDelta,
    HookPermissions,
    ModifyLiquidityParams,
    PoolKey,
    SwapParams,
    normalize_address,
)
from pairhook.pricing import ExternalPoolPricing, PricingStrategy
from pairhook.safe_int import S
from pairhook.settlement import SettlementAdapter
from pairhook.state import PoolRecord, PoolStateStore, is_full_range

logger = structlog.get_logger()


class PairHook:
    """Swap pricing, settlement and fee-distribution engine for ledger pools.

    The hook never custodies reserves; it only decides amounts, fee splits
    and throttling for swaps routed through it.

    Args:
        address: Address the hook is deployed at (pool keys must name it)
        ledger: Host ledger
        book: Asset custody used for transfers outside the ledger
        wrapped_native: Wrapper for the native asset
        share_token_factory: Creates a pool's full-range share token
        resolve_reference_pool: Maps a computed pair address to the pair
        admin: Capability that privileged calls must present
        config: Hook configuration (DEFAULT_HOOK_CONFIG if omitted)
        pricing: Pre-swap strategy (external reference pool if omitted)
    """

    PERMISSIONS = HookPermissions(
        before_initialize=True,
        after_initialize=True,
        before_add_liquidity=True,
        before_remove_liquidity=True,
        before_swap=True,
        after_swap=True,
        before_swap_returns_delta=True,
        after_swap_returns_delta=True,
    )

    def __init__(
        self,
        address: str,
        ledger: Ledger,
        book: AssetBook,
        wrapped_native: WrappedNative,
        share_token_factory: ShareTokenFactory,
        resolve_reference_pool: ReferencePoolResolver,
        admin: AdministratorCapability,
        config: HookConfig | None = None,
        pricing: PricingStrategy | None = None,
    ) -> None:
        self.address = normalize_address(address, validate=True)
        self.config = config or DEFAULT_HOOK_CONFIG
        self._ledger = ledger
        self._wrapped = wrapped_native
        self._share_token_factory = share_token_factory
        self._admin = admin
        self._store = PoolStateStore()
        self._accrued: dict[str, int] = {}

        self.settlement = SettlementAdapter(self.address, ledger, book, wrapped_native)
        self.pricing: PricingStrategy = pricing or ExternalPoolPricing(
            self.settlement,
            resolve_reference_pool,
            factory=self.config.pair_factory,
            init_code_hash=self.config.pair_init_code_hash,
        )
        self._fee_calculator = DynamicFeeCalculator()
        self._distributor = FeeDistributor(ledger, self.settlement)

    # --- Ledger callbacks: lifecycle ---

    def before_initialize(self, sender: str, key: PoolKey, sqrt_price_x96: int) -> None:
        self._require_bound(key)

    def after_initialize(self, sender: str, key: PoolKey, sqrt_price_x96: int, tick: int) -> None:
        """Create the pool's share token and apply the default fee split."""
        self._require_bound(key)
        record = self._store.get(key.pool_id)
        record.liquidity_token = self._share_token_factory(key)
        record.retained_fee_bips = self.config.default_retained_fee_bips

        logger.info(
            "pool_initialized",
            pool_id=key.pool_id[:18] + "...",
            currency0=key.currency0,
            currency1=key.currency1,
            share_token=record.liquidity_token.address,
            sqrt_price_x96=sqrt_price_x96,
            tick=tick,
        )

    # --- Ledger callbacks: liquidity ---

    def before_add_liquidity(
        self, sender: str, key: PoolKey, params: ModifyLiquidityParams
    ) -> None:
        """Mint shares for full-range additions; other ranges pass untouched."""
        record = self._initialized_record(key)
        if params.liquidity_delta <= 0 or not is_full_range(params, key.tick_spacing):
            return

        assert record.liquidity_token is not None
        record.liquidity_token.mint(sender, params.liquidity_delta)
        logger.debug(
            "shares_minted",
            pool_id=key.pool_id[:18] + "...",
            provider=sender,
            amount=params.liquidity_delta,
        )

    def before_remove_liquidity(
        self, sender: str, key: PoolKey, params: ModifyLiquidityParams
    ) -> None:
        """Burn shares for full-range removals.

        Raises:
            InsufficientShares: If the sender holds fewer shares than removed
        """
        record = self._initialized_record(key)
        if params.liquidity_delta >= 0 or not is_full_range(params, key.tick_spacing):
            return

        assert record.liquidity_token is not None
        amount = -params.liquidity_delta
        held = record.liquidity_token.balance_of(sender)
        if held < amount:
            logger.warning(
                "insufficient_shares",
                pool_id=key.pool_id[:18] + "...",
                provider=sender,
                held=held,
                requested=amount,
            )
            raise InsufficientShares(f"{sender} holds {held} shares, removing {amount}")

        record.liquidity_token.burn(sender, amount)
        logger.debug(
            "shares_burned",
            pool_id=key.pool_id[:18] + "...",
            provider=sender,
            amount=amount,
        )

    # --- Ledger callbacks: swaps ---

    def before_swap(self, sender: str, key: PoolKey, params: SwapParams) -> BeforeSwapDelta:
        """Throttle, then price and settle the swap.

        The throttle marker is committed before the strategy makes any
        external call, and rolled back if the swap fails.

        Raises:
            ZeroSwapAmount: If amount_specified is zero
            RepeatedDirectionThisBlock: If this direction already swapped this block
            InsufficientLiquidityError: If the reference pool cannot cover the swap
            SettlementFailure: If any transfer fails
        """
        self._initialized_record(key)
        if params.amount_specified == 0:
            raise ZeroSwapAmount("Swap amount cannot be zero")

        block_number = self._ledger.block_number
        with self._store.atomic(key.pool_id):
            self._store.mark_swap(key.pool_id, params.zero_for_one, block_number)
            delta = self.pricing.before_swap(key, params)

        logger.debug(
            "swap_admitted",
            pool_id=key.pool_id[:18] + "...",
            sender=sender,
            zero_for_one=params.zero_for_one,
            amount_specified=params.amount_specified,
            block_number=block_number,
            delta_specified=delta.specified,
            delta_unspecified=delta.unspecified,
        )
        return delta

    def after_swap(
        self, sender: str, key: PoolKey, params: SwapParams, delta: BalanceDelta
    ) -> int:
        """Charge and distribute the dynamic fee.

        Args:
            sender: Swap initiator
            key: Pool that was swapped
            params: Swap parameters
            delta: Swapper's delta after the pre-swap hook, before the fee

        Returns:
            Fee charged to the swapper on the unspecified currency
        """
        record = self._initialized_record(key)
        pool_id = key.pool_id
        if self._ledger.get_liquidity(pool_id) == 0:
            logger.debug("fee_skipped_no_liquidity", pool_id=pool_id[:18] + "...")
            return 0

        step = self._fee_calculator.compute(
            key,
            params,
            delta,
            self._ledger.get_sqrt_price(pool_id),
            record.retained_fee_bips,
        )
        if step.total_fee == 0:
            return 0

        self._distributor.distribute(key, step)
        if step.retained_fee > 0:
            self._accrued[step.fee_asset] = self._accrued.get(step.fee_asset, 0) + step.retained_fee

        return S(step.total_fee).to_int128()

    # --- Administrative surface ---

    def set_retained_fee_bips(
        self, capability: AdministratorCapability, key: PoolKey, bips: int
    ) -> None:
        """Set the share of each fee the hook retains for a pool.

        Raises:
            Unauthorized: If capability is not the administrator's
            InvalidRetainedFeeBips: If bips is outside [minimum, 10_000]
        """
        self._require_admin(capability)
        record = self._initialized_record(key)
        minimum = self.config.min_retained_fee_bips
        if not minimum <= bips <= BIPS_DENOMINATOR:
            raise InvalidRetainedFeeBips(
                f"Retained fee bips must be within [{minimum}, {BIPS_DENOMINATOR}]: {bips}"
            )

        previous = record.retained_fee_bips
        record.retained_fee_bips = bips
        logger.info(
            "retained_fee_bips_updated",
            pool_id=key.pool_id[:18] + "...",
            previous=previous,
            bips=bips,
        )

    def claim(
        self,
        capability: AdministratorCapability,
        asset: str,
        recipient: str,
        amount: int | None = None,
    ) -> int:
        """Withdraw accrued retained fees.

        Args:
            capability: Administrator capability
            asset: Currency to withdraw
            recipient: Where to send it
            amount: How much (the whole accrued balance if None)

        Returns:
            Amount sent

        Raises:
            Unauthorized: If capability is not the administrator's
            ClaimExceedsBalance: If amount exceeds the accrued balance
        """
        self._require_admin(capability)
        asset = normalize_address(asset, validate=True)
        balance = self._accrued.get(asset, 0)
        if amount is None:
            amount = balance
        if amount < 0 or amount > balance:
            raise ClaimExceedsBalance(f"Claim of {amount} {asset} exceeds accrued {balance}")
        if amount == 0:
            return 0

        self.settlement.pay_out(asset, normalize_address(recipient, validate=True), amount)
        self._accrued[asset] = balance - amount
        logger.info("retained_fees_claimed", asset=asset, recipient=recipient, amount=amount)
        return amount

    def transfer_administration(
        self, capability: AdministratorCapability, new_administrator: str
    ) -> AdministratorCapability:
        """Revoke ``capability`` and issue one for ``new_administrator``."""
        self._require_admin(capability)
        self._admin = issue_capability(new_administrator)
        logger.info(
            "administration_transferred",
            previous=capability.administrator,
            administrator=self._admin.administrator,
        )
        return self._admin

    # --- Queries ---

    def accrued_fees(self, asset: str) -> int:
        return self._accrued.get(normalize_address(asset), 0)

    def pool_record(self, key: PoolKey) -> PoolRecord:
        """Copy of a pool's record (defaults if never touched)."""
        if key.pool_id not in self._store:
            return PoolRecord()
        return copy.copy(self._store.get(key.pool_id))

    def reference_pool_address(self, key: PoolKey) -> str:
        return pair_for(
            key.currency0,
            key.currency1,
            factory=self.config.pair_factory,
            init_code_hash=self.config.pair_init_code_hash,
            wrapped_native=self._wrapped.address,
        )

    # --- Guards ---

    def _require_bound(self, key: PoolKey) -> None:
        if key.hooks != self.address:
            raise PoolNotBound(f"Pool names hook {key.hooks}, not {self.address}")

    def _initialized_record(self, key: PoolKey) -> PoolRecord:
        self._require_bound(key)
        pool_id = key.pool_id
        if pool_id not in self._store or self._store.get(pool_id).liquidity_token is None:
            raise PoolNotInitialized(f"Pool {pool_id} was not initialized through this hook")
        return self._store.get(pool_id)

    def _require_admin(self, capability: AdministratorCapability) -> None:
        if not self._admin.matches(capability):
            logger.warning(
                "unauthorized_call",
                presented_by=getattr(capability, "administrator", None),
            )
            raise Unauthorized("Administrator capability required")

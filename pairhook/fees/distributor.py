"""Pays a computed swap fee out to liquidity providers and the hook."""

from __future__ import annotations

import structlog

from pairhook.fees.calculator import FeeStep
from pairhook.interfaces import Ledger
from pairhook.models import PoolKey
from pairhook.settlement import SettlementAdapter

logger = structlog.get_logger()


class FeeDistributor:
    """Donates the LP share and collects the retained share of a fee.

    Both legs create a debt for the hook that the fee charged to the
    swapper (the after-swap return delta) exactly offsets.
    """

    def __init__(self, ledger: Ledger, adapter: SettlementAdapter) -> None:
        self._ledger = ledger
        self._adapter = adapter

    def distribute(self, key: PoolKey, step: FeeStep) -> None:
        donated = step.donated_fee
        if donated > 0:
            amount0, amount1 = (donated, 0) if step.fee_is_token0 else (0, donated)
            self._adapter.call_guarded(
                "donate",
                step.fee_asset,
                donated,
                lambda: self._ledger.donate(self._adapter.owner, key, amount0, amount1),
            )

        if step.retained_fee > 0:
            self._adapter.collect(step.fee_asset, step.retained_fee)

        logger.debug(
            "fee_distributed",
            pool_id=key.pool_id[:18] + "...",
            fee_asset=step.fee_asset,
            donated=donated,
            retained=step.retained_fee,
        )

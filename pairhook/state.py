"""Per-pool hook state and the per-block swap-direction throttle.

Each tracked pool has one PoolRecord, created with defaults on first access
and never deleted. The throttle is keyed by block height: a direction is
"swapped this block" when its stored height equals the current one, and it
resets implicitly when the height moves on.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog

from pairhook.constants import MAX_TICK
from pairhook.errors import RepeatedDirectionThisBlock
from pairhook.interfaces import ShareToken
from pairhook.models import ModifyLiquidityParams

logger = structlog.get_logger()


@dataclass
class PoolRecord:
    """Mutable state the hook keeps for one pool.

    Attributes:
        last_zero_for_one_block: Height of the last zero_for_one swap (None: never)
        last_one_for_zero_block: Height of the last one_for_zero swap (None: never)
        liquidity_token: Share token for full-range liquidity, set at initialize
        retained_fee_bips: Share of each fee kept by the hook, 0 = all donated
    """

    last_zero_for_one_block: int | None = None
    last_one_for_zero_block: int | None = None
    liquidity_token: ShareToken | None = None
    retained_fee_bips: int = 0

    def last_block(self, zero_for_one: bool) -> int | None:
        return self.last_zero_for_one_block if zero_for_one else self.last_one_for_zero_block


class PoolStateStore:
    """Keyed store of PoolRecords with snapshot/rollback.

    The ledger serializes calls per pool, so no locking is done here.
    """

    def __init__(self) -> None:
        self._records: dict[str, PoolRecord] = {}

    def __contains__(self, pool_id: str) -> bool:
        return pool_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, pool_id: str) -> PoolRecord:
        """Record for a pool, created with defaults if missing."""
        record = self._records.get(pool_id)
        if record is None:
            record = PoolRecord()
            self._records[pool_id] = record
        return record

    def mark_swap(self, pool_id: str, zero_for_one: bool, block_number: int) -> None:
        """Admit one swap in a direction for the current block.

        The stored height is updated before returning, so any call that
        re-enters during settlement sees this swap already recorded.

        Raises:
            RepeatedDirectionThisBlock: If the direction already swapped this block
        """
        record = self.get(pool_id)
        if record.last_block(zero_for_one) == block_number:
            logger.warning(
                "swap_throttled",
                pool_id=pool_id[:18] + "...",
                zero_for_one=zero_for_one,
                block_number=block_number,
            )
            raise RepeatedDirectionThisBlock(pool_id, zero_for_one, block_number)

        if zero_for_one:
            record.last_zero_for_one_block = block_number
        else:
            record.last_one_for_zero_block = block_number

    @contextmanager
    def atomic(self, pool_id: str) -> Iterator[None]:
        """Restore one pool's record if the enclosed operation raises.

        Share token handles are kept by reference; only scalar fields are
        snapshotted. A record created inside the block is dropped.
        """
        record = self._records.get(pool_id)
        saved = copy.copy(vars(record)) if record is not None else {}
        try:
            yield
        except BaseException:
            if record is None:
                self._records.pop(pool_id, None)
            else:
                vars(record).update(saved)
                self._records[pool_id] = record
            raise


def full_range_ticks(tick_spacing: int) -> tuple[int, int]:
    """Widest (tick_lower, tick_upper) usable at a tick spacing."""
    if tick_spacing <= 0:
        raise ValueError(f"Tick spacing must be positive: {tick_spacing}")
    max_usable = (MAX_TICK // tick_spacing) * tick_spacing
    return -max_usable, max_usable


def is_full_range(params: ModifyLiquidityParams, tick_spacing: int) -> bool:
    """True if a liquidity change targets the canonical full range."""
    return (params.tick_lower, params.tick_upper) == full_range_ticks(tick_spacing)

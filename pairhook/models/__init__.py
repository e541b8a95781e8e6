"""Ledger-facing data models."""

from pairhook.models.deltas import (
    ZERO_BEFORE_SWAP_DELTA,
    ZERO_DELTA,
    BalanceDelta,
    BeforeSwapDelta,
)
from pairhook.models.pool import (
    HookPermissions,
    ModifyLiquidityParams,
    PoolKey,
    SwapParams,
)
from pairhook.models.types import (
    NATIVE_ASSET,
    Address,
    is_native,
    is_valid_address,
    normalize_address,
    sort_assets,
)

__all__ = [
    # Deltas
    "BalanceDelta",
    "BeforeSwapDelta",
    "ZERO_DELTA",
    "ZERO_BEFORE_SWAP_DELTA",
    # Pool
    "PoolKey",
    "SwapParams",
    "ModifyLiquidityParams",
    "HookPermissions",
    # Types
    "Address",
    "NATIVE_ASSET",
    "is_native",
    "is_valid_address",
    "normalize_address",
    "sort_assets",
]

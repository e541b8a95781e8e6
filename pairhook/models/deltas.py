"""Signed balance changes exchanged with the host ledger.

Sign convention (from the point of view of the account a delta is booked on):
negative means the account owes the ledger, positive means it may take.
"""

from __future__ import annotations

from dataclasses import dataclass

from pairhook.safe_int import S


@dataclass(frozen=True)
class BalanceDelta:
    """Net change of (currency0, currency1) for one operation."""

    amount0: int = 0
    amount1: int = 0

    def __post_init__(self) -> None:
        S(self.amount0).to_int128()
        S(self.amount1).to_int128()

    def __add__(self, other: BalanceDelta) -> BalanceDelta:
        return BalanceDelta(self.amount0 + other.amount0, self.amount1 + other.amount1)

    def __sub__(self, other: BalanceDelta) -> BalanceDelta:
        return BalanceDelta(self.amount0 - other.amount0, self.amount1 - other.amount1)

    def __neg__(self) -> BalanceDelta:
        return BalanceDelta(-self.amount0, -self.amount1)

    def amount(self, token0: bool) -> int:
        """Component for currency0 (token0=True) or currency1."""
        return self.amount0 if token0 else self.amount1

    @classmethod
    def single(cls, amount: int, token0: bool) -> BalanceDelta:
        """Delta touching only one currency."""
        return cls(amount, 0) if token0 else cls(0, amount)


ZERO_DELTA = BalanceDelta()


@dataclass(frozen=True)
class BeforeSwapDelta:
    """Delta returned from the pre-swap hook, in (specified, unspecified) terms.

    The ledger books it on the hook and swaps ``amount_specified + specified``
    against its own curve.
    """

    specified: int = 0
    unspecified: int = 0

    def __post_init__(self) -> None:
        S(self.specified).to_int128()
        S(self.unspecified).to_int128()

    def to_balance_delta(self, specified_is_token0: bool) -> BalanceDelta:
        """Reorder into (currency0, currency1)."""
        if specified_is_token0:
            return BalanceDelta(self.specified, self.unspecified)
        return BalanceDelta(self.unspecified, self.specified)


ZERO_BEFORE_SWAP_DELTA = BeforeSwapDelta()

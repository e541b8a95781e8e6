"""Hook error classes.

Every failure is fatal to the enclosing swap or liquidity change. Nothing is
retried here; the caller resubmits a corrected operation.
"""


class HookError(Exception):
    """Base error for settlement hook operations."""

    pass


class InsufficientLiquidityError(HookError):
    """Pricing denominator would be zero or negative."""

    pass


class ReferencePoolNotFound(InsufficientLiquidityError):
    """No reference pool lives at the address computed for a pair."""

    def __init__(self, pair_address: str, currency0: str, currency1: str) -> None:
        super().__init__(
            f"No reference pool at {pair_address} for pair {currency0}/{currency1}"
        )
        self.pair_address = pair_address


class ThrottleViolation(HookError):
    """Swap rejected by the per-block direction throttle."""

    pass


class RepeatedDirectionThisBlock(ThrottleViolation):
    """A second swap in the same direction within one block."""

    def __init__(self, pool_id: str, zero_for_one: bool, block_number: int) -> None:
        direction = "zero_for_one" if zero_for_one else "one_for_zero"
        super().__init__(f"Pool {pool_id} already swapped {direction} in block {block_number}")
        self.pool_id = pool_id
        self.zero_for_one = zero_for_one
        self.block_number = block_number


class PolicyViolation(HookError):
    """Operation falls outside the rules this hook enforces."""

    pass


class PoolNotBound(PolicyViolation):
    """Pool key names a different hook address."""

    pass


class PoolNotInitialized(PolicyViolation):
    """Pool was never initialized through this hook."""

    pass


class ZeroSwapAmount(PolicyViolation):
    """Swap specified a zero amount."""

    pass


class InsufficientShares(PolicyViolation):
    """Full-range removal exceeds the sender's share balance."""

    pass


class InvalidRetainedFeeBips(PolicyViolation):
    """Retained-fee bips outside [minimum, 10_000]."""

    pass


class ClaimExceedsBalance(PolicyViolation):
    """Claim asks for more than the accrued retained fees."""

    pass


class SettlementFailure(HookError):
    """An asset transfer during take/settle/donate failed."""

    pass


class Unauthorized(HookError):
    """Privileged call made without the administrator capability."""

    pass

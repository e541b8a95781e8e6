"""Pool identity and call parameters passed in by the host ledger."""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi import encode  # type: ignore[attr-defined]
from pydantic import BaseModel, ConfigDict, Field, model_validator
from web3 import Web3

from pairhook.models.types import Address, address_bytes

# Largest LP fee the ledger accepts, in hundredths of a bip (100%)
MAX_LP_FEE = 1_000_000


class PoolKey(BaseModel):
    """Identifies a ledger pool: sorted currency pair, fee, spacing, hook.

    The pool id is keccak256(abi.encode(currency0, currency1, fee,
    tick_spacing, hooks)), the same derivation the ledger uses.
    """

    model_config = ConfigDict(frozen=True)

    currency0: Address
    currency1: Address
    fee: int = Field(default=0, ge=0, le=MAX_LP_FEE)
    tick_spacing: int = Field(ge=1, le=32_767)
    hooks: Address

    @model_validator(mode="after")
    def _currencies_sorted(self) -> PoolKey:
        if int(self.currency0, 16) >= int(self.currency1, 16):
            raise ValueError(
                f"currency0 must sort below currency1: {self.currency0} >= {self.currency1}"
            )
        return self

    @property
    def pool_id(self) -> str:
        """0x-prefixed 32-byte pool identifier."""
        encoded = encode(
            ["address", "address", "uint24", "int24", "address"],
            [
                address_bytes(self.currency0),
                address_bytes(self.currency1),
                self.fee,
                self.tick_spacing,
                address_bytes(self.hooks),
            ],
        )
        return "0x" + bytes(Web3.keccak(encoded)).hex()

    def currency(self, token0: bool) -> str:
        return self.currency0 if token0 else self.currency1


@dataclass(frozen=True)
class SwapParams:
    """Swap request as forwarded by the ledger.

    Attributes:
        zero_for_one: True when currency0 is sold for currency1
        amount_specified: Negative for exact input, positive for exact output
        sqrt_price_limit_x96: Price limit for the ledger's own curve
    """

    zero_for_one: bool
    amount_specified: int
    sqrt_price_limit_x96: int = 0

    @property
    def exact_input(self) -> bool:
        return self.amount_specified < 0

    @property
    def specified_is_token0(self) -> bool:
        """True if the caller-supplied amount is denominated in currency0."""
        return self.exact_input == self.zero_for_one


@dataclass(frozen=True)
class ModifyLiquidityParams:
    """Liquidity change over [tick_lower, tick_upper)."""

    tick_lower: int
    tick_upper: int
    liquidity_delta: int
    salt: bytes = b"\x00" * 32


@dataclass(frozen=True)
class HookPermissions:
    """Which ledger callbacks a hook wants invoked."""

    before_initialize: bool = False
    after_initialize: bool = False
    before_add_liquidity: bool = False
    before_remove_liquidity: bool = False
    before_swap: bool = False
    after_swap: bool = False
    before_swap_returns_delta: bool = False
    after_swap_returns_delta: bool = False

"""Hook configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from pairhook.constants import (
    BIPS_DENOMINATOR,
    MIN_RETAINED_FEE_BIPS,
    PAIR_FACTORY,
    PAIR_INIT_CODE_HASH,
)
from pairhook.models.types import normalize_address

ENV_PREFIX = "PAIRHOOK_"


@dataclass(frozen=True)
class HookConfig:
    """Centralized configuration for the settlement hook.

    Attributes:
        pair_factory: Factory the reference pairs are deployed from
        pair_init_code_hash: keccak256 of the pair creation code
        default_retained_fee_bips: Retained share given to new pools
            (0 donates every fee)
        min_retained_fee_bips: Floor the administrator may not go below
    """

    pair_factory: str = PAIR_FACTORY
    pair_init_code_hash: str = PAIR_INIT_CODE_HASH
    default_retained_fee_bips: int = 0
    min_retained_fee_bips: int = MIN_RETAINED_FEE_BIPS

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "pair_factory", normalize_address(self.pair_factory, validate=True)
        )
        if len(bytes.fromhex(self.pair_init_code_hash.removeprefix("0x"))) != 32:
            raise ValueError(f"Init code hash must be 32 bytes: {self.pair_init_code_hash}")
        if not 0 <= self.min_retained_fee_bips <= BIPS_DENOMINATOR:
            raise ValueError(f"Minimum retained bips out of range: {self.min_retained_fee_bips}")
        if self.default_retained_fee_bips != 0 and not (
            self.min_retained_fee_bips <= self.default_retained_fee_bips <= BIPS_DENOMINATOR
        ):
            raise ValueError(
                f"Default retained bips must be 0 or within "
                f"[{self.min_retained_fee_bips}, {BIPS_DENOMINATOR}]: "
                f"{self.default_retained_fee_bips}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> HookConfig:
        """Build a config from PAIRHOOK_* environment variables.

        Recognized variables (unset ones keep the defaults):
        - PAIRHOOK_PAIR_FACTORY
        - PAIRHOOK_PAIR_INIT_CODE_HASH
        - PAIRHOOK_DEFAULT_RETAINED_FEE_BIPS
        - PAIRHOOK_MIN_RETAINED_FEE_BIPS
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            pair_factory=env.get(f"{ENV_PREFIX}PAIR_FACTORY", defaults.pair_factory),
            pair_init_code_hash=env.get(
                f"{ENV_PREFIX}PAIR_INIT_CODE_HASH", defaults.pair_init_code_hash
            ),
            default_retained_fee_bips=int(
                env.get(
                    f"{ENV_PREFIX}DEFAULT_RETAINED_FEE_BIPS",
                    str(defaults.default_retained_fee_bips),
                )
            ),
            min_retained_fee_bips=int(
                env.get(f"{ENV_PREFIX}MIN_RETAINED_FEE_BIPS", str(defaults.min_retained_fee_bips))
            ),
        )


# Default configuration instance
DEFAULT_HOOK_CONFIG = HookConfig()

"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token and actor addresses
- fakes: In-memory ledger, asset book, reference pair and tokens
- factories: Pool key and hook environment factory functions
"""

from tests.helpers.constants import (
    ADMIN,
    ALICE,
    BOB,
    HOOK,
    LEDGER,
    NATIVE_ASSET,
    ONE,
    TOKEN_A,
    TOKEN_B,
    TOKEN_HIGH,
    TREASURY,
    WETH,
)
from tests.helpers.factories import HookEnvironment, make_environment, make_pool_key

__all__ = [
    # Constants
    "ADMIN",
    "ALICE",
    "BOB",
    "HOOK",
    "LEDGER",
    "NATIVE_ASSET",
    "ONE",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_HIGH",
    "TREASURY",
    "WETH",
    # Factories
    "HookEnvironment",
    "make_environment",
    "make_pool_key",
]

"""Protocol constants for the pair settlement hook.

Centralizes fee-split parameters, tick bounds and the well-known addresses
the pair locator needs.
"""

from pairhook.models.types import NATIVE_ASSET, is_valid_address

# Basis point denominator for fee splits (10_000 bips = 100%)
BIPS_DENOMINATOR = 10_000

# Lowest retained-fee setting the administrator may choose (10%)
MIN_RETAINED_FEE_BIPS = 1_000

# Tick bounds of the host ledger (sqrt(1.0001^tick) must fit Q64.96)
MIN_TICK = -887_272
MAX_TICK = 887_272


def _validate_address(name: str, address: str) -> str:
    """Validate a hard-coded address at import time.

    Raises:
        ValueError: If the address is malformed
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Mainnet deployment of the reference pair factory. A wrong factory or
# init-code hash resolves every pair to an address with no code behind it.
PAIR_FACTORY = _validate_address("PAIR_FACTORY", "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f")
PAIR_INIT_CODE_HASH = "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"

WETH = _validate_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")

__all__ = [
    "BIPS_DENOMINATOR",
    "MIN_RETAINED_FEE_BIPS",
    "MIN_TICK",
    "MAX_TICK",
    "NATIVE_ASSET",
    "PAIR_FACTORY",
    "PAIR_INIT_CODE_HASH",
    "WETH",
]

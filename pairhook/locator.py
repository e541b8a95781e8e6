"""Deterministic reference-pair address derivation.

The reference pool for a token pair lives at its CREATE2 address:

    keccak256(0xff ++ factory ++ keccak256(token0 ++ token1) ++ init_code_hash)[12:]

with the native asset first replaced by its wrapped form and the pair sorted.
Computing an address proves nothing about what is deployed there; callers
must still resolve it.
"""

from __future__ import annotations

from web3 import Web3

from pairhook.constants import PAIR_FACTORY, PAIR_INIT_CODE_HASH, WETH
from pairhook.models.types import address_bytes, is_native, normalize_address, sort_assets


def canonical_asset(asset: str, wrapped_native: str = WETH) -> str:
    """Lowercased asset, with the native sentinel mapped to its wrapped token."""
    if is_native(asset):
        return normalize_address(wrapped_native)
    return normalize_address(asset)


def pair_for(
    asset_a: str,
    asset_b: str,
    *,
    factory: str = PAIR_FACTORY,
    init_code_hash: str = PAIR_INIT_CODE_HASH,
    wrapped_native: str = WETH,
) -> str:
    """Checksummed address of the reference pair for two assets.

    Args:
        asset_a: Either asset of the pair (order does not matter)
        asset_b: The other asset
        factory: Pair factory that deploys via CREATE2
        init_code_hash: keccak256 of the pair creation code
        wrapped_native: Token the native asset is canonicalized to

    Raises:
        ValueError: If the assets are identical after canonicalization or the
            init code hash is not 32 bytes
    """
    token0, token1 = sort_assets(
        canonical_asset(asset_a, wrapped_native),
        canonical_asset(asset_b, wrapped_native),
    )
    code_hash = bytes.fromhex(init_code_hash.removeprefix("0x"))
    if len(code_hash) != 32:
        raise ValueError(f"Init code hash must be 32 bytes: {init_code_hash}")

    salt = Web3.keccak(address_bytes(token0) + address_bytes(token1))
    digest = Web3.keccak(b"\xff" + address_bytes(factory) + bytes(salt) + code_hash)
    return Web3.to_checksum_address("0x" + bytes(digest)[12:].hex())

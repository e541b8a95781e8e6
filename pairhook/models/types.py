"""Shared type definitions for ledger-facing models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# The ledger identifies the chain's native asset by the zero address
NATIVE_ASSET = "0x0000000000000000000000000000000000000000"


def validate_address(value: Any) -> str:
    """Validate and lowercase an address.

    Raises:
        ValueError: If value is not a 0x-prefixed 40-hex-char string
    """
    if not isinstance(value, str) or not is_valid_address(value):
        raise ValueError(f"Invalid address: {value!r}")
    return value.lower()


# Lowercased 20-byte address
Address = Annotated[
    str,
    BeforeValidator(validate_address),
    Field(description="0x-prefixed 20-byte address, lowercased"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an address to lowercase with 0x prefix.

    Args:
        address: An address (with or without 0x prefix)
        validate: If True, raises ValueError for malformed addresses

    Returns:
        Lowercase address with 0x prefix
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed 20-byte hex address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def address_bytes(address: str) -> bytes:
    """Raw 20 bytes of an address."""
    return bytes.fromhex(normalize_address(address, validate=True)[2:])


def is_native(asset: str) -> bool:
    """True if asset is the ledger's native-asset sentinel."""
    return normalize_address(asset) == NATIVE_ASSET


def sort_assets(asset_a: str, asset_b: str) -> tuple[str, str]:
    """Order two assets by numeric address value (ledger and pair order).

    Raises:
        ValueError: If both assets are the same
    """
    a = normalize_address(asset_a)
    b = normalize_address(asset_b)
    if a == b:
        raise ValueError(f"Identical assets: {asset_a}")
    return (a, b) if int(a, 16) < int(b, 16) else (b, a)

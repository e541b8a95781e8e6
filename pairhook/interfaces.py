"""Contracts for the collaborators the hook drives.

The hook never holds reserves or decides pool lifecycle; it only calls out
through these protocols. Implementations raise ``ValueError``,
``ArithmeticError`` or ``LookupError`` on a failed transfer; the settlement
adapter turns those into ``SettlementFailure``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from pairhook.models import BalanceDelta, PoolKey


@runtime_checkable
class AssetBook(Protocol):
    """Custody of every asset, native included (keyed by asset address)."""

    def balance_of(self, asset: str, owner: str) -> int: ...

    def transfer(self, asset: str, sender: str, recipient: str, amount: int) -> None: ...


@runtime_checkable
class Ledger(Protocol):
    """The host ledger's settlement primitives and pool queries.

    ``caller`` is the account whose running delta is adjusted: ``take``
    debits it, ``settle`` credits it with what arrived since the last
    ``sync``, ``donate`` debits it.
    """

    address: str

    @property
    def block_number(self) -> int: ...

    def take(self, caller: str, currency: str, to: str, amount: int) -> None: ...

    def sync(self, currency: str) -> None: ...

    def settle(self, caller: str, value: int = 0) -> int: ...

    def donate(self, caller: str, key: PoolKey, amount0: int, amount1: int) -> BalanceDelta: ...

    def get_sqrt_price(self, pool_id: str) -> int: ...

    def get_liquidity(self, pool_id: str) -> int: ...


@runtime_checkable
class ReferencePool(Protocol):
    """Constant-product pair outside the ledger (pay first, then swap)."""

    address: str
    token0: str
    token1: str

    def get_reserves(self) -> tuple[int, int]: ...

    def swap(self, amount0_out: int, amount1_out: int, to: str) -> None: ...


@runtime_checkable
class WrappedNative(Protocol):
    """Wrapper turning the native asset into a transferable token."""

    address: str

    def deposit(self, owner: str, amount: int) -> None: ...

    def withdraw(self, owner: str, amount: int) -> None: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None: ...


@runtime_checkable
class ShareToken(Protocol):
    """Fungible claim on a pool's full-range liquidity."""

    address: str

    def balance_of(self, owner: str) -> int: ...

    def mint(self, to: str, amount: int) -> None: ...

    def burn(self, owner: str, amount: int) -> None: ...


# Resolves a computed address to the pair deployed there, if any
ReferencePoolResolver = Callable[[str], "ReferencePool | None"]

# Deploys the share token for a newly initialized pool
ShareTokenFactory = Callable[[PoolKey], ShareToken]

"""Settlement adapter between the host ledger and the reference pool.

Moves value in both directions for one swap. The ledger speaks the native
asset, the reference pool only holds its wrapped form, so native legs are
wrapped on the way out and unwrapped on the way back. The adapter never keeps
a balance across swaps: whatever it receives mid-swap is forwarded before the
hook returns.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from pairhook.errors import SettlementFailure
from pairhook.interfaces import AssetBook, Ledger, WrappedNative
from pairhook.models.types import is_native

logger = structlog.get_logger()

# Failures a collaborator may raise on a bad transfer
TRANSFER_ERRORS = (ValueError, ArithmeticError, LookupError)


@contextmanager
def _settlement_step(step: str, asset: str, amount: int) -> Iterator[None]:
    """Re-raise collaborator transfer failures as SettlementFailure."""
    try:
        yield
    except TRANSFER_ERRORS as err:
        logger.warning(
            "settlement_step_failed",
            step=step,
            asset=asset,
            amount=amount,
            error=str(err),
        )
        raise SettlementFailure(f"{step} of {amount} {asset} failed: {err}") from err


class SettlementAdapter:
    """Translates logical debits/credits into ledger take/sync/settle calls.

    Attributes:
        owner: Address the adapter acts for (the hook)
    """

    def __init__(
        self,
        owner: str,
        ledger: Ledger,
        book: AssetBook,
        wrapped_native: WrappedNative,
    ) -> None:
        self.owner = owner
        self._ledger = ledger
        self._book = book
        self._wrapped = wrapped_native

    @property
    def wrapped_native_address(self) -> str:
        return self._wrapped.address

    def take(self, asset: str, amount: int, recipient: str) -> None:
        """Pull ``amount`` of ``asset`` out of the ledger and forward it.

        Native asset is taken into the hook, wrapped, and the wrapped token
        is forwarded.
        """
        with _settlement_step("take", asset, amount):
            self._ledger.take(self.owner, asset, self.owner, amount)
            if is_native(asset):
                self._wrapped.deposit(self.owner, amount)
                self._wrapped.transfer(self.owner, recipient, amount)
            else:
                self._book.transfer(asset, self.owner, recipient, amount)

        logger.debug("settlement_take", asset=asset, amount=amount, recipient=recipient)

    def unwrap(self, amount: int) -> None:
        """Turn wrapped native received from the reference pool back into native."""
        with _settlement_step("unwrap", self._wrapped.address, amount):
            self._wrapped.withdraw(self.owner, amount)

    def settle(self, asset: str, amount: int) -> None:
        """Pay ``amount`` of ``asset`` from the hook into the ledger.

        Native asset is a direct value transfer. Any other asset is synced,
        transferred, then settled.
        """
        with _settlement_step("settle", asset, amount):
            if is_native(asset):
                paid = self._ledger.settle(self.owner, value=amount)
            else:
                self._ledger.sync(asset)
                self._book.transfer(asset, self.owner, self._ledger.address, amount)
                paid = self._ledger.settle(self.owner)

        if paid != amount:
            raise SettlementFailure(f"Ledger credited {paid} {asset}, expected {amount}")
        logger.debug("settlement_settle", asset=asset, amount=amount)

    def collect(self, asset: str, amount: int) -> None:
        """Take ``amount`` of ``asset`` from the ledger into the hook's own custody."""
        with _settlement_step("collect", asset, amount):
            self._ledger.take(self.owner, asset, self.owner, amount)

    def pay_out(self, asset: str, recipient: str, amount: int) -> None:
        """Send ``amount`` of ``asset`` held by the hook to ``recipient``."""
        with _settlement_step("pay_out", asset, amount):
            self._book.transfer(asset, self.owner, recipient, amount)

    def call_guarded(self, step: str, asset: str, amount: int, fn: Callable[[], object]) -> None:
        """Run a collaborator call under the same failure translation."""
        with _settlement_step(step, asset, amount):
            fn()

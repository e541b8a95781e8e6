"""Administrator capability for privileged hook calls."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field

from pairhook.models.types import normalize_address


@dataclass(frozen=True)
class AdministratorCapability:
    """Unforgeable token presented to fee-setting and claim calls.

    Equality covers the secret, so a capability rebuilt from the
    administrator address alone does not match.
    """

    administrator: str
    secret: str = field(default_factory=lambda: secrets.token_hex(32), repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "administrator", normalize_address(self.administrator, validate=True)
        )

    def matches(self, other: object) -> bool:
        """Constant-time comparison against another capability."""
        if not isinstance(other, AdministratorCapability):
            return False
        return other.administrator == self.administrator and secrets.compare_digest(
            other.secret, self.secret
        )


def issue_capability(administrator: str) -> AdministratorCapability:
    """Mint a fresh capability for ``administrator``."""
    return AdministratorCapability(administrator=administrator)

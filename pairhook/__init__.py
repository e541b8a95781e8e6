"""Pair settlement hook - pricing, settlement and fee distribution for ledger pools."""

from pairhook.admin import AdministratorCapability, issue_capability
from pairhook.config import DEFAULT_HOOK_CONFIG, HookConfig
from pairhook.hook import PairHook
from pairhook.locator import pair_for

__version__ = "0.1.0"
__all__ = [
    "PairHook",
    "HookConfig",
    "DEFAULT_HOOK_CONFIG",
    "AdministratorCapability",
    "issue_capability",
    "pair_for",
    "__version__",
]

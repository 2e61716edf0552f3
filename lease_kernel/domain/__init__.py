"""
Pure domain layer.

Immutable value objects with NO dependencies on storage, wall-clock time
(outside ``SystemClock``) or any other I/O.
"""

from lease_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from lease_kernel.domain.ledger_accounts import (
    DEFAULT_LEDGER_ACCOUNTS,
    LedgerAccount,
    LedgerAccountMapping,
    LedgerAccountRegistry,
    LedgerRole,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "DEFAULT_LEDGER_ACCOUNTS",
    "LedgerAccount",
    "LedgerAccountMapping",
    "LedgerAccountRegistry",
    "LedgerRole",
]

"""
lease_config -- public entrypoint for ledger-account configuration.

Responsibility:
    Turns the YAML ledger-account files under ``sets/`` (or a file the
    caller names) into a ``LedgerAccountMapping``, and offers a registry
    pre-loaded from that file for administrative updates.

Architecture position:
    Configuration -- sits above ``lease_kernel`` and below
    ``lease_modules``.  The kernel never imports from this package.

Failure modes:
    See ``lease_config.loader``.
"""

from __future__ import annotations

from pathlib import Path

from lease_config.loader import (
    compute_checksum,
    load_ledger_accounts_file,
    load_yaml_file,
    parse_ledger_accounts,
)
from lease_kernel.domain.ledger_accounts import (
    LedgerAccountMapping,
    LedgerAccountRegistry,
)

DEFAULT_LEDGER_ACCOUNTS_FILE = Path(__file__).parent / "sets" / "ledger_accounts.yaml"


def load_ledger_accounts(path: Path | None = None) -> LedgerAccountMapping:
    """Load the ledger mapping from ``path`` (default: the bundled set)."""
    mapping, _ = load_ledger_accounts_file(path or DEFAULT_LEDGER_ACCOUNTS_FILE)
    return mapping


def build_registry(path: Path | None = None) -> LedgerAccountRegistry:
    """A fresh registry initialised from a ledger-account file."""
    return LedgerAccountRegistry(load_ledger_accounts(path))


__all__ = [
    "DEFAULT_LEDGER_ACCOUNTS_FILE",
    "build_registry",
    "compute_checksum",
    "load_ledger_accounts",
    "load_ledger_accounts_file",
    "load_yaml_file",
    "parse_ledger_accounts",
]

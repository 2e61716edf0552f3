"""
Ledger accounts -- posting roles and their chart-of-accounts labels.

Responsibility:
    Maps each semantic posting role used by lease journal entries
    ("ROU asset", "lease liability", "cash", ...) to a display code and
    name.  Journal generation takes a ``LedgerAccountMapping`` as an
    explicit argument and resolves roles against it at call time.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.  YAML loading lives in
    ``lease_config.loader``.

Invariants enforced:
    - A mapping always covers every ``LedgerRole``; unknown keys and
      entries without a code or name are rejected at construction.
    - Mappings are immutable.  ``LedgerAccountRegistry.replace()`` swaps
      the whole mapping; entries already generated keep the labels they
      were built with.

Failure modes:
    - ``UnknownLedgerAccountError`` for keys that are not a ``LedgerRole``.
    - ``IncompleteLedgerMappingError`` for a role that is absent or whose
      code/name is empty.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from lease_kernel.exceptions import (
    IncompleteLedgerMappingError,
    UnknownLedgerAccountError,
)
from lease_kernel.logging_config import get_logger

logger = get_logger("domain.ledger_accounts")


class LedgerRole(str, Enum):
    """Posting roles; values are the stable configuration keys."""

    ROU_ASSET = "rouAsset"
    LEASE_LIABILITY = "leaseLiability"
    ACCUM_DEPRECIATION = "accumDepreciation"
    CASH = "cash"
    INTEREST_EXPENSE = "interestExpense"
    DEPRECIATION_EXPENSE = "depreciationExpense"
    SHORT_TERM_EXPENSE = "shortTermExpense"
    LOW_VALUE_EXPENSE = "lowValueExpense"
    VARIABLE_EXPENSE = "variableExpense"
    MODIFICATION_GAIN_LOSS = "modificationGainLoss"

    @classmethod
    def parse(cls, key: LedgerRole | str) -> LedgerRole:
        """Accept a role or its configuration key."""
        if isinstance(key, LedgerRole):
            return key
        try:
            return cls(key)
        except ValueError:
            raise UnknownLedgerAccountError(str(key)) from None


@dataclass(frozen=True, slots=True)
class LedgerAccount:
    """A chart-of-accounts line: code plus display name."""

    code: str
    name: str

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"


DEFAULT_LEDGER_ACCOUNTS: Mapping[LedgerRole, LedgerAccount] = MappingProxyType({
    LedgerRole.ROU_ASSET: LedgerAccount("1600", "Right-of-Use Asset"),
    LedgerRole.LEASE_LIABILITY: LedgerAccount("2100", "Lease Liability"),
    LedgerRole.ACCUM_DEPRECIATION: LedgerAccount("1650", "ROU Asset Accum Dep"),
    LedgerRole.CASH: LedgerAccount("1000", "Cash/Bank"),
    LedgerRole.INTEREST_EXPENSE: LedgerAccount("6100", "Interest Expense"),
    LedgerRole.DEPRECIATION_EXPENSE: LedgerAccount("6200", "Depreciation Expense"),
    LedgerRole.SHORT_TERM_EXPENSE: LedgerAccount("6300", "Rent Exp - Short Term"),
    LedgerRole.LOW_VALUE_EXPENSE: LedgerAccount("6310", "Rent Exp - Low Value"),
    LedgerRole.VARIABLE_EXPENSE: LedgerAccount("6320", "Variable Rent Expense"),
    LedgerRole.MODIFICATION_GAIN_LOSS: LedgerAccount("8000", "Gain/Loss on Lease Mods"),
})


def _to_account(key: str, value: LedgerAccount | Mapping[str, Any]) -> LedgerAccount:
    if isinstance(value, LedgerAccount):
        account = value
    else:
        account = LedgerAccount(
            code=str(value.get("code") or "").strip(),
            name=str(value.get("name") or "").strip(),
        )
    missing = tuple(
        attr for attr in ("code", "name") if not getattr(account, attr)
    )
    if missing:
        raise IncompleteLedgerMappingError(key, missing)
    return account


@dataclass(frozen=True)
class LedgerAccountMapping:
    """
    Complete, immutable role -> account mapping.

    Contract:
        Construct from any mapping keyed by ``LedgerRole`` or its string
        key; values may be ``LedgerAccount`` or ``{"code", "name"}`` dicts.
    """

    accounts: Mapping[LedgerRole, LedgerAccount] = field(
        default_factory=lambda: DEFAULT_LEDGER_ACCOUNTS
    )

    def __post_init__(self) -> None:
        normalized: dict[LedgerRole, LedgerAccount] = {}
        for key, value in self.accounts.items():
            role = LedgerRole.parse(key)
            normalized[role] = _to_account(role.value, value)

        for role in LedgerRole:
            if role not in normalized:
                raise IncompleteLedgerMappingError(role.value, ("code", "name"))

        object.__setattr__(self, "accounts", MappingProxyType(normalized))

    @classmethod
    def with_defaults(cls) -> LedgerAccountMapping:
        """Standard IFRS 16 chart of accounts."""
        return cls(DEFAULT_LEDGER_ACCOUNTS)

    def resolve(self, role: LedgerRole | str) -> LedgerAccount:
        """Account for a role."""
        return self.accounts[LedgerRole.parse(role)]

    def merged(
        self,
        overrides: Mapping[LedgerRole | str, LedgerAccount | Mapping[str, Any]],
    ) -> LedgerAccountMapping:
        """New mapping with ``overrides`` laid over this one."""
        combined: dict[LedgerRole, Any] = dict(self.accounts)
        for key, value in overrides.items():
            combined[LedgerRole.parse(key)] = value
        return LedgerAccountMapping(combined)

    def as_dict(self) -> dict[str, dict[str, str]]:
        """Plain ``{key: {"code", "name"}}`` form, in role order."""
        return {
            role.value: {"code": self.accounts[role].code, "name": self.accounts[role].name}
            for role in LedgerRole
        }


class LedgerAccountRegistry:
    """
    Administrative holder of the mapping in effect.

    Contract:
        An ordinary object owned by the caller, never a module global.
        ``get()`` returns the current mapping; ``replace()`` swaps it
        wholesale; ``update()`` merges partial overrides.  Readers that
        call ``get()`` per generation see a replacement from the next
        generation onward.
    """

    def __init__(self, mapping: LedgerAccountMapping | None = None):
        self._mapping = mapping or LedgerAccountMapping.with_defaults()

    def get(self) -> LedgerAccountMapping:
        return self._mapping

    def replace(self, new_mapping: LedgerAccountMapping) -> None:
        self._mapping = new_mapping
        logger.info(
            "ledger_accounts_replaced",
            extra={"accounts": new_mapping.as_dict()},
        )

    def update(
        self,
        overrides: Mapping[LedgerRole | str, LedgerAccount | Mapping[str, Any]],
    ) -> LedgerAccountMapping:
        """Merge partial overrides into the current mapping and return it."""
        self.replace(self._mapping.merged(overrides))
        return self._mapping

"""
Lease Accounting Domain Models (``lease_modules.lease.models``).

Responsibility
--------------
Frozen dataclass value objects for IFRS 16 lease accounting: the lease
contract, its modification events, amortization schedule rows and the
journal entries derived from them.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by the
reconstruction, schedule and journal functions and by
``LeaseAccountingService``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* Monetary fields are ``Decimal``.
* A modification's ``previous_values`` and ``new_values`` carry exactly the
  same keys, and only keys its kind is permitted to change.
* A journal entry's debit amount equals its credit amount.

Failure modes
-------------
* ``InvalidModificationError`` from a modification with mismatched or
  forbidden change keys.
* ``UnbalancedEntryError`` from a journal entry with debit != credit.
"""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, ClassVar
from uuid import UUID, uuid4

from lease_kernel.domain.ledger_accounts import LedgerAccount
from lease_kernel.exceptions import InvalidModificationError, UnbalancedEntryError
from lease_kernel.logging_config import get_logger

logger = get_logger("modules.lease.models")

INITIAL_RECOGNITION = "Initial Recognition"


class LeaseClassification(Enum):
    """Lease classification, as supplied by the contract owner."""
    FINANCE = "Finance"
    OPERATING = "Operating"


class LeaseStandard(Enum):
    """Reporting framework the contract is accounted under."""
    IFRS16 = "IFRS 16"
    ASC842 = "ASC 842"
    IQ_GAAP = "Iraqi GAAP"


class LeaseStatus(Enum):
    """Lease lifecycle states."""
    DRAFT = "Draft"
    ACTIVE = "Active"
    TERMINATED = "Terminated"
    ENDED = "Ended"
    ARCHIVED = "Archived"


class PaymentFrequency(IntEnum):
    """Payments per year."""
    MONTHLY = 12
    QUARTERLY = 4
    ANNUALLY = 1


class PaymentTiming(Enum):
    """Whether each payment falls at the start or the end of its cycle."""
    IN_ADVANCE = "In Advance"
    IN_ARREARS = "In Arrears"


class ModificationType(Enum):
    """Kinds of lease modification."""
    EXTENSION = "Extension"
    TERMINATION = "Termination"
    PAYMENT_CHANGE = "Payment Change"
    SCOPE_DECREASE = "Scope Decrease"
    OTHER = "Other"


def add_months(start: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the last day of short months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


# ---------------------------------------------------------------------------
# Modifications
# ---------------------------------------------------------------------------

TERM_FIELDS = frozenset({
    "term_months",
    "payment_amount",
    "payment_frequency",
    "payment_timing",
    "incremental_borrowing_rate",
})


@dataclass(frozen=True)
class LeaseModification:
    """
    An immutable modification event.

    Concrete kinds are the subclasses below; each declares the contract
    fields it may change in ``permitted_fields``.  ``previous_values`` holds
    the pre-modification value of every field in ``new_values``.
    """

    effective_date: date
    previous_values: Mapping[str, Any]
    new_values: Mapping[str, Any]
    reason: str = ""
    recorded_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)

    modification_type: ClassVar[ModificationType]
    permitted_fields: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        if type(self) is LeaseModification:
            raise TypeError("LeaseModification is abstract; use a concrete kind")
        kind = self.modification_type.value
        previous_keys = frozenset(self.previous_values)
        new_keys = frozenset(self.new_values)

        if not new_keys:
            raise InvalidModificationError(kind, "no fields changed")
        if previous_keys != new_keys:
            mismatched = tuple(sorted(previous_keys ^ new_keys))
            logger.error("modification_values_mismatch", extra={
                "modification_type": kind,
                "fields": list(mismatched),
            })
            raise InvalidModificationError(
                kind, "previous and new values must cover the same fields", mismatched,
            )
        forbidden = tuple(sorted(new_keys - self.permitted_fields))
        if forbidden:
            raise InvalidModificationError(kind, "fields not permitted for this kind", forbidden)

        object.__setattr__(self, "previous_values", MappingProxyType(dict(self.previous_values)))
        object.__setattr__(self, "new_values", MappingProxyType(dict(self.new_values)))

    @property
    def changed_fields(self) -> tuple[str, ...]:
        return tuple(sorted(self.new_values))


@dataclass(frozen=True)
class LeaseExtension(LeaseModification):
    """Term lengthened, possibly with new payment or rate."""
    modification_type: ClassVar[ModificationType] = ModificationType.EXTENSION
    permitted_fields: ClassVar[frozenset[str]] = frozenset({
        "term_months", "payment_amount", "incremental_borrowing_rate",
    })


@dataclass(frozen=True)
class LeaseTermination(LeaseModification):
    """Term cut short; the contract status moves to terminated."""
    modification_type: ClassVar[ModificationType] = ModificationType.TERMINATION
    permitted_fields: ClassVar[frozenset[str]] = frozenset({
        "term_months", "payment_amount", "incremental_borrowing_rate", "status",
    })


@dataclass(frozen=True)
class PaymentChange(LeaseModification):
    """Payment amount, cadence or timing revised."""
    modification_type: ClassVar[ModificationType] = ModificationType.PAYMENT_CHANGE
    permitted_fields: ClassVar[frozenset[str]] = frozenset({
        "payment_amount", "payment_frequency", "payment_timing", "incremental_borrowing_rate",
    })


@dataclass(frozen=True)
class ScopeDecrease(LeaseModification):
    """Less of the asset leased; typically shorter term and lower payment."""
    modification_type: ClassVar[ModificationType] = ModificationType.SCOPE_DECREASE
    permitted_fields: ClassVar[frozenset[str]] = frozenset({
        "term_months", "payment_amount", "incremental_borrowing_rate",
    })


@dataclass(frozen=True)
class OtherModification(LeaseModification):
    """Any other change to the lease terms."""
    modification_type: ClassVar[ModificationType] = ModificationType.OTHER
    permitted_fields: ClassVar[frozenset[str]] = TERM_FIELDS | {"status"}


MODIFICATION_KINDS: Mapping[ModificationType, type[LeaseModification]] = MappingProxyType({
    ModificationType.EXTENSION: LeaseExtension,
    ModificationType.TERMINATION: LeaseTermination,
    ModificationType.PAYMENT_CHANGE: PaymentChange,
    ModificationType.SCOPE_DECREASE: ScopeDecrease,
    ModificationType.OTHER: OtherModification,
})


def modification_from_type(
    modification_type: ModificationType | str,
    **kwargs: Any,
) -> LeaseModification:
    """Build the modification variant for ``modification_type``."""
    return MODIFICATION_KINDS[ModificationType(modification_type)](**kwargs)


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LeaseContract:
    """A lease contract with its current terms and modification log."""
    id: UUID
    contract_number: str
    start_date: date
    term_months: int
    payment_amount: Decimal
    lessee_name: str = ""
    asset_name: str = ""
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    payment_timing: PaymentTiming = PaymentTiming.IN_ARREARS
    incremental_borrowing_rate: Decimal = Decimal("0")  # annual, percent
    initial_direct_costs: Decimal = Decimal("0")
    lease_incentives: Decimal = Decimal("0")
    residual_value: Decimal = Decimal("0")
    currency: str = "USD"
    status: LeaseStatus = LeaseStatus.DRAFT
    classification: LeaseClassification = LeaseClassification.OPERATING
    standard: LeaseStandard = LeaseStandard.IFRS16
    modifications: tuple[LeaseModification, ...] = ()

    @property
    def end_date(self) -> date | None:
        """Start date plus the term, or None when the term is unusable."""
        if not isinstance(self.term_months, int) or self.term_months <= 0:
            return None
        return add_months(self.start_date, self.term_months)


# ---------------------------------------------------------------------------
# Derived artifacts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AmortizationRow:
    """One simulated period of the amortization schedule."""
    period: int
    date: date
    payment: Decimal
    interest_expense: Decimal
    principal_repayment: Decimal
    lease_liability_closing: Decimal
    rou_depreciation: Decimal
    rou_asset_balance: Decimal
    event: str | None = None
    modification_adjustment: Decimal = Decimal("0")

    @property
    def is_inception(self) -> bool:
        return self.event == INITIAL_RECOGNITION


@dataclass(frozen=True)
class JournalEntry:
    """One balanced debit/credit posting."""
    id: str
    date: date
    lease_id: UUID
    description: str
    debit_account: LedgerAccount
    credit_account: LedgerAccount
    debit_amount: Decimal
    credit_amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        if self.debit_amount != self.credit_amount:
            logger.critical("journal_entry_unbalanced", extra={
                "entry_id": self.id,
                "debit_amount": str(self.debit_amount),
                "credit_amount": str(self.credit_amount),
            })
            raise UnbalancedEntryError(self.id, self.debit_amount, self.credit_amount)

    @property
    def amount(self) -> Decimal:
        return self.debit_amount

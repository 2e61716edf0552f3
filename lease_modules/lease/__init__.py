"""
Lease Accounting Module (``lease_modules.lease``).

Responsibility
--------------
IFRS 16 lease accounting for a single contract and its modification log:
present value of the payment stream, reconstruction of inception terms,
the month-by-month amortization schedule with remeasurement on
modification, and the balanced journal entries derived from it.

Architecture position
---------------------
**Modules layer** -- models, declarative posting profiles, pure schedule
and journal functions, and a service facade.  Depends on
``lease_engines`` and ``lease_kernel`` only.

Invariants enforced
-------------------
* Pure and deterministic: outputs depend only on the contract, its
  modifications, the ledger mapping passed in and ``LeaseConfig``.
* Debit equals credit on every journal entry.
* Account ROLES in profiles; codes resolved at generation time.
"""

from lease_modules.lease.calculations import calculate_present_value
from lease_modules.lease.config import LeaseConfig
from lease_modules.lease.journal import generate_entries_for_period, generate_journal
from lease_modules.lease.models import (
    INITIAL_RECOGNITION,
    AmortizationRow,
    JournalEntry,
    LeaseClassification,
    LeaseContract,
    LeaseExtension,
    LeaseModification,
    LeaseStandard,
    LeaseStatus,
    LeaseTermination,
    ModificationType,
    OtherModification,
    PaymentChange,
    PaymentFrequency,
    PaymentTiming,
    ScopeDecrease,
    modification_from_type,
)
from lease_modules.lease.profiles import LEASE_POSTING_PROFILES
from lease_modules.lease.reconstruction import (
    reconstruct_inception_terms,
    replay_modifications,
)
from lease_modules.lease.schedule import generate_schedule
from lease_modules.lease.service import LeaseAccountingService

__all__ = [
    "INITIAL_RECOGNITION",
    "LEASE_POSTING_PROFILES",
    "AmortizationRow",
    "JournalEntry",
    "LeaseAccountingService",
    "LeaseClassification",
    "LeaseConfig",
    "LeaseContract",
    "LeaseExtension",
    "LeaseModification",
    "LeaseStandard",
    "LeaseStatus",
    "LeaseTermination",
    "ModificationType",
    "OtherModification",
    "PaymentChange",
    "PaymentFrequency",
    "PaymentTiming",
    "ScopeDecrease",
    "calculate_present_value",
    "generate_entries_for_period",
    "generate_journal",
    "generate_schedule",
    "modification_from_type",
    "reconstruct_inception_terms",
    "replay_modifications",
]

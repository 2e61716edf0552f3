"""
Lease Posting Profiles (``lease_modules.lease.profiles``).

Responsibility
--------------
Declares the debit/credit shape of every journal entry the lease module
emits.  Profiles name account ROLES, never account codes; the journal
generator resolves roles against the ``LedgerAccountMapping`` supplied at
generation time.

Invariants enforced
-------------------
* Adding a new lease posting requires only a new profile here plus the
  rule in the journal generator that selects it.
* Every profile posts one debit and one credit of the same amount.

Profiles:
    INIT-LIAB   Initial recognition     Dr ROU asset         / Cr Lease liability
    INIT-PMT    Payment at inception    Dr Lease liability   / Cr Cash
    INIT-COST   Initial direct costs    Dr ROU asset         / Cr Cash
    INIT-INC    Lease incentives        Dr Cash              / Cr ROU asset
    MOD         Remeasurement increase  Dr ROU asset         / Cr Lease liability
    MOD         Remeasurement decrease  Dr Lease liability   / Cr ROU asset
    INT         Interest accrual        Dr Interest expense  / Cr Lease liability
    DEP         ROU depreciation        Dr Depreciation exp. / Cr Accum. depreciation
    PMT         Periodic payment        Dr Lease liability   / Cr Cash
"""

from __future__ import annotations

from dataclasses import dataclass

from lease_kernel.domain.ledger_accounts import LedgerRole


@dataclass(frozen=True)
class PostingProfile:
    """Shape of one balanced posting."""

    name: str
    suffix: str
    debit_role: LedgerRole
    credit_role: LedgerRole
    description: str


# --- Initial recognition -----------------------------------------------------

INITIAL_RECOGNITION = PostingProfile(
    name="LeaseInitialRecognition",
    suffix="INIT-LIAB",
    debit_role=LedgerRole.ROU_ASSET,
    credit_role=LedgerRole.LEASE_LIABILITY,
    description="Initial Recognition - ROU Asset & Lease Liability",
)

INITIAL_PAYMENT = PostingProfile(
    name="LeaseInitialPayment",
    suffix="INIT-PMT",
    debit_role=LedgerRole.LEASE_LIABILITY,
    credit_role=LedgerRole.CASH,
    description="Initial Lease Payment (Advance)",
)

INITIAL_DIRECT_COSTS = PostingProfile(
    name="LeaseInitialDirectCosts",
    suffix="INIT-COST",
    debit_role=LedgerRole.ROU_ASSET,
    credit_role=LedgerRole.CASH,
    description="Initial Direct Costs Capitalization",
)

LEASE_INCENTIVES = PostingProfile(
    name="LeaseIncentivesReceived",
    suffix="INIT-INC",
    debit_role=LedgerRole.CASH,
    credit_role=LedgerRole.ROU_ASSET,
    description="Lease Incentives Received",
)


# --- Remeasurement -----------------------------------------------------------

REMEASUREMENT_INCREASE = PostingProfile(
    name="LeaseRemeasurementIncrease",
    suffix="MOD",
    debit_role=LedgerRole.ROU_ASSET,
    credit_role=LedgerRole.LEASE_LIABILITY,
    description="Lease Modification Adjustment ({event})",
)

REMEASUREMENT_DECREASE = PostingProfile(
    name="LeaseRemeasurementDecrease",
    suffix="MOD",
    debit_role=LedgerRole.LEASE_LIABILITY,
    credit_role=LedgerRole.ROU_ASSET,
    description="Lease Modification Adjustment ({event})",
)


# --- Periodic ----------------------------------------------------------------

INTEREST_ACCRUAL = PostingProfile(
    name="LeaseInterestAccrued",
    suffix="INT",
    debit_role=LedgerRole.INTEREST_EXPENSE,
    credit_role=LedgerRole.LEASE_LIABILITY,
    description="Interest Expense - Period {period}",
)

ROU_DEPRECIATION = PostingProfile(
    name="LeaseRouDepreciation",
    suffix="DEP",
    debit_role=LedgerRole.DEPRECIATION_EXPENSE,
    credit_role=LedgerRole.ACCUM_DEPRECIATION,
    description="ROU Depreciation - Period {period}",
)

PERIODIC_PAYMENT = PostingProfile(
    name="LeasePaymentMade",
    suffix="PMT",
    debit_role=LedgerRole.LEASE_LIABILITY,
    credit_role=LedgerRole.CASH,
    description="Lease Payment - Period {period}",
)


LEASE_POSTING_PROFILES: tuple[PostingProfile, ...] = (
    INITIAL_RECOGNITION,
    INITIAL_PAYMENT,
    INITIAL_DIRECT_COSTS,
    LEASE_INCENTIVES,
    REMEASUREMENT_INCREASE,
    REMEASUREMENT_DECREASE,
    INTEREST_ACCRUAL,
    ROU_DEPRECIATION,
    PERIODIC_PAYMENT,
)

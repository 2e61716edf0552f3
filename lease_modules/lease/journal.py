"""
Journal entry generation (``lease_modules.lease.journal``).

Responsibility
--------------
Turns amortization rows into balanced double-entry postings.  Each row is
handled on its own: the inception row yields the recognition entries, and
every later row yields up to one entry each for remeasurement, interest,
depreciation and payment.  Entries are never merged or netted.

Account labels come from the ``LedgerAccountMapping`` passed in on each
call, so a changed mapping affects the next generation only.

Invariants enforced
-------------------
* Debit amount equals credit amount on every entry (checked again by
  ``JournalEntry.__post_init__``).
* Entry ids are ``<lease id>-<period>-<profile suffix>`` and therefore
  stable across regenerations.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from decimal import Decimal

from lease_engines.tracer import traced_engine
from lease_kernel.domain.ledger_accounts import LedgerAccountMapping
from lease_kernel.domain.values import ZERO, coerce_decimal
from lease_kernel.logging_config import get_logger
from lease_modules.lease.config import LeaseConfig
from lease_modules.lease.models import AmortizationRow, JournalEntry, LeaseContract
from lease_modules.lease.profiles import (
    INITIAL_DIRECT_COSTS,
    INITIAL_PAYMENT,
    INITIAL_RECOGNITION,
    INTEREST_ACCRUAL,
    LEASE_INCENTIVES,
    PERIODIC_PAYMENT,
    REMEASUREMENT_DECREASE,
    REMEASUREMENT_INCREASE,
    ROU_DEPRECIATION,
    PostingProfile,
)
from lease_modules.lease.schedule import generate_schedule

logger = get_logger("modules.lease.journal")


def _post(
    profile: PostingProfile,
    amount: Decimal,
    contract: LeaseContract,
    row: AmortizationRow,
    ledger_accounts: LedgerAccountMapping,
) -> JournalEntry:
    return JournalEntry(
        id=f"{contract.id}-{row.period}-{profile.suffix}",
        date=row.date,
        lease_id=contract.id,
        description=profile.description.format(period=row.period, event=row.event),
        debit_account=ledger_accounts.resolve(profile.debit_role),
        credit_account=ledger_accounts.resolve(profile.credit_role),
        debit_amount=amount,
        credit_amount=amount,
        currency=contract.currency,
    )


def _inception_postings(
    contract: LeaseContract,
    row: AmortizationRow,
) -> Iterator[tuple[PostingProfile, Decimal]]:
    gross_liability = row.lease_liability_closing + row.payment
    yield INITIAL_RECOGNITION, gross_liability

    if row.payment > 0:
        yield INITIAL_PAYMENT, row.payment

    direct_costs = coerce_decimal(contract.initial_direct_costs)
    if direct_costs > 0:
        yield INITIAL_DIRECT_COSTS, direct_costs

    incentives = coerce_decimal(contract.lease_incentives)
    if incentives > 0:
        yield LEASE_INCENTIVES, incentives


def _period_postings(
    row: AmortizationRow,
    config: LeaseConfig,
) -> Iterator[tuple[PostingProfile, Decimal]]:
    adjustment = row.modification_adjustment or ZERO
    if abs(adjustment) > config.adjustment_posting_threshold:
        profile = REMEASUREMENT_INCREASE if adjustment > 0 else REMEASUREMENT_DECREASE
        yield profile, abs(adjustment)

    if row.interest_expense > 0:
        yield INTEREST_ACCRUAL, row.interest_expense

    if row.rou_depreciation > 0:
        yield ROU_DEPRECIATION, row.rou_depreciation

    if row.payment > 0:
        yield PERIODIC_PAYMENT, row.payment


def generate_entries_for_period(
    contract: LeaseContract,
    row: AmortizationRow,
    ledger_accounts: LedgerAccountMapping,
    config: LeaseConfig | None = None,
) -> tuple[JournalEntry, ...]:
    """Balanced entries for one schedule row."""
    config = config or LeaseConfig.with_defaults()
    if row.is_inception:
        postings = _inception_postings(contract, row)
    else:
        postings = _period_postings(row, config)

    return tuple(
        _post(profile, amount, contract, row, ledger_accounts)
        for profile, amount in postings
    )


@traced_engine("lease_journal", "1.0", fingerprint_fields=("contract",))
def generate_journal(
    contract: LeaseContract,
    ledger_accounts: LedgerAccountMapping,
    schedule: Iterable[AmortizationRow] | None = None,
    config: LeaseConfig | None = None,
) -> tuple[JournalEntry, ...]:
    """All entries for a contract, in schedule order."""
    config = config or LeaseConfig.with_defaults()
    rows = generate_schedule(contract, config) if schedule is None else tuple(schedule)

    entries = tuple(
        entry
        for row in rows
        for entry in generate_entries_for_period(contract, row, ledger_accounts, config)
    )
    logger.info("lease_journal_generated", extra={
        "lease_id": str(contract.id),
        "rows": len(rows),
        "entries": len(entries),
    })
    return entries

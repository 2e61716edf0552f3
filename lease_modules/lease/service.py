"""
Lease Accounting Module Service (``lease_modules.lease.service``).

Responsibility
--------------
Single entry point for callers of the lease core: schedule generation,
journal derivation, present value, recording a modification against a
contract, and portfolio-level summaries.  Pure computation is delegated to
``schedule``, ``journal`` and ``calculations``.

Architecture position
---------------------
**Modules layer** -- thin glue.  Holds no lease state; every method is a
function of the contracts passed in, the ledger mapping in effect and the
injected clock (used only to timestamp recorded modifications).

Invariants enforced
-------------------
* The ledger mapping is read at call time.  With a
  ``LedgerAccountRegistry`` each generation calls ``registry.get()``, so a
  replacement shows up from the next generation on and never alters
  entries already returned.
* Recording a modification captures the contract's current values as
  ``previous_values``, so the log always unwinds back to inception.

Failure modes
-------------
* ``InvalidModificationError`` when a change set names fields the
  modification kind may not change.
* ``ScheduleTruncatedError`` from ``generate_schedule(strict=True)``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import uuid4

from lease_kernel.domain.clock import Clock, SystemClock
from lease_kernel.domain.ledger_accounts import LedgerAccountMapping, LedgerAccountRegistry
from lease_kernel.domain.values import ZERO, coerce_decimal
from lease_kernel.logging_config import get_logger
from lease_modules.lease.calculations import calculate_present_value, monthly_cash_out
from lease_modules.lease.config import LeaseConfig
from lease_modules.lease.journal import generate_entries_for_period, generate_journal
from lease_modules.lease.models import (
    AmortizationRow,
    JournalEntry,
    LeaseClassification,
    LeaseContract,
    LeaseModification,
    LeaseStatus,
    ModificationType,
    modification_from_type,
)
from lease_modules.lease.schedule import generate_schedule

logger = get_logger("modules.lease.service")


class LeaseAccountingService:
    """
    Orchestrates lease accounting over the pure calculation functions.

    Contract
    --------
    * ``ledger_accounts`` may be a fixed ``LedgerAccountMapping`` or a
      ``LedgerAccountRegistry`` that an administrator updates.
    * Clock is injectable for deterministic ``recorded_at`` timestamps.

    Non-goals
    ---------
    * Does NOT persist contracts, schedules or entries.
    * Does NOT decide lease classification; it reports what it is given.
    """

    def __init__(
        self,
        ledger_accounts: LedgerAccountMapping | LedgerAccountRegistry | None = None,
        config: LeaseConfig | None = None,
        clock: Clock | None = None,
    ):
        self._ledger_accounts = ledger_accounts or LedgerAccountRegistry()
        self._config = config or LeaseConfig.with_defaults()
        self._clock = clock or SystemClock()

    @property
    def ledger_accounts(self) -> LedgerAccountMapping:
        """The mapping in effect right now."""
        if isinstance(self._ledger_accounts, LedgerAccountRegistry):
            return self._ledger_accounts.get()
        return self._ledger_accounts

    # =========================================================================
    # Schedule and journal
    # =========================================================================

    def generate_schedule(
        self,
        contract: LeaseContract,
        strict: bool = False,
    ) -> tuple[AmortizationRow, ...]:
        """Amortization schedule from inception to term end."""
        return generate_schedule(contract, self._config, strict=strict)

    def generate_entries_for_period(
        self,
        contract: LeaseContract,
        row: AmortizationRow,
    ) -> tuple[JournalEntry, ...]:
        """Balanced entries for one schedule row."""
        return generate_entries_for_period(contract, row, self.ledger_accounts, self._config)

    def generate_journal(self, contract: LeaseContract) -> tuple[JournalEntry, ...]:
        """Every entry for the contract, in schedule order."""
        return generate_journal(contract, self.ledger_accounts, config=self._config)

    def calculate_present_value(self, contract: LeaseContract) -> Decimal:
        """PV of the contract's current payments over its full term."""
        return calculate_present_value(contract)

    # =========================================================================
    # Modification
    # =========================================================================

    def record_modification(
        self,
        contract: LeaseContract,
        modification_type: ModificationType | str,
        effective_date: date,
        changes: Mapping[str, Any],
        reason: str = "",
    ) -> LeaseContract:
        """
        Apply ``changes`` to the contract and log them as a modification.

        The contract's current value of every changed field becomes the
        modification's ``previous_values``.  A termination also moves the
        status to TERMINATED.  The new modification goes at the head of the
        log.
        """
        modification_type = ModificationType(modification_type)
        new_values = dict(changes)
        if modification_type is ModificationType.TERMINATION:
            new_values["status"] = LeaseStatus.TERMINATED

        # Fields the kind may not change are rejected by its own validation.
        previous_values = {name: getattr(contract, name, None) for name in new_values}

        modification: LeaseModification = modification_from_type(
            modification_type,
            id=uuid4(),
            effective_date=effective_date,
            previous_values=previous_values,
            new_values=new_values,
            reason=reason,
            recorded_at=self._clock.now(),
        )

        logger.info("lease_modification_recorded", extra={
            "lease_id": str(contract.id),
            "modification_type": modification_type.value,
            "effective_date": effective_date.isoformat(),
            "fields": list(modification.changed_fields),
        })

        return replace(
            contract,
            **new_values,
            modifications=(modification, *contract.modifications),
        )

    # =========================================================================
    # Portfolio queries
    # =========================================================================

    def get_portfolio_journal(
        self,
        contracts: Sequence[LeaseContract],
        account_filter: str = "",
        contract_filter: str = "",
    ) -> list[tuple[LeaseContract, JournalEntry]]:
        """
        Entries across all contracts, newest date first.

        ``account_filter`` matches either account label and
        ``contract_filter`` the contract number, both as case-insensitive
        substrings; empty filters match everything.
        """
        ledger_accounts = self.ledger_accounts
        account_needle = account_filter.lower()
        contract_needle = contract_filter.lower()

        log: list[tuple[LeaseContract, JournalEntry]] = []
        for contract in contracts:
            if contract_needle and contract_needle not in contract.contract_number.lower():
                continue
            for entry in generate_journal(contract, ledger_accounts, config=self._config):
                if account_needle and not (
                    account_needle in str(entry.debit_account).lower()
                    or account_needle in str(entry.credit_account).lower()
                ):
                    continue
                log.append((contract, entry))

        log.sort(key=lambda item: item[1].date, reverse=True)
        return log

    def get_lease_portfolio(self, contracts: Sequence[LeaseContract]) -> dict:
        """Portfolio summary: counts, total PV liability, monthly cash out."""
        active = [c for c in contracts if c.status == LeaseStatus.ACTIVE]
        total_liability = sum((calculate_present_value(c) for c in contracts), ZERO)
        cash_out = sum((monthly_cash_out(c) for c in active), ZERO)
        return {
            "total_leases": len(contracts),
            "active_leases": len(active),
            "finance_leases": sum(
                1 for c in contracts if c.classification == LeaseClassification.FINANCE
            ),
            "operating_leases": sum(
                1 for c in contracts if c.classification == LeaseClassification.OPERATING
            ),
            "total_liability": total_liability,
            "monthly_cash_out": cash_out,
        }

    def get_disclosure_data(self, contracts: Sequence[LeaseContract]) -> dict:
        """
        Interest and depreciation over each contract's full schedule, plus
        the initially measured liability and ROU asset under current terms.
        """
        total_interest = ZERO
        total_depreciation = ZERO
        total_liability = ZERO
        total_rou = ZERO
        for contract in contracts:
            liability = calculate_present_value(contract)
            total_liability += liability
            total_rou += (
                liability
                + coerce_decimal(contract.initial_direct_costs)
                - coerce_decimal(contract.lease_incentives)
            )
            for row in generate_schedule(contract, self._config):
                total_interest += row.interest_expense
                total_depreciation += row.rou_depreciation
        return {
            "total_interest": total_interest,
            "total_depreciation": total_depreciation,
            "total_liability": total_liability,
            "total_rou": total_rou,
            "lease_count": len(contracts),
        }

"""
Lease amortization schedule (``lease_modules.lease.schedule``).

Responsibility
--------------
Replays a contract month by month from inception to the end of its
(possibly modified) term and produces one ``AmortizationRow`` per month:
interest on the opening liability, the payment due, the closing liability,
straight-line ROU depreciation and the closing ROU balance.

Modifications take effect in the calendar month of their effective date.
The liability is then re-measured as the present value of the remaining
payments under the *new* terms over ``term - (month - 1)`` months; the
difference is booked against the ROU asset too, and depreciation is spread
afresh over the remaining months.
A change that moves the term end before the current month closes the
lease in that month: no interest, no payment, and the remaining ROU
balance is written off.

Invariants enforced
-------------------
* Row 0 is inception; rows follow in strictly increasing period order.
* At most ``LeaseConfig.safety_cap_periods`` months are simulated.
* Liability and ROU balances within ``balance_clamp_tolerance`` of zero
  are snapped to zero; the ROU asset never goes negative on remeasurement.
* Pure: the same contract always yields the same rows.

Failure modes
-------------
* Non-numeric or missing terms are coerced (zero term gives an inception
  row only).  Nothing raises, except ``ScheduleTruncatedError`` when the
  caller asks for ``strict`` generation and the cap cuts the term short.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from lease_engines.present_value import months_per_period, present_value_of_payments
from lease_engines.tracer import traced_engine
from lease_kernel.domain.values import ZERO, coerce_decimal, coerce_int
from lease_kernel.exceptions import ScheduleTruncatedError
from lease_kernel.logging_config import LogContext, get_logger
from lease_modules.lease.calculations import annuity_timing, coerce_payment_timing
from lease_modules.lease.config import LeaseConfig
from lease_modules.lease.models import (
    INITIAL_RECOGNITION,
    AmortizationRow,
    LeaseContract,
    LeaseModification,
    PaymentTiming,
    add_months,
)
from lease_modules.lease.reconstruction import chronological, reconstruct_inception_terms

logger = get_logger("modules.lease.schedule")

HUNDRED = Decimal("100")
TWELVE = Decimal("12")


@dataclass(slots=True)
class _SimulationState:
    """Running terms and balances; one instance per schedule generation."""

    term_months: int
    payment_amount: Decimal
    payment_frequency: int
    incremental_borrowing_rate: Decimal
    payment_timing: PaymentTiming
    liability: Decimal = ZERO
    rou_asset: Decimal = ZERO
    monthly_depreciation: Decimal = ZERO

    @classmethod
    def from_contract(cls, contract: LeaseContract, config: LeaseConfig) -> _SimulationState:
        state = cls(
            term_months=0,
            payment_amount=ZERO,
            payment_frequency=config.default_payment_frequency,
            incremental_borrowing_rate=ZERO,
            payment_timing=PaymentTiming.IN_ARREARS,
        )
        state.apply(
            {
                "term_months": contract.term_months,
                "payment_amount": contract.payment_amount,
                "payment_frequency": contract.payment_frequency,
                "incremental_borrowing_rate": contract.incremental_borrowing_rate,
                "payment_timing": contract.payment_timing,
            },
            config,
        )
        return state

    def apply(self, values: Mapping[str, Any], config: LeaseConfig) -> None:
        """Overwrite the simulated terms present in ``values``; others are ignored."""
        if "term_months" in values:
            self.term_months = coerce_int(values["term_months"])
        if "payment_amount" in values:
            self.payment_amount = coerce_decimal(values["payment_amount"])
        if "payment_frequency" in values:
            frequency = coerce_int(values["payment_frequency"])
            self.payment_frequency = frequency if frequency > 0 else config.default_payment_frequency
        if "incremental_borrowing_rate" in values:
            self.incremental_borrowing_rate = coerce_decimal(values["incremental_borrowing_rate"])
        if "payment_timing" in values:
            self.payment_timing = coerce_payment_timing(values["payment_timing"])

    def present_value(self, remaining_months: int) -> Decimal:
        return present_value_of_payments(
            payment=self.payment_amount,
            annual_rate_percent=self.incremental_borrowing_rate,
            periods_per_year=self.payment_frequency,
            remaining_months=remaining_months,
            timing=annuity_timing(self.payment_timing),
        )

    def depreciation_over(self, months: int) -> Decimal:
        return self.rou_asset / months if months > 0 else ZERO

    def payment_due(self, month: int) -> Decimal:
        """Full periodic payment on a payment month, else zero.

        In arrears pays at the end of each cycle.  In advance pays at the
        start, so the payment that would land on the final month was already
        made one cycle earlier.
        """
        is_payment_month = Decimal(month) % months_per_period(self.payment_frequency) == 0
        if self.payment_timing is PaymentTiming.IN_ADVANCE:
            is_payment_month = is_payment_month and month < self.term_months
        else:
            is_payment_month = is_payment_month and month <= self.term_months
        return self.payment_amount if is_payment_month else ZERO


def _clamp(balance: Decimal, tolerance: Decimal) -> Decimal:
    return ZERO if abs(balance) < tolerance else balance


def _same_month(left: date, right: date) -> bool:
    return (left.year, left.month) == (right.year, right.month)


def _recognize(
    contract: LeaseContract,
    state: _SimulationState,
    start_date: date,
) -> AmortizationRow:
    """Period 0: initial measurement of liability and ROU asset."""
    state.liability = state.present_value(state.term_months)
    state.rou_asset = (
        state.liability
        + coerce_decimal(contract.initial_direct_costs)
        - coerce_decimal(contract.lease_incentives)
    )
    state.monthly_depreciation = state.depreciation_over(state.term_months)

    payment = ZERO
    if state.payment_timing is PaymentTiming.IN_ADVANCE and state.term_months > 0:
        payment = state.payment_amount
        state.liability -= payment

    return AmortizationRow(
        period=0,
        date=start_date,
        payment=payment,
        interest_expense=ZERO,
        principal_repayment=payment,
        lease_liability_closing=state.liability,
        rou_depreciation=ZERO,
        rou_asset_balance=state.rou_asset,
        event=INITIAL_RECOGNITION,
        modification_adjustment=ZERO,
    )


def _remeasure(
    contract: LeaseContract,
    state: _SimulationState,
    month: int,
    due: Sequence[LeaseModification],
    config: LeaseConfig,
) -> tuple[str, Decimal]:
    """Apply the month's modifications and re-measure both balances."""
    for modification in due:
        state.apply(modification.new_values, config)

    remaining = state.term_months - (month - 1)
    new_liability = state.present_value(remaining)
    adjustment = new_liability - state.liability

    state.liability = new_liability
    state.rou_asset = max(ZERO, state.rou_asset + adjustment)
    state.monthly_depreciation = state.depreciation_over(remaining)

    label = "Mod: " + " + ".join(m.modification_type.value for m in due)

    if len(due) > 1:
        logger.warning("multiple_modifications_in_month", extra={
            "lease_id": str(contract.id),
            "period": month,
            "modification_ids": [str(m.id) for m in due],
        })
    logger.info("lease_remeasured", extra={
        "lease_id": str(contract.id),
        "period": month,
        "remaining_months": remaining,
        "new_liability": str(new_liability),
        "adjustment": str(adjustment),
    })
    return label, adjustment


def _ended_row(
    contract: LeaseContract,
    state: _SimulationState,
    month: int,
    row_date: date,
    event: str,
    adjustment: Decimal,
) -> AmortizationRow:
    """Final row when a modification moves the term end behind this month.

    The remeasured liability is already zero.  No interest accrues and no
    payment falls due; whatever ROU balance survived the remeasurement is
    written off as this row's depreciation.
    """
    written_off = state.rou_asset
    state.rou_asset = ZERO
    state.monthly_depreciation = ZERO

    logger.info("lease_ended_by_modification", extra={
        "lease_id": str(contract.id),
        "period": month,
        "term_months": state.term_months,
        "rou_written_off": str(written_off),
    })
    return AmortizationRow(
        period=month,
        date=row_date,
        payment=ZERO,
        interest_expense=ZERO,
        principal_repayment=ZERO,
        lease_liability_closing=state.liability,
        rou_depreciation=written_off,
        rou_asset_balance=ZERO,
        event=event,
        modification_adjustment=adjustment,
    )


@traced_engine("lease_schedule", "1.0", fingerprint_fields=("contract", "config"))
def generate_schedule(
    contract: LeaseContract,
    config: LeaseConfig | None = None,
    *,
    strict: bool = False,
) -> tuple[AmortizationRow, ...]:
    """
    Simulate the contract from inception to term end.

    Returns ``term + 1`` rows (fewer when a modification ends the lease
    early), or ``safety_cap_periods + 1`` when the term runs past the cap.  A capped schedule is logged as ``schedule_truncated``;
    with ``strict=True`` it raises ``ScheduleTruncatedError`` instead.
    """
    config = config or LeaseConfig.with_defaults()
    tolerance = config.balance_clamp_tolerance

    with LogContext.bind(lease_id=str(contract.id), contract_number=contract.contract_number):
        inception = reconstruct_inception_terms(contract)
        state = _SimulationState.from_contract(inception, config)
        modifications = chronological(contract.modifications)
        applied: set[UUID] = set()

        rows = [_recognize(inception, state, contract.start_date)]

        month = 1
        while month <= state.term_months and month <= config.safety_cap_periods:
            row_date = add_months(contract.start_date, month)

            event: str | None = None
            adjustment = ZERO
            due = [m for m in modifications if _same_month(m.effective_date, row_date)]
            if due:
                event, adjustment = _remeasure(contract, state, month, due, config)
                applied.update(m.id for m in due)
                if month > state.term_months:
                    rows.append(_ended_row(contract, state, month, row_date, event, adjustment))
                    break

            interest = state.liability * (state.incremental_borrowing_rate / HUNDRED) / TWELVE
            payment = state.payment_due(month)

            state.liability = _clamp(state.liability + interest - payment, tolerance)
            state.rou_asset = _clamp(state.rou_asset - state.monthly_depreciation, tolerance)

            rows.append(AmortizationRow(
                period=month,
                date=row_date,
                payment=payment,
                interest_expense=interest,
                principal_repayment=payment - interest,
                lease_liability_closing=state.liability,
                rou_depreciation=state.monthly_depreciation,
                rou_asset_balance=state.rou_asset,
                event=event,
                modification_adjustment=adjustment,
            ))
            month += 1

        for modification in modifications:
            if modification.id not in applied:
                logger.debug("modification_outside_timeline", extra={
                    "modification_id": str(modification.id),
                    "effective_date": modification.effective_date.isoformat(),
                })

        truncated = month <= state.term_months
        if truncated:
            logger.warning("schedule_truncated", extra={
                "term_months": state.term_months,
                "safety_cap_periods": config.safety_cap_periods,
            })
            if strict:
                raise ScheduleTruncatedError(
                    str(contract.id), state.term_months, config.safety_cap_periods,
                )

        logger.info("lease_schedule_generated", extra={
            "periods": len(rows) - 1,
            "modifications_applied": len(applied),
            "truncated": truncated,
        })

    return tuple(rows)

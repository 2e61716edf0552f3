"""
Lease Accounting Pure Calculation Functions.

Contract-level wrappers over the engines: the present value of a contract's
current payment stream, the annuity convention implied by its payment
timing, and the monthly cash-out figure used for portfolio summaries.
"""

from decimal import Decimal
from typing import Any

from lease_engines.present_value import (
    AnnuityTiming,
    months_per_period,
    present_value_of_payments,
)
from lease_kernel.domain.values import coerce_decimal
from lease_modules.lease.models import LeaseContract, PaymentTiming


def coerce_payment_timing(value: Any) -> PaymentTiming:
    """Payment timing for ``value``; anything unrecognised reads as in arrears."""
    if isinstance(value, PaymentTiming):
        return value
    try:
        return PaymentTiming(value)
    except ValueError:
        return PaymentTiming.IN_ARREARS


def annuity_timing(payment_timing: Any) -> AnnuityTiming:
    """In-advance payments form an annuity-due; in-arrears an ordinary annuity."""
    if coerce_payment_timing(payment_timing) is PaymentTiming.IN_ADVANCE:
        return AnnuityTiming.DUE
    return AnnuityTiming.ORDINARY


def calculate_present_value(contract: LeaseContract) -> Decimal:
    """
    Present value of the contract's current payments over its full term.

    Used for liability totals across a portfolio; the schedule itself
    starts from the reconstructed inception terms instead.
    """
    return present_value_of_payments(
        payment=contract.payment_amount,
        annual_rate_percent=contract.incremental_borrowing_rate,
        periods_per_year=contract.payment_frequency,
        remaining_months=contract.term_months,
        timing=annuity_timing(contract.payment_timing),
    )


def monthly_cash_out(contract: LeaseContract) -> Decimal:
    """Periodic payment spread evenly over the months of its cycle."""
    payment = coerce_decimal(contract.payment_amount)
    return payment / months_per_period(contract.payment_frequency)

"""
lease_engines.present_value -- Present value of a level-payment annuity.

Responsibility:
    Discount a remaining stream of equal periodic lease payments to present
    value.  Used at lease inception and again whenever a modification
    forces the liability to be re-measured.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Never raises on numeric input: missing or non-finite payment and rate
      are treated as zero, a missing or non-positive frequency as monthly.
    - Decimal-only arithmetic.  Fractional period counts are discounted
      with a non-integral ``Decimal`` exponent rather than rounded.

Failure modes:
    (none -- degenerate input degrades to a zero present value)
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from lease_kernel.domain.values import ZERO, coerce_decimal

ONE = Decimal("1")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")
DEFAULT_PERIODS_PER_YEAR = Decimal("12")


class AnnuityTiming(str, Enum):
    """When within each period the payment falls."""

    ORDINARY = "ordinary"  # end of period, in arrears
    DUE = "due"            # start of period, in advance


def _frequency(periods_per_year: Any) -> Decimal:
    frequency = coerce_decimal(periods_per_year, default=DEFAULT_PERIODS_PER_YEAR)
    if frequency <= 0:
        return DEFAULT_PERIODS_PER_YEAR
    return frequency


def months_per_period(periods_per_year: Any) -> Decimal:
    """12 / frequency, with a missing or non-positive frequency read as monthly."""
    return MONTHS_PER_YEAR / _frequency(periods_per_year)


def rate_per_period(annual_rate_percent: Any, periods_per_year: Any) -> Decimal:
    """Annual percentage rate converted to a per-payment-period fraction."""
    annual = coerce_decimal(annual_rate_percent) / HUNDRED
    return annual / _frequency(periods_per_year)


def present_value_of_payments(
    payment: Any,
    annual_rate_percent: Any,
    periods_per_year: Any,
    remaining_months: Any,
    timing: AnnuityTiming = AnnuityTiming.ORDINARY,
) -> Decimal:
    """
    Present value of the remaining payments.

    PV = payment * (1 - (1 + r)^-n) / r, times (1 + r) when payments are
    due in advance.  ``n`` is ``remaining_months`` expressed in payment
    periods and may be fractional.  With a zero rate the result is simply
    ``payment * n``.
    """
    months = coerce_decimal(remaining_months)
    if months <= 0:
        return ZERO

    amount = coerce_decimal(payment)
    period_months = months_per_period(periods_per_year)
    r = rate_per_period(annual_rate_percent, periods_per_year)
    periods = months / period_months

    if r == 0:
        return amount * periods

    one_plus_r = ONE + r
    if one_plus_r <= 0:
        return ZERO

    pv = amount * (ONE - one_plus_r ** -periods) / r

    if timing == AnnuityTiming.DUE:
        pv = pv * one_plus_r

    return pv

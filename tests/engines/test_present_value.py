"""
Tests for the present value engine.

Tests cover:
- Ordinary annuity and annuity-due
- Zero and missing rates
- Payment frequency (monthly, quarterly, annual, invalid)
- Fractional period counts
- Degenerate numeric input
"""

from decimal import Decimal

import pytest

from lease_engines.present_value import (
    AnnuityTiming,
    months_per_period,
    present_value_of_payments,
    rate_per_period,
)

CENT = Decimal("0.01")


def _q(value: Decimal) -> Decimal:
    return value.quantize(CENT)


class TestOrdinaryAnnuity:
    """Payments at the end of each period."""

    def test_twelve_percent_monthly(self):
        """1000/month for 12 months at 12% per annum."""
        pv = present_value_of_payments(Decimal("1000"), Decimal("12"), 12, 12)
        assert _q(pv) == Decimal("11255.08")

    def test_six_percent_monthly(self):
        pv = present_value_of_payments(Decimal("1000"), Decimal("6"), 12, 12)
        assert _q(pv) == Decimal("11618.93")

    def test_quarterly_payments(self):
        """3000/quarter at 12% is four periods at 3%."""
        pv = present_value_of_payments(Decimal("3000"), Decimal("12"), 4, 12)
        assert _q(pv) == Decimal("11151.30")

    def test_result_is_decimal(self):
        pv = present_value_of_payments(Decimal("1000"), Decimal("6"), 12, 12)
        assert isinstance(pv, Decimal)

    def test_pv_below_undiscounted_total(self):
        pv = present_value_of_payments(Decimal("1000"), Decimal("6"), 12, 24)
        assert Decimal("0") < pv < Decimal("24000")


class TestAnnuityDue:
    """Payments at the start of each period."""

    def test_due_is_ordinary_times_one_plus_rate(self):
        ordinary = present_value_of_payments(Decimal("1000"), Decimal("12"), 12, 12)
        due = present_value_of_payments(
            Decimal("1000"), Decimal("12"), 12, 12, timing=AnnuityTiming.DUE,
        )
        assert due == ordinary * Decimal("1.01")
        assert _q(due) == Decimal("11367.63")

    def test_due_with_zero_rate_equals_ordinary(self):
        ordinary = present_value_of_payments(Decimal("500"), Decimal("0"), 12, 10)
        due = present_value_of_payments(
            Decimal("500"), Decimal("0"), 12, 10, timing=AnnuityTiming.DUE,
        )
        assert ordinary == due == Decimal("5000")


class TestZeroRate:
    """Zero rate is the undiscounted sum of the payments."""

    def test_monthly(self):
        pv = present_value_of_payments(Decimal("1000"), Decimal("0"), 12, 12)
        assert pv == Decimal("12000")

    def test_quarterly(self):
        pv = present_value_of_payments(Decimal("1000"), Decimal("0"), 4, 12)
        assert pv == Decimal("4000")

    def test_missing_rate_reads_as_zero(self):
        pv = present_value_of_payments(Decimal("1000"), None, 12, 6)
        assert pv == Decimal("6000")


class TestFractionalPeriods:
    """Remaining months that do not fill a whole payment period."""

    def test_half_an_annual_period(self):
        pv = present_value_of_payments(Decimal("1000"), Decimal("12"), 1, 6)
        assert _q(pv) == Decimal("459.07")

    def test_fraction_lies_between_whole_periods(self):
        one = present_value_of_payments(Decimal("3000"), Decimal("8"), 4, 3)
        two = present_value_of_payments(Decimal("3000"), Decimal("8"), 4, 6)
        between = present_value_of_payments(Decimal("3000"), Decimal("8"), 4, 4)
        assert one < between < two

    def test_zero_rate_fraction_is_proportional(self):
        pv = present_value_of_payments(Decimal("1200"), Decimal("0"), 4, 4)
        assert _q(pv) == Decimal("1600.00")


class TestDegenerateInput:
    """Bad numbers never raise; they degrade."""

    @pytest.mark.parametrize("months", [0, -3, None, "abc", float("nan")])
    def test_no_remaining_months(self, months):
        assert present_value_of_payments(Decimal("1000"), Decimal("6"), 12, months) == Decimal("0")

    @pytest.mark.parametrize("payment", [None, float("nan"), "", Decimal("NaN")])
    def test_unusable_payment(self, payment):
        assert present_value_of_payments(payment, Decimal("6"), 12, 12) == Decimal("0")

    def test_float_payment_converted_via_str(self):
        pv = present_value_of_payments(0.1, Decimal("0"), 12, 10)
        assert pv == Decimal("1.0")

    @pytest.mark.parametrize("frequency", [0, -4, None, "monthly"])
    def test_invalid_frequency_reads_as_monthly(self, frequency):
        pv = present_value_of_payments(Decimal("1000"), Decimal("12"), frequency, 12)
        assert _q(pv) == Decimal("11255.08")

    def test_rate_at_minus_one_hundred_percent_per_period(self):
        """1 + r <= 0 has no meaningful discount factor."""
        pv = present_value_of_payments(Decimal("1000"), Decimal("-1200"), 12, 12)
        assert pv == Decimal("0")


class TestHelpers:
    """Frequency and rate conversions."""

    @pytest.mark.parametrize(
        ("frequency", "expected"),
        [(12, Decimal("1")), (4, Decimal("3")), (1, Decimal("12")), (0, Decimal("1"))],
    )
    def test_months_per_period(self, frequency, expected):
        assert months_per_period(frequency) == expected

    def test_rate_per_period_quarterly(self):
        assert rate_per_period(Decimal("12"), 4) == Decimal("0.03")

    def test_rate_per_period_monthly(self):
        assert rate_per_period(Decimal("6"), 12) == Decimal("0.005")

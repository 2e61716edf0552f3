"""
Tests for inception-state reconstruction and replay.

Validates:
- Unwinding the modification log recovers the inception terms
- Replaying the log recovers the current terms
- Chronological ordering by effective date, then recorded_at
"""

from dataclasses import replace
from datetime import UTC, date, datetime
from decimal import Decimal

from lease_modules.lease.models import (
    LeaseExtension,
    LeaseStatus,
    ModificationType,
    PaymentChange,
)
from lease_modules.lease.reconstruction import (
    chronological,
    reconstruct_inception_terms,
    replay_modifications,
)
from lease_modules.lease.service import LeaseAccountingService
from tests.conftest import make_lease


def _modified_lease(clock):
    """Extension then payment change then termination, recorded a day apart."""
    service = LeaseAccountingService(clock=clock)
    lease = make_lease()
    lease = service.record_modification(
        lease, ModificationType.EXTENSION, date(2024, 4, 1), {"term_months": 24},
    )
    clock.advance(86400)
    lease = service.record_modification(
        lease, ModificationType.PAYMENT_CHANGE, date(2024, 7, 1),
        {"payment_amount": Decimal("1200"), "incremental_borrowing_rate": Decimal("7")},
    )
    clock.advance(86400)
    lease = service.record_modification(
        lease, ModificationType.TERMINATION, date(2024, 10, 1), {"term_months": 10},
    )
    return lease


class TestReconstruction:
    """Unwinding newest-first restores the original terms."""

    def test_no_modifications_is_identity(self):
        lease = make_lease()
        assert reconstruct_inception_terms(lease) == lease

    def test_recovers_inception_terms(self, deterministic_clock):
        lease = _modified_lease(deterministic_clock)
        inception = reconstruct_inception_terms(lease)

        assert inception.term_months == 12
        assert inception.payment_amount == Decimal("1000")
        assert inception.incremental_borrowing_rate == Decimal("6")
        assert inception.status == LeaseStatus.ACTIVE
        assert inception.modifications == ()

    def test_inception_equals_original_contract(self, deterministic_clock):
        lease = _modified_lease(deterministic_clock)
        assert reconstruct_inception_terms(lease) == make_lease()

    def test_replay_recovers_current_terms(self, deterministic_clock):
        lease = _modified_lease(deterministic_clock)
        inception = reconstruct_inception_terms(lease)

        replayed = replay_modifications(inception, lease.modifications)

        assert replayed == replace(lease, modifications=())
        assert replayed.term_months == 10
        assert replayed.status == LeaseStatus.TERMINATED

    def test_same_field_changed_twice(self, deterministic_clock):
        service = LeaseAccountingService(clock=deterministic_clock)
        lease = make_lease()
        lease = service.record_modification(
            lease, "Payment Change", date(2024, 3, 1), {"payment_amount": Decimal("1100")},
        )
        deterministic_clock.advance()
        lease = service.record_modification(
            lease, "Payment Change", date(2024, 6, 1), {"payment_amount": Decimal("1300")},
        )

        assert reconstruct_inception_terms(lease).payment_amount == Decimal("1000")

    def test_log_order_does_not_matter(self, deterministic_clock):
        lease = _modified_lease(deterministic_clock)
        shuffled = replace(lease, modifications=tuple(reversed(lease.modifications)))
        assert reconstruct_inception_terms(shuffled) == reconstruct_inception_terms(lease)


class TestChronological:
    """Processing order for the timeline."""

    def test_sorted_by_effective_date(self, deterministic_clock):
        lease = _modified_lease(deterministic_clock)
        ordered = chronological(lease.modifications)
        assert [m.effective_date for m in ordered] == [
            date(2024, 4, 1), date(2024, 7, 1), date(2024, 10, 1),
        ]

    def test_recorded_at_breaks_ties(self):
        later = PaymentChange(
            effective_date=date(2024, 7, 1),
            previous_values={"payment_amount": Decimal("1100")},
            new_values={"payment_amount": Decimal("1200")},
            recorded_at=datetime(2024, 7, 2, tzinfo=UTC),
        )
        earlier = PaymentChange(
            effective_date=date(2024, 7, 1),
            previous_values={"payment_amount": Decimal("1000")},
            new_values={"payment_amount": Decimal("1100")},
            recorded_at=datetime(2024, 7, 1, tzinfo=UTC),
        )
        assert chronological([later, earlier]) == (earlier, later)

    def test_untimestamped_sorts_first(self):
        stamped = LeaseExtension(
            effective_date=date(2024, 7, 1),
            previous_values={"term_months": 18},
            new_values={"term_months": 24},
            recorded_at=datetime(2024, 7, 1, 8, 0),
        )
        unstamped = LeaseExtension(
            effective_date=date(2024, 7, 1),
            previous_values={"term_months": 12},
            new_values={"term_months": 18},
        )
        assert chronological([stamped, unstamped]) == (unstamped, stamped)

    def test_identical_timestamps_follow_log_position(self, deterministic_clock):
        service = LeaseAccountingService(clock=deterministic_clock)
        lease = service.record_modification(
            make_lease(), "Payment Change", date(2024, 7, 1), {"payment_amount": Decimal("1100")},
        )
        lease = service.record_modification(
            lease, "Payment Change", date(2024, 7, 1), {"payment_amount": Decimal("1200")},
        )

        first, second = chronological(lease.modifications)

        assert first.new_values["payment_amount"] == Decimal("1100")
        assert second.new_values["payment_amount"] == Decimal("1200")
        assert reconstruct_inception_terms(lease).payment_amount == Decimal("1000")

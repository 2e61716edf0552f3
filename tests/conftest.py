"""
Pytest fixtures for the lease accounting core test suite.

Provides:
- A contract factory with sensible defaults
- The standard scenario contract (1000/month, 6%, 12 months, in arrears)
- Ledger account mapping and registry
- Deterministic clock
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from lease_kernel.domain.clock import DeterministicClock
from lease_kernel.domain.ledger_accounts import LedgerAccountMapping, LedgerAccountRegistry
from lease_kernel.logging_config import LogContext, reset_logging
from lease_modules.lease.config import LeaseConfig
from lease_modules.lease.models import (
    LeaseContract,
    LeaseStatus,
    PaymentFrequency,
    PaymentTiming,
)

TEST_LEASE_ID = UUID("00000000-0000-4000-8000-000000000001")
START_DATE = date(2024, 1, 1)


def make_lease(**overrides) -> LeaseContract:
    """Contract with scenario defaults; any field may be overridden."""
    fields = {
        "id": TEST_LEASE_ID,
        "contract_number": "LC-2024-001",
        "lessee_name": "Acme Trading LLC",
        "asset_name": "HQ Building Floor 3",
        "start_date": START_DATE,
        "term_months": 12,
        "payment_amount": Decimal("1000"),
        "payment_frequency": PaymentFrequency.MONTHLY,
        "payment_timing": PaymentTiming.IN_ARREARS,
        "incremental_borrowing_rate": Decimal("6"),
        "status": LeaseStatus.ACTIVE,
    }
    fields.update(overrides)
    return LeaseContract(**fields)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def basic_lease() -> LeaseContract:
    return make_lease()


@pytest.fixture
def ledger_accounts() -> LedgerAccountMapping:
    return LedgerAccountMapping.with_defaults()


@pytest.fixture
def ledger_registry() -> LedgerAccountRegistry:
    return LedgerAccountRegistry()


@pytest.fixture
def lease_config() -> LeaseConfig:
    return LeaseConfig.with_defaults()


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(datetime(2024, 7, 15, 9, 30, tzinfo=timezone.utc))

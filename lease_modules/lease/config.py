"""
Lease Accounting Configuration Schema.

Numeric settings of the schedule simulator and journal generator: the
period cap, the balance snap-to-zero tolerance and the smallest
remeasurement adjustment that is worth a journal entry.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self

from lease_kernel.logging_config import get_logger

logger = get_logger("modules.lease.config")


@dataclass(frozen=True)
class LeaseConfig:
    """Configuration schema for the lease accounting module."""

    # Hard bound on simulated months (50 years)
    safety_cap_periods: int = 600

    # Balances closer than this to zero are snapped to zero
    balance_clamp_tolerance: Decimal = Decimal("1")

    # Remeasurement adjustments at or below this are not posted
    adjustment_posting_threshold: Decimal = Decimal("0.01")

    default_payment_frequency: int = 12

    def __post_init__(self):
        if self.safety_cap_periods <= 0:
            raise ValueError("safety_cap_periods must be positive")
        if self.balance_clamp_tolerance < 0:
            raise ValueError("balance_clamp_tolerance cannot be negative")
        if self.adjustment_posting_threshold < 0:
            raise ValueError("adjustment_posting_threshold cannot be negative")
        if self.default_payment_frequency not in (1, 2, 3, 4, 6, 12):
            raise ValueError("default_payment_frequency must divide 12")

        logger.debug(
            "lease_config_initialized",
            extra={
                "safety_cap_periods": self.safety_cap_periods,
                "balance_clamp_tolerance": str(self.balance_clamp_tolerance),
                "adjustment_posting_threshold": str(self.adjustment_posting_threshold),
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the standard defaults."""
        return cls()

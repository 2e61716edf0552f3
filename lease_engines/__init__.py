"""
Module: lease_engines
Responsibility:
    Package entrypoint that re-exports the pure calculation engines used by
    the lease module.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import lease_kernel (values, logging).
    MUST NOT import lease_modules.

Invariants enforced:
    - Purity: engines never read the wall clock.
    - Decimal-only arithmetic.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from lease_engines import AnnuityTiming, present_value_of_payments
    from lease_engines.tracer import traced_engine
"""

from lease_engines.present_value import (
    AnnuityTiming,
    months_per_period,
    present_value_of_payments,
    rate_per_period,
)
from lease_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "AnnuityTiming",
    "compute_input_fingerprint",
    "months_per_period",
    "present_value_of_payments",
    "rate_per_period",
    "traced_engine",
]

"""
Numeric value coercion for boundary inputs.

Contract records arrive from collaborators that may leave a field empty or
hand over a float NaN.  The engines never reject such input; they coerce it
to a finite ``Decimal`` (or ``int``) through these helpers and carry on.
Floats are converted via ``str()`` so ``0.1`` becomes ``Decimal("0.1")``
rather than its binary expansion.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")


def coerce_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Finite ``Decimal`` for ``value``; ``default`` when missing or not a number."""
    if value is None or isinstance(value, bool):
        return default
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return default
    if not result.is_finite():
        return default
    return result


def coerce_int(value: Any, default: int = 0) -> int:
    """Whole number for ``value`` (truncated); ``default`` when unusable."""
    result = coerce_decimal(value, default=Decimal(default))
    return int(result)

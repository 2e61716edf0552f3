"""
Typed Exception Hierarchy for the Lease Accounting Core.

Every error raised by the core has its own class and a machine-readable
``code`` class attribute, and carries its context as attributes rather than
only inside the message string.  Callers catch by type, never by message.

    LeaseKernelError (base)
    |
    +-- ModificationError
    |   +-- InvalidModificationError
    |
    +-- ScheduleError
    |   +-- ScheduleTruncatedError
    |
    +-- PostingError
    |   +-- UnbalancedEntryError
    |
    +-- LedgerAccountError
        +-- UnknownLedgerAccountError
        +-- IncompleteLedgerMappingError

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Modification    | INVALID_MODIFICATION        | previous/new values not exact inverses,
                |                             | or a field the kind may not change
----------------|-----------------------------|-----------------------------------------
Schedule        | SCHEDULE_TRUNCATED          | strict generation hit the period cap
----------------|-----------------------------|-----------------------------------------
Posting         | UNBALANCED_ENTRY            | Debit amount != credit amount
----------------|-----------------------------|-----------------------------------------
Ledger accounts | UNKNOWN_LEDGER_ACCOUNT      | Mapping key is not a known role
                | INCOMPLETE_LEDGER_MAPPING   | Mapping entry lacks a code or name

Numeric degeneracy (NaN payment, zero rate, missing term) is NOT an error:
the engines coerce it to zero and carry on.  Only structural problems raise.
"""

from decimal import Decimal


class LeaseKernelError(Exception):
    """
    Base exception for all lease accounting core errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEASE_KERNEL_ERROR"


# Modification-related exceptions


class ModificationError(LeaseKernelError):
    """Base exception for lease modification errors."""

    code: str = "MODIFICATION_ERROR"


class InvalidModificationError(ModificationError):
    """A modification's change sets are malformed for its kind."""

    code: str = "INVALID_MODIFICATION"

    def __init__(self, modification_type: str, reason: str, fields: tuple[str, ...] = ()):
        self.modification_type = modification_type
        self.reason = reason
        self.fields = fields
        detail = f" (fields: {', '.join(fields)})" if fields else ""
        super().__init__(
            f"Invalid {modification_type} modification: {reason}{detail}"
        )


# Schedule-related exceptions


class ScheduleError(LeaseKernelError):
    """Base exception for amortization schedule errors."""

    code: str = "SCHEDULE_ERROR"


class ScheduleTruncatedError(ScheduleError):
    """The simulation reached the period cap before the contract term ended."""

    code: str = "SCHEDULE_TRUNCATED"

    def __init__(self, lease_id: str, term_months: int, cap: int):
        self.lease_id = lease_id
        self.term_months = term_months
        self.cap = cap
        super().__init__(
            f"Schedule for lease {lease_id} truncated at {cap} periods "
            f"(term is {term_months} months)"
        )


# Posting-related exceptions


class PostingError(LeaseKernelError):
    """Base exception for journal posting errors."""

    code: str = "POSTING_ERROR"


class UnbalancedEntryError(PostingError):
    """Journal entry debit amount does not equal credit amount."""

    code: str = "UNBALANCED_ENTRY"

    def __init__(self, entry_id: str, debit_amount: Decimal, credit_amount: Decimal):
        self.entry_id = entry_id
        self.debit_amount = debit_amount
        self.credit_amount = credit_amount
        super().__init__(
            f"Entry {entry_id} is unbalanced: "
            f"debit={debit_amount}, credit={credit_amount}"
        )


# Ledger account exceptions


class LedgerAccountError(LeaseKernelError):
    """Base exception for ledger account mapping errors."""

    code: str = "LEDGER_ACCOUNT_ERROR"


class UnknownLedgerAccountError(LedgerAccountError):
    """Ledger account key is not one of the known posting roles."""

    code: str = "UNKNOWN_LEDGER_ACCOUNT"

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown ledger account key: {key}")


class IncompleteLedgerMappingError(LedgerAccountError):
    """A ledger account entry is missing its code or name."""

    code: str = "INCOMPLETE_LEDGER_MAPPING"

    def __init__(self, key: str, missing: tuple[str, ...]):
        self.key = key
        self.missing = missing
        super().__init__(
            f"Ledger account '{key}' is missing: {', '.join(missing)}"
        )

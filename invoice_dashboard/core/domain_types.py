"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId and CustomerId are opaque strings (the store decides their shape)
    - AmountCents is always an integer >= 1 once normalized
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and bind to SQL parameters without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", str)
CustomerId = NewType("CustomerId", str)


# ─── Value Types ─────────────────────────────────────────────────

AmountCents = NewType("AmountCents", int)   # >= 1
IsoDate = NewType("IsoDate", str)           # YYYY-MM-DD


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class ValidationMode(str, Enum):
    """How a validation failure reaches the caller.

    LENIENT returns a structured FormState; STRICT raises
    InvoiceValidationError (legacy flow, no error recovery).
    """
    LENIENT = "lenient"
    STRICT = "strict"


class InvoiceAction(str, Enum):
    """Mutating actions — the value is the verb used in user/log messages."""
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class FormField(str, Enum):
    """Form field names read from the submitted form."""
    CUSTOMER_ID = "customerId"
    AMOUNT = "amount"
    STATUS = "status"

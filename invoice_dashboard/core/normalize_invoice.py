"""Invoice Normalizer — derives storage-ready values from a validated invoice.

Invariants:
    - amount_cents = amount × 100 rounded ROUND_HALF_UP, computed in Decimal (no float drift)
    - date is the current UTC calendar day as YYYY-MM-DD
    - Pure: output depends only on the input and the (injectable) clock

Design Decisions:
    - Decimal quantize over int(round(float)): 0.29 × 100 must be 29, not 28
    - Naive datetimes treated as UTC: callers in tests pass datetime(2026, 1, 2)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from invoice_dashboard.core.domain_types import (
    AmountCents, CustomerId, InvoiceStatus, IsoDate,
)

_ONE_CENT = Decimal("1")


@dataclass(frozen=True)
class NormalizedInvoice:
    """Column values for one invoices row (id excluded)."""
    customer_id: CustomerId
    amount_cents: AmountCents
    status: InvoiceStatus
    date: IsoDate


def to_cents(amount: Decimal) -> AmountCents:
    """Convert a decimal currency amount to integer cents, half-up."""
    cents = (amount * 100).quantize(_ONE_CENT, rounding=ROUND_HALF_UP)
    return AmountCents(int(cents))


def utc_today(now: datetime | None = None) -> IsoDate:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return IsoDate(now.astimezone(timezone.utc).date().isoformat())


def normalize_invoice(validated, now: datetime | None = None) -> NormalizedInvoice:
    """Build the storage-ready row values for a ValidatedInvoice."""
    return NormalizedInvoice(
        customer_id=CustomerId(validated.customer_id),
        amount_cents=to_cents(validated.amount),
        status=validated.status,
        date=utc_today(now),
    )

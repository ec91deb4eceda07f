"""Invoice ORM — one row per invoice in the `invoices` table.

Invariants:
    - id is a string primary key generated on insert (UUID4 text)
    - amount is integer cents (BIGINT), never a fractional value
    - date is the issue day as YYYY-MM-DD text
    - status is one of InvoiceStatus values

Design Decisions:
    - String id over native UUID: update/delete accept whatever id the caller
      sends; an id that matches nothing affects zero rows instead of failing to bind
    - customer_id has no FK: customers are owned by another part of the dashboard
"""

import uuid

from sqlalchemy import BigInteger, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from invoice_dashboard.db.base import Base


def new_invoice_id() -> str:
    return str(uuid.uuid4())


class Invoice(Base):
    """Persisted invoice row."""
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("amount >= 1", name="ck_invoices_amount_positive"),
        CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status_valid",
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_invoice_id,
    )
    customer_id: Mapped[str] = mapped_column(
        String(36), nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    date: Mapped[str] = mapped_column(String(10), nullable=False)

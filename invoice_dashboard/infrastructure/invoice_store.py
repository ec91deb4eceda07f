"""SQL Invoice Store — single-statement invoice persistence over an AsyncSession.

Invariants:
    - Each mutating call issues exactly one parameterized statement, then commits
    - Values are always bound parameters (SQLAlchemy Core), never interpolated
    - update/delete return the affected row count; 0 is not an error
    - Any SQLAlchemyError rolls back and is re-raised as DatabaseError

Design Decisions:
    - Core insert/update/delete over ORM add/delete: no SELECT before the write,
      so an unknown id is a no-op instead of a lookup failure
    - Id generated here rather than by a server default: insert returns it
      without a RETURNING clause (works on SQLite and PostgreSQL alike)
"""

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_dashboard.core.domain_types import (
    AmountCents, CustomerId, InvoiceId, InvoiceStatus, IsoDate,
)
from invoice_dashboard.infrastructure.database import map_sqlalchemy_error
from invoice_dashboard.models.invoice import Invoice, new_invoice_id

logger = logging.getLogger(__name__)


class SqlInvoiceStore:
    """InvoiceStore implementation backed by the invoices table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(
        self, customer_id: CustomerId, amount_cents: AmountCents,
        status: InvoiceStatus, date: IsoDate,
    ) -> InvoiceId:
        invoice_id = InvoiceId(new_invoice_id())
        await self._execute(
            insert(Invoice).values(
                id=invoice_id,
                customer_id=customer_id,
                amount=amount_cents,
                status=InvoiceStatus(status).value,
                date=date,
            ),
            "insert",
        )
        return invoice_id

    async def update(
        self, invoice_id: InvoiceId, customer_id: CustomerId,
        amount_cents: AmountCents, status: InvoiceStatus,
    ) -> int:
        return await self._execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=customer_id,
                amount=amount_cents,
                status=InvoiceStatus(status).value,
            ),
            "update",
        )

    async def delete(self, invoice_id: InvoiceId) -> int:
        return await self._execute(
            delete(Invoice).where(Invoice.id == invoice_id), "delete",
        )

    async def get(self, invoice_id: InvoiceId) -> Invoice | None:
        result = await self.db.execute(
            select(Invoice).where(Invoice.id == invoice_id),
        )
        return result.scalar_one_or_none()

    async def list_invoices(self, limit: int = 10, offset: int = 0) -> list[Invoice]:
        """Newest first; id breaks ties so paging is stable."""
        result = await self.db.execute(
            select(Invoice)
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(limit)
            .offset(offset),
        )
        return list(result.scalars().all())

    async def _execute(self, statement, operation: str) -> int:
        try:
            result = await self.db.execute(statement)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.debug(
                f"Invoice {operation} statement failed: {e}",
                extra={"operation": operation},
            )
            raise map_sqlalchemy_error(e, operation) from e
        return result.rowcount

"""Boundary Protocols — contracts between the invoice pipeline and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store, cache and navigation accessed only through these Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Navigator.redirect is NoReturn: it ends the request, nothing after it runs
"""

from typing import NoReturn, Protocol

from invoice_dashboard.core.domain_types import (
    AmountCents, CustomerId, InvoiceId, InvoiceStatus, IsoDate,
)


class InvoiceStore(Protocol):
    """Contract for invoice persistence — one statement per call."""
    async def insert(
        self, customer_id: CustomerId, amount_cents: AmountCents,
        status: InvoiceStatus, date: IsoDate,
    ) -> InvoiceId: ...
    async def update(
        self, invoice_id: InvoiceId, customer_id: CustomerId,
        amount_cents: AmountCents, status: InvoiceStatus,
    ) -> int: ...
    async def delete(self, invoice_id: InvoiceId) -> int: ...


class CacheInvalidator(Protocol):
    """Marks cached rendered output for a route path as stale."""
    def revalidate_path(self, path: str) -> None: ...


class Navigator(Protocol):
    """Ends the current request by sending the client to another path."""
    def redirect(self, path: str) -> NoReturn: ...

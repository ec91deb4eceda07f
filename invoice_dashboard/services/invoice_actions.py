"""Invoice Actions — create/update/delete pipeline: validate, normalize, persist, revalidate, redirect.

Invariants:
    - Validation failure in LENIENT mode returns FormState and touches no collaborator
    - Validation failure in STRICT mode raises InvoiceValidationError (no recovery)
    - DatabaseError from the store is logged and swallowed, never surfaced
    - create/update: revalidate + redirect run unconditionally after the write attempt
    - delete: revalidate runs inside the try, so a failed delete skips it; no redirect
    - No state kept between calls (collaborators are injected per request)

Design Decisions:
    - Fire-and-forget persistence: a failed write still lands the user on the
      invoices list, same as a successful one
    - Delete's in-try revalidation kept distinct from create/update
    - Only DatabaseError is swallowed: programming errors still propagate
"""

import logging
from collections.abc import Mapping
from datetime import datetime

from invoice_dashboard.core.domain_types import (
    InvoiceAction, InvoiceId, ValidationMode,
)
from invoice_dashboard.core.errors import DatabaseError
from invoice_dashboard.core.normalize_invoice import normalize_invoice
from invoice_dashboard.core.repository_protocols import (
    CacheInvalidator, InvoiceStore, Navigator,
)
from invoice_dashboard.core.validate_invoice import validate_invoice
from invoice_dashboard.schemas.invoice import FormState

logger = logging.getLogger(__name__)

DEFAULT_INVOICES_PATH = "/dashboard/invoices"


def database_error_message(action: InvoiceAction) -> str:
    return f"Database Error: Failed to {action.value} Invoice."


class InvoiceActions:
    """Server-side form actions for invoices."""

    def __init__(
        self,
        store: InvoiceStore,
        cache: CacheInvalidator,
        navigator: Navigator,
        invoices_path: str = DEFAULT_INVOICES_PATH,
        clock=None,
    ):
        self.store = store
        self.cache = cache
        self.navigator = navigator
        self.invoices_path = invoices_path
        self._clock = clock

    async def create_invoice(
        self, form: Mapping, mode: ValidationMode = ValidationMode.LENIENT,
    ) -> FormState:
        """Validate and insert a new invoice, then redirect to the list.

        Returns FormState only when lenient validation fails; otherwise
        navigator.redirect() ends the call.
        """
        outcome = validate_invoice(form, InvoiceAction.CREATE, mode)
        if not outcome.ok:
            return self._rejected(outcome, InvoiceAction.CREATE)

        row = normalize_invoice(outcome.invoice, self._now())
        try:
            invoice_id = await self.store.insert(
                row.customer_id, row.amount_cents, row.status, row.date,
            )
            logger.info(
                f"Invoice {invoice_id} created ({row.amount_cents} cents)",
                extra={"invoice_id": invoice_id, "operation": "insert"},
            )
        except DatabaseError as e:
            self._log_swallowed(InvoiceAction.CREATE, e)

        self.cache.revalidate_path(self.invoices_path)
        self.navigator.redirect(self.invoices_path)

    async def update_invoice(
        self,
        invoice_id: InvoiceId,
        form: Mapping,
        mode: ValidationMode = ValidationMode.LENIENT,
    ) -> FormState:
        """Validate and update invoice `invoice_id`, then redirect to the list.

        No existence check: an unknown id updates zero rows and still redirects.
        """
        outcome = validate_invoice(form, InvoiceAction.UPDATE, mode)
        if not outcome.ok:
            return self._rejected(outcome, InvoiceAction.UPDATE, invoice_id)

        row = normalize_invoice(outcome.invoice, self._now())
        try:
            rowcount = await self.store.update(
                invoice_id, row.customer_id, row.amount_cents, row.status,
            )
            self._log_rowcount(invoice_id, "update", rowcount)
        except DatabaseError as e:
            self._log_swallowed(InvoiceAction.UPDATE, e, invoice_id)

        self.cache.revalidate_path(self.invoices_path)
        self.navigator.redirect(self.invoices_path)

    async def delete_invoice(self, invoice_id: InvoiceId) -> None:
        """Delete invoice `invoice_id`. Safe to repeat."""
        try:
            rowcount = await self.store.delete(invoice_id)
            self._log_rowcount(invoice_id, "delete", rowcount)
            self.cache.revalidate_path(self.invoices_path)
        except DatabaseError as e:
            self._log_swallowed(InvoiceAction.DELETE, e, invoice_id)

    # ─── helpers ──────────────────────────────────────────────────

    def _now(self) -> datetime | None:
        return self._clock() if self._clock else None

    def _rejected(self, outcome, action: InvoiceAction, invoice_id=None) -> FormState:
        logger.info(
            f"{action.value} invoice rejected by validation",
            extra={
                "invoice_id": invoice_id,
                "fields": sorted(outcome.errors or {}),
            },
        )
        return FormState(errors=outcome.errors, message=outcome.message)

    def _log_swallowed(
        self, action: InvoiceAction, exc: DatabaseError, invoice_id=None,
    ) -> None:
        logger.error(
            database_error_message(action),
            extra={
                "invoice_id": invoice_id,
                "operation": exc.operation,
                "error_code": exc.code,
            },
            exc_info=True,
        )

    def _log_rowcount(self, invoice_id, operation: str, rowcount: int) -> None:
        if rowcount == 0:
            logger.info(
                f"Invoice {invoice_id} not found; {operation} affected no rows",
                extra={"invoice_id": invoice_id, "operation": operation, "rowcount": 0},
            )
        else:
            logger.info(
                f"Invoice {invoice_id} {operation}d",
                extra={"invoice_id": invoice_id, "operation": operation, "rowcount": rowcount},
            )

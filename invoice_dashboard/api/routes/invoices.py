"""Invoice Routes — form-action endpoints and the cached invoices list view.

Invariants:
    - Form endpoints read application/x-www-form-urlencoded or multipart bodies
    - Successful create/update ends in 303 → invoices list (via NavigationRedirect)
    - Lenient validation failure → 422 with FormState body; strict → 400 envelope
    - Delete always answers 204, whether or not the row existed or the write failed
    - GET list is served from route_cache until a mutation revalidates the path

Design Decisions:
    - Actions built per request from the request's AsyncSession: no shared state
    - Cache variant keyed by pagination params so each page is cached separately
    - Legacy strict create kept as a deprecated route for older forms
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_dashboard.config import get_settings
from invoice_dashboard.core.domain_types import InvoiceId, ValidationMode
from invoice_dashboard.core.errors import ResourceNotFoundError
from invoice_dashboard.infrastructure.database import get_db
from invoice_dashboard.infrastructure.invoice_store import SqlInvoiceStore
from invoice_dashboard.infrastructure.navigation import RedirectNavigator
from invoice_dashboard.infrastructure.route_cache import route_cache
from invoice_dashboard.schemas.invoice import (
    FormState, InvoiceListResponse, InvoiceResponse,
)
from invoice_dashboard.services.invoice_actions import InvoiceActions

logger = logging.getLogger(__name__)
INVOICES_PATH = get_settings().invoices_path
router = APIRouter(prefix=INVOICES_PATH, tags=["invoices"])

# 422 literal: starlette renamed the constant (UNPROCESSABLE_ENTITY → _CONTENT)
FORM_REJECTED_STATUS = 422


def get_invoice_actions(db: AsyncSession = Depends(get_db)) -> InvoiceActions:
    """FastAPI dependency: pipeline wired to the request's DB session."""
    return InvoiceActions(
        SqlInvoiceStore(db), route_cache, RedirectNavigator(), INVOICES_PATH,
    )


def _form_state_response(state: FormState) -> JSONResponse:
    return JSONResponse(
        status_code=FORM_REJECTED_STATUS,
        content=state.model_dump(),
    )


@router.post(
    "/create",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={FORM_REJECTED_STATUS: {"model": FormState}},
)
async def create_invoice(
    request: Request, actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Create an invoice from the submitted form."""
    form = await request.form()
    state = await actions.create_invoice(form)
    return _form_state_response(state)


@router.post(
    "/legacy/create",
    status_code=status.HTTP_303_SEE_OTHER,
    deprecated=True,
)
async def create_invoice_strict(
    request: Request, actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Create an invoice; any validation failure is a 400 error, not form state."""
    form = await request.form()
    await actions.create_invoice(form, mode=ValidationMode.STRICT)


@router.post(
    "/{invoice_id}/edit",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={FORM_REJECTED_STATUS: {"model": FormState}},
)
async def update_invoice(
    invoice_id: str,
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Update an invoice from the submitted form."""
    form = await request.form()
    state = await actions.update_invoice(InvoiceId(invoice_id), form)
    return _form_state_response(state)


@router.post("/{invoice_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: str, actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Delete an invoice."""
    await actions.delete_invoice(InvoiceId(invoice_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Invoices list view (cached until the next mutation)."""
    variant = f"limit={limit}&offset={offset}"
    cached = route_cache.get(INVOICES_PATH, variant)
    if cached is not None:
        return cached

    rows = await SqlInvoiceStore(db).list_invoices(limit, offset)
    view = InvoiceListResponse(
        invoices=[InvoiceResponse.model_validate(r) for r in rows],
        pagination={"limit": limit, "offset": offset},
    )
    route_cache.put(INVOICES_PATH, view, variant)
    return view


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(invoice_id: str, db: AsyncSession = Depends(get_db)):
    """Single invoice, used to prefill the edit form."""
    invoice = await SqlInvoiceStore(db).get(InvoiceId(invoice_id))
    if not invoice:
        raise ResourceNotFoundError("Invoice", invoice_id)
    return InvoiceResponse.model_validate(invoice)

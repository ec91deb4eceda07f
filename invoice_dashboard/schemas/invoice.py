"""Invoice Schemas — form state and invoice views returned to the dashboard.

Invariants:
    - FormState.errors keys are form field names (customerId, amount, status)
    - FormState with no errors and no message is the initial (untouched) form
    - InvoiceResponse.amount is integer cents, exactly as stored

Design Decisions:
    - FormState mirrors what the form component renders inline: per-field
      message lists plus one summary message
"""

from pydantic import BaseModel, ConfigDict, Field

from invoice_dashboard.core.domain_types import InvoiceStatus


class FormState(BaseModel):
    """Result handed back to the invoice form after a rejected submission."""
    errors: dict[str, list[str]] | None = None
    message: str | None = None


class InvoiceResponse(BaseModel):
    """Single invoice row as shown in the list and the edit form."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    amount: int = Field(ge=0)
    status: InvoiceStatus
    date: str


class InvoiceListResponse(BaseModel):
    """Paginated invoices view."""
    invoices: list[InvoiceResponse]
    pagination: dict[str, int]

"""Invoice Form Validation — maps untyped form fields to a ValidatedInvoice.

Invariants:
    - One schema for every call site; ValidationMode decides how failures surface
    - LENIENT never raises: failures come back as field errors + message
    - STRICT raises InvoiceValidationError with the same field errors
    - Every failing field is reported (fields validated independently)
    - A ValidatedInvoice always has: non-empty customer_id, amount > 0 that is
      between one cent and MAX_AMOUNT_CENTS after rounding, status in InvoiceStatus

Design Decisions:
    - Absent form fields are read as None and fed to the schema, so a missing
      field gets the field's own message rather than a generic "field required"
    - PydanticCustomError keeps user-facing messages verbatim (no "Value error, " prefix)
    - FIELD_MESSAGES is a read-only mapping: process-wide static configuration
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from invoice_dashboard.core.domain_types import (
    FormField, InvoiceAction, InvoiceStatus, ValidationMode,
)
from invoice_dashboard.core.errors import ErrorContext, InvoiceValidationError
from invoice_dashboard.core.normalize_invoice import to_cents

FIELD_MESSAGES: Mapping[FormField, str] = MappingProxyType({
    FormField.CUSTOMER_ID: "Please select a customer.",
    FormField.AMOUNT: "Please enter an amount greater than $0.",
    FormField.STATUS: "Please select an invoice status.",
})

_STATUSES = frozenset(s.value for s in InvoiceStatus)

# invoices.amount is BIGINT cents
MAX_AMOUNT_CENTS = 2**63 - 1
# dollar amounts past this magnitude exceed MAX_AMOUNT_CENTS; checked before to_cents
# so huge exponents never reach Decimal.quantize
_MAX_AMOUNT_ADJUSTED = len(str(MAX_AMOUNT_CENTS)) - 3


def _field_error(form_field: FormField) -> PydanticCustomError:
    return PydanticCustomError(
        f"invalid_{form_field.name.lower()}", FIELD_MESSAGES[form_field],
    )


def coerce_amount(value: Any) -> Decimal | None:
    """Coerce a raw form value to a finite Decimal, or None if it isn't numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    return amount if amount.is_finite() else None


class ValidatedInvoice(BaseModel):
    """Invoice fields that passed the form schema."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer_id: str = Field(alias=FormField.CUSTOMER_ID.value)
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def check_customer_id(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise _field_error(FormField.CUSTOMER_ID)
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v: Any) -> Decimal:
        amount = coerce_amount(v)
        if (
            amount is None or amount <= 0
            or amount.adjusted() > _MAX_AMOUNT_ADJUSTED
        ):
            raise _field_error(FormField.AMOUNT)
        # sub-cent amounts would normalize to 0 cents
        if not 1 <= to_cents(amount) <= MAX_AMOUNT_CENTS:
            raise _field_error(FormField.AMOUNT)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> str:
        if isinstance(v, InvoiceStatus):
            return v
        if not isinstance(v, str) or v not in _STATUSES:
            raise _field_error(FormField.STATUS)
        return v


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a lenient validation: either an invoice or field errors."""
    invoice: ValidatedInvoice | None = None
    errors: dict[str, list[str]] | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.invoice is not None


def read_invoice_draft(form: Mapping) -> dict[str, Any]:
    """Pull the invoice fields out of a form mapping (absent → None)."""
    return {f.value: form.get(f.value) for f in FormField}


def failure_message(action: InvoiceAction) -> str:
    return f"Missing Fields. Failed to {action.value} Invoice."


def flatten_field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by form field name, preserving order."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else "__root__"
        errors.setdefault(name, []).append(err["msg"])
    return errors


def validate_invoice(
    form: Mapping,
    action: InvoiceAction,
    mode: ValidationMode = ValidationMode.LENIENT,
) -> ValidationOutcome:
    """Validate submitted invoice form fields.

    Args:
        form: mapping-like form data (anything with .get(name)).
        action: which action is validating; selects the failure message.
        mode: LENIENT returns errors in the outcome, STRICT raises.

    Raises:
        InvoiceValidationError: in STRICT mode, when any field fails.
    """
    mode = ValidationMode(mode)
    try:
        invoice = ValidatedInvoice.model_validate(read_invoice_draft(form))
    except ValidationError as e:
        errors = flatten_field_errors(e)
        message = failure_message(action)
        if mode is ValidationMode.STRICT:
            raise InvoiceValidationError(
                message, errors, ErrorContext(action=action.value),
            ) from e
        return ValidationOutcome(errors=errors, message=message)
    return ValidationOutcome(invoice=invoice)

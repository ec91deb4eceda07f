"""Invoice Form Validation — field rules, error shape, and the two modes.

Invariants:
    - customerId: string, non-empty → else "Please select a customer."
    - amount: numeric, between one cent and the BIGINT cents limit → else "Please enter an amount greater than $0."
    - status: "pending" | "paid" → else "Please select an invoice status."
    - LENIENT returns errors keyed by form field + "Missing Fields..." message
    - STRICT raises InvoiceValidationError carrying the same errors
"""

from decimal import Decimal

import pytest

from invoice_dashboard.core.domain_types import (
    InvoiceAction, InvoiceStatus, ValidationMode,
)
from invoice_dashboard.core.errors import InvoiceValidationError
from invoice_dashboard.core.validate_invoice import (
    FIELD_MESSAGES, MAX_AMOUNT_CENTS, ValidatedInvoice, coerce_amount,
    read_invoice_draft, validate_invoice,
)
from invoice_dashboard.core.normalize_invoice import to_cents

CUSTOMER_MSG = "Please select a customer."
AMOUNT_MSG = "Please enter an amount greater than $0."
STATUS_MSG = "Please select an invoice status."


def _form(**overrides):
    form = {"customerId": "c1", "amount": "15.00", "status": "pending"}
    form.update(overrides)
    return {k: v for k, v in form.items() if v is not None}


# --- happy path ---------------------------------------------------------------

def test_valid_form_returns_validated_invoice():
    outcome = validate_invoice(_form(), InvoiceAction.CREATE)
    assert outcome.ok
    assert outcome.errors is None
    assert outcome.invoice == ValidatedInvoice(
        customer_id="c1", amount=Decimal("15.00"), status=InvoiceStatus.PENDING,
    )


def test_paid_status_accepted():
    outcome = validate_invoice(_form(status="paid"), InvoiceAction.CREATE)
    assert outcome.invoice.status is InvoiceStatus.PAID


def test_numeric_amount_accepted():
    outcome = validate_invoice(_form(amount=42), InvoiceAction.CREATE)
    assert outcome.invoice.amount == Decimal("42")


def test_amount_whitespace_is_ignored():
    outcome = validate_invoice(_form(amount=" 7.5 "), InvoiceAction.CREATE)
    assert outcome.invoice.amount == Decimal("7.5")


def test_validated_invoice_is_immutable():
    outcome = validate_invoice(_form(), InvoiceAction.CREATE)
    with pytest.raises(Exception):
        outcome.invoice.amount = Decimal("1")


# --- customerId ---------------------------------------------------------------

def test_missing_customer_id_reports_customer_error():
    outcome = validate_invoice(_form(customerId=None), InvoiceAction.CREATE)
    assert not outcome.ok
    assert outcome.errors == {"customerId": [CUSTOMER_MSG]}


@pytest.mark.parametrize("value", ["", "   ", 123, ["c1"]])
def test_blank_or_non_string_customer_id_rejected(value):
    outcome = validate_invoice(_form(customerId=value), InvoiceAction.CREATE)
    assert outcome.errors == {"customerId": [CUSTOMER_MSG]}


# --- amount -------------------------------------------------------------------

@pytest.mark.parametrize("value", [
    "0", "0.00", "-5", "abc", "", "   ", "NaN", "Infinity", "0.004", True,
])
def test_bad_amount_reports_amount_error(value):
    outcome = validate_invoice(_form(amount=value), InvoiceAction.CREATE)
    assert outcome.errors == {"amount": [AMOUNT_MSG]}


def test_missing_amount_reports_amount_error():
    outcome = validate_invoice(_form(amount=None), InvoiceAction.CREATE)
    assert outcome.errors == {"amount": [AMOUNT_MSG]}


def test_half_cent_amount_accepted():
    outcome = validate_invoice(_form(amount="0.005"), InvoiceAction.CREATE)
    assert outcome.ok


# --- status -------------------------------------------------------------------

@pytest.mark.parametrize("value", ["overdue", "PAID", "", 1])
def test_unknown_status_reports_status_error(value):
    outcome = validate_invoice(_form(status=value), InvoiceAction.CREATE)
    assert outcome.errors == {"status": [STATUS_MSG]}


def test_missing_status_reports_status_error():
    outcome = validate_invoice(_form(status=None), InvoiceAction.CREATE)
    assert outcome.errors == {"status": [STATUS_MSG]}


# --- error shape --------------------------------------------------------------

def test_empty_form_reports_every_field():
    outcome = validate_invoice({}, InvoiceAction.CREATE)
    assert outcome.errors == {
        "customerId": [CUSTOMER_MSG],
        "amount": [AMOUNT_MSG],
        "status": [STATUS_MSG],
    }


def test_create_failure_message():
    outcome = validate_invoice({}, InvoiceAction.CREATE)
    assert outcome.message == "Missing Fields. Failed to Create Invoice."


def test_update_failure_message():
    outcome = validate_invoice({}, InvoiceAction.UPDATE)
    assert outcome.message == "Missing Fields. Failed to Update Invoice."


def test_field_messages_are_read_only():
    with pytest.raises(TypeError):
        FIELD_MESSAGES["amount"] = "changed"


def test_read_invoice_draft_fills_absent_fields_with_none():
    assert read_invoice_draft({"amount": "3", "extra": "x"}) == {
        "customerId": None, "amount": "3", "status": None,
    }


# --- modes --------------------------------------------------------------------

def test_lenient_mode_never_raises():
    outcome = validate_invoice(
        {"amount": "-1"}, InvoiceAction.UPDATE, ValidationMode.LENIENT,
    )
    assert not outcome.ok


def test_strict_mode_raises_with_field_errors():
    with pytest.raises(InvoiceValidationError) as exc_info:
        validate_invoice(_form(amount="0"), InvoiceAction.CREATE, ValidationMode.STRICT)
    err = exc_info.value
    assert err.field_errors == {"amount": [AMOUNT_MSG]}
    assert err.message == "Missing Fields. Failed to Create Invoice."
    assert err.http_status == 400


def test_strict_mode_accepts_string_flag():
    with pytest.raises(InvoiceValidationError):
        validate_invoice({}, InvoiceAction.CREATE, "strict")


def test_strict_mode_valid_form_returns_invoice():
    outcome = validate_invoice(_form(), InvoiceAction.CREATE, ValidationMode.STRICT)
    assert outcome.ok


# --- coerce_amount ------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    ("12.5", Decimal("12.5")),
    (3, Decimal("3")),
    (2.25, Decimal("2.25")),
    (Decimal("9.99"), Decimal("9.99")),
    ("1e2", Decimal("100")),
    (None, None),
    (False, None),
    ("ten", None),
    ("inf", None),
    (object(), None),
])
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


# --- amount upper bound -------------------------------------------------------

@pytest.mark.parametrize("value", [
    "1e30",
    "99999999999999999999999999999",
    "1e100000",
    "92233720368547758.08",
])
def test_amount_beyond_column_range_reports_amount_error(value):
    outcome = validate_invoice(_form(amount=value), InvoiceAction.CREATE)
    assert outcome.errors == {"amount": [AMOUNT_MSG]}


def test_amount_beyond_column_range_strict_raises_validation_error():
    with pytest.raises(InvoiceValidationError) as exc_info:
        validate_invoice(_form(amount="1e30"), InvoiceAction.UPDATE, ValidationMode.STRICT)
    assert exc_info.value.field_errors == {"amount": [AMOUNT_MSG]}


def test_largest_storable_amount_accepted():
    outcome = validate_invoice(_form(amount="92233720368547758.07"), InvoiceAction.CREATE)
    assert outcome.ok
    assert to_cents(outcome.invoice.amount) == MAX_AMOUNT_CENTS


def test_amount_above_32_bit_cents_accepted():
    outcome = validate_invoice(_form(amount="21474836.48"), InvoiceAction.CREATE)
    assert to_cents(outcome.invoice.amount) == 2**31


# --- customerId passthrough ---------------------------------------------------

def test_customer_id_kept_verbatim():
    outcome = validate_invoice(_form(customerId=" c1 "), InvoiceAction.CREATE)
    assert outcome.invoice.customer_id == " c1 "

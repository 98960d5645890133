"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class InvalidRecordError(DomainError):
    """A record field is malformed, non-finite or negative."""


class MalformedRecordError(DomainError):
    """A document has no renderable content or an unparsable nested payload."""


class ConfigurationError(DomainError):
    """A tax rate or page geometry constant is missing or invalid."""


def negative_value(field: str, value: Decimal | int) -> str:
    """Return message for a negative value in a non-negative field."""
    return f"{field} must not be negative (got {value})"


def not_a_number(field: str, value: object) -> str:
    """Return message for a value that is not a finite number."""
    return f"{field} must be a finite number (got {value!r})"


def gst_without_applicability(gst_amount: Decimal) -> str:
    """Return message for GST recorded on a non-taxable expense."""
    return f"GST amount {gst_amount} recorded on an expense that is not GST applicable"


def paid_date_without_payment(invoice_number: str, status: str) -> str:
    """Return message for a paid date on an unpaid invoice."""
    return f"Invoice {invoice_number} has a paid date but status '{status}'"


def empty_invoice(invoice_number: str) -> str:
    """Return message for an invoice with nothing to render."""
    return f"Invoice {invoice_number} has no line items to render"


def invalid_window(start, end) -> str:
    """Return message for a window whose start is after its end."""
    return f"Window start {start} is after window end {end}"

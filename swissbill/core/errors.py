"""
Validation error values for payment orders.

Errors are plain data: validators collect them into lists and never raise.
The reason codes are stable identifiers; turning them into user-facing text
is left to the caller.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FieldErrorReason(str, Enum):
    MISSING = "missing"
    TOO_LONG = "too_long"
    UNKNOWN_COUNTRY = "unknown_country"
    MIXED_ADDRESS_SHAPE = "mixed_address_shape"


class OrderErrorReason(str, Enum):
    INVALID_AMOUNT = "invalid_amount"
    INVALID_CURRENCY = "invalid_currency"
    INVALID_IBAN = "invalid_iban"
    QR_REFERENCE_REQUIRES_QR_IBAN = "qr_reference_requires_qr_iban"
    QR_IBAN_REQUIRES_QR_REFERENCE = "qr_iban_requires_qr_reference"
    MISSING_REFERENCE = "missing_reference"
    INVALID_REFERENCE = "invalid_reference"
    UNEXPECTED_REFERENCE = "unexpected_reference"
    MESSAGE_TOO_LONG = "message_too_long"
    BILL_INFORMATION_TOO_LONG = "bill_information_too_long"
    TOO_MANY_ALTERNATIVE_PROCEDURES = "too_many_alternative_procedures"
    ALTERNATIVE_PROCEDURE_TOO_LONG = "alternative_procedure_too_long"
    INVALID_ADDRESS = "invalid_address"


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    reason: FieldErrorReason


class OrderError(BaseModel):
    """
    One violation found in a payment order.

    `field` is a dotted path into the order (e.g. "debtor.address.city").
    Address problems carry the originating `FieldError` in `field_error`.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    reason: OrderErrorReason
    field_error: Optional[FieldError] = None

"""
Cross-field validation of a payment order before it is encoded.

Every rule runs on every call; the result is the complete list of
violations (empty when the order can be encoded).
"""

from decimal import Decimal
import re

from swissbill.core.address_validation import validate_address
from swissbill.core.billing_reference import (
    is_qr_iban,
    is_valid_iban,
    is_valid_rf_reference,
    verify_qr_reference,
)
from swissbill.core.errors import OrderError, OrderErrorReason
from swissbill.core.text_sanitizer import sanitize
from swissbill.schemas.payment_order import Address, PaymentOrder, ReferenceType


ALLOWED_CURRENCIES = ("CHF", "EUR")
MAX_AMOUNT = Decimal("999999999.99")
MAX_UNSTRUCTURED_MESSAGE = 140
MAX_BILL_INFORMATION = 140
MAX_ALTERNATIVE_PROCEDURES = 2
MAX_ALTERNATIVE_PROCEDURE = 100

_CENTS = Decimal("0.01")


def normalize_reference(reference: str | None) -> str:
    return re.sub(r"\s", "", reference or "").upper()


def _amount_is_valid(amount: Decimal) -> bool:
    if not amount.is_finite():
        return False
    if amount.is_signed() or amount > MAX_AMOUNT:
        return False
    return amount == amount.quantize(_CENTS)


def _address_errors(prefix: str, address: Address) -> list[OrderError]:
    return [
        OrderError(
            field=f"{prefix}.{field_error.field}",
            reason=OrderErrorReason.INVALID_ADDRESS,
            field_error=field_error,
        )
        for field_error in validate_address(address)
    ]


def _reference_errors(order: PaymentOrder) -> list[OrderError]:
    errors: list[OrderError] = []
    qr_iban = is_qr_iban(order.creditor.account)
    reference = normalize_reference(order.reference)

    if order.reference_type == ReferenceType.QRR:
        if not qr_iban:
            errors.append(
                OrderError(
                    field="reference_type",
                    reason=OrderErrorReason.QR_REFERENCE_REQUIRES_QR_IBAN,
                )
            )
        if not reference:
            errors.append(OrderError(field="reference", reason=OrderErrorReason.MISSING_REFERENCE))
        elif not verify_qr_reference(reference):
            errors.append(OrderError(field="reference", reason=OrderErrorReason.INVALID_REFERENCE))
        return errors

    if qr_iban:
        errors.append(
            OrderError(
                field="reference_type",
                reason=OrderErrorReason.QR_IBAN_REQUIRES_QR_REFERENCE,
            )
        )

    if order.reference_type == ReferenceType.SCOR:
        if not reference:
            errors.append(OrderError(field="reference", reason=OrderErrorReason.MISSING_REFERENCE))
        elif not is_valid_rf_reference(reference):
            errors.append(OrderError(field="reference", reason=OrderErrorReason.INVALID_REFERENCE))
    elif reference:
        errors.append(OrderError(field="reference", reason=OrderErrorReason.UNEXPECTED_REFERENCE))

    return errors


def validate_order(order: PaymentOrder) -> list[OrderError]:
    errors: list[OrderError] = []

    if order.amount is not None and not _amount_is_valid(order.amount):
        errors.append(OrderError(field="amount", reason=OrderErrorReason.INVALID_AMOUNT))

    if order.currency not in ALLOWED_CURRENCIES:
        errors.append(OrderError(field="currency", reason=OrderErrorReason.INVALID_CURRENCY))

    if not is_valid_iban(order.creditor.account):
        errors.append(OrderError(field="creditor.account", reason=OrderErrorReason.INVALID_IBAN))

    errors.extend(_reference_errors(order))

    errors.extend(_address_errors("creditor.address", order.creditor.address))
    if order.ultimate_creditor is not None:
        errors.extend(_address_errors("ultimate_creditor", order.ultimate_creditor))
    if order.debtor is not None:
        errors.extend(_address_errors("debtor.address", order.debtor.address))

    if len(sanitize(order.unstructured_message)) > MAX_UNSTRUCTURED_MESSAGE:
        errors.append(
            OrderError(field="unstructured_message", reason=OrderErrorReason.MESSAGE_TOO_LONG)
        )
    if len(sanitize(order.bill_information)) > MAX_BILL_INFORMATION:
        errors.append(
            OrderError(field="bill_information", reason=OrderErrorReason.BILL_INFORMATION_TOO_LONG)
        )

    if len(order.alternative_procedures) > MAX_ALTERNATIVE_PROCEDURES:
        errors.append(
            OrderError(
                field="alternative_procedures",
                reason=OrderErrorReason.TOO_MANY_ALTERNATIVE_PROCEDURES,
            )
        )
    for index, procedure in enumerate(order.alternative_procedures):
        if len(sanitize(procedure)) > MAX_ALTERNATIVE_PROCEDURE:
            errors.append(
                OrderError(
                    field=f"alternative_procedures.{index}",
                    reason=OrderErrorReason.ALTERNATIVE_PROCEDURE_TOO_LONG,
                )
            )

    return errors

"""
Swiss Payment Code (SPC) serialization.

The payload is a fixed sequence of text lines defined by the SIX
implementation guidelines for the QR-bill (version 0200). Field order and
count must not change: banking apps parse it positionally.
"""

from decimal import Decimal
import logging

from swissbill.core.billing_reference import clean_iban
from swissbill.core.errors import OrderError
from swissbill.core.payload_validation import normalize_reference, validate_order
from swissbill.core.text_sanitizer import sanitize
from swissbill.schemas.payment_order import Address, AddressType, PaymentOrder, ReferenceType


logger = logging.getLogger(__name__)

QR_TYPE = "SPC"
VERSION = "0200"
CODING_TYPE = "1"
TRAILER = "EPD"
LINE_SEPARATOR = "\r\n"

ADDRESS_FIELD_COUNT = 7


class EncodingError(ValueError):
    def __init__(self, errors: list[OrderError]):
        self.errors = errors
        super().__init__(f"Payment order has {len(errors)} validation error(s)")


def format_amount(amount: Decimal | None) -> str:
    if amount is None:
        return ""
    return f"{amount:.2f}"


def _address_fields(address: Address | None) -> list[str]:
    if address is None:
        return [""] * ADDRESS_FIELD_COUNT

    if address.address_type == AddressType.COMBINED:
        return [
            AddressType.COMBINED.value,
            sanitize(address.name),
            sanitize(address.line1),
            sanitize(address.line2),
            "",
            "",
            sanitize(address.country).upper(),
        ]

    return [
        AddressType.STRUCTURED.value,
        sanitize(address.name),
        sanitize(address.street),
        sanitize(address.house_number),
        sanitize(address.postal_code),
        sanitize(address.city),
        sanitize(address.country).upper(),
    ]


def build_payload_lines(order: PaymentOrder) -> list[str]:
    """Serialize an already validated order into SPC lines."""
    reference = ""
    if order.reference_type != ReferenceType.NON:
        reference = normalize_reference(order.reference)

    lines = [
        QR_TYPE,
        VERSION,
        CODING_TYPE,
        clean_iban(order.creditor.account),
    ]
    lines.extend(_address_fields(order.creditor.address))
    lines.extend(_address_fields(order.ultimate_creditor))
    lines.extend([format_amount(order.amount), order.currency])
    lines.extend(_address_fields(order.debtor.address if order.debtor else None))
    lines.extend(
        [
            order.reference_type.value,
            reference,
            sanitize(order.unstructured_message),
            TRAILER,
        ]
    )

    bill_information = sanitize(order.bill_information)
    procedures = [sanitize(procedure) for procedure in order.alternative_procedures]
    if bill_information or procedures:
        lines.append(bill_information)
        lines.extend(procedures)

    return lines


def encode_order(order: PaymentOrder) -> tuple[str | None, list[OrderError]]:
    """
    Validate and encode `order`.

    Returns `(payload, [])` on success and `(None, errors)` otherwise; a
    partial payload is never produced.
    """
    errors = validate_order(order)
    if errors:
        logger.warning(
            f"Payment order rejected: {[f'{e.field}:{e.reason.value}' for e in errors]}"
        )
        return None, errors

    payload = LINE_SEPARATOR.join(build_payload_lines(order))
    logger.debug(f"Encoded SPC payload with {payload.count(LINE_SEPARATOR) + 1} lines")
    return payload, []


def encode(order: PaymentOrder) -> str:
    """Like `encode_order`, raising `EncodingError` when the order is invalid."""
    payload, errors = encode_order(order)
    if errors:
        raise EncodingError(errors)
    return payload

from decimal import Decimal

from swissbill.core.billing_reference import generate_reference, is_qr_iban
from swissbill.core.config import Settings, get_settings
from swissbill.schemas.payment_order import (
    Address,
    Creditor,
    Debtor,
    PaymentOrder,
    ReferenceType,
)


def creditor_from_settings(settings: Settings | None = None) -> Creditor:
    settings = settings or get_settings()
    return Creditor(
        account=settings.BILLING_CREDITOR_IBAN,
        address=Address(
            name=settings.BILLING_CREDITOR_NAME,
            street=settings.BILLING_CREDITOR_STREET,
            house_number=settings.BILLING_CREDITOR_HOUSE_NUMBER or None,
            postal_code=settings.BILLING_CREDITOR_POSTAL_CODE,
            city=settings.BILLING_CREDITOR_CITY,
            country=settings.BILLING_CREDITOR_COUNTRY,
        ),
    )


def build_payment_order(
    *,
    invoice_number: str,
    amount: Decimal | int | str | None,
    debtor_address: Address | None = None,
    message: str | None = None,
    creditor: Creditor | None = None,
    currency: str | None = None,
    settings: Settings | None = None,
) -> PaymentOrder:
    """
    Assemble the payment order for one invoice.

    The reference is derived from the invoice number: a QR reference when
    the creditor account is a QR-IBAN, an ISO 11649 creditor reference
    otherwise. The result still has to go through validation.
    """
    settings = settings or get_settings()
    creditor = creditor or creditor_from_settings(settings)

    reference = generate_reference(creditor.account, invoice_number)
    if reference is None:
        reference_type = ReferenceType.NON
    elif is_qr_iban(creditor.account):
        reference_type = ReferenceType.QRR
    else:
        reference_type = ReferenceType.SCOR

    return PaymentOrder(
        creditor=creditor,
        debtor=Debtor(address=debtor_address) if debtor_address is not None else None,
        amount=Decimal(str(amount)) if amount is not None else None,
        currency=currency or settings.BILLING_DEFAULT_CURRENCY,
        reference_type=reference_type,
        reference=reference,
        unstructured_message=message,
    )

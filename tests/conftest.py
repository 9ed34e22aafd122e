from decimal import Decimal

import pytest

from swissbill.schemas.payment_order import (
    Address,
    AddressType,
    Creditor,
    Debtor,
    PaymentOrder,
    ReferenceType,
)

# SIX sample accounts
IBAN = "CH9300762011623852957"
QR_IBAN = "CH4431999123000889012"
QR_REFERENCE = "210000000003139471430009017"
RF_REFERENCE = "RF18539007547034"


@pytest.fixture
def creditor_address():
    return Address(
        name="Robert Schneider AG",
        street="Rue du Lac",
        house_number="1268",
        postal_code="2501",
        city="Biel",
        country="CH",
    )


@pytest.fixture
def debtor_address():
    return Address(
        name="Pia-Maria Rutschmann-Schnyder",
        street="Grosse Marktgasse",
        house_number="28",
        postal_code="9400",
        city="Rorschach",
        country="CH",
    )


@pytest.fixture
def combined_address():
    return Address(
        address_type=AddressType.COMBINED,
        name="Hans Muster",
        line1="Musterweg 3",
        line2="8000 Zürich",
        country="CH",
    )


@pytest.fixture
def qrr_order(creditor_address, debtor_address):
    """QR-IBAN order with a QR reference, as in the SIX sample bill."""
    return PaymentOrder(
        creditor=Creditor(account=QR_IBAN, address=creditor_address),
        debtor=Debtor(address=debtor_address),
        amount=Decimal("1949.75"),
        currency="CHF",
        reference_type=ReferenceType.QRR,
        reference=QR_REFERENCE,
        unstructured_message="Order of 15 June 2020",
    )


@pytest.fixture
def non_order(creditor_address):
    """Regular IBAN, no reference, open amount, no debtor."""
    return PaymentOrder(
        creditor=Creditor(account=IBAN, address=creditor_address),
        currency="CHF",
        reference_type=ReferenceType.NON,
    )

from decimal import Decimal

import pytest

from swissbill.core.errors import OrderError, OrderErrorReason
from swissbill.core.payload_encoder import (
    EncodingError,
    build_payload_lines,
    encode,
    encode_order,
    format_amount,
)
from swissbill.schemas.payment_order import Debtor, ReferenceType
from tests.conftest import IBAN, QR_IBAN, QR_REFERENCE


def test_full_qrr_payload(qrr_order):
    order = qrr_order.model_copy(
        update={"bill_information": "//S1/10/10201409/11/200701/20/140.000-53/30/102673831/31/200615/32/7.7/33/7.7:100/40/0:30"}
    )

    payload = encode(order)

    assert payload.split("\r\n") == [
        "SPC",
        "0200",
        "1",
        QR_IBAN,
        "S",
        "Robert Schneider AG",
        "Rue du Lac",
        "1268",
        "2501",
        "Biel",
        "CH",
        "", "", "", "", "", "", "",
        "1949.75",
        "CHF",
        "S",
        "Pia-Maria Rutschmann-Schnyder",
        "Grosse Marktgasse",
        "28",
        "9400",
        "Rorschach",
        "CH",
        "QRR",
        QR_REFERENCE,
        "Order of 15 June 2020",
        "EPD",
        "//S1/10/10201409/11/200701/20/140.000-53/30/102673831/31/200615/32/7.7/33/7.7:100/40/0:30",
    ]


def test_minimal_payload_has_31_lines_and_no_trailing_separator(non_order):
    payload = encode(non_order)
    lines = payload.split("\r\n")

    assert len(lines) == 31
    assert lines[18] == ""  # open amount
    assert lines[19] == "CHF"
    assert lines[20:27] == [""] * 7  # no debtor
    assert lines[27:31] == ["NON", "", "", "EPD"]
    assert not payload.endswith("\r\n")


def test_combined_address_fields(non_order, combined_address):
    order = non_order.model_copy(update={"debtor": Debtor(address=combined_address)})
    lines = build_payload_lines(order)

    assert lines[20:27] == ["K", "Hans Muster", "Musterweg 3", "8000 Zürich", "", "", "CH"]


def test_alternative_procedures_follow_bill_information(non_order):
    order = non_order.model_copy(update={"alternative_procedures": ["eBill/B/41010560425610173", "cdbk/some/values"]})
    lines = encode(order).split("\r\n")

    assert lines[30:] == ["EPD", "", "eBill/B/41010560425610173", "cdbk/some/values"]


def test_text_fields_are_sanitized(qrr_order, creditor_address):
    order = qrr_order.model_copy(
        update={
            "creditor": qrr_order.creditor.model_copy(
                update={"address": creditor_address.model_copy(update={"name": " Robert\r\nSchneider  AG 🚀"})}
            ),
            "unstructured_message": "Rechnung\nNr. 42",
        }
    )
    lines = encode(order).split("\r\n")

    assert lines[5] == "Robert Schneider AG"
    assert lines[29] == "Rechnung Nr. 42"
    assert "\n" not in "".join(lines)


def test_references_are_compacted(qrr_order, non_order):
    spaced = qrr_order.model_copy(update={"reference": "21 00000 00003 13947 14300 09017"})
    assert build_payload_lines(spaced)[28] == QR_REFERENCE

    scor = non_order.model_copy(
        update={"reference_type": ReferenceType.SCOR, "reference": "rf18 5390 0754 7034"}
    )
    assert build_payload_lines(scor)[27:29] == ["SCOR", "RF18539007547034"]


def test_account_and_country_normalized(non_order, creditor_address):
    order = non_order.model_copy(
        update={
            "creditor": non_order.creditor.model_copy(
                update={
                    "account": "ch93 0076 2011 6238 5295 7",
                    "address": creditor_address.model_copy(update={"country": "ch"}),
                }
            )
        }
    )
    lines = encode(order).split("\r\n")
    assert lines[3] == IBAN
    assert lines[10] == "CH"


@pytest.mark.parametrize(
    "amount, expected",
    [("0", "0.00"), ("12.5", "12.50"), ("1E+2", "100.00"), ("999999999.99", "999999999.99")],
)
def test_format_amount(amount, expected):
    assert format_amount(Decimal(amount)) == expected
    assert format_amount(None) == ""


def test_encoding_is_deterministic(qrr_order):
    assert encode(qrr_order) == encode(qrr_order)
    assert encode(qrr_order).encode("utf-8") == encode(qrr_order.model_copy()).encode("utf-8")


def test_invalid_order_returns_errors_without_payload(non_order, caplog):
    order = non_order.model_copy(update={"currency": "USD", "amount": Decimal("-1")})

    payload, errors = encode_order(order)

    assert payload is None
    assert [error.reason for error in errors] == [
        OrderErrorReason.INVALID_AMOUNT,
        OrderErrorReason.INVALID_CURRENCY,
    ]
    assert "Payment order rejected" in caplog.text

    with pytest.raises(EncodingError) as exc:
        encode(order)
    assert exc.value.errors == errors


def test_negative_zero_amount_is_rejected(non_order):
    order = non_order.model_copy(update={"amount": Decimal("-0.00")})

    payload, errors = encode_order(order)

    assert payload is None
    assert errors == [OrderError(field="amount", reason=OrderErrorReason.INVALID_AMOUNT)]

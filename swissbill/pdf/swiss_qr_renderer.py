"""
Swiss QR Bill Renderer - SIX Interbank Clearing Compliant

Draws the payment slip (receipt + payment part) onto a ReportLab canvas.
Positions come from `swissbill.pdf.layout` (millimeters, top-left origin);
the QR payload comes from `swissbill.core.payload_encoder`. This module only
converts units and draws.

References:
- SIX Implementation Guidelines v2.2
- Swiss QR Bill Specification
"""

from decimal import Decimal
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas as pdf_canvas
from reportlab.graphics.barcode import qr
from reportlab.graphics.shapes import Drawing, Group, Rect

from swissbill.core.address_validation import join_postal, join_street
from swissbill.core.billing_reference import format_iban, format_reference
from swissbill.core.payload_encoder import encode
from swissbill.core.text_sanitizer import sanitize
from swissbill.pdf.layout import LayoutGeometry, TextRole, cross_geometry, geometry, unit_convert
from swissbill.schemas.payment_order import Address, AddressType, PaymentOrder, ReferenceType


FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

LINE_HEIGHT_RECEIPT = 3.0
LINE_HEIGHT_PAYMENT = 4.0

LABELS = {
    "fr": {
        "receipt": "Récépissé",
        "payment_part": "Section paiement",
        "account": "Compte / Payable à",
        "reference": "Référence",
        "additional_information": "Informations supplémentaires",
        "payable_by": "Payable par",
        "currency": "Monnaie",
        "amount": "Montant",
        "acceptance_point": "Point de dépôt",
    },
    "de": {
        "receipt": "Empfangsschein",
        "payment_part": "Zahlteil",
        "account": "Konto / Zahlbar an",
        "reference": "Referenz",
        "additional_information": "Zusätzliche Informationen",
        "payable_by": "Zahlbar durch",
        "currency": "Währung",
        "amount": "Betrag",
        "acceptance_point": "Annahmestelle",
    },
    "en": {
        "receipt": "Receipt",
        "payment_part": "Payment part",
        "account": "Account / Payable to",
        "reference": "Reference",
        "additional_information": "Additional information",
        "payable_by": "Payable by",
        "currency": "Currency",
        "amount": "Amount",
        "acceptance_point": "Acceptance point",
    },
}


# ============================================================================
# HELPERS
# ============================================================================

def _pt(value_mm: float) -> float:
    return unit_convert(value_mm, mm)


def _baseline(layout: LayoutGeometry, y_mm: float) -> float:
    """Top-left millimeters to ReportLab's bottom-left points."""
    return _pt(layout.page_height - y_mm)


def _set_font(canvas, layout: LayoutGeometry, role: TextRole):
    font = layout.font(role)
    canvas.setFont(FONT_BOLD if font.bold else FONT_REGULAR, font.size)


def address_lines(address: Address | None) -> list[str]:
    if address is None:
        return []
    if address.address_type == AddressType.COMBINED:
        lines = [address.name, address.line1, address.line2]
    else:
        lines = [
            address.name,
            join_street(sanitize(address.street), sanitize(address.house_number)),
            join_postal(sanitize(address.postal_code), sanitize(address.city)),
        ]
    return [sanitize(line) for line in lines if sanitize(line)]


def display_amount(amount: Decimal | None) -> str:
    if amount is None:
        return ""
    return f"{amount:,.2f}".replace(",", " ")


def _draw_block(
    canvas,
    layout: LayoutGeometry,
    x: float,
    y: float,
    label: str,
    lines: list[str],
    line_height: float,
    label_role: TextRole = TextRole.LABEL,
    content_role: TextRole = TextRole.CONTENT,
) -> float:
    """Draw a label followed by its content lines; returns the next free y."""
    _set_font(canvas, layout, label_role)
    canvas.drawString(_pt(x), _baseline(layout, y), label)
    y += line_height
    _set_font(canvas, layout, content_role)
    for line in lines:
        canvas.drawString(_pt(x), _baseline(layout, y), line)
        y += line_height
    return y + line_height


# ============================================================================
# QR CODE
# ============================================================================

def _generate_qr_code_with_cross(payload: str, layout: LayoutGeometry) -> Drawing:
    size = _pt(layout.qr_size)

    qr_code = qr.QrCodeWidget(payload, barLevel="M")
    bounds = qr_code.getBounds()
    width = bounds[2] - bounds[0]
    height = bounds[3] - bounds[1]

    drawing = Drawing(size, size)
    drawing.add(Group(qr_code, transform=[size / width, 0, 0, size / height, 0, 0]))

    cross = cross_geometry(layout.emblem_size)
    emblem = layout.emblem_box
    # emblem position inside the drawing, bottom-left origin
    origin_x = _pt(emblem.x - layout.qr_x)
    origin_y = _pt(layout.qr_size - (emblem.y - layout.qr_y) - emblem.height)
    square = _pt(cross.square_size)

    drawing.add(
        Rect(origin_x, origin_y, square, square, fillColor=colors.black, strokeColor=None)
    )
    for arm in (cross.horizontal_arm, cross.vertical_arm):
        drawing.add(
            Rect(
                origin_x + _pt(arm.x),
                origin_y + square - _pt(arm.y + arm.height),
                _pt(arm.width),
                _pt(arm.height),
                fillColor=colors.white,
                strokeColor=None,
            )
        )
    return drawing


# ============================================================================
# MAIN RENDERER
# ============================================================================

def _draw_separators(canvas, layout: LayoutGeometry) -> None:
    canvas.saveState()
    canvas.setDash(list(layout.separator_dash))
    canvas.setStrokeColor(colors.black)
    canvas.setLineWidth(_pt(layout.separator_line_width))
    separator = _baseline(layout, layout.separator_y)
    canvas.line(0, separator, _pt(layout.page_width), separator)
    canvas.line(
        _pt(layout.receipt_width),
        separator,
        _pt(layout.receipt_width),
        _baseline(layout, layout.page_height),
    )
    canvas.restoreState()


def _draw_receipt(canvas, layout: LayoutGeometry, order: PaymentOrder, lang: dict) -> None:
    x = layout.receipt_text_x
    y = layout.separator_y + 5 + layout.font(TextRole.TITLE).size * 0.35

    _set_font(canvas, layout, TextRole.TITLE)
    canvas.drawString(_pt(x), _baseline(layout, y), lang["receipt"])
    y += 7

    creditor_lines = [format_iban(order.creditor.account)] + address_lines(order.creditor.address)
    y = _draw_block(canvas, layout, x, y, lang["account"], creditor_lines, LINE_HEIGHT_RECEIPT)

    if order.reference_type != ReferenceType.NON and order.reference:
        y = _draw_block(
            canvas, layout, x, y, lang["reference"],
            [format_reference(order.reference)], LINE_HEIGHT_RECEIPT,
        )

    if order.debtor is not None:
        _draw_block(
            canvas, layout, x, y, lang["payable_by"],
            address_lines(order.debtor.address), LINE_HEIGHT_RECEIPT,
        )

    amount_y = layout.qr_y + layout.qr_size + 3
    _draw_block(canvas, layout, x, amount_y, lang["currency"], [order.currency], LINE_HEIGHT_RECEIPT)
    _draw_block(
        canvas, layout, x + 15, amount_y, lang["amount"],
        [display_amount(order.amount)], LINE_HEIGHT_RECEIPT,
    )

    _set_font(canvas, layout, TextRole.LABEL)
    canvas.drawRightString(
        _pt(layout.receipt_width - 5),
        _baseline(layout, layout.page_height - 5),
        lang["acceptance_point"],
    )


def _draw_payment_part(
    canvas, layout: LayoutGeometry, order: PaymentOrder, payload: str, lang: dict
) -> None:
    x = layout.payment_text_x
    title_y = layout.separator_y + 5 + layout.font(TextRole.TITLE).size * 0.35

    _set_font(canvas, layout, TextRole.TITLE)
    canvas.drawString(_pt(x), _baseline(layout, title_y), lang["payment_part"])

    qr_drawing = _generate_qr_code_with_cross(payload, layout)
    qr_drawing.drawOn(canvas, _pt(layout.qr_x), _baseline(layout, layout.qr_y + layout.qr_size))

    amount_y = layout.qr_y + layout.qr_size + 3
    roles = (TextRole.PAYMENT_LABEL, TextRole.PAYMENT_CONTENT)
    _draw_block(canvas, layout, x, amount_y, lang["currency"], [order.currency], LINE_HEIGHT_PAYMENT, *roles)
    _draw_block(
        canvas, layout, x + 18, amount_y, lang["amount"],
        [display_amount(order.amount)], LINE_HEIGHT_PAYMENT, *roles,
    )

    info_x = layout.qr_x + layout.qr_size + 5
    y = title_y

    creditor_lines = [format_iban(order.creditor.account)] + address_lines(order.creditor.address)
    y = _draw_block(canvas, layout, info_x, y, lang["account"], creditor_lines, LINE_HEIGHT_PAYMENT, *roles)

    if order.reference_type != ReferenceType.NON and order.reference:
        y = _draw_block(
            canvas, layout, info_x, y, lang["reference"],
            [format_reference(order.reference)], LINE_HEIGHT_PAYMENT, *roles,
        )

    additional = [
        text for text in (sanitize(order.unstructured_message), sanitize(order.bill_information)) if text
    ]
    if additional:
        y = _draw_block(
            canvas, layout, info_x, y, lang["additional_information"],
            additional, LINE_HEIGHT_PAYMENT, *roles,
        )

    if order.debtor is not None:
        _draw_block(
            canvas, layout, info_x, y, lang["payable_by"],
            address_lines(order.debtor.address), LINE_HEIGHT_PAYMENT, *roles,
        )


def render_swiss_qr_bill(
    canvas,
    order: PaymentOrder,
    *,
    language: str = "de",
    layout: LayoutGeometry | None = None,
) -> str:
    """
    Render a complete Swiss QR Bill in the bottom 105 mm of an A4 canvas.

    The order is encoded first; an invalid order raises `EncodingError`
    before anything is drawn. Returns the encoded SPC payload.
    """
    layout = layout or geometry()
    payload = encode(order)
    lang = LABELS.get(language, LABELS["de"])

    _draw_separators(canvas, layout)
    _draw_receipt(canvas, layout, order, lang)
    _draw_payment_part(canvas, layout, order, payload, lang)
    return payload


def generate_qr_bill_pdf(
    output_path: str | BytesIO,
    order: PaymentOrder,
    **kwargs,
) -> str:
    """Write a standalone one-page PDF holding only the payment slip."""
    layout = kwargs.get("layout") or geometry()
    c = pdf_canvas.Canvas(output_path, pagesize=(_pt(layout.page_width), _pt(layout.page_height)))
    payload = render_swiss_qr_bill(c, order, **kwargs)
    c.showPage()
    c.save()
    return payload

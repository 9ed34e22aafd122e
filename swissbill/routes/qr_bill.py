from io import BytesIO
import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse

from swissbill.core.billing_reference import (
    generate_rf_reference,
    is_qr_iban,
    qr_reference_from_seed,
)
from swissbill.core.config import settings
from swissbill.core.payload_encoder import encode_order
from swissbill.core.payload_validation import validate_order
from swissbill.pdf.swiss_qr_renderer import generate_qr_bill_pdf
from swissbill.schemas.payment_order import PaymentOrder


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/qr-bill", tags=["qr-bill"])


def _reject(errors) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=[error.model_dump(mode="json") for error in errors],
    )


@router.post("/validate")
def validate_payment_order(order: PaymentOrder):
    errors = validate_order(order)
    return {
        "valid": not errors,
        "errors": [error.model_dump(mode="json") for error in errors],
    }


@router.post("/payload")
def encode_payment_order(order: PaymentOrder):
    payload, errors = encode_order(order)
    if errors:
        raise _reject(errors)
    return {"payload": payload, "lines": payload.split("\r\n")}


@router.post("/pdf")
def render_payment_slip(
    order: PaymentOrder,
    language: str | None = Query(default=None, pattern=r"^(de|fr|en)$"),
):
    errors = validate_order(order)
    if errors:
        raise _reject(errors)

    pdf_buffer = BytesIO()
    generate_qr_bill_pdf(
        pdf_buffer, order, language=language or settings.BILLING_LABEL_LANGUAGE
    )
    pdf_buffer.seek(0)

    return StreamingResponse(
        pdf_buffer,
        media_type="application/pdf",
        headers={
            "Content-Disposition": 'attachment; filename="qr-bill.pdf"',
        },
    )


@router.get("/reference")
def get_reference(
    seed: str = Query(min_length=1),
    iban: str | None = Query(default=None),
):
    if iban is not None and not is_qr_iban(iban):
        reference = generate_rf_reference(seed)
        if reference is None:
            logger.warning(f"RF reference requested for unusable seed {seed!r}")
            raise HTTPException(status_code=400, detail="Seed has no usable characters")
        return {"reference_type": "SCOR", "reference": reference}

    reference = qr_reference_from_seed(seed)
    return {
        "reference_type": "QRR",
        "reference": reference.digits,
        "formatted": reference.formatted,
    }

import logging
import re

from swissbill.schemas.payment_order import ReferenceNumber


logger = logging.getLogger(__name__)

QRR_LENGTH = 27
QRR_BASE_LENGTH = 26

# Recursive modulo 10 (Swiss ISR / QR reference): row = carry, column = digit.
_MOD10_TABLE = (
    (0, 9, 4, 6, 8, 2, 7, 1, 3, 5),
    (9, 4, 6, 8, 2, 7, 1, 3, 5, 0),
    (4, 6, 8, 2, 7, 1, 3, 5, 0, 9),
    (6, 8, 2, 7, 1, 3, 5, 0, 9, 4),
    (8, 2, 7, 1, 3, 5, 0, 9, 4, 6),
    (2, 7, 1, 3, 5, 0, 9, 4, 6, 8),
    (7, 1, 3, 5, 0, 9, 4, 6, 8, 2),
    (1, 3, 5, 0, 9, 4, 6, 8, 2, 7),
    (3, 5, 0, 9, 4, 6, 8, 2, 7, 1),
    (5, 0, 9, 4, 6, 8, 2, 7, 1, 3),
)

_QR_IID_RANGE = (30000, 31999)
_IBAN_COUNTRIES = ("CH", "LI")
_SWISS_IBAN_LENGTH = 21


def clean_iban(value: str | None) -> str:
    return re.sub(r"[^0-9A-Za-z]", "", (value or "").strip()).upper()


def _clean_reference(value: str | None) -> str:
    return re.sub(r"\s", "", value or "").upper()


def _iban_iid(iban: str | None) -> int | None:
    cleaned = clean_iban(iban)
    if len(cleaned) < 9:
        return None
    if not cleaned.startswith(_IBAN_COUNTRIES):
        return None
    iid = cleaned[4:9]
    if not iid.isdigit():
        return None
    return int(iid)


def is_qr_iban(iban: str | None) -> bool:
    iid = _iban_iid(iban)
    return iid is not None and _QR_IID_RANGE[0] <= iid <= _QR_IID_RANGE[1]


def _mod97(numeric_str: str) -> int:
    remainder = 0
    for ch in numeric_str:
        remainder = (remainder * 10 + int(ch)) % 97
    return remainder


def _alnum_to_numeric(value: str) -> str:
    digits = []
    for ch in value:
        if ch.isdigit():
            digits.append(ch)
        elif ch.isalpha():
            digits.append(str(ord(ch.upper()) - 55))
    return "".join(digits)


def is_valid_iban(iban: str | None) -> bool:
    """Swiss or Liechtenstein IBAN, 21 characters, ISO 13616 mod-97 check."""
    cleaned = clean_iban(iban)
    if len(cleaned) != _SWISS_IBAN_LENGTH or not cleaned.startswith(_IBAN_COUNTRIES):
        return False
    if not cleaned[2:9].isdigit():
        return False
    rearranged = cleaned[4:] + cleaned[:4]
    return _mod97(_alnum_to_numeric(rearranged)) == 1


def format_iban(iban: str | None) -> str:
    cleaned = clean_iban(iban)
    return " ".join(cleaned[i:i + 4] for i in range(0, len(cleaned), 4))


# ---------------------------------------------------------------------------
# Creditor reference (ISO 11649, "SCOR")
# ---------------------------------------------------------------------------


def generate_rf_reference(seed: str) -> str | None:
    base = re.sub(r"[^0-9A-Z]", "", (seed or "").upper())
    if not base:
        return None
    base = base[:21]
    numeric = _alnum_to_numeric(f"{base}RF00")
    check = 98 - _mod97(numeric)
    return f"RF{check:02d}{base}"


def is_valid_rf_reference(reference: str | None) -> bool:
    cleaned = _clean_reference(reference)
    if not re.fullmatch(r"RF\d{2}[0-9A-Z]{1,21}", cleaned):
        return False
    numeric = _alnum_to_numeric(cleaned[4:] + cleaned[:4])
    return _mod97(numeric) == 1


# ---------------------------------------------------------------------------
# QR reference ("QRR")
# ---------------------------------------------------------------------------


def mod10_recursive(number: str) -> int:
    carry = 0
    for ch in number:
        carry = _MOD10_TABLE[carry][int(ch)]
    return (10 - carry) % 10


def qr_reference_from_seed(seed: str | None) -> ReferenceNumber:
    """
    Build a 27-digit QR reference from an arbitrary seed such as an invoice
    number. Non-digits are discarded, the rest is left-padded with zeros to
    26 digits (keeping the rightmost 26 when longer) and the recursive
    modulo 10 check digit is appended.
    """
    digits = "".join(ch for ch in (seed or "") if ch in "0123456789")
    if not digits:
        logger.warning(f"QR reference seed {seed!r} contains no digits, using all-zero base")
    base = digits.zfill(QRR_BASE_LENGTH)[-QRR_BASE_LENGTH:]
    return ReferenceNumber(digits=f"{base}{mod10_recursive(base)}")


def verify_qr_reference(candidate: str | None) -> bool:
    if candidate is None or not re.fullmatch(r"[0-9]{27}", candidate):
        return False
    return int(candidate[-1]) == mod10_recursive(candidate[:-1])


def format_reference(reference: str | None) -> str:
    cleaned = _clean_reference(reference)
    if re.fullmatch(r"[0-9]{27}", cleaned):
        return ReferenceNumber(digits=cleaned).formatted
    if cleaned.startswith("RF"):
        return " ".join(cleaned[i:i + 4] for i in range(0, len(cleaned), 4))
    return cleaned


def generate_reference(iban: str | None, seed: str) -> str | None:
    if not seed:
        return None
    if is_qr_iban(iban):
        return qr_reference_from_seed(seed).digits
    return generate_rf_reference(seed)

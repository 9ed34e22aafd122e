"""
Structural checks for postal addresses on a payment slip.

An address is either structured (street, house number, postal code and city
as separate fields) or combined (two pre-joined lines). All problems are
reported at once as `FieldError` values.
"""

from iso3166 import countries_by_alpha2

from swissbill.core.errors import FieldError, FieldErrorReason
from swissbill.core.text_sanitizer import sanitize
from swissbill.schemas.payment_order import Address, AddressType


MAX_NAME = 70
MAX_STREET = 70
MAX_HOUSE_NUMBER = 16
MAX_POSTAL_CODE = 16
MAX_CITY = 35
MAX_ADDRESS_LINE = 70


def join_street(street: str | None, house_number: str | None) -> str:
    street = (street or "").strip()
    house_number = (house_number or "").strip()
    if not house_number:
        return street
    return f"{street} {house_number}"


def join_postal(postal_code: str | None, city: str | None) -> str:
    return f"{(postal_code or '').strip()} {(city or '').strip()}"


def is_known_country(code: str | None) -> bool:
    code = (code or "").strip()
    return len(code) == 2 and code.upper() in countries_by_alpha2


def _check_text(
    errors: list[FieldError],
    field: str,
    value: str | None,
    max_length: int,
    required: bool,
) -> None:
    cleaned = sanitize(value)
    if required and not cleaned:
        errors.append(FieldError(field=field, reason=FieldErrorReason.MISSING))
    elif len(cleaned) > max_length:
        errors.append(FieldError(field=field, reason=FieldErrorReason.TOO_LONG))


def _has_structured_fields(address: Address) -> bool:
    return any(
        sanitize(value)
        for value in (address.street, address.house_number, address.postal_code, address.city)
    )


def _has_combined_fields(address: Address) -> bool:
    return bool(sanitize(address.line1) or sanitize(address.line2))


def validate_address(address: Address) -> list[FieldError]:
    errors: list[FieldError] = []

    _check_text(errors, "name", address.name, MAX_NAME, required=True)

    if address.address_type == AddressType.STRUCTURED:
        if _has_combined_fields(address):
            errors.append(FieldError(field="line1", reason=FieldErrorReason.MIXED_ADDRESS_SHAPE))
        _check_text(errors, "street", address.street, MAX_STREET, required=True)
        _check_text(errors, "house_number", address.house_number, MAX_HOUSE_NUMBER, required=False)
        _check_text(errors, "postal_code", address.postal_code, MAX_POSTAL_CODE, required=True)
        _check_text(errors, "city", address.city, MAX_CITY, required=True)
    else:
        if _has_structured_fields(address):
            errors.append(FieldError(field="street", reason=FieldErrorReason.MIXED_ADDRESS_SHAPE))
        _check_text(errors, "line1", address.line1, MAX_ADDRESS_LINE, required=True)
        _check_text(errors, "line2", address.line2, MAX_ADDRESS_LINE, required=True)

    if not sanitize(address.country):
        errors.append(FieldError(field="country", reason=FieldErrorReason.MISSING))
    elif not is_known_country(address.country):
        errors.append(FieldError(field="country", reason=FieldErrorReason.UNKNOWN_COUNTRY))

    return errors

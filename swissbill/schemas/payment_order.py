from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AddressType(str, Enum):
    STRUCTURED = "S"
    COMBINED = "K"


class ReferenceType(str, Enum):
    QRR = "QRR"
    SCOR = "SCOR"
    NON = "NON"


class Address(BaseModel):
    model_config = ConfigDict(frozen=True)

    address_type: AddressType = AddressType.STRUCTURED
    name: str = ""
    # Structured
    street: str = ""
    house_number: Optional[str] = None
    postal_code: str = ""
    city: str = ""
    # Combined
    line1: str = ""
    line2: str = ""
    country: str = "CH"


class Creditor(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: str
    address: Address


class Debtor(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: Address


class PaymentOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    creditor: Creditor
    ultimate_creditor: Optional[Address] = None
    debtor: Optional[Debtor] = None
    amount: Optional[Decimal] = None
    currency: str = "CHF"
    reference_type: ReferenceType = ReferenceType.NON
    reference: Optional[str] = None
    unstructured_message: Optional[str] = None
    bill_information: Optional[str] = None
    alternative_procedures: List[str] = Field(default_factory=list)


class ReferenceNumber(BaseModel):
    model_config = ConfigDict(frozen=True)

    digits: str

    @property
    def formatted(self) -> str:
        """Blocks of five counted from the right, as printed on the slip."""
        head = len(self.digits) % 5
        blocks = [self.digits[:head]] if head else []
        blocks.extend(self.digits[i:i + 5] for i in range(head, len(self.digits), 5))
        return " ".join(blocks)

    def __str__(self) -> str:
        return self.digits

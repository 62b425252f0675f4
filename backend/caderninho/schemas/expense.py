from datetime import datetime
from decimal import Decimal

from pydantic import Field

from caderninho.models.enums import PaymentType
from caderninho.schemas.card import CardOut
from caderninho.schemas.common import CamelModel, Money
from caderninho.schemas.establishment import EstablishmentOut


class ExpenseCreate(CamelModel):
    user_id: int | None = None
    description: str = Field(min_length=1, max_length=500)
    establishment_id: int
    payment_type: PaymentType
    card_id: int | None = None
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    date: datetime
    installment_count: int = Field(default=1, ge=1, le=120)


class ExpenseOut(CamelModel):
    id: int
    user_id: int | None = None
    description: str
    establishment_id: int
    establishment: EstablishmentOut | None = None
    payment_type: PaymentType
    card_id: int | None = None
    card: CardOut | None = None
    amount: Money
    date: datetime
    installment_count: int
    created_at: datetime
    updated_at: datetime


class CardInvoiceLine(CamelModel):
    date: datetime
    establishment_name: str = Field(min_length=1, max_length=200)
    amount: Decimal = Field(max_digits=18, decimal_places=2)


class ImportCardInvoiceRequest(CamelModel):
    card_id: int
    user_id: int | None = None
    lines: list[CardInvoiceLine] = Field(min_length=1)

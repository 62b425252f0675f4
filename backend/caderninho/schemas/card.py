from datetime import datetime

from pydantic import Field

from caderninho.models.enums import CardBrand, CardType
from caderninho.schemas.common import CamelModel


class CardCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    type: CardType
    brand: CardBrand
    last_four_digits: str = Field(pattern=r"^\d{4}$")
    closing_day: int | None = Field(default=None, ge=1, le=31)


class CardOut(CamelModel):
    id: int
    name: str
    type: CardType
    brand: CardBrand
    last_four_digits: str
    closing_day: int | None = None
    created_at: datetime
    updated_at: datetime

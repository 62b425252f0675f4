from datetime import datetime

from pydantic import Field

from caderninho.models.enums import EstablishmentType
from caderninho.schemas.common import CamelModel


class EstablishmentCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    type: EstablishmentType
    card_invoice_name: str | None = Field(default=None, max_length=200)


class EstablishmentUpdate(EstablishmentCreate):
    pass


class EstablishmentOut(CamelModel):
    id: int
    name: str
    type: EstablishmentType
    card_invoice_name: str | None = None
    created_at: datetime
    updated_at: datetime

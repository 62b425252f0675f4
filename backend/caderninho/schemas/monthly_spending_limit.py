from datetime import datetime
from decimal import Decimal

from pydantic import Field

from caderninho.models.enums import EstablishmentType
from caderninho.schemas.common import CamelModel, Money


class MonthlySpendingLimitCreate(CamelModel):
    establishment_type: EstablishmentType
    limit_amount: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2000, le=2100)


class MonthlySpendingLimitOut(CamelModel):
    id: int
    establishment_type: EstablishmentType
    limit_amount: Money
    is_active: bool
    month: int
    year: int
    created_at: datetime
    updated_at: datetime

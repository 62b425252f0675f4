from datetime import datetime
from decimal import Decimal

from pydantic import Field

from caderninho.models.enums import MonthlyEntryType, OperationType
from caderninho.schemas.common import CamelModel, Money


class MonthlyEntryCreate(CamelModel):
    type: MonthlyEntryType
    description: str = Field(min_length=2, max_length=200)
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    operation: OperationType
    month: int | None = Field(default=None, ge=1, le=12)
    year: int | None = Field(default=None, ge=2000, le=2100)


class MonthlyEntryOut(CamelModel):
    id: int
    type: MonthlyEntryType
    description: str
    amount: Money
    operation: OperationType
    is_active: bool
    month: int | None = None
    year: int | None = None
    created_at: datetime
    updated_at: datetime


class DuplicateAmount(CamelModel):
    """Corpo do "duplicar para o próximo mês": permite editar o valor."""

    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)

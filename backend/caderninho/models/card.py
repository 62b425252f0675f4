from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from caderninho.db import Base
from caderninho.models.base import BaseEntity
from caderninho.models.enums import CardBrand, CardType
from caderninho.models.types import IntEnumType


class Card(BaseEntity, Base):
    __tablename__ = "cards"

    name: Mapped[str] = mapped_column(String(100), index=True)
    type: Mapped[CardType] = mapped_column(IntEnumType(CardType), index=True)
    brand: Mapped[CardBrand] = mapped_column(IntEnumType(CardBrand), index=True)
    last_four_digits: Mapped[str] = mapped_column(String(4))

    # dia do mês em que a fatura fecha (1-31)
    closing_day: Mapped[int | None] = mapped_column(nullable=True)

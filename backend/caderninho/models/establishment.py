from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from caderninho.db import Base
from caderninho.models.base import BaseEntity
from caderninho.models.enums import EstablishmentType
from caderninho.models.types import IntEnumType


class Establishment(BaseEntity, Base):
    __tablename__ = "establishments"

    name: Mapped[str] = mapped_column(String(200), index=True)
    type: Mapped[EstablishmentType] = mapped_column(IntEnumType(EstablishmentType), index=True)

    # nome do estabelecimento como aparece na fatura do cartão
    card_invoice_name: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)

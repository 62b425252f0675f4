from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from caderninho.db import Base
from caderninho.models.base import BaseEntity


class User(BaseEntity, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(254), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

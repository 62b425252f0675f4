from datetime import datetime

from pydantic import Field

from caderninho.schemas.common import CamelModel


class UserCreate(CamelModel):
    name: str = Field(min_length=2, max_length=200)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(default="", max_length=128)


class UserUpdate(CamelModel):
    name: str = Field(min_length=2, max_length=200)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    is_active: bool = True


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

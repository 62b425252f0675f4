from __future__ import annotations

import math
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer, computed_field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# valores monetários: Decimal internamente, número no JSON (o app mobile espera number)
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base dos schemas da API: camelCase no fio, snake_case no Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PagedResponse(CamelModel, Generic[T]):
    items: list[T]
    page_number: int
    page_size: int
    total_items: int
    total_pages: int

    @computed_field(alias="hasPreviousPage")
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field(alias="hasNextPage")
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @classmethod
    def build(cls, items: list, page_number: int, page_size: int, total_items: int) -> "PagedResponse":
        return cls(
            items=items,
            page_number=page_number,
            page_size=page_size,
            total_items=total_items,
            total_pages=math.ceil(total_items / page_size) if page_size else 0,
        )

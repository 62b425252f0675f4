from typing import Any, Sequence

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from caderninho.schemas.common import PagedResponse


class PageParams:
    """Query params de paginação/busca usados pelo app (pageNumber, pageSize, searchText)."""

    def __init__(
        self,
        page_number: int = Query(1, ge=1, alias="pageNumber"),
        page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
        search_text: str | None = Query(None, alias="searchText"),
    ):
        self.page_number = page_number
        self.page_size = page_size
        self.search_text = (search_text or "").strip() or None

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


def paginate(
    db: Session,
    model: Any,
    criteria: Sequence[Any],
    order_by: Sequence[Any],
    page: PageParams,
    out: type[BaseModel],
) -> PagedResponse:
    # count não passa pelo loader criteria (não carrega entidade): filtra is_deleted explicitamente
    total = db.scalar(select(func.count(model.id)).where(model.is_deleted.is_(False), *criteria)) or 0
    rows = db.scalars(
        select(model).where(*criteria).order_by(*order_by).offset(page.offset).limit(page.page_size)
    ).unique()
    items = [out.model_validate(r) for r in rows]
    return PagedResponse[out].build(items, page.page_number, page.page_size, total)

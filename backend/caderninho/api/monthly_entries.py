from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
import logging

from caderninho.api.paging import PageParams, paginate
from caderninho.deps import get_uow
from caderninho.models.monthly_entry import MonthlyEntry
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.common import PagedResponse
from caderninho.schemas.monthly_entry import DuplicateAmount, MonthlyEntryCreate, MonthlyEntryOut
from caderninho.services.monthly_entries import MonthlyEntryService

router = APIRouter(prefix="/api/monthlyentries", tags=["monthly-entries"])

logger = logging.getLogger(__name__)

NOT_FOUND = "Entrada mensal não encontrada"


@router.get("", response_model=PagedResponse[MonthlyEntryOut])
def list_monthly_entries(
    page: PageParams = Depends(),
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = Query(None),
    is_active: bool | None = Query(None, alias="isActive"),
    uow: UnitOfWork = Depends(get_uow),
):
    criteria = []
    if page.search_text:
        criteria.append(MonthlyEntry.description.ilike(f"%{page.search_text}%"))
    if month is not None:
        criteria.append(MonthlyEntry.month == month)
    if year is not None:
        criteria.append(MonthlyEntry.year == year)
    if is_active is not None:
        criteria.append(MonthlyEntry.is_active.is_(is_active))

    order_by = [MonthlyEntry.year.desc(), MonthlyEntry.month.desc(), MonthlyEntry.created_at.desc()]
    return paginate(uow.session, MonthlyEntry, criteria, order_by, page, MonthlyEntryOut)


@router.get("/{entry_id}", response_model=MonthlyEntryOut)
def get_monthly_entry(entry_id: int, uow: UnitOfWork = Depends(get_uow)):
    try:
        e = Repository[MonthlyEntry, int](uow, MonthlyEntry).get_by_id(entry_id)

        if not e:
            raise HTTPException(status_code=404, detail=NOT_FOUND)

        return e

    except HTTPException:
        raise

    except SQLAlchemyError:
        logger.exception("DB error fetching monthly_entry_id=%s", entry_id)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=MonthlyEntryOut, status_code=201)
def create_monthly_entry(payload: MonthlyEntryCreate, uow: UnitOfWork = Depends(get_uow)):
    return MonthlyEntryService(uow).create(payload)


@router.put("/{entry_id}", response_model=MonthlyEntryOut)
def update_monthly_entry(entry_id: int, payload: MonthlyEntryCreate, uow: UnitOfWork = Depends(get_uow)):
    e = MonthlyEntryService(uow).update(entry_id, payload)
    if e is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return e


@router.delete("/{entry_id}", status_code=204)
def delete_monthly_entry(entry_id: int, uow: UnitOfWork = Depends(get_uow)):
    if not MonthlyEntryService(uow).delete(entry_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=204)


@router.patch("/{entry_id}/toggle-active", response_model=MonthlyEntryOut)
def toggle_monthly_entry(entry_id: int, is_active: bool = Body(...), uow: UnitOfWork = Depends(get_uow)):
    e = MonthlyEntryService(uow).toggle_active(entry_id, is_active)
    if e is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return e


@router.post("/{entry_id}/duplicate", response_model=MonthlyEntryOut, status_code=201)
def duplicate_monthly_entry(entry_id: int, payload: DuplicateAmount, uow: UnitOfWork = Depends(get_uow)):
    e = MonthlyEntryService(uow).duplicate_to_next_month(entry_id, payload.amount)
    if e is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return e

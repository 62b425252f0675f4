from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
import logging

from caderninho.api.paging import PageParams, paginate
from caderninho.deps import get_uow
from caderninho.models.enums import EstablishmentType
from caderninho.models.monthly_spending_limit import MonthlySpendingLimit
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.common import PagedResponse
from caderninho.schemas.monthly_entry import DuplicateAmount
from caderninho.schemas.monthly_spending_limit import MonthlySpendingLimitCreate, MonthlySpendingLimitOut
from caderninho.services.monthly_spending_limits import MonthlySpendingLimitService

router = APIRouter(prefix="/api/monthlyspendinglimits", tags=["monthly-spending-limits"])

logger = logging.getLogger(__name__)

NOT_FOUND = "Limite de gasto não encontrado"


@router.get("", response_model=PagedResponse[MonthlySpendingLimitOut])
def list_monthly_spending_limits(
    page: PageParams = Depends(),
    establishment_type: int | None = Query(
        None, alias="establishmentType", ge=1, le=len(EstablishmentType)
    ),
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = Query(None),
    is_active: bool | None = Query(None, alias="isActive"),
    uow: UnitOfWork = Depends(get_uow),
):
    criteria = []
    if establishment_type is not None:
        criteria.append(MonthlySpendingLimit.establishment_type == EstablishmentType(establishment_type))
    if month is not None:
        criteria.append(MonthlySpendingLimit.month == month)
    if year is not None:
        criteria.append(MonthlySpendingLimit.year == year)
    if is_active is not None:
        criteria.append(MonthlySpendingLimit.is_active.is_(is_active))

    order_by = [
        MonthlySpendingLimit.year.desc(),
        MonthlySpendingLimit.month.desc(),
        MonthlySpendingLimit.establishment_type,
    ]
    return paginate(uow.session, MonthlySpendingLimit, criteria, order_by, page, MonthlySpendingLimitOut)


@router.get("/{limit_id}", response_model=MonthlySpendingLimitOut)
def get_monthly_spending_limit(limit_id: int, uow: UnitOfWork = Depends(get_uow)):
    try:
        l = Repository[MonthlySpendingLimit, int](uow, MonthlySpendingLimit).get_by_id(limit_id)

        if not l:
            raise HTTPException(status_code=404, detail=NOT_FOUND)

        return l

    except HTTPException:
        raise

    except SQLAlchemyError:
        logger.exception("DB error fetching monthly_spending_limit_id=%s", limit_id)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=MonthlySpendingLimitOut, status_code=201)
def create_monthly_spending_limit(payload: MonthlySpendingLimitCreate, uow: UnitOfWork = Depends(get_uow)):
    try:
        return MonthlySpendingLimitService(uow).create(payload)
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))


@router.put("/{limit_id}", response_model=MonthlySpendingLimitOut)
def update_monthly_spending_limit(
    limit_id: int, payload: MonthlySpendingLimitCreate, uow: UnitOfWork = Depends(get_uow)
):
    try:
        l = MonthlySpendingLimitService(uow).update(limit_id, payload)
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))
    if l is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return l


@router.delete("/{limit_id}", status_code=204)
def delete_monthly_spending_limit(limit_id: int, uow: UnitOfWork = Depends(get_uow)):
    if not MonthlySpendingLimitService(uow).delete(limit_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=204)


@router.patch("/{limit_id}/toggle-active", response_model=MonthlySpendingLimitOut)
def toggle_monthly_spending_limit(limit_id: int, is_active: bool = Body(...), uow: UnitOfWork = Depends(get_uow)):
    l = MonthlySpendingLimitService(uow).toggle_active(limit_id, is_active)
    if l is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return l


@router.post("/{limit_id}/duplicate", response_model=MonthlySpendingLimitOut, status_code=201)
def duplicate_monthly_spending_limit(limit_id: int, payload: DuplicateAmount, uow: UnitOfWork = Depends(get_uow)):
    try:
        l = MonthlySpendingLimitService(uow).duplicate_to_next_month(limit_id, payload.amount)
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))
    if l is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return l

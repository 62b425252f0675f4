from datetime import datetime

from fastapi import APIRouter, Body, Depends, HTTPException, Query
import logging

from caderninho.db import to_naive_utc, utcnow
from caderninho.deps import get_uow
from caderninho.repositories.base import UnitOfWork
from caderninho.schemas.installment import InstallmentOut, MarkAsPaid
from caderninho.services.installments import CreditCardInstallmentService

router = APIRouter(prefix="/api/installments", tags=["installments"])

logger = logging.getLogger(__name__)


@router.get("", response_model=list[InstallmentOut])
def list_installments(
    card_id: int = Query(..., alias="cardId"),
    start: datetime = Query(...),
    end: datetime = Query(...),
    uow: UnitOfWork = Depends(get_uow),
):
    start, end = to_naive_utc(start), to_naive_utc(end)
    if end < start:
        raise HTTPException(status_code=400, detail="Período inválido: fim antes do início")
    return CreditCardInstallmentService(uow).get_by_card_and_period(card_id, start, end)


@router.patch("/{installment_id}/pay", response_model=InstallmentOut)
def pay_installment(
    installment_id: int,
    payload: MarkAsPaid | None = Body(None),
    uow: UnitOfWork = Depends(get_uow),
):
    paid_date = to_naive_utc(payload.paid_date) if payload and payload.paid_date else utcnow()
    try:
        return CreditCardInstallmentService(uow).mark_as_paid(installment_id, paid_date)
    except LookupError as ex:
        raise HTTPException(status_code=404, detail=str(ex))

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from caderninho.db import get_db
from caderninho.schemas.statement import MonthlyStatement
from caderninho.services.monthly_statement import get_monthly_statement
from caderninho.services.statement_pdf import build_statement_pdf

router = APIRouter(prefix="/api/monthlystatement", tags=["monthly-statement"])

logger = logging.getLogger(__name__)


def _validate_period(year: int, month: int) -> None:
    if year < 2000 or year > 2100:
        logger.warning("Ano inválido fornecido: %s", year)
        raise HTTPException(status_code=400, detail="Ano inválido. Deve estar entre 2000 e 2100.")
    if month < 1 or month > 12:
        logger.warning("Mês inválido fornecido: %s", month)
        raise HTTPException(status_code=400, detail="Mês inválido. Deve estar entre 1 e 12.")


def _statement(db: Session, year: int, month: int) -> MonthlyStatement:
    _validate_period(year, month)
    try:
        return get_monthly_statement(db, year, month)
    except SQLAlchemyError:
        logger.exception("Erro ao gerar extrato mensal para %02d/%s", month, year)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.get("", response_model=MonthlyStatement)
def monthly_statement(year: int = Query(...), month: int = Query(...), db: Session = Depends(get_db)):
    logger.info("Requisição de extrato mensal recebida: %02d/%s", month, year)
    return _statement(db, year, month)


@router.get("/pdf")
def monthly_statement_pdf(year: int = Query(...), month: int = Query(...), db: Session = Depends(get_db)):
    pdf = build_statement_pdf(_statement(db, year, month))
    filename = f"extrato_{year}-{month:02d}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

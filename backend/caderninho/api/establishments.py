from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
import logging

from caderninho.api.paging import PageParams, paginate
from caderninho.deps import get_uow
from caderninho.models.enums import EstablishmentType
from caderninho.models.establishment import Establishment
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.common import PagedResponse
from caderninho.schemas.establishment import EstablishmentCreate, EstablishmentOut, EstablishmentUpdate

router = APIRouter(prefix="/api/establishments", tags=["establishments"])

logger = logging.getLogger(__name__)


def _get_or_404(repo: Repository[Establishment, int], establishment_id: int) -> Establishment:
    e = repo.get_by_id(establishment_id)
    if not e:
        raise HTTPException(status_code=404, detail="Estabelecimento não encontrado")
    return e


@router.get("", response_model=PagedResponse[EstablishmentOut])
def list_establishments(
    page: PageParams = Depends(),
    type: int | None = Query(None, ge=1, le=len(EstablishmentType)),
    uow: UnitOfWork = Depends(get_uow),
):
    criteria = []
    if page.search_text:
        like = f"%{page.search_text}%"
        criteria.append(or_(Establishment.name.ilike(like), Establishment.card_invoice_name.ilike(like)))
    if type is not None:
        criteria.append(Establishment.type == EstablishmentType(type))
    return paginate(uow.session, Establishment, criteria, [Establishment.name, Establishment.id], page, EstablishmentOut)


@router.get("/{establishment_id}", response_model=EstablishmentOut)
def get_establishment(establishment_id: int, uow: UnitOfWork = Depends(get_uow)):
    try:
        return _get_or_404(Repository[Establishment, int](uow, Establishment), establishment_id)

    except HTTPException:
        raise

    except SQLAlchemyError:
        logger.exception("DB error fetching establishment_id=%s", establishment_id)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=EstablishmentOut, status_code=201)
def create_establishment(payload: EstablishmentCreate, uow: UnitOfWork = Depends(get_uow)):
    e = Establishment(
        name=payload.name.strip(),
        type=payload.type,
        card_invoice_name=(payload.card_invoice_name or "").strip() or None,
    )
    Repository[Establishment, int](uow, Establishment).add(e)
    uow.save_changes()
    logger.info("Estabelecimento criado com sucesso: %s - %s", e.id, e.name)
    return e


@router.put("/{establishment_id}", response_model=EstablishmentOut)
def update_establishment(establishment_id: int, payload: EstablishmentUpdate, uow: UnitOfWork = Depends(get_uow)):
    e = _get_or_404(Repository[Establishment, int](uow, Establishment), establishment_id)
    e.name = payload.name.strip()
    e.type = payload.type
    e.card_invoice_name = (payload.card_invoice_name or "").strip() or None
    uow.save_changes()
    logger.info("Estabelecimento atualizado com sucesso: %s", establishment_id)
    return e


@router.delete("/{establishment_id}", status_code=204)
def delete_establishment(establishment_id: int, uow: UnitOfWork = Depends(get_uow)):
    repo = Repository[Establishment, int](uow, Establishment)
    _get_or_404(repo, establishment_id)
    repo.delete_by_id(establishment_id)
    uow.save_changes()
    logger.info("Estabelecimento excluído com sucesso: %s", establishment_id)
    return Response(status_code=204)

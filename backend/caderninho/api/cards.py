from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
import logging

from caderninho.api.paging import PageParams, paginate
from caderninho.deps import get_uow
from caderninho.models.card import Card
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.card import CardCreate, CardOut
from caderninho.schemas.common import PagedResponse

router = APIRouter(prefix="/api/cards", tags=["cards"])

logger = logging.getLogger(__name__)


def _get_or_404(repo: Repository[Card, int], card_id: int) -> Card:
    c = repo.get_by_id(card_id)
    if not c:
        raise HTTPException(status_code=404, detail="Cartão não encontrado")
    return c


@router.get("", response_model=PagedResponse[CardOut])
def list_cards(page: PageParams = Depends(), uow: UnitOfWork = Depends(get_uow)):
    criteria = []
    if page.search_text:
        like = f"%{page.search_text}%"
        criteria.append(or_(Card.name.ilike(like), Card.last_four_digits.like(like)))
    return paginate(uow.session, Card, criteria, [Card.name, Card.id], page, CardOut)


@router.get("/{card_id}", response_model=CardOut)
def get_card(card_id: int, uow: UnitOfWork = Depends(get_uow)):
    try:
        return _get_or_404(Repository[Card, int](uow, Card), card_id)

    except HTTPException:
        raise

    except SQLAlchemyError:
        logger.exception("DB error fetching card_id=%s", card_id)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=CardOut, status_code=201)
def create_card(payload: CardCreate, uow: UnitOfWork = Depends(get_uow)):
    c = Card(
        name=payload.name.strip(),
        type=payload.type,
        brand=payload.brand,
        last_four_digits=payload.last_four_digits,
        closing_day=payload.closing_day,
    )
    Repository[Card, int](uow, Card).add(c)
    uow.save_changes()
    logger.info("Cartão criado com sucesso: %s - %s", c.id, c.name)
    return c


@router.put("/{card_id}", response_model=CardOut)
def update_card(card_id: int, payload: CardCreate, uow: UnitOfWork = Depends(get_uow)):
    c = _get_or_404(Repository[Card, int](uow, Card), card_id)
    c.name = payload.name.strip()
    c.type = payload.type
    c.brand = payload.brand
    c.last_four_digits = payload.last_four_digits
    c.closing_day = payload.closing_day
    uow.save_changes()
    logger.info("Cartão atualizado com sucesso: %s", card_id)
    return c


@router.delete("/{card_id}", status_code=204)
def delete_card(card_id: int, uow: UnitOfWork = Depends(get_uow)):
    repo = Repository[Card, int](uow, Card)
    repo.delete(_get_or_404(repo, card_id))
    uow.save_changes()
    logger.info("Cartão excluído com sucesso: %s", card_id)
    return Response(status_code=204)

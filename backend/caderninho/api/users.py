from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
import logging

from caderninho.auth.jwt import hash_password
from caderninho.deps import get_uow
from caderninho.models.user import User
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.user import UserCreate, UserOut, UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])

logger = logging.getLogger(__name__)

NOT_FOUND = "Usuário não encontrado"


def _email_in_use(uow: UnitOfWork, email: str, exclude_id: int | None = None) -> bool:
    # inclui excluídos: o índice unique do banco também os enxerga
    q = select(User).where(User.email == email).execution_options(include_deleted=True)
    if exclude_id is not None:
        q = q.where(User.id != exclude_id)
    return uow.session.scalar(q.limit(1)) is not None


def _get_or_404(repo: Repository[User, int], user_id: int) -> User:
    u = repo.get_by_id(user_id)
    if not u:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return u


@router.get("", response_model=list[UserOut])
def list_users(uow: UnitOfWork = Depends(get_uow)):
    return list(uow.session.scalars(select(User).where(User.is_active.is_(True)).order_by(User.name)))


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, uow: UnitOfWork = Depends(get_uow)):
    try:
        u = Repository[User, int](uow, User).get_by_id(user_id)

        if not u or not u.is_active:
            raise HTTPException(status_code=404, detail=NOT_FOUND)

        return u

    except HTTPException:
        raise

    except SQLAlchemyError:
        logger.exception("DB error fetching user_id=%s", user_id)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreate, uow: UnitOfWork = Depends(get_uow)):
    email = payload.email.strip().lower()
    if _email_in_use(uow, email):
        raise HTTPException(status_code=409, detail="Email já está em uso")

    u = User(
        name=payload.name.strip(),
        email=email,
        password_hash=hash_password(payload.password) if payload.password else "",
        is_active=True,
    )
    Repository[User, int](uow, User).add(u)
    uow.save_changes()
    uow.session.refresh(u)
    logger.info("Usuário criado com sucesso: %s", u.id)
    return u


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: int, payload: UserUpdate, uow: UnitOfWork = Depends(get_uow)):
    u = _get_or_404(Repository[User, int](uow, User), user_id)

    email = payload.email.strip().lower()
    if email != u.email and _email_in_use(uow, email, exclude_id=user_id):
        raise HTTPException(status_code=409, detail="Email já está em uso")

    u.name = payload.name.strip()
    u.email = email
    u.is_active = payload.is_active
    uow.save_changes()
    uow.session.refresh(u)
    logger.info("Usuário atualizado com sucesso: %s", user_id)
    return u


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, uow: UnitOfWork = Depends(get_uow)):
    repo = Repository[User, int](uow, User)
    repo.delete(_get_or_404(repo, user_id))
    uow.save_changes()
    logger.info("Usuário excluído com sucesso: %s", user_id)
    return Response(status_code=204)

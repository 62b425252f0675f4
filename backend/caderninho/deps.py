from fastapi import Depends
from sqlalchemy.orm import Session

from caderninho.db import get_db
from caderninho.repositories.base import UnitOfWork


def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)

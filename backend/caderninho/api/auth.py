from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from caderninho.core.settings import settings
from caderninho.auth.jwt import create_access_token, require_auth, verify_password
from caderninho.db import get_db
from caderninho.models.user import User
from caderninho.schemas.auth import LoginIn, TokenOut


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    if not settings.AUTH_ENABLED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Auth disabled")

    email = payload.email.strip().lower()
    user = db.scalar(select(User).where(User.email == email).where(User.is_active.is_(True)))

    # mesma resposta para usuário inexistente e senha errada
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return TokenOut(access_token=create_access_token(sub=user.email))


@router.get("/me")
def me(claims=Depends(require_auth)):
    return {"sub": claims.get("sub"), "iat": claims.get("iat"), "exp": claims.get("exp")}

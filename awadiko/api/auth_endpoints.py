"""Authentication endpoints: registration, login, token refresh and session user."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from awadiko.core.db import get_db
from awadiko.core.dependencies import get_current_user
from awadiko.core.exceptions import ConflictError
from awadiko.models.user import User
from awadiko.core.security import hash_password, verify_password
from awadiko.core.jwt import create_access_token, create_refresh_token, decode_token
from awadiko.core.permissions import ROLE_PERMISSIONS
from awadiko.core.auth import get_user_role
from awadiko.schemas.user import UserCreate, UserRead, LoginRequest, Token, TokenRefresh
from awadiko.schemas.base import Envelope

router = APIRouter(prefix="/auth", tags=["auth"])


def _envelope(data=None, error: str | None = None, status: str = "ok"):
    return {"status": status, "data": data, "error": error}


def _tokens(user: User) -> Token:
    return Token(
        access_token=create_access_token(str(user.id), scopes=[get_user_role(user).value]),
        refresh_token=create_refresh_token(str(user.id)),
    )


@router.post("/register", response_model=Envelope)
def register_user(payload: UserCreate, db: Session = Depends(get_db)):
    email = payload.email.lower()
    existing = db.execute(select(User).where(func.lower(User.email) == email)).scalar_one_or_none()
    if existing:
        raise ConflictError("Email already registered")
    user = User(email=email, name=payload.name, hashed_password=hash_password(payload.password))
    db.add(user)
    db.commit()
    return _envelope(data={"user": UserRead.model_validate(user), "token": _tokens(user)})


@router.post("/login", response_model=Envelope)
def login_user(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.execute(
        select(User).where(func.lower(User.email) == payload.email.lower())
    ).scalar_one_or_none()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _envelope(data={"user": UserRead.model_validate(user), "token": _tokens(user)})


@router.post("/refresh", response_model=Envelope)
def refresh_token(payload: TokenRefresh, db: Session = Depends(get_db)):
    decoded = decode_token(payload.refresh_token, refresh=True)
    if not decoded:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    try:
        user = db.get(User, int(decoded.get("sub")))
    except (TypeError, ValueError):
        user = None
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    return _envelope(data={"token": _tokens(user)})


@router.get("/me", response_model=Envelope)
def get_me(current_user: User = Depends(get_current_user)):
    """Session user with the permissions granted by their role."""
    role = get_user_role(current_user)
    return _envelope(data={
        "user": UserRead.model_validate(current_user),
        "permissions": sorted(p.value for p in ROLE_PERMISSIONS[role]),
    })

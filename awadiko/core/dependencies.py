"""
FastAPI dependency providers: database session, session user and cache.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from typing import Optional
import logging

from awadiko.core.db import get_db
from awadiko.core.jwt import decode_token
from awadiko.core.cache_client import CacheClient, get_cache_client
from awadiko.core.exceptions import UnauthorizedError, DictionaryException, ErrorCode
from awadiko.models.user import User


logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """
    Resolve the session user from a Bearer access token.

    Returns None when no token is sent. An invalid token or unknown
    subject is rejected with 401.
    """
    token = _bearer_token(request)
    if token is None:
        return None

    payload = decode_token(token, refresh=False)
    if not payload or "sub" not in payload:
        raise DictionaryException(
            "Invalid or expired token", ErrorCode.INVALID_TOKEN, status_code=401
        )

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise DictionaryException("Invalid token payload", ErrorCode.INVALID_TOKEN, status_code=401)

    user = db.get(User, user_id)
    if user is None:
        raise DictionaryException("User not found", ErrorCode.INVALID_TOKEN, status_code=401)
    request.state.user_id = user.id
    return user


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Session user; raises 401 when the request is anonymous."""
    if user is None:
        raise UnauthorizedError()
    return user


def get_cache() -> Optional[CacheClient]:
    return get_cache_client()


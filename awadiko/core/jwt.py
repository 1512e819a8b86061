"""JWT issue / verify utilities (access & refresh tokens)"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Any
import jwt

from awadiko.config.settings import settings


def _build_payload(subject: str, expires_minutes: int, scopes: list[str] | None = None) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "sub": subject,
        "scopes": scopes or [],
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }


def create_access_token(subject: str, scopes: list[str] | None = None, expires_minutes: int | None = None) -> str:
    minutes = expires_minutes or settings.security.access_token_minutes
    return jwt.encode(
        _build_payload(subject, minutes, scopes),
        settings.security.jwt_secret,
        algorithm=settings.security.jwt_algorithm,
    )


def create_refresh_token(subject: str, expires_minutes: int | None = None) -> str:
    minutes = expires_minutes or settings.security.refresh_token_minutes
    payload = _build_payload(subject, minutes)
    payload["type"] = "refresh"
    return jwt.encode(payload, settings.security.refresh_secret, algorithm=settings.security.jwt_algorithm)


def decode_token(token: str, refresh: bool = False) -> Dict[str, Any] | None:
    secret = settings.security.refresh_secret if refresh else settings.security.jwt_secret
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.security.jwt_algorithm])
    except jwt.PyJWTError:
        return None
    if refresh != (payload.get("type") == "refresh"):
        return None
    return payload

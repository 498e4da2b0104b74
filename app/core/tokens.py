# app/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from app.core.config import settings

def _now() -> datetime:
    return datetime.now(timezone.utc)

def _encode(kind: str, sub: str, role: str, expires: datetime) -> str:
    payload: Dict[str, Any] = {
        "type": kind,
        "sub": sub,
        "role": role,
        "jti": uuid.uuid4().hex,
        "iat": int(_now().timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def create_access_token(*, sub: str, role: str) -> str:
    """Access token curto (minutos); sub = e-mail do operador."""
    return _encode("access", sub, role, _now() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

def create_refresh_token(*, sub: str, role: str) -> str:
    return _encode("refresh", sub, role, _now() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))

def _decode(token: str, kind: str) -> Optional[Dict[str, Any]]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if not isinstance(payload, dict) or payload.get("type") != kind:
        return None
    if not payload.get("sub"):
        return None
    return payload

def decode_access(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, "access")

def decode_refresh(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, "refresh")

# campground_api/adapters/api/sessions.py
"""
Signed session tokens (HS256 JWT) and the cookie that carries them.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from fastapi import Response

from campground_api.shared.config import Settings

logger = structlog.get_logger()

JWT_ALGORITHM = "HS256"


def create_session_token(user_id: str, settings: Settings) -> str:
    """Create a session token for an authenticated user."""
    now = datetime.now(timezone.utc)
    expiry = now + timedelta(days=settings.SESSION_TTL_DAYS)

    payload = {
        "sub": user_id,
        "iat": int(now.timestamp()),
        "exp": int(expiry.timestamp()),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=JWT_ALGORITHM)


def read_session_token(token: str, settings: Settings) -> Optional[str]:
    """Verify a session token and return the user id it was issued for."""
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("session_expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug("session_invalid", error=str(e))
        return None

    sub = payload.get("sub")
    return sub if isinstance(sub, str) and sub else None


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")

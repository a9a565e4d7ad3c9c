from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request, status
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.Core.config import Settings, get_settings
from .schemas import AuthUser

logger = logging.getLogger("auth.deps")


def _extract_bearer(request: Request) -> str | None:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        token = auth.removeprefix("Bearer ").strip()
        return token or None
    return None


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def user_from_claims(claims: Dict[str, Any]) -> AuthUser:
    user_id = claims.get("id") or claims.get("sub")
    if not user_id:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Invalid token: missing subject")
    try:
        return AuthUser(
            id=str(user_id),
            college_id=claims.get("collegeId"),
            contact=claims.get("contact"),
            role=claims.get("role") or "student",
            batch=claims.get("batch"),
            department=claims.get("department"),
            name=claims.get("name"),
            email=claims.get("email"),
        )
    except ValidationError as exc:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Invalid token: malformed claims") from exc


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AuthUser:
    """Verify the bearer token (HS256 shared secret) and return the caller.

    Missing token -> 401; invalid or expired token -> 403.
    """
    token = _extract_bearer(request)
    if not token:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            "Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = decode_token(token, settings)
    except ExpiredSignatureError:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Token expired")
    except JWTError as exc:
        logger.info("Token verification failed: %s", exc)
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Invalid token")
    user = user_from_claims(claims)
    request.state.current_user = user
    return user

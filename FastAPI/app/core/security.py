from typing import Any
from uuid import uuid4

from jose import JWTError, jwt

from app.config import settings


def decode_access_token(token: str) -> dict[str, Any] | None:
    """
    Verify a bearer token issued by the hosted auth service.
    Returns the claims when signature, expiry (and audience, if configured) check out.
    """
    options = {"verify_aud": bool(settings.auth_jwt_audience)}
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience or None,
            options=options,
        )
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload


def generate_id() -> str:
    return str(uuid4())

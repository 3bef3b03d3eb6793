"""Bearer-token subject extraction for Supabase-issued JWTs."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

import jwt
from fastapi import Depends, Header

from .config import get_config

LOGGER = logging.getLogger(__name__)

ASYMMETRIC_ALGORITHMS = ["RS256", "ES256"]


class AuthError(Exception):
    """Raised when a request needs a caller identity and has none."""


@lru_cache(maxsize=4)
def _jwks_client(url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(url)


def verify_token(token: str) -> Optional[str]:
    """Return the ``sub`` claim of a token whose signature checks out, else None."""
    config = get_config()
    try:
        if config.SUPABASE_JWKS_URL:
            signing_key = _jwks_client(config.SUPABASE_JWKS_URL).get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=ASYMMETRIC_ALGORITHMS,
                audience=config.JWT_AUDIENCE,
            )
        elif config.SUPABASE_JWT_SECRET:
            payload = jwt.decode(
                token,
                config.SUPABASE_JWT_SECRET,
                algorithms=["HS256"],
                audience=config.JWT_AUDIENCE,
            )
        else:
            LOGGER.error("No SUPABASE_JWT_SECRET or SUPABASE_JWKS_URL configured; rejecting bearer token")
            return None
    except jwt.PyJWTError as exc:
        LOGGER.info("Rejected bearer token: %s", exc)
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None


def get_user_id(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Caller's user id, or None when the request carries no valid bearer token."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        return None
    return verify_token(token)


def require_user_id(user_id: Optional[str] = Depends(get_user_id)) -> str:
    if not user_id:
        raise AuthError("Unauthorized")
    return user_id

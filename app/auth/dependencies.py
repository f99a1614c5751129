# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Supports both:
# - HS256 tokens signed with JWT_SECRET
# - Asymmetric tokens (ES256, RS256, ...) verified against JWKS_URL
#
# Every failure raises AuthenticationError, which the error sink turns
# into a 401 with a WWW-Authenticate header.
# =============================================================================

import logging
import time
from typing import Any

import httpx
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are reported by us, not FastAPI
security = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _fetch_jwks() -> dict:
    """Fetch the JWKS document with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(settings.JWKS_URL, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {settings.JWKS_URL}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Serve the expired copy rather than rejecting every token
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the key and algorithm to verify a token with.

    Returns:
        Tuple of (key, algorithm)

    Raises:
        AuthenticationError: If the token names a key we cannot find
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        raise AuthenticationError("Invalid token: unreadable header")

    alg = unverified_header.get("alg", settings.JWT_ALGORITHM)
    kid = unverified_header.get("kid")

    if alg.startswith("HS"):
        return settings.JWT_SECRET, settings.JWT_ALGORITHM

    if settings.JWKS_URL and kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"No verification key for alg={alg}, kid={kid}")
    raise AuthenticationError("Invalid token: unknown signing key")


def decode_token(token: str) -> AuthUser:
    """
    Verify a bearer token and build the caller identity from its claims.

    Args:
        token: The raw JWT

    Returns:
        AuthUser: The authenticated caller

    Raises:
        AuthenticationError: If the token is expired, badly signed,
            for another audience, or missing its `sub` claim
    """
    signing_key, algorithm = _get_signing_key(token)

    options = {"verify_aud": settings.JWT_VERIFY_AUDIENCE}

    try:
        claims = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=settings.JWT_AUDIENCE if settings.JWT_VERIFY_AUDIENCE else None,
            options=options,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise AuthenticationError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise AuthenticationError(f"Invalid token: {e}")

    try:
        payload = TokenPayload(**claims)
    except ValidationError:
        logger.warning("JWT token missing 'sub' claim")
        raise AuthenticationError("Invalid token: missing user ID")

    logger.debug(f"Authenticated user: {payload.sub}")
    return AuthUser(id=payload.sub, email=payload.email)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security)
) -> AuthUser:
    """
    Extract and validate the caller from the Authorization header.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}

    Raises:
        AuthenticationError: 401 if no bearer token is sent or it is invalid
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    return decode_token(credentials.credentials)

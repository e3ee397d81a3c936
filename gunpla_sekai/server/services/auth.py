"""
Clerk Authentication Dependencies.

Clerk issues RS256 session tokens. The signing key is looked up by ``kid`` in
the instance's JWKS document, which is fetched with httpx and cached for an
hour. Routers depend on one of:

- ``CurrentUserId``: a verified user id, 401 otherwise
- ``OptionalUserId``: the user id when a valid token is sent, else None
- ``AdminUserId``: a verified user whose ``is_admin`` flag is set, 403 otherwise
"""

from __future__ import annotations

import time
from typing import Annotated, Any, Dict, Optional

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database import get_session
from gunpla_sekai.core.database.entities.users import User
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.server.core.config import settings

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)

JWKS_CACHE_TTL = 3600  # seconds
ALGORITHM = "RS256"

_jwks_cache: Dict[str, Any] = {}
_jwks_cache_time: float = 0.0


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def reset_jwks_cache() -> None:
    global _jwks_cache, _jwks_cache_time
    _jwks_cache = {}
    _jwks_cache_time = 0.0


async def fetch_jwks(force: bool = False) -> Dict[str, Any]:
    """Return the Clerk JWKS document, refreshing it once the cache is an hour old."""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if not force and _jwks_cache and now - _jwks_cache_time < JWKS_CACHE_TTL:
        return _jwks_cache

    jwks_url = settings.clerk.resolved_jwks_url
    if not jwks_url:
        logger.error("Clerk is not configured: set CLERK_ISSUER or CLERK_JWKS_URL")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Authentication is not configured")

    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.get(jwks_url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS from {jwks_url}: {e}")
        if _jwks_cache:
            return _jwks_cache
        raise _unauthorized("Unable to verify token")

    _jwks_cache = response.json()
    _jwks_cache_time = now
    logger.debug(f"Fetched JWKS from {jwks_url}")
    return _jwks_cache


async def _signing_key(token: str) -> Dict[str, Any]:
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        raise _unauthorized("Invalid token header")

    kid = header.get("kid")
    for force in (False, True):
        jwks = await fetch_jwks(force=force)
        for key in jwks.get("keys", []):
            if key.get("kid") == kid:
                return key
    logger.warning(f"No JWKS key matches kid={kid}")
    raise _unauthorized("Invalid token: unknown signing key")


async def verify_token(token: str) -> str:
    """
    Verify a Clerk session token and return its subject.

    Raises:
        HTTPException: 401 when the token is malformed, expired, signed by an
            unknown key or issued for a party that is not authorized.
    """
    key = await _signing_key(token)
    clerk = settings.clerk
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[ALGORITHM],
            issuer=clerk.issuer or None,
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        logger.warning("Clerk token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"Clerk token validation failed: {e}")
        raise _unauthorized("Invalid token")

    authorized_party = payload.get("azp")
    if clerk.authorized_parties and authorized_party and authorized_party not in clerk.authorized_parties:
        logger.warning(f"Rejected token for unauthorized party {authorized_party}")
        raise _unauthorized("Invalid token: unauthorized party")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token: missing user ID")
    return user_id


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return await verify_token(credentials.credentials)


async def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Resolve the caller when a valid token is present; anonymous otherwise."""
    if credentials is None:
        return None
    try:
        return await verify_token(credentials.credentials)
    except HTTPException as e:
        if e.status_code != status.HTTP_401_UNAUTHORIZED:
            raise
        return None


async def get_admin_user_id(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> str:
    user = await session.get(User, user_id)
    if user is None or not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
OptionalUserId = Annotated[Optional[str], Depends(get_optional_user_id)]
AdminUserId = Annotated[str, Depends(get_admin_user_id)]

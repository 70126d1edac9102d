"""
Supabase JWT authentication

Verifies bearer tokens against the project's JWKS (public keys) and exposes the
authenticated user ID as a FastAPI dependency.
"""
import time
import logging
from typing import Optional
from fastapi import HTTPException, Header
from jose import jwt, jwk
import httpx

from taskflow import config

logger = logging.getLogger(__name__)

_jwks_cache: Optional[dict] = None
_jwks_cache_time: float = 0
JWKS_CACHE_DURATION = 60 * 60  # seconds

JWT_AUDIENCE = "authenticated"
SUPPORTED_ALGORITHMS = ["ES256", "RS256"]


def get_supabase_url() -> str:
    if not config.SUPABASE_URL:
        raise ValueError("SUPABASE_URL must be set")
    return config.SUPABASE_URL.rstrip("/")


def reset_jwks_cache() -> None:
    global _jwks_cache, _jwks_cache_time
    _jwks_cache = None
    _jwks_cache_time = 0


async def get_jwks() -> dict:
    """Fetch JWKS from Supabase, reusing the cached copy for an hour"""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_DURATION:
        return _jwks_cache

    jwks_url = f"{get_supabase_url()}/auth/v1/.well-known/jwks.json"
    logger.info(f"Fetching JWKS from Supabase: {jwks_url}")

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            _jwks_cache = response.json()
            _jwks_cache_time = now
            return _jwks_cache
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch JWKS: {e}")
        if _jwks_cache:
            logger.warning("Using expired JWKS cache due to fetch failure")
            return _jwks_cache
        raise HTTPException(status_code=500, detail="Failed to fetch authentication keys")


async def verify_token(token: str) -> dict:
    """
    Verify a Supabase JWT and return its payload.

    Raises HTTPException(401) when the token is expired, malformed or signed by an
    unknown key.
    """
    jwks = await get_jwks()

    try:
        header = jwt.get_unverified_header(token)
    except jwt.JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    kid = header.get("kid")
    if not kid:
        raise HTTPException(status_code=401, detail="Token missing key ID (kid)")

    key_data = next((key for key in jwks.get("keys", []) if key.get("kid") == kid), None)
    if not key_data:
        raise HTTPException(status_code=401, detail=f"Key with ID '{kid}' not found in JWKS")

    try:
        return jwt.decode(
            token,
            jwk.construct(key_data),
            algorithms=SUPPORTED_ALGORITHMS,
            audience=JWT_AUDIENCE,
            issuer=f"{get_supabase_url()}/auth/v1",
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except jwt.JWTClaimsError as e:
        raise HTTPException(status_code=401, detail=f"Token validation failed: {str(e)}")
    except jwt.JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")


def get_user_id_from_payload(payload: dict) -> str:
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: no user ID")
    return user_id


async def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """FastAPI dependency returning the authenticated user ID"""
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )

    payload = await verify_token(token)
    return get_user_id_from_payload(payload)

# app/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx
from jose import jwt, JWTError
from fastapi import status

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.core.config import (
    JWT_ACCESS_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    GOOGLE_CLIENT_ID,
    GOOGLE_CERTS_URL,
    GOOGLE_ISSUERS,
)
from app.utils.logger import get_logger

logger = get_logger("auth.security")

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _unauthorized(message: str, code: ErrorCode = ErrorCode.UNAUTHORIZED) -> AppException:
    return AppException(
        status.HTTP_401_UNAUTHORIZED,
        message,
        code,
        headers=BEARER_CHALLENGE,
    )


# =====================================================
# SESSION ACCESS TOKEN
# =====================================================
def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta
        if expires_delta
        else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    payload = {
        "sub": subject,
        "type": "access",
        "iat": now,
        "exp": expire,
    }

    return jwt.encode(payload, JWT_ACCESS_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            token,
            JWT_ACCESS_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
        )
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    return payload


# =====================================================
# GOOGLE ID TOKEN
# =====================================================
_cached_jwks: dict | None = None


async def _get_google_jwks(force_refresh: bool = False) -> dict:
    global _cached_jwks
    if _cached_jwks and not force_refresh:
        return _cached_jwks

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(GOOGLE_CERTS_URL)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error("Failed to fetch Google signing keys: %s", exc)
        raise AppException(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Unable to verify sign-in right now",
            ErrorCode.INTERNAL_ERROR,
        )

    _cached_jwks = response.json()
    logger.info("Fetched %d Google signing keys", len(_cached_jwks.get("keys", [])))
    return _cached_jwks


def _find_key(jwks: dict, kid: str) -> dict | None:
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key
    return None


async def verify_google_id_token(id_token: str) -> dict:
    """
    Verify a Google ID token signature and claims and return its claims.

    Keys are cached; an unknown ``kid`` triggers one refresh, since Google
    rotates its signing keys.
    """
    if not GOOGLE_CLIENT_ID:
        raise AppException(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Google sign-in is not configured",
            ErrorCode.OAUTH_NOT_CONFIGURED,
        )

    try:
        header = jwt.get_unverified_header(id_token)
    except JWTError:
        raise _unauthorized("Malformed Google token", ErrorCode.INVALID_OAUTH_TOKEN)

    kid = header.get("kid")
    if not kid:
        raise _unauthorized("Google token missing key ID", ErrorCode.INVALID_OAUTH_TOKEN)

    key = _find_key(await _get_google_jwks(), kid)
    if key is None:
        logger.warning("Unknown Google key id %s, refreshing keys", kid)
        key = _find_key(await _get_google_jwks(force_refresh=True), kid)
    if key is None:
        raise _unauthorized("Unable to verify Google token", ErrorCode.INVALID_OAUTH_TOKEN)

    try:
        claims = jwt.decode(
            id_token,
            key,
            algorithms=["RS256"],
            audience=GOOGLE_CLIENT_ID,
            options={"verify_at_hash": False},
        )
    except JWTError as exc:
        logger.warning("Google token rejected: %s", exc)
        raise _unauthorized("Invalid Google token", ErrorCode.INVALID_OAUTH_TOKEN)

    if claims.get("iss") not in GOOGLE_ISSUERS:
        raise _unauthorized("Invalid Google token issuer", ErrorCode.INVALID_OAUTH_TOKEN)

    return claims

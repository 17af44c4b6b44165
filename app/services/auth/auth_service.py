from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import status

from app.core.config import ADMIN_EMAIL, ACCESS_TOKEN_EXPIRE_MINUTES
from app.core.exceptions import AppException
from app.core.security import BEARER_CHALLENGE, create_access_token, verify_google_id_token
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.schemas.auth.auth_schemas import TokenResponse
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger("auth.service")


def is_allowed_email(email: str | None) -> bool:
    return bool(email) and email.strip().lower() == ADMIN_EMAIL


# =====================================================
# GOOGLE LOGIN
# =====================================================
async def login_with_google(db: AsyncSession, id_token: str) -> TokenResponse:
    claims = await verify_google_id_token(id_token)

    email = (claims.get("email") or "").strip().lower()
    logger.info("Authenticating Google account", extra={"email": email})

    if not claims.get("email_verified"):
        logger.warning("Unverified Google email", extra={"email": email})
        raise AppException(
            status.HTTP_401_UNAUTHORIZED,
            "Google account email is not verified",
            ErrorCode.INVALID_OAUTH_TOKEN,
            headers=BEARER_CHALLENGE,
        )

    if not is_allowed_email(email):
        logger.warning("Login blocked for account", extra={"email": email})
        raise AppException(
            status.HTTP_401_UNAUTHORIZED,
            "This account is not allowed to sign in",
            ErrorCode.EMAIL_NOT_ALLOWED,
            headers=BEARER_CHALLENGE,
        )

    access_token = create_access_token(subject=email)

    await emit_activity(
        db,
        actor_email=email,
        code=ActivityCode.LOGIN,
    )
    await db.commit()

    logger.info("Login successful", extra={"email": email})

    return TokenResponse(
        access_token=access_token,
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        email=email,
        name=claims.get("name"),
    )

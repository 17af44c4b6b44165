from fastapi import Header, Request, status

from app.constants.error_codes import ErrorCode
from app.core.config import ADMIN_EMAIL
from app.core.exceptions import AppException
from app.core.security import decode_access_token, BEARER_CHALLENGE
from app.schemas.auth.auth_schemas import SessionUser
from app.utils.logger import get_logger

logger = get_logger("auth.guard")


async def get_current_user(
    request: Request,
    authorization: str | None = Header(None),
) -> SessionUser:
    if not authorization or not authorization.startswith("Bearer "):
        logger.warning("Missing bearer token", extra={"path": request.url.path})
        raise AppException(
            status.HTTP_401_UNAUTHORIZED,
            "Not authenticated",
            ErrorCode.UNAUTHORIZED,
            headers=BEARER_CHALLENGE,
        )

    token = authorization.split("Bearer ", 1)[1].strip()
    payload = decode_access_token(token)

    email = (payload.get("sub") or "").lower()

    # allow-list may change between token issue and use
    if email != ADMIN_EMAIL:
        logger.warning("Token for non allow-listed account", extra={"email": email})
        raise AppException(
            status.HTTP_401_UNAUTHORIZED,
            "Account is not allowed",
            ErrorCode.EMAIL_NOT_ALLOWED,
            headers=BEARER_CHALLENGE,
        )

    user = SessionUser(email=email)
    request.state.user = user
    return user

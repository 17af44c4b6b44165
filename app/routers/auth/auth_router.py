from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.auth.auth_schemas import (
    GoogleLoginRequest,
    SessionUser,
    TokenResponse,
)
from app.services.auth.auth_service import login_with_google
from app.utils.get_user import get_current_user
from app.utils.response import success_response, APIResponse
from app.utils.logger import get_logger

logger = get_logger("auth.router")

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/google", response_model=APIResponse[TokenResponse])
async def google_login(
    payload: GoogleLoginRequest,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Google login attempt")

    tokens = await login_with_google(db, payload.id_token)

    return success_response("Login successful", tokens)


@router.get("/me", response_model=APIResponse[SessionUser])
async def me(current_user: SessionUser = Depends(get_current_user)):
    return success_response("Session is valid", current_user)
